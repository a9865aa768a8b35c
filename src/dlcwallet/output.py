"""Structured output for CLI and JSON modes."""

# ruff: noqa: T201 - this module is the output layer; print() is how CLI output is produced.

import json
import sys
from typing import Any, NoReturn

import typer

from dlcwallet.models import Contact, ContractInfo, DLCContract, FundedAddress, IncomingOffer, OfferWithHex
from dlcwallet.state import WalletState


class Output:
    """Handles all CLI output in JSON or human-readable format."""

    def __init__(self, *, json_mode: bool) -> None:
        """Initialize output handler.

        Args:
            json_mode: If True, output JSON envelopes; otherwise human-readable text.

        """
        self._json_mode = json_mode

    def _success(self, data: dict[str, Any], message: str) -> None:
        """Print a success result in JSON or human-readable format."""
        if self._json_mode:
            print(json.dumps({"ok": True, "data": data}))
        else:
            print(message)

    def print_error_and_exit(self, code: str, message: str) -> NoReturn:
        """Print an error in JSON or human-readable format and exit with code 1.

        Raises:
            typer.Exit: Always, with code 1.

        """
        if self._json_mode:
            print(json.dumps({"ok": False, "error": code, "message": message}))
        else:
            print(f"Error: {message}", file=sys.stderr)
        raise typer.Exit(code=1)

    # --- Server ---

    def print_status(self, state: WalletState) -> None:
        """Print the aggregate wallet snapshot."""
        network = state.info.get("network", "?") if state.info else "?"
        self._success(
            {
                "version": state.version,
                "short_version": state.short_version,
                "info": state.info,
                "dlc_host_address": state.dlc_host_address,
                "fee_estimate": state.fee_estimate,
            },
            f"Server {state.short_version or '?'} on {network}, DLC host {state.dlc_host_address or '-'}, "
            f"fee estimate {state.fee_estimate} sats/vbyte.",
        )

    def print_sync(self, counts: dict[str, int]) -> None:
        """Print the size of every cache after a full sync."""
        self._success(counts, "Synced: " + ", ".join(f"{v} {k}" for k, v in counts.items()) + ".")

    # --- Addresses ---

    def print_addresses(self, funded: list[FundedAddress], unfunded: list[str], labels: dict[str, list[str]]) -> None:
        """Print funded and unfunded addresses with their labels."""
        if self._json_mode:
            data = {"funded": [a.to_wire() for a in funded], "unfunded": unfunded, "labels": labels}
            print(json.dumps({"ok": True, "data": data}))
            return
        for a in funded:
            print(f"{a.address}  {a.value}  {','.join(labels.get(a.address, []))}".rstrip())
        for address in unfunded:
            print(f"{address}  0  {','.join(labels.get(address, []))}".rstrip())

    def print_new_address(self, address: str) -> None:
        """Print a freshly generated address."""
        self._success({"address": address}, address)

    # --- Contacts ---

    def print_contacts(self, contacts: list[Contact]) -> None:
        """Print the contact list."""
        if self._json_mode:
            print(json.dumps({"ok": True, "data": {"contacts": [c.to_wire() for c in contacts]}}))
            return
        for c in contacts:
            print(f"{c.alias}  {c.address}  {c.memo}".rstrip())

    def print_contact_added(self, alias: str, address: str) -> None:
        """Print contact add confirmation."""
        self._success({"alias": alias, "address": address}, f"Contact '{alias}' added.")

    def print_contact_removed(self, address: str) -> None:
        """Print contact removal confirmation."""
        self._success({"address": address}, f"Contact {address} removed.")

    # --- DLCs ---

    def print_dlcs(self, dlcs: list[DLCContract], contract_infos: dict[str, ContractInfo]) -> None:
        """Print DLC contracts with their decoded contract info."""
        if self._json_mode:
            data = [{**d.to_wire(), "decodedContractInfo": contract_infos.get(d.dlc_id)} for d in dlcs]
            print(json.dumps({"ok": True, "data": {"dlcs": data}}))
            return
        for d in dlcs:
            decoded = "decoded" if d.dlc_id in contract_infos else "not decoded"
            print(f"{d.dlc_id}  {d.state}  {d.peer or '-'}  ({decoded})")

    def print_dlc_cancelled(self, dlc_id: str) -> None:
        """Print DLC cancel confirmation."""
        self._success({"dlc_id": dlc_id}, f"DLC {dlc_id} cancelled.")

    # --- Offers ---

    def print_offers(self, offers: list[IncomingOffer], decoded: dict[str, OfferWithHex]) -> None:
        """Print incoming offers, marking the ones that decoded."""
        if self._json_mode:
            data = [
                {**o.to_wire(), "temporaryContractId": decoded[o.hash].temporary_contract_id if o.hash in decoded else None}
                for o in offers
            ]
            print(json.dumps({"ok": True, "data": {"offers": data}}))
            return
        for o in offers:
            temp_id = decoded[o.hash].temporary_contract_id if o.hash in decoded else "(not decoded)"
            print(f"{o.hash}  {o.peer}  {temp_id}  {o.message}".rstrip())

    def print_offer_removed(self, offer_hash: str) -> None:
        """Print offer removal confirmation."""
        self._success({"hash": offer_hash}, f"Offer {offer_hash} removed.")
