"""Address cache: funded addresses, unused addresses, and address labels."""

import logging

from dlcwallet.joins import join_all
from dlcwallet.models import AddressLabels, FundedAddress
from dlcwallet.observable import Subject
from dlcwallet.server.client import ServerClient
from dlcwallet.server.messages import WalletMethod
from dlcwallet.server.protocol import Response
from dlcwallet.validation import validate_string

logger = logging.getLogger(__name__)


class AddressService:
    """Caches address facets, each fetched independently and replaced wholesale."""

    def __init__(self, client: ServerClient) -> None:
        """Initialize with empty caches.

        Args:
            client: Client used for all address messages.

        """
        self._client = client
        self.initialized: Subject[bool] = Subject(False)
        self.funded_addresses: Subject[list[FundedAddress]] = Subject([])
        self.unfunded_addresses: Subject[list[str]] = Subject([])
        self.address_label_map: Subject[dict[str, list[str]]] = Subject({})

    async def initialize(self) -> tuple[list[FundedAddress], list[str], dict[str, list[str]]]:
        """Load every facet concurrently and mark the cache ready."""
        funded, unfunded, labels = await join_all(
            self.refresh_funded_addresses(), self.refresh_unfunded_addresses(), self.refresh_address_labels()
        )
        logger.debug("Addresses initialized: %d funded, %d unfunded, %d labeled", len(funded), len(unfunded), len(labels))
        self.initialized.publish(True)
        return funded, unfunded, labels

    def uninitialize(self) -> None:
        """Drop all cached addresses."""
        self.initialized.publish(False)
        self.funded_addresses.publish([])
        self.unfunded_addresses.publish([])
        self.address_label_map.publish({})

    # --- Cache refresh ---

    async def refresh_funded_addresses(self) -> list[FundedAddress]:
        """Replace the funded address list; an empty answer clears it."""
        resp = await self.get_funded_addresses()
        self.funded_addresses.publish([FundedAddress.model_validate(a) for a in resp.result or []])
        return self.funded_addresses.value

    async def refresh_unfunded_addresses(self) -> list[str]:
        """Replace the unused address list; an empty answer clears it."""
        resp = await self.get_unused_addresses()
        self.unfunded_addresses.publish(list(resp.result or []))
        return self.unfunded_addresses.value

    async def refresh_address_labels(self) -> dict[str, list[str]]:
        """Replace the address -> labels map; an empty answer clears it."""
        resp = await self.get_address_labels()
        entries = [AddressLabels.model_validate(a) for a in resp.result or []]
        self.address_label_map.publish({e.address: e.labels for e in entries})
        return self.address_label_map.value

    async def update_address_label(self, address: str, label: str) -> dict[str, list[str]]:
        """Replace all labels of ``address`` with ``label``."""
        await self.drop_address_labels(address)
        resp = await self.label_address(address, label)
        if resp.result:
            labels = self.address_label_map.value
            labels[address] = [label]
            self.address_label_map.publish(labels)
        return self.address_label_map.value

    # --- Messages ---

    async def get_new_address(self, label: str | None = None) -> Response:
        """Ask the wallet for a fresh receive address, optionally labeled."""
        logger.debug("getnewaddress %s", label)
        if label is None:
            return await self._client.call(WalletMethod.GET_NEW_ADDRESS)
        validate_string(label, "get_new_address", "label")
        return await self._client.call(WalletMethod.GET_NEW_ADDRESS, label)

    async def label_address(self, address: str, label: str) -> Response:
        """Attach a label to an address."""
        validate_string(address, "label_address", "address")
        validate_string(label, "label_address", "label")
        logger.debug("labeladdress %s %s", address, label)
        return await self._client.call(WalletMethod.LABEL_ADDRESS, address, label)

    async def drop_address_label(self, address: str, label: str) -> Response:
        """Remove one label from an address."""
        validate_string(address, "drop_address_label", "address")
        validate_string(label, "drop_address_label", "label")
        logger.debug("dropaddresslabel %s %s", address, label)
        return await self._client.call(WalletMethod.DROP_ADDRESS_LABEL, address, label)

    async def get_address_labels(self) -> Response:
        """List every labeled address."""
        return await self._client.call(WalletMethod.GET_ADDRESS_LABELS)

    async def drop_address_labels(self, address: str) -> Response:
        """Remove all labels from an address."""
        validate_string(address, "drop_address_labels", "address")
        logger.debug("dropaddresslabels %s", address)
        return await self._client.call(WalletMethod.DROP_ADDRESS_LABELS, address)

    async def get_addresses(self) -> Response:
        """List every wallet address."""
        return await self._client.call(WalletMethod.GET_ADDRESSES)

    async def get_spent_addresses(self) -> Response:
        """List addresses that have been spent from."""
        return await self._client.call(WalletMethod.GET_SPENT_ADDRESSES)

    async def get_funded_addresses(self) -> Response:
        """List addresses with a balance."""
        return await self._client.call(WalletMethod.GET_FUNDED_ADDRESSES)

    async def get_unused_addresses(self) -> Response:
        """List addresses that never received funds."""
        return await self._client.call(WalletMethod.GET_UNUSED_ADDRESSES)
