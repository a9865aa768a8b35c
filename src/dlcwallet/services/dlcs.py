"""DLC cache: contracts keyed by DLC id, plus their decoded contract info."""

import logging

from dlcwallet.joins import join_all
from dlcwallet.models import ContractInfo, DLCContract
from dlcwallet.observable import Subject
from dlcwallet.server.client import ServerClient
from dlcwallet.server.messages import CoreMethod, WalletMethod
from dlcwallet.server.protocol import Response
from dlcwallet.services.contacts import ContactService
from dlcwallet.validation import validate_string

logger = logging.getLogger(__name__)


class DLCService:
    """Caches DLC contracts and decodes each contract's info at most once per DLC id."""

    def __init__(self, client: ServerClient, contacts: ContactService) -> None:
        """Initialize with empty caches.

        Args:
            client: Client used for all DLC messages.
            contacts: Contact service used to attach peers to contracts.

        """
        self._client = client
        self._contacts = contacts
        self.initialized: Subject[bool] = Subject(False)
        self.dlcs: Subject[list[DLCContract]] = Subject([])
        self.contract_infos: Subject[dict[str, ContractInfo]] = Subject({})

    async def initialize(self) -> list[DLCContract]:
        """Load all contracts and their contract info."""
        dlcs = await self.load_dlcs()
        logger.debug("DLCs initialized: %d", len(dlcs))
        return dlcs

    def uninitialize(self) -> None:
        """Drop all cached contracts and contract info."""
        self.initialized.publish(False)
        self.dlcs.publish([])
        self.contract_infos.publish({})

    # --- Contracts ---

    async def load_dlcs(self) -> list[DLCContract]:
        """Replace the contract list, then decode contract info for every listed contract.

        Raises:
            ServerError: Listing failed, or any one contract info decode failed. A failed decode aborts the
                rest of the batch.

        """
        resp = await self.get_dlcs()
        dlcs = [DLCContract.model_validate(d) for d in resp.result or []]
        self.dlcs.publish(dlcs)
        await self.load_contract_infos(dlcs)
        return dlcs

    async def refresh_dlc(self, dlc_id: str) -> DLCContract | None:
        """Fetch one contract and merge it into the cache. Return None if the server has no such contract."""
        resp = await self.get_dlc(dlc_id)
        if not resp.result:
            logger.debug("getdlc %s returned nothing: %s", dlc_id, resp.error)
            return None
        dlc = DLCContract.model_validate(resp.result)
        await self.replace_dlc(dlc)
        return dlc

    async def replace_dlc(self, dlc: DLCContract) -> ContractInfo | None:
        """Replace the cached contract with the same id in place, or append it and load its contract info.

        Returns the contract info loaded for a newly appended contract, None when an existing entry was replaced.
        """
        dlcs = self.dlcs.value
        for i, existing in enumerate(dlcs):
            if existing.dlc_id == dlc.dlc_id:
                dlcs[i] = dlc
                self.dlcs.publish(dlcs)
                return None

        logger.warning("replace_dlc() did not find %s in cached dlcs, adding it", dlc.dlc_id)
        dlcs.append(dlc)
        self.dlcs.publish(dlcs)
        return await self.load_contract_info(dlc)

    def remove_dlc(self, dlc_id: str) -> bool:
        """Drop a contract from the cache. Return True if it was present."""
        dlcs = self.dlcs.value
        for i, existing in enumerate(dlcs):
            if existing.dlc_id == dlc_id:
                del dlcs[i]
                self.dlcs.publish(dlcs)
                return True
        return False

    async def cancel_dlc(self, dlc_id: str) -> Response:
        """Cancel a DLC on the server and drop it from the cache when the server confirms."""
        validate_string(dlc_id, "cancel_dlc", "dlc_id")
        logger.debug("canceldlc %s", dlc_id)
        resp = await self._client.call(WalletMethod.CANCEL_DLC, dlc_id)
        if resp.result:
            self.remove_dlc(dlc_id)
        return resp

    # --- Contract info ---

    async def load_contract_infos(self, dlcs: list[DLCContract]) -> dict[str, ContractInfo]:
        """Decode contract info for every contract that has none cached yet, all at once."""
        infos = self.contract_infos.value
        pending = list({d.dlc_id: d for d in dlcs if d.dlc_id not in infos}.values())
        logger.debug("load_contract_infos() %d contracts, %d to decode", len(dlcs), len(pending))

        results = await join_all(*(self.decode_contract_info(d.contract_info) for d in pending))
        for dlc, resp in zip(pending, results, strict=True):
            if resp.result:
                infos[dlc.dlc_id] = resp.result
            else:
                logger.warning("Contract info for %s not decoded: %s", dlc.dlc_id, resp.error)
        self.contract_infos.publish(infos)
        self.initialized.publish(True)
        return infos

    async def load_contract_info(self, dlc: DLCContract) -> ContractInfo | None:
        """Decode and cache contract info for one contract; cached info is returned without decoding again."""
        infos = self.contract_infos.value
        if dlc.dlc_id in infos:
            logger.warning("load_contract_info() already have contract info for %s", dlc.dlc_id)
            return infos[dlc.dlc_id]

        resp = await self.decode_contract_info(dlc.contract_info)
        if not resp.result:
            logger.warning("Contract info for %s not decoded: %s", dlc.dlc_id, resp.error)
            return None
        infos[dlc.dlc_id] = resp.result
        self.contract_infos.publish(infos)
        return resp.result

    # --- Peers ---

    async def add_contact(self, dlc: DLCContract, address: str) -> Response:
        """Attach a contact to a contract and set its peer locally on success."""
        resp = await self._contacts.dlc_contact_add(dlc.dlc_id, address)
        if resp.error:
            logger.warning("dlc-contact-add %s failed: %s", dlc.dlc_id, resp.error)
        elif resp.result:
            dlc.peer = address
            self._publish_if_cached(dlc)
        return resp

    async def remove_contact(self, dlc: DLCContract) -> Response:
        """Detach the contact from a contract and clear its peer locally on success."""
        resp = await self._contacts.dlc_contact_remove(dlc.dlc_id)
        if resp.error:
            logger.warning("dlc-contact-remove %s failed: %s", dlc.dlc_id, resp.error)
        elif resp.result:
            dlc.peer = None
            self._publish_if_cached(dlc)
        return resp

    def _publish_if_cached(self, dlc: DLCContract) -> None:
        """Republish the contract list when ``dlc`` is one of its entries."""
        if any(d is dlc for d in self.dlcs.value):
            self.dlcs.publish(self.dlcs.value)

    # --- Messages ---

    async def get_dlcs(self, contact_address: str | None = None) -> Response:
        """List DLCs, optionally only those with the given contact."""
        if contact_address:
            validate_string(contact_address, "get_dlcs", "contact_address")
            return await self._client.call(WalletMethod.GET_DLCS, contact_address)
        return await self._client.call(WalletMethod.GET_DLCS)

    async def get_dlc(self, dlc_id: str) -> Response:
        """Fetch one DLC by id."""
        validate_string(dlc_id, "get_dlc", "dlc_id")
        logger.debug("getdlc %s", dlc_id)
        return await self._client.call(WalletMethod.GET_DLC, dlc_id)

    async def decode_contract_info(self, contract_info_hex: str) -> Response:
        """Decode a contract info TLV."""
        validate_string(contract_info_hex, "decode_contract_info", "contract_info_hex")
        return await self._client.call(CoreMethod.DECODE_CONTRACT_INFO, contract_info_hex)
