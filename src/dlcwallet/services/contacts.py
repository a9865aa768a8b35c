"""Contact cache: the wallet's address book."""

import logging

from dlcwallet.models import Contact
from dlcwallet.observable import Subject
from dlcwallet.server.client import ServerClient
from dlcwallet.server.messages import WalletMethod
from dlcwallet.server.protocol import Response
from dlcwallet.validation import validate_string

logger = logging.getLogger(__name__)


class ContactService:
    """Caches the contact list; add/remove go straight to the server without touching the cache."""

    def __init__(self, client: ServerClient) -> None:
        """Initialize with an empty contact list.

        Args:
            client: Client used for all contact messages.

        """
        self._client = client
        self.initialized: Subject[bool] = Subject(False)
        self.contacts: Subject[list[Contact]] = Subject([])

    async def initialize(self) -> list[Contact]:
        """Load the contact list and mark the cache ready."""
        resp = await self.contact_list()
        self.contacts.publish([Contact.model_validate(c) for c in resp.result or []])
        logger.debug("Contacts initialized: %d", len(self.contacts.value))
        self.initialized.publish(True)
        return self.contacts.value

    def uninitialize(self) -> None:
        """Drop all cached contacts."""
        self.initialized.publish(False)
        self.contacts.publish([])

    # --- Messages ---

    async def contact_list(self) -> Response:
        """List contacts."""
        return await self._client.call(WalletMethod.CONTACTS_LIST)

    async def contact_add(self, alias: str, address: str, memo: str) -> Response:
        """Add a contact. The server answers "ok"."""
        validate_string(alias, "contact_add", "alias")
        validate_string(address, "contact_add", "address")
        validate_string(memo, "contact_add", "memo")
        logger.debug("contact-add %s %s", alias, address)
        return await self._client.call(WalletMethod.CONTACT_ADD, alias, address, memo)

    async def contact_remove(self, address: str) -> Response:
        """Remove the contact with ``address``."""
        validate_string(address, "contact_remove", "address")
        logger.debug("contact-remove %s", address)
        return await self._client.call(WalletMethod.CONTACT_REMOVE, address)

    async def dlc_contact_add(self, dlc_id: str, address: str) -> Response:
        """Attach a contact address to a DLC."""
        validate_string(dlc_id, "dlc_contact_add", "dlc_id")
        validate_string(address, "dlc_contact_add", "address")
        logger.debug("dlc-contact-add %s %s", dlc_id, address)
        return await self._client.call(WalletMethod.DLC_CONTACT_ADD, dlc_id, address)

    async def dlc_contact_remove(self, dlc_id: str) -> Response:
        """Detach the contact from a DLC."""
        validate_string(dlc_id, "dlc_contact_remove", "dlc_id")
        logger.debug("dlc-contact-remove %s", dlc_id)
        return await self._client.call(WalletMethod.DLC_CONTACT_REMOVE, dlc_id)
