"""Incoming offer cache: offers keyed by hash, plus their decoded form."""

import asyncio
import logging
from typing import Any

from pydantic import ValidationError

from dlcwallet.joins import join_settled, settle
from dlcwallet.models import IncomingOffer, OfferWithHex
from dlcwallet.observable import Subject
from dlcwallet.server.client import ServerClient
from dlcwallet.server.messages import CoreMethod, WalletMethod
from dlcwallet.server.protocol import Response
from dlcwallet.validation import validate_string

logger = logging.getLogger(__name__)


def _parse_offer(raw: Any) -> IncomingOffer | None:  # noqa: ANN401
    try:
        return IncomingOffer.model_validate(raw)
    except ValidationError as e:
        logger.warning("Skipping malformed offer %r: %s", raw, e)
        return None


class OfferService:
    """Caches incoming offers. A payload that fails to decode is left out instead of failing its siblings."""

    def __init__(self, client: ServerClient) -> None:
        """Initialize with empty caches.

        Args:
            client: Client used for all offer messages.

        """
        self._client = client
        self.initialized: Subject[bool] = Subject(False)
        self.offers: Subject[list[IncomingOffer]] = Subject([])
        self.decoded_offers: Subject[dict[str, OfferWithHex]] = Subject({})
        # Strong references to background decodes to prevent GC
        self._background_tasks: set[asyncio.Task[OfferWithHex | None]] = set()

    async def initialize(self) -> list[IncomingOffer]:
        """Load all incoming offers and decode them."""
        offers = await self.load_incoming_offers()
        logger.debug("Offers initialized: %d", len(offers))
        return offers

    def uninitialize(self) -> None:
        """Drop all cached offers and stop pending decodes."""
        for task in list(self._background_tasks):
            task.cancel()
        self.initialized.publish(False)
        self.offers.publish([])
        self.decoded_offers.publish({})

    async def load_incoming_offers(self) -> list[IncomingOffer]:
        """Replace the offer list, then decode every offer."""
        resp = await self.offer_list()
        offers = [o for o in map(_parse_offer, resp.result or []) if o is not None]
        self.offers.publish(offers)
        await self.decode_offers(offers)
        return offers

    async def decode_offers(self, offers: list[IncomingOffer]) -> dict[str, OfferWithHex]:
        """Decode a batch of offers concurrently; failed decodes are skipped."""
        logger.debug("decode_offers() %d offers", len(offers))
        results = await join_settled(*(self.decode_offer(o.offer_tlv) for o in offers))
        decoded = self.decoded_offers.value
        for offer, result in zip(offers, results, strict=True):
            if result is not None:
                decoded[offer.hash] = result
        self.decoded_offers.publish(decoded)
        self.initialized.publish(True)
        return decoded

    async def decode_offer(self, offer_tlv: str) -> OfferWithHex | None:
        """Decode one offer TLV. Return None when the server cannot decode it.

        Raises:
            ServerError: Transport failure; batch callers map it to None.

        """
        validate_string(offer_tlv, "decode_offer", "offer_tlv")
        resp = await self._client.call(CoreMethod.DECODE_OFFER, offer_tlv)
        if not resp.result:
            logger.warning("Offer not decoded: %s", resp.error)
            return None
        return OfferWithHex(offer=resp.result, hex=offer_tlv)

    # --- Push updates ---

    def incoming_offer_received(self, offer: IncomingOffer) -> asyncio.Task[OfferWithHex | None]:
        """Append a newly received offer now and decode it in the background.

        Returns the decode task; the decoded entry appears once it completes.
        """
        offers = self.offers.value
        offers.append(offer)
        self.offers.publish(offers)

        task = asyncio.ensure_future(self._decode_received(offer))
        self._background_tasks.add(task)
        task.add_done_callback(self._background_tasks.discard)
        return task

    def incoming_offer_removed(self, offer_hash: str) -> bool:
        """Drop an offer and its decoded form. Return True if either was present."""
        offers = self.offers.value
        decoded = self.decoded_offers.value
        index = next((i for i, o in enumerate(offers) if o.hash == offer_hash), None)
        if index is not None:
            del offers[index]
            self.offers.publish(offers)
        had_decoded = decoded.pop(offer_hash, None) is not None
        if had_decoded:
            self.decoded_offers.publish(decoded)
        return index is not None or had_decoded

    async def _decode_received(self, offer: IncomingOffer) -> OfferWithHex | None:
        result = await settle(self.decode_offer(offer.offer_tlv))
        if result is not None:
            decoded = self.decoded_offers.value
            decoded[offer.hash] = result
            self.decoded_offers.publish(decoded)
        return result

    # --- Server-side changes ---

    async def add_incoming_offer(self, offer_tlv: str, peer: str, message: str) -> Response:
        """Store an offer on the server. The server pushes it back as a received offer."""
        return await self.offer_add(offer_tlv, peer, message)

    async def remove_incoming_offer(self, offer_hash: str) -> Response:
        """Remove an offer on the server and drop it from the cache when the server confirms."""
        resp = await self.offer_remove(offer_hash)
        if resp.result:
            # The server answers with the removed hash
            self.incoming_offer_removed(str(resp.result))
        return resp

    async def remove_incoming_offer_by_temporary_contract_id(self, temporary_contract_id: str) -> Response | None:
        """Remove the offer whose decoded form has ``temporary_contract_id``. Return None if none matches."""
        offer_hash = self.get_offer_hash_by_temporary_contract_id(temporary_contract_id)
        if offer_hash is None:
            return None
        return await self.remove_incoming_offer(offer_hash)

    def get_offer_hash_by_temporary_contract_id(self, temporary_contract_id: str) -> str | None:
        """Find the hash of a decoded offer by its temporary contract id."""
        for offer_hash, decoded in self.decoded_offers.value.items():
            if decoded.temporary_contract_id == temporary_contract_id:
                return offer_hash
        return None

    async def send_incoming_offer(self, offer_tlv_or_temp_id: str, peer: str, message: str) -> Response:
        """Send an offer (by TLV or temporary contract id) to a peer."""
        return await self.offer_send(offer_tlv_or_temp_id, peer, message)

    # --- Messages ---

    async def offer_list(self) -> Response:
        """List incoming offers."""
        return await self._client.call(WalletMethod.OFFERS_LIST)

    async def offer_add(self, offer_tlv: str, peer: str, message: str) -> Response:
        """Store an incoming offer. The server answers with its hash."""
        validate_string(offer_tlv, "offer_add", "offer_tlv")
        validate_string(peer, "offer_add", "peer")
        validate_string(message, "offer_add", "message")
        logger.debug("offer-add %s %s", peer, message)
        return await self._client.call(WalletMethod.OFFER_ADD, offer_tlv, peer, message)

    async def offer_remove(self, offer_hash: str) -> Response:
        """Remove an incoming offer. The server answers with its hash."""
        validate_string(offer_hash, "offer_remove", "offer_hash")
        logger.debug("offer-remove %s", offer_hash)
        return await self._client.call(WalletMethod.OFFER_REMOVE, offer_hash)

    async def offer_send(self, offer_tlv_or_temp_id: str, peer: str, message: str) -> Response:
        """Send an offer to a peer."""
        validate_string(offer_tlv_or_temp_id, "offer_send", "offer_tlv_or_temp_id")
        validate_string(peer, "offer_send", "peer")
        validate_string(message, "offer_send", "message")
        logger.debug("offer-send %s %s", peer, message)
        return await self._client.call(WalletMethod.OFFER_SEND, offer_tlv_or_temp_id, peer, message)
