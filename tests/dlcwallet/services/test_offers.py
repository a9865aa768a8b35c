"""Tests for the incoming offer cache."""

import asyncio

import httpx
import pytest

from dlcwallet.models import IncomingOffer
from dlcwallet.server.client import ServerClient
from dlcwallet.server.protocol import Response
from dlcwallet.services.offers import OfferService


def offer(offer_hash: str) -> dict:
    return {"hash": offer_hash, "offerTLV": f"tlv-{offer_hash}", "peer": "bob.onion:2862", "message": "hi", "receivedAt": 1}


def decode_offer(params):
    """Decode every TLV except those marked bad."""
    tlv = params[0]
    if "bad" in tlv:
        return Response(error=f"cannot decode {tlv}")
    return Response(result={"temporaryContractId": f"temp-{tlv}"})


@pytest.fixture
def service(client: ServerClient) -> OfferService:
    """Offer service on the fake server."""
    return OfferService(client)


@pytest.fixture
def loaded(backend, service: OfferService) -> OfferService:
    """Service loaded with two decodable offers."""
    backend.on("offers-list", [offer("h1"), offer("h2")])
    backend.on_call("decodeoffer", decode_offer)
    asyncio.run(service.initialize())
    return service


class TestLoad:
    """load_incoming_offers() lists and decodes."""

    def test_decodes_every_offer(self, backend, loaded: OfferService):
        """Each offer gets a decoded entry keyed by hash."""
        assert [o.hash for o in loaded.offers.value] == ["h1", "h2"]
        assert loaded.decoded_offers.value["h1"].hex == "tlv-h1"
        assert loaded.decoded_offers.value["h2"].temporary_contract_id == "temp-tlv-h2"
        assert loaded.initialized.value is True

    def test_bad_payload_skipped(self, backend, service: OfferService):
        """N offers with one bad payload yield N-1 decoded entries."""
        backend.on("offers-list", [offer("h1"), offer("bad"), offer("h3")])
        backend.on_call("decodeoffer", decode_offer)
        asyncio.run(service.initialize())
        assert len(service.offers.value) == 3
        assert sorted(service.decoded_offers.value) == ["h1", "h3"]

    def test_transport_failure_contained(self, backend, service: OfferService):
        """A decode that fails at the transport level is skipped too."""

        def flaky(params):
            if params[0] == "tlv-h2":
                return httpx.Response(502, text="bad gateway")
            return decode_offer(params)

        backend.on("offers-list", [offer("h1"), offer("h2")])
        backend.on_call("decodeoffer", flaky)
        asyncio.run(service.initialize())
        assert list(service.decoded_offers.value) == ["h1"]
        assert service.initialized.value is True

    def test_malformed_entries_skipped(self, backend, service: OfferService):
        """Entries with a null or missing offerTLV are dropped; the rest still load and decode."""
        listing = [offer("h1"), {"hash": "h2", "offerTLV": None}, {"hash": "h3"}, offer("h4")]
        backend.on("offers-list", listing)
        backend.on_call("decodeoffer", decode_offer)
        asyncio.run(service.initialize())
        assert [o.hash for o in service.offers.value] == ["h1", "h4"]
        assert sorted(service.decoded_offers.value) == ["h1", "h4"]
        assert backend.count("decodeoffer") == 2
        assert service.initialized.value is True

    def test_absent_list_clears(self, backend, loaded: OfferService):
        """A null listing leaves no offers."""
        backend.on("offers-list", None)
        asyncio.run(loaded.load_incoming_offers())
        assert loaded.offers.value == []

    def test_uninitialize(self, loaded: OfferService):
        """uninitialize() clears both maps and the ready flag."""
        loaded.uninitialize()
        assert loaded.offers.value == []
        assert loaded.decoded_offers.value == {}
        assert loaded.initialized.value is False


class TestPushUpdates:
    """Offers arriving or disappearing outside a full load."""

    def test_received_appended_before_decode(self, backend, service: OfferService):
        """The offer is listed at once and decoded once the task completes."""
        backend.on_call("decodeoffer", decode_offer)

        async def run():
            task = service.incoming_offer_received(IncomingOffer.model_validate(offer("h7")))
            listed = [o.hash for o in service.offers.value]
            decoded_before = dict(service.decoded_offers.value)
            await task
            return listed, decoded_before

        listed, decoded_before = asyncio.run(run())
        assert listed == ["h7"]
        assert decoded_before == {}
        assert service.decoded_offers.value["h7"].hex == "tlv-h7"

    def test_received_bad_payload(self, backend, service: OfferService):
        """An undecodable pushed offer stays listed without a decoded entry."""
        backend.on_call("decodeoffer", decode_offer)

        async def run():
            await service.incoming_offer_received(IncomingOffer.model_validate(offer("bad")))

        asyncio.run(run())
        assert [o.hash for o in service.offers.value] == ["bad"]
        assert service.decoded_offers.value == {}

    def test_removed_drops_both(self, loaded: OfferService):
        """Removal deletes the offer and its decoded form."""
        assert loaded.incoming_offer_removed("h1") is True
        assert [o.hash for o in loaded.offers.value] == ["h2"]
        assert "h1" not in loaded.decoded_offers.value

    def test_removed_unknown_is_noop(self, loaded: OfferService):
        """Removing an unknown hash changes nothing."""
        assert loaded.incoming_offer_removed("nope") is False
        assert len(loaded.offers.value) == 2
        assert len(loaded.decoded_offers.value) == 2


class TestServerRemoval:
    """Removal through the server."""

    def test_remove_incoming_offer(self, backend, loaded: OfferService):
        """The hash echoed by the server is dropped locally."""
        backend.on("offer-remove", "h2")
        asyncio.run(loaded.remove_incoming_offer("h2"))
        assert backend.params("offer-remove") == [["h2"]]
        assert [o.hash for o in loaded.offers.value] == ["h1"]
        assert "h2" not in loaded.decoded_offers.value

    def test_remove_refused(self, backend, loaded: OfferService):
        """An error answer keeps the offer."""
        backend.on("offer-remove", error="not found")
        asyncio.run(loaded.remove_incoming_offer("h2"))
        assert len(loaded.offers.value) == 2

    def test_by_temporary_contract_id(self, backend, loaded: OfferService):
        """The hash is resolved through the decoded offers."""
        backend.on("offer-remove", "h1")
        resp = asyncio.run(loaded.remove_incoming_offer_by_temporary_contract_id("temp-tlv-h1"))
        assert resp is not None
        assert backend.params("offer-remove") == [["h1"]]
        assert [o.hash for o in loaded.offers.value] == ["h2"]

    def test_by_unknown_temporary_contract_id(self, backend, loaded: OfferService):
        """No match sends nothing."""
        assert asyncio.run(loaded.remove_incoming_offer_by_temporary_contract_id("temp-nope")) is None
        assert backend.count("offer-remove") == 0


class TestMessages:
    """Message wrappers."""

    def test_offer_add(self, backend, service: OfferService):
        """Arguments are sent in tlv, peer, message order."""
        backend.on("offer-add", "h9")
        resp = asyncio.run(service.add_incoming_offer("tlv-9", "bob.onion:2862", "hello"))
        assert resp.result == "h9"
        assert backend.params("offer-add") == [["tlv-9", "bob.onion:2862", "hello"]]

    def test_offer_send(self, backend, service: OfferService):
        """Sending accepts a TLV or a temporary contract id."""
        backend.on("offer-send", "sent")
        asyncio.run(service.send_incoming_offer("temp-1", "bob.onion:2862", "hello"))
        assert backend.params("offer-send") == [["temp-1", "bob.onion:2862", "hello"]]
