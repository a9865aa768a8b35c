"""Tests for the DLC cache and its contract info decoding."""

import asyncio

import httpx
import pytest

from dlcwallet.models import DLCContract
from dlcwallet.server.client import ServerClient, ServerError
from dlcwallet.server.protocol import Response
from dlcwallet.services.contacts import ContactService
from dlcwallet.services.dlcs import DLCService


def dlc(dlc_id: str, state: str = "Offered") -> dict:
    return {"dlcId": dlc_id, "contractInfo": f"info-{dlc_id}", "state": state}


def decode_echo(params):
    """Decoded contract info echoes the hex it was built from."""
    return Response(result={"decodedFrom": params[0]})


@pytest.fixture
def service(client: ServerClient) -> DLCService:
    """DLC service on the fake server."""
    return DLCService(client, ContactService(client))


@pytest.fixture
def loaded(backend, service: DLCService) -> DLCService:
    """Service loaded with two DLCs."""
    backend.on("getdlcs", [dlc("d1"), dlc("d2")])
    backend.on_call("decodecontractinfo", decode_echo)
    asyncio.run(service.initialize())
    return service


class TestLoad:
    """load_dlcs() replaces the list and decodes contract info."""

    def test_one_decode_per_id(self, backend, loaded: DLCService):
        """Each listed DLC is decoded exactly once."""
        assert [d.dlc_id for d in loaded.dlcs.value] == ["d1", "d2"]
        assert loaded.contract_infos.value == {"d1": {"decodedFrom": "info-d1"}, "d2": {"decodedFrom": "info-d2"}}
        assert backend.count("decodecontractinfo") == 2
        assert loaded.initialized.value is True

    def test_duplicate_ids_decoded_once(self, backend, service: DLCService):
        """A DLC id listed twice is decoded once."""
        backend.on("getdlcs", [dlc("d1"), dlc("d1")])
        backend.on_call("decodecontractinfo", decode_echo)
        asyncio.run(service.load_dlcs())
        assert backend.count("decodecontractinfo") == 1

    def test_reload_does_not_redecode(self, backend, loaded: DLCService):
        """Cached contract info is kept across reloads."""
        backend.on("getdlcs", [dlc("d1", "Accepted"), dlc("d2"), dlc("d3")])
        asyncio.run(loaded.load_dlcs())
        assert backend.params("decodecontractinfo")[2:] == [["info-d3"]]
        assert loaded.dlcs.value[0].state == "Accepted"

    def test_decode_transport_failure_aborts(self, backend, service: DLCService):
        """A failed decode fails the whole load."""
        backend.on("getdlcs", [dlc("d1"), dlc("d2")])
        backend.on_call("decodecontractinfo", lambda _p: httpx.Response(500, text="decoder crashed"))
        with pytest.raises(ServerError):
            asyncio.run(service.load_dlcs())
        assert service.initialized.value is False
        assert len(service.dlcs.value) == 2

    def test_decode_error_envelope_skipped(self, backend, service: DLCService):
        """A server-side decode error leaves that id without contract info."""
        backend.on("getdlcs", [dlc("d1")])
        backend.on("decodecontractinfo", error="invalid TLV")
        asyncio.run(service.load_dlcs())
        assert service.contract_infos.value == {}
        assert service.initialized.value is True

    def test_uninitialize_then_reload_decodes_again(self, backend, loaded: DLCService):
        """Clearing the cache allows a fresh decode."""
        loaded.uninitialize()
        assert loaded.dlcs.value == []
        assert loaded.contract_infos.value == {}
        asyncio.run(loaded.load_dlcs())
        assert backend.count("decodecontractinfo") == 4


class TestRefreshDLC:
    """refresh_dlc() merges one contract into the cache."""

    def test_existing_replaced_in_place(self, backend, loaded: DLCService):
        """A known id is replaced at its position without decoding."""
        backend.on("getdlc", dlc("d1", "Signed"))
        asyncio.run(loaded.refresh_dlc("d1"))
        assert [(d.dlc_id, d.state) for d in loaded.dlcs.value] == [("d1", "Signed"), ("d2", "Offered")]
        assert backend.count("decodecontractinfo") == 2

    def test_new_id_appended_and_decoded(self, backend, loaded: DLCService):
        """An unknown id is appended and its contract info is ready on return."""
        backend.on("getdlc", dlc("d3"))
        asyncio.run(loaded.refresh_dlc("d3"))
        assert [d.dlc_id for d in loaded.dlcs.value] == ["d1", "d2", "d3"]
        assert loaded.contract_infos.value["d3"] == {"decodedFrom": "info-d3"}

    def test_repeated_refresh_decodes_once(self, backend, service: DLCService):
        """Refreshing the same new DLC again never re-decodes it."""
        backend.on("getdlc", dlc("d9"))
        backend.on_call("decodecontractinfo", decode_echo)
        for _ in range(3):
            asyncio.run(service.refresh_dlc("d9"))
        assert backend.count("decodecontractinfo") == 1
        assert len(service.dlcs.value) == 1

    def test_missing_dlc(self, backend, loaded: DLCService):
        """An error answer leaves the cache untouched."""
        backend.on("getdlc", error="DLC not found")
        assert asyncio.run(loaded.refresh_dlc("nope")) is None
        assert len(loaded.dlcs.value) == 2

    def test_cached_info_returned_without_decode(self, backend, loaded: DLCService):
        """load_contract_info() returns cached info directly."""
        info = asyncio.run(loaded.load_contract_info(DLCContract(dlc_id="d1", contract_info="info-d1")))
        assert info == {"decodedFrom": "info-d1"}
        assert backend.count("decodecontractinfo") == 2


class TestRemoval:
    """remove_dlc() / cancel_dlc()."""

    def test_remove_unknown_is_noop(self, loaded: DLCService):
        """Removing an id that is not cached changes nothing."""
        seen = []
        loaded.dlcs.subscribe(seen.append)
        assert loaded.remove_dlc("nope") is False
        assert [d.dlc_id for d in loaded.dlcs.value] == ["d1", "d2"]
        assert len(seen) == 1

    def test_remove_known(self, loaded: DLCService):
        """Removing a cached id drops it."""
        assert loaded.remove_dlc("d1") is True
        assert [d.dlc_id for d in loaded.dlcs.value] == ["d2"]

    def test_cancel_removes_on_success(self, backend, loaded: DLCService):
        """A confirmed cancel removes the DLC."""
        backend.on("canceldlc", "ok")
        asyncio.run(loaded.cancel_dlc("d2"))
        assert backend.params("canceldlc") == [["d2"]]
        assert [d.dlc_id for d in loaded.dlcs.value] == ["d1"]

    def test_cancel_error_keeps_dlc(self, backend, loaded: DLCService):
        """A refused cancel leaves the cache alone."""
        backend.on("canceldlc", error="already signed")
        resp = asyncio.run(loaded.cancel_dlc("d2"))
        assert resp.error == "already signed"
        assert len(loaded.dlcs.value) == 2


class TestContacts:
    """Peer assertion on contact attach/detach."""

    def test_add_contact_sets_peer(self, backend, loaded: DLCService):
        """A successful attach sets the peer and republishes."""
        backend.on("dlc-contact-add", "ok")
        seen = []
        loaded.dlcs.subscribe(seen.append)
        target = loaded.dlcs.value[0]
        asyncio.run(loaded.add_contact(target, "bob.onion:2862"))
        assert target.peer == "bob.onion:2862"
        assert len(seen) == 2

    def test_add_contact_failure(self, backend, loaded: DLCService):
        """A failed attach leaves the peer unset."""
        backend.on("dlc-contact-add", error="unknown contact")
        target = loaded.dlcs.value[0]
        asyncio.run(loaded.add_contact(target, "bob.onion:2862"))
        assert target.peer is None

    def test_remove_contact_clears_peer(self, backend, loaded: DLCService):
        """A successful detach clears the peer."""
        backend.on("dlc-contact-remove", "ok")
        target = loaded.dlcs.value[1]
        target.peer = "bob.onion:2862"
        asyncio.run(loaded.remove_contact(target))
        assert target.peer is None


class TestMessages:
    """Message wrappers."""

    def test_get_dlcs_by_contact(self, backend, service: DLCService):
        """A contact address filters the listing."""
        backend.on("getdlcs", [])
        asyncio.run(service.get_dlcs("bob.onion:2862"))
        asyncio.run(service.get_dlcs())
        assert backend.params("getdlcs") == [["bob.onion:2862"], []]
