"""Tests for the CLI commands against the fake server."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from dlcwallet.app_context import AppContext
from dlcwallet.cli import app
from dlcwallet.orchestrator import WalletContext
from dlcwallet.server.client import ServerClient
from dlcwallet.server.protocol import Response

runner = CliRunner()


@pytest.fixture(autouse=True)
def wired(monkeypatch: pytest.MonkeyPatch, client: ServerClient) -> None:
    """Route every command to the fake server."""
    monkeypatch.setattr(AppContext, "wallet", lambda _self: WalletContext.create(client, poll_interval=0.01))


def invoke(tmp_path: Path, *args: str) -> dict:
    result = runner.invoke(app, ["--json", "--data-dir", str(tmp_path), *args])
    return json.loads(result.stdout.strip().splitlines()[-1])


class TestCommands:
    """JSON output of each command."""

    def test_status(self, backend, tmp_path: Path):
        """status prints the aggregate snapshot."""
        backend.on("getversion", {"version": "1.9.9-224-6f0e5b3c"})
        backend.on("getinfo", {"network": "regtest"})
        backend.on("getdlchostaddress", "0.0.0.0:2862")
        backend.on("estimatefee", -1)
        out = invoke(tmp_path, "status")
        assert out["ok"] is True
        assert out["data"]["short_version"] == "1.9.9-224-6f0e5b3c"
        assert out["data"]["fee_estimate"] == 1

    def test_contacts(self, backend, tmp_path: Path):
        """contacts lists the address book."""
        backend.on("contacts-list", [{"alias": "alice", "address": "alice.onion:2862", "memo": ""}])
        out = invoke(tmp_path, "contacts")
        assert out["data"]["contacts"] == [{"alias": "alice", "address": "alice.onion:2862", "memo": ""}]

    def test_offers(self, backend, tmp_path: Path):
        """offers lists incoming offers with their temporary contract ids."""
        backend.on("offers-list", [{"hash": "h1", "offerTLV": "tlv"}])
        backend.on_call("decodeoffer", lambda _p: Response(result={"temporaryContractId": "t1"}))
        out = invoke(tmp_path, "offers")
        assert out["data"]["offers"][0]["hash"] == "h1"
        assert out["data"]["offers"][0]["temporaryContractId"] == "t1"

    def test_dlc_cancel(self, backend, tmp_path: Path):
        """dlc-cancel confirms the cancelled id."""
        backend.on("canceldlc", "ok")
        out = invoke(tmp_path, "dlc-cancel", "d1")
        assert out == {"ok": True, "data": {"dlc_id": "d1"}}


class TestErrors:
    """Errors become JSON error envelopes and exit code 1."""

    def test_server_error_envelope(self, backend, tmp_path: Path):
        """An application error is reported with the server's text."""
        backend.on("offer-remove", error="offer not found")
        result = runner.invoke(app, ["--json", "--data-dir", str(tmp_path), "offer-remove", "h9"])
        assert result.exit_code == 1
        assert json.loads(result.stdout) == {"ok": False, "error": "server_error", "message": "offer not found"}

    def test_transport_error(self, backend, tmp_path: Path):
        """An HTTP failure is reported with its code."""
        result = runner.invoke(app, ["--json", "--data-dir", str(tmp_path), "contact-remove", "alice.onion:2862"])
        assert result.exit_code == 1
        assert json.loads(result.stdout)["error"] == "http_error"
