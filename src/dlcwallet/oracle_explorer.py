"""Oracle explorer REST client: announcements, attestations, and the oracle's public name."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Self

import httpx

from dlcwallet.config import Config
from dlcwallet.observable import Subject

logger = logging.getLogger(__name__)

# Tells the proxy in front of the explorer which upstream host to reach
HOST_OVERRIDE_HEADER = "host-override"


@dataclass(frozen=True, slots=True)
class OracleExplorer:
    """One public oracle explorer deployment."""

    value: str
    name: str
    host: str


ORACLE_EXPLORERS: dict[str, OracleExplorer] = {
    "test": OracleExplorer("test", "Suredbits Test Oracle Explorer", "test.oracle.suredbits.com"),
    "prod": OracleExplorer("prod", "Suredbits Production Oracle Explorer", "oracle.suredbits.com"),
}
DEFAULT_ORACLE_EXPLORER = "test"


class OracleExplorerError(Exception):
    """Oracle explorer request refused locally or failed remotely."""

    def __init__(self, code: str, message: str) -> None:
        """Initialize with a machine-readable code and a human-readable message.

        Args:
            code: Machine-readable error code (e.g. "oracle_name_not_set").
            message: Human-readable error description.

        """
        super().__init__(message)
        self.code = code


class OracleExplorerClient:
    """Client for one oracle explorer API root.

    The oracle name is kept in ``oracle_name``; ``server_oracle_name`` is True once the explorer itself
    reported that name, after which it can only be changed with ``force``.
    """

    def __init__(
        self,
        url: str,
        name_path: Path,
        explorer: str = DEFAULT_ORACLE_EXPLORER,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize client settings.

        Args:
            url: Explorer API root, e.g. "http://localhost:4200/oracleexplorer".
            name_path: File holding the locally chosen oracle name.
            explorer: Key into ORACLE_EXPLORERS; unknown keys fall back to the default explorer.
            transport: Optional httpx transport, used to route requests somewhere other than the network.

        """
        self._url = url.rstrip("/")
        self._name_path = name_path
        self._transport = transport
        self.oracle_name: Subject[str] = Subject("")
        self.server_oracle_name: Subject[bool] = Subject(False)
        self.explorer: Subject[OracleExplorer] = Subject(
            ORACLE_EXPLORERS.get(explorer, ORACLE_EXPLORERS[DEFAULT_ORACLE_EXPLORER])
        )

    @classmethod
    def from_config(cls, cfg: Config) -> Self:
        """Build a client for the explorer described by ``cfg``."""
        return cls(cfg.oracle_explorer_url, cfg.oracle_name_path, cfg.oracle_explorer)

    def set_oracle_explorer(self, value: str) -> None:
        """Switch to another explorer deployment.

        Raises:
            OracleExplorerError: Unknown explorer (code: ``unknown_explorer``).

        """
        if value not in ORACLE_EXPLORERS:
            raise OracleExplorerError("unknown_explorer", f"Unknown oracle explorer '{value}'.")
        self.explorer.publish(ORACLE_EXPLORERS[value])

    # --- Announcements ---

    async def list_announcements(self) -> list[dict[str, Any]]:
        """All announcements known to the explorer."""
        resp = await self._request("GET", "/announcements", host_override=True)
        return resp.json()

    async def get_announcement(self, announcement_hash: str) -> dict[str, Any]:
        """One announcement by its TLV sha256."""
        resp = await self._request("GET", f"/announcements/{announcement_hash}", host_override=True)
        return resp.json()

    async def create_announcement(self, announcement_tlv: str, event_name: str) -> str:
        """Publish an announcement under the current oracle name. The explorer answers with its hash.

        Raises:
            OracleExplorerError: No oracle name is set (code: ``oracle_name_not_set``); nothing is sent.

        """
        oracle_name = self._require_oracle_name("announcements")
        data = {"oracleAnnouncementV0": announcement_tlv, "description": event_name, "oracleName": oracle_name}
        logger.debug("create_announcement %s as %s", event_name, oracle_name)
        resp = await self._request("POST", "/announcements", data=data)
        return resp.text

    async def create_attestations(self, announcement_hash: str, attestations: str) -> dict[str, Any]:
        """Publish the attestations of an announced event.

        Raises:
            OracleExplorerError: No oracle name is set (code: ``oracle_name_not_set``); nothing is sent.

        """
        self._require_oracle_name("attestations")
        logger.debug("create_attestations %s", announcement_hash)
        path = f"/announcements/{announcement_hash}/attestations"
        resp = await self._request("POST", path, data={"attestations": attestations})
        return resp.json()

    # --- Oracle name ---

    async def get_oracle_name(self, pubkey: str) -> dict[str, Any] | None:
        """Name the explorer has registered for an oracle public key, None if it has none."""
        resp = await self._request("GET", f"/oracle/{pubkey}", allow_missing=True)
        if resp.status_code == httpx.codes.NOT_FOUND or not resp.content:
            return None
        return resp.json()

    async def load_oracle_name(self, pubkey: str) -> str:
        """Resolve the oracle name: the explorer's name wins, then the locally stored one, else empty."""
        result = await self.get_oracle_name(pubkey)
        local_name = self._read_local_name()

        if result:
            server_name = result.get("oracleName") or ""
            if server_name and local_name and server_name != local_name:
                logger.error("Local oracle name %r does not match explorer name %r, using explorer name", local_name, server_name)
                self._write_local_name(server_name)
            self.oracle_name.publish(server_name)
            self.server_oracle_name.publish(True)
        elif local_name:
            self.oracle_name.publish(local_name)
            self.server_oracle_name.publish(False)
        else:
            logger.warning("No oracle name found for %s", pubkey)
            self.oracle_name.publish("")
            self.server_oracle_name.publish(False)
        return self.oracle_name.value

    def set_oracle_name(self, name: str, *, force: bool = False) -> bool:
        """Choose the oracle name locally. Return False if refused.

        Refused when the explorer already reported a name and ``force`` is not set. An empty name is ignored.
        """
        if self.server_oracle_name.value and not force:
            logger.error("Cannot change oracle name once set on the oracle explorer")
            return False
        if not name:
            return False
        self._write_local_name(name)
        self.oracle_name.publish(name)
        return True

    # --- Internals ---

    def _require_oracle_name(self, what: str) -> str:
        if not self.oracle_name.value:
            raise OracleExplorerError("oracle_name_not_set", f"Oracle name must be set to create {what}.")
        return self.oracle_name.value

    def _read_local_name(self) -> str:
        if not self._name_path.is_file():
            return ""
        return self._name_path.read_text().strip()

    def _write_local_name(self, name: str) -> None:
        self._name_path.parent.mkdir(parents=True, exist_ok=True)
        self._name_path.write_text(name)

    async def _request(
        self,
        method: str,
        path: str,
        *,
        data: dict[str, str] | None = None,
        host_override: bool = False,
        allow_missing: bool = False,
    ) -> httpx.Response:
        """Send one request to the explorer.

        Raises:
            OracleExplorerError: Network failure (code: ``connection_error``) or non-success HTTP status
                (code: ``http_error``).

        """
        headers = {HOST_OVERRIDE_HEADER: self.explorer.value.host} if host_override else {}
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                resp = await client.request(method, self._url + path, data=data, headers=headers)
        except httpx.HTTPError as e:
            raise OracleExplorerError("connection_error", str(e) or type(e).__name__) from e

        if allow_missing and resp.status_code == httpx.codes.NOT_FOUND:
            return resp
        if not resp.is_success:
            logger.debug("%s %s failed with HTTP %d", method, path, resp.status_code)
            raise OracleExplorerError("http_error", resp.text)
        return resp
