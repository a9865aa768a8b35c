"""Aggregate wallet server state, rebuilt from independent fetches."""

import dataclasses
import logging
import re
from dataclasses import dataclass
from typing import Any

from dlcwallet.joins import join_all
from dlcwallet.observable import Subject
from dlcwallet.server.client import ServerClient
from dlcwallet.server.messages import BlockchainMethod, CommonMethod, DLCMethod, WalletMethod
from dlcwallet.server.protocol import Response

logger = logging.getLogger(__name__)

# Server sentinel for "no estimate available"
FEE_RATE_NOT_SET = -1
# Published in place of the sentinel, sats/vbyte
DEFAULT_FEE_RATE = 1

# e.g. "1.9.9-224-6f0e5b3c" out of a longer version banner
_SHORT_VERSION_RE = re.compile(r"([.\w]+-[.\w]+-[.\w]+)", re.ASCII)


def short_version(version: str) -> str:
    """Extract the ``<token>-<token>-<token>`` part of a version string, or return it unchanged."""
    m = _SHORT_VERSION_RE.search(version)
    return m.group(1) if m else version


@dataclass(frozen=True)
class WalletState:
    """Snapshot of server-wide facts. Every update produces a new instance."""

    version: str = ""
    short_version: str = ""
    info: dict[str, Any] | None = None
    dlc_host_address: str = ""
    fee_estimate: float | None = None


class WalletStateStore:
    """Owns the aggregate snapshot and refreshes it from the server."""

    def __init__(self, client: ServerClient) -> None:
        """Initialize with an empty snapshot.

        Args:
            client: Client used for all fetches.

        """
        self._client = client
        self.state: Subject[WalletState] = Subject(WalletState())

    @property
    def current(self) -> WalletState:
        """Latest published snapshot."""
        return self.state.value

    async def refresh(self) -> WalletState:
        """Fetch version, node info, DLC host address and fee estimate concurrently.

        Each fetch publishes its part as soon as it arrives.

        Raises:
            ServerError: Any of the fetches failed at the transport level.

        """
        await join_all(self._fetch_version(), self._fetch_info(), self._fetch_dlc_host_address(), self._fetch_fee_estimate())
        logger.debug("State refreshed: %s", self.current)
        return self.current

    def clear(self) -> None:
        """Reset to an empty snapshot."""
        self.state.publish(WalletState())

    def set_version(self, result: Any) -> None:  # noqa: ANN401
        """Apply a ``getversion`` result to the snapshot."""
        version = result.get("version") if isinstance(result, dict) else None
        if not isinstance(version, str):
            logger.warning("Unexpected version result: %r", result)
            return
        self._update(version=version, short_version=short_version(version))

    def set_fee_estimate(self, fee: float | None) -> None:
        """Apply an ``estimatefee`` result, replacing the not-set sentinel with the default rate."""
        self._update(fee_estimate=DEFAULT_FEE_RATE if fee is None or fee == FEE_RATE_NOT_SET else fee)

    # --- Fetches ---

    async def _fetch_version(self) -> Response:
        resp = await self._client.call(CommonMethod.GET_VERSION)
        if resp.result:
            self.set_version(resp.result)
        return resp

    async def _fetch_info(self) -> Response:
        resp = await self._client.call(BlockchainMethod.GET_INFO)
        if resp.result:
            self._update(info=resp.result)
        return resp

    async def _fetch_dlc_host_address(self) -> Response:
        resp = await self._client.call(DLCMethod.GET_DLC_HOST_ADDRESS)
        if resp.result:
            self._update(dlc_host_address=resp.result)
        return resp

    async def _fetch_fee_estimate(self) -> Response:
        resp = await self._client.call(WalletMethod.ESTIMATE_FEE)
        if resp.result is not None:
            self.set_fee_estimate(resp.result)
        return resp

    def _update(self, **changes: Any) -> None:  # noqa: ANN401
        """Publish a copy of the current snapshot with ``changes`` applied."""
        self.state.publish(dataclasses.replace(self.state.value, **changes))
