"""Startup sequencing: wait for the server, load aggregate state, then load every cache."""

import logging
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Self

from dlcwallet.config import Config
from dlcwallet.joins import join_all
from dlcwallet.observable import Subject
from dlcwallet.server.client import ServerClient
from dlcwallet.server.poller import OFFLINE_POLL_INTERVAL, wait_for_server
from dlcwallet.services.addresses import AddressService
from dlcwallet.services.contacts import ContactService
from dlcwallet.services.dlcs import DLCService
from dlcwallet.services.offers import OfferService
from dlcwallet.state import WalletStateStore

logger = logging.getLogger(__name__)


class Phase(StrEnum):
    """Initialization progress."""

    IDLE = "idle"
    WAITING_FOR_BACKEND = "waiting-for-backend"
    LOADING_AGGREGATE = "loading-aggregate"
    LOADING_DOMAINS = "loading-domains"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class WalletContext:
    """Everything derived from one wallet server: the client, the aggregate state, and each cache."""

    client: ServerClient
    state: WalletStateStore
    addresses: AddressService
    contacts: ContactService
    dlcs: DLCService
    offers: OfferService
    poll_interval: float = field(default=OFFLINE_POLL_INTERVAL)

    @classmethod
    def create(cls, client: ServerClient, *, poll_interval: float = OFFLINE_POLL_INTERVAL) -> Self:
        """Build a context with fresh, empty caches around ``client``."""
        contacts = ContactService(client)
        return cls(
            client=client,
            state=WalletStateStore(client),
            addresses=AddressService(client),
            contacts=contacts,
            dlcs=DLCService(client, contacts),
            offers=OfferService(client),
            poll_interval=poll_interval,
        )

    @classmethod
    def from_config(cls, cfg: Config) -> Self:
        """Build a context for the server described by ``cfg``."""
        return cls.create(ServerClient(cfg.server_url, cfg.authorization_header), poll_interval=cfg.poll_interval)


class Orchestrator:
    """Runs the startup sequence for one WalletContext and publishes its phase."""

    def __init__(self, ctx: WalletContext) -> None:
        """Initialize in the idle phase.

        Args:
            ctx: Context to initialize.

        """
        self.ctx = ctx
        self.phase: Subject[Phase] = Subject(Phase.IDLE)
        self.error: BaseException | None = None

    @property
    def is_ready(self) -> bool:
        """True when every cache reports itself initialized."""
        ctx = self.ctx
        return all(s.initialized.value for s in (ctx.addresses, ctx.contacts, ctx.dlcs, ctx.offers))

    async def start(self) -> None:
        """Wait for the server, then load aggregate state, then every cache.

        The server wait retries forever on transport failures. Any other failure, in the wait or in either
        loading stage, leaves the orchestrator in the failed phase and is re-raised; nothing is retried.
        """
        self.error = None
        try:
            self.phase.publish(Phase.WAITING_FOR_BACKEND)
            logger.info("Waiting for wallet server at %s", self.ctx.client.url)
            answer = await wait_for_server(self.ctx.client, delay=self.ctx.poll_interval)
            if answer.result:
                self.ctx.state.set_version(answer.result)

            self.phase.publish(Phase.LOADING_AGGREGATE)
            await self.ctx.state.refresh()

            self.phase.publish(Phase.LOADING_DOMAINS)
            await self.initialize_services()
        except Exception as e:
            logger.exception("Initialization failed in phase %s", self.phase.value)
            self.error = e
            self.phase.publish(Phase.FAILED)
            raise

        self.phase.publish(Phase.READY)
        logger.info("Wallet state ready (server %s)", self.ctx.state.current.short_version)

    async def initialize_services(self) -> None:
        """Load all four caches concurrently; the first failure aborts the rest."""
        ctx = self.ctx
        await join_all(ctx.addresses.initialize(), ctx.contacts.initialize(), ctx.dlcs.initialize(), ctx.offers.initialize())

    def uninitialize(self) -> None:
        """Clear every cache and the aggregate state, and return to idle."""
        ctx = self.ctx
        for service in (ctx.addresses, ctx.contacts, ctx.dlcs, ctx.offers):
            service.uninitialize()
        ctx.state.clear()
        self.error = None
        self.phase.publish(Phase.IDLE)
