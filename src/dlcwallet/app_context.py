"""Application context shared across CLI commands."""

import asyncio
from collections.abc import Coroutine
from dataclasses import dataclass
from typing import Any, TypeVar

import typer

from dlcwallet.config import Config
from dlcwallet.orchestrator import WalletContext
from dlcwallet.oracle_explorer import OracleExplorerError
from dlcwallet.output import Output
from dlcwallet.server.client import ServerError
from dlcwallet.server.protocol import Response
from dlcwallet.validation import ArgumentError

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class AppContext:
    """Shared application state passed through Typer context."""

    out: Output
    cfg: Config

    def wallet(self) -> WalletContext:
        """Build a fresh wallet context for the configured server."""
        return WalletContext.from_config(self.cfg)

    def run(self, coro: Coroutine[Any, Any, T]) -> T:
        """Run a coroutine to completion, turning client errors into a CLI error exit."""
        try:
            return asyncio.run(coro)
        except (ServerError, ArgumentError, OracleExplorerError) as e:
            self.out.print_error_and_exit(e.code, str(e))

    def check(self, resp: Response) -> Response:
        """Exit with the server's message when the response carries an application error."""
        if resp.error is not None:
            self.out.print_error_and_exit("server_error", resp.error)
        return resp


def use_context(ctx: typer.Context) -> AppContext:
    """Extract application context from Typer context."""
    result: AppContext = ctx.obj
    return result
