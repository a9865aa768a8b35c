"""Show wallet server status."""

import typer

from dlcwallet.app_context import use_context
from dlcwallet.orchestrator import WalletContext
from dlcwallet.server.poller import wait_for_server
from dlcwallet.state import WalletState


async def _status(wallet: WalletContext) -> WalletState:
    answer = await wait_for_server(wallet.client, delay=wallet.poll_interval)
    if answer.result:
        wallet.state.set_version(answer.result)
    return await wallet.state.refresh()


def status(ctx: typer.Context) -> None:
    """Wait for the wallet server, then show version, network, DLC host and fee estimate."""
    app = use_context(ctx)
    state = app.run(_status(app.wallet()))
    app.out.print_status(state)
