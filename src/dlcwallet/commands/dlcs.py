"""List and cancel DLCs."""

import typer

from dlcwallet.app_context import use_context


def dlcs(ctx: typer.Context) -> None:
    """List DLCs with their decoded contract info."""
    app = use_context(ctx)
    service = app.wallet().dlcs
    app.run(service.initialize())
    app.out.print_dlcs(service.dlcs.value, service.contract_infos.value)


def dlc_cancel(ctx: typer.Context, dlc_id: str) -> None:
    """Cancel a DLC that has not been signed yet."""
    app = use_context(ctx)
    app.check(app.run(app.wallet().dlcs.cancel_dlc(dlc_id)))
    app.out.print_dlc_cancelled(dlc_id)
