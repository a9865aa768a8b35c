"""Generate a receive address."""

from typing import Annotated

import typer

from dlcwallet.app_context import use_context


def new_address(
    ctx: typer.Context, label: Annotated[str | None, typer.Option("--label", "-l", help="Label for the new address")] = None
) -> None:
    """Generate a new receive address, optionally labeled."""
    app = use_context(ctx)
    resp = app.check(app.run(app.wallet().addresses.get_new_address(label)))
    app.out.print_new_address(str(resp.result))
