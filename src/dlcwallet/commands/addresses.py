"""List wallet addresses."""

import typer

from dlcwallet.app_context import use_context


def addresses(ctx: typer.Context) -> None:
    """List funded and unused addresses with their labels."""
    app = use_context(ctx)
    service = app.wallet().addresses
    app.run(service.initialize())
    app.out.print_addresses(service.funded_addresses.value, service.unfunded_addresses.value, service.address_label_map.value)
