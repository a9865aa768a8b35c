"""List and remove incoming offers."""

import typer

from dlcwallet.app_context import use_context


def offers(ctx: typer.Context) -> None:
    """List incoming offers."""
    app = use_context(ctx)
    service = app.wallet().offers
    app.run(service.initialize())
    app.out.print_offers(service.offers.value, service.decoded_offers.value)


def offer_remove(ctx: typer.Context, offer_hash: str) -> None:
    """Remove an incoming offer by hash."""
    app = use_context(ctx)
    app.check(app.run(app.wallet().offers.remove_incoming_offer(offer_hash)))
    app.out.print_offer_removed(offer_hash)
