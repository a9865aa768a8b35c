"""Manage the address book."""

import typer

from dlcwallet.app_context import use_context


def contacts(ctx: typer.Context) -> None:
    """List contacts."""
    app = use_context(ctx)
    service = app.wallet().contacts
    app.run(service.initialize())
    app.out.print_contacts(service.contacts.value)


def contact_add(ctx: typer.Context, alias: str, address: str, memo: str = typer.Argument("", help="Free-form note")) -> None:
    """Add a contact by alias and peer address."""
    app = use_context(ctx)
    app.check(app.run(app.wallet().contacts.contact_add(alias, address, memo)))
    app.out.print_contact_added(alias, address)


def contact_remove(ctx: typer.Context, address: str) -> None:
    """Remove the contact with the given address."""
    app = use_context(ctx)
    app.check(app.run(app.wallet().contacts.contact_remove(address)))
    app.out.print_contact_removed(address)
