"""CLI entry point for dlcwallet."""

from pathlib import Path
from typing import Annotated

import typer
from mm_clikit import TyperPlus

from dlcwallet.app_context import AppContext
from dlcwallet.commands.addresses import addresses
from dlcwallet.commands.contacts import contact_add, contact_remove, contacts
from dlcwallet.commands.dlcs import dlc_cancel, dlcs
from dlcwallet.commands.new_address import new_address
from dlcwallet.commands.offers import offer_remove, offers
from dlcwallet.commands.status import status
from dlcwallet.commands.sync import sync
from dlcwallet.config import Config
from dlcwallet.log import setup_logging
from dlcwallet.output import Output

app = TyperPlus(package_name="dlcwallet")


@app.callback()
def callback(
    ctx: typer.Context,
    *,
    json_output: Annotated[bool, typer.Option("--json", help="Output results as JSON.")] = False,
    data_dir: Annotated[Path | None, typer.Option("--data-dir", help="Data directory path.")] = None,
    url: Annotated[str | None, typer.Option("--url", help="Wallet server endpoint.")] = None,
    auth: Annotated[str | None, typer.Option("--auth", help="Raw Authorization header value.")] = None,
) -> None:
    """Talk to a bitcoin-s DLC wallet server from the terminal."""
    cfg = Config.build(data_dir, server_url=url, authorization=auth)
    cfg.data_dir.mkdir(parents=True, exist_ok=True)
    setup_logging(cfg.log_path)
    ctx.obj = AppContext(out=Output(json_mode=json_output), cfg=cfg)


# Server
app.command(aliases=["s"])(status)
app.command()(sync)

# Addresses
app.command()(addresses)
app.command("new-address")(new_address)

# Contacts
app.command()(contacts)
app.command("contact-add")(contact_add)
app.command("contact-remove")(contact_remove)

# DLCs
app.command()(dlcs)
app.command("dlc-cancel")(dlc_cancel)

# Offers
app.command()(offers)
app.command("offer-remove")(offer_remove)
