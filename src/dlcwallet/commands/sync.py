"""Load every cache from the wallet server."""

import typer

from dlcwallet.app_context import use_context
from dlcwallet.orchestrator import Orchestrator


def sync(ctx: typer.Context) -> None:
    """Run the full startup sequence and show how much was loaded."""
    app = use_context(ctx)
    orchestrator = Orchestrator(app.wallet())
    app.run(orchestrator.start())
    wallet = orchestrator.ctx
    app.out.print_sync(
        {
            "funded addresses": len(wallet.addresses.funded_addresses.value),
            "unfunded addresses": len(wallet.addresses.unfunded_addresses.value),
            "contacts": len(wallet.contacts.contacts.value),
            "dlcs": len(wallet.dlcs.dlcs.value),
            "contract infos": len(wallet.dlcs.contract_infos.value),
            "offers": len(wallet.offers.offers.value),
            "decoded offers": len(wallet.offers.decoded_offers.value),
        }
    )
