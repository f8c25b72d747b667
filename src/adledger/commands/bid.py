"""Command: place a bid on an ad."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from adledger.commands._base import LedgerCommand
from adledger.services.ads import AdService

if TYPE_CHECKING:
    from adledger.commands._context import AppContext


@click.command(
    cls=LedgerCommand,
    examples="""\
  adledger bid AD_ID --bidder alice --amount 100
  adledger --json bid AD_ID --bidder bob --amount 149.99""",
)
@click.argument("ad_id")
@click.option("--bidder", required=True, help="Bidder identity.")
@click.option("--amount", required=True, type=float, help="Offer amount.")
@click.pass_obj
def bid(app: AppContext, ad_id: str, bidder: str, amount: float) -> None:
    """Bid on an open ad. One bid per bidder; owners cannot bid."""
    app.emit(AdService(app.ledger).bid_on_ad(ad_id, bidder, amount))
