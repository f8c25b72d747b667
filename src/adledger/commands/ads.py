"""Commands: create, update, delete, show and list ads."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from adledger.commands._base import LedgerCommand
from adledger.domain.ads import ALLOWED_STATUSES
from adledger.services.ads import AdService

if TYPE_CHECKING:
    from adledger.commands._context import AppContext


@click.command(
    cls=LedgerCommand,
    examples="""\
  adledger create bike "red bike, 21 gears"
  adledger --json create furniture "oak table" """,
)
@click.argument("item_type")
@click.argument("item_description")
@click.pass_obj
def create(app: AppContext, item_type: str, item_description: str) -> None:
    """Create an ad. Prints the new ad, including its owner token."""
    app.emit(AdService(app.ledger).create_ad(item_type, item_description))


@click.command(
    cls=LedgerCommand,
    examples="""\
  adledger update AD_ID --owner OWNER --item-type bike --item-description "blue bike"
  adledger update AD_ID --owner OWNER --item-type bike --item-description "sold" --status BOUGHT""",
)
@click.argument("ad_id")
@click.option("--owner", required=True, help="Owner token returned by create.")
@click.option("--item-type", required=True, help="Item type.")
@click.option("--item-description", required=True, help="Item description.")
@click.option(
    "--status",
    default="",
    help=f"New status ({', '.join(ALLOWED_STATUSES)}). Omit to keep the current one.",
)
@click.pass_obj
def update(
    app: AppContext,
    ad_id: str,
    owner: str,
    item_type: str,
    item_description: str,
    status: str,
) -> None:
    """Edit an ad you own."""
    app.emit(
        AdService(app.ledger).update_ad(
            ad_id,
            owner,
            item_type=item_type,
            item_description=item_description,
            status=status,
        )
    )


@click.command(
    cls=LedgerCommand,
    examples="""\
  adledger delete AD_ID --owner OWNER""",
)
@click.argument("ad_id")
@click.option("--owner", required=True, help="Owner token returned by create.")
@click.pass_obj
def delete(app: AppContext, ad_id: str, owner: str) -> None:
    """Delete an ad you own."""
    app.emit(AdService(app.ledger).delete_ad(ad_id, owner))


@click.command(cls=LedgerCommand)
@click.argument("ad_id")
@click.pass_obj
def show(app: AppContext, ad_id: str) -> None:
    """Show one ad and its bids."""
    app.emit(AdService(app.ledger).get_ad_by_id(ad_id))


@click.command(
    "list",
    cls=LedgerCommand,
    examples="""\
  adledger list
  adledger list --owner OWNER
  adledger -q list""",
)
@click.option("--owner", default=None, help="Only ads with this owner (fails if none).")
@click.pass_obj
def list_ads(app: AppContext, owner: str | None) -> None:
    """List all ads, or the ads of one owner."""
    svc = AdService(app.ledger)
    if owner is None:
        app.emit(svc.get_all_ads())
    else:
        app.emit(svc.get_ads_by_owner(owner))
