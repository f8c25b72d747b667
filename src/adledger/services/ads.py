"""AdService — the ad lifecycle engine.

Each operation follows the same pipeline: VALIDATE the arguments, LOAD the
current ad, CHECK ownership and bidding rules, then APPLY one write and
RESPOND. Every rejection happens before the write, so a failed call never
leaves partial state behind.

Status rules:
- Any status may be set by the owner, in any direction (CLOSED -> OPEN is fine).
- Only OPEN ads accept bids; a bid never changes the status.
"""

from __future__ import annotations

import logging
from typing import Any

from adledger.domain.ads import (
    ALLOWED_STATUSES,
    Ad,
    AdStatus,
    Bid,
    is_valid_amount,
    parse_status,
)
from adledger.services.base import BaseService, store_guarded
from adledger.services.errors import ErrorCode
from adledger.services.result import ServiceResult

logger = logging.getLogger(__name__)


def _not_found_message(ad_id: str) -> str:
    return f"Ad with id of {ad_id} has not been found"


def _list_data(ads: list[Ad]) -> dict[str, Any]:
    return {"items": [ad.to_payload() for ad in ads], "count": len(ads)}


class AdService(BaseService):
    """Creates, edits, deletes and bids on ads."""

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    @store_guarded
    def create_ad(self, item_type: str, item_description: str) -> ServiceResult:
        """Create an OPEN ad with a synthesized owner identity.

        The returned ``owner`` is the only credential accepted by
        :meth:`update_ad` and :meth:`delete_ad` for this ad.
        """
        op = "create_ad"
        if not item_type or not item_description:
            return self._reject(op, ErrorCode.INVALID_PAYLOAD, "Invalid payload for creating ad")

        ad = Ad(
            id=self._ledger.new_id(),
            owner=self._ledger.new_owner(),
            item_type=item_type,
            item_description=item_description,
            bids=(),
            status=AdStatus.OPEN,
            created_at=self._ledger.now(),
            updated_at=None,
        )

        with self._ledger.transaction(ad.id) as txn:
            txn.store.insert(ad)

        logger.debug("Created ad %s (%s)", ad.id, ad.item_type)
        return ServiceResult.success(op, ad.to_payload())

    @store_guarded
    def update_ad(
        self,
        ad_id: str,
        owner: str,
        *,
        item_type: str,
        item_description: str,
        status: str | None = None,
    ) -> ServiceResult:
        """Replace an ad's descriptive fields and optionally its status.

        An empty *status* keeps the current one. ``updated_at`` is stamped
        on every successful call.
        """
        op = "update_ad"
        if not ad_id or not owner:
            return self._reject(
                op, ErrorCode.INVALID_PARAMETERS, "Invalid parameters for updating ad"
            )
        if not item_type or not item_description:
            return self._reject(op, ErrorCode.INVALID_PAYLOAD, "Invalid payload for updating ad")

        new_status: AdStatus | None = None
        if status:
            new_status = parse_status(status)
            if new_status is None:
                return self._reject(
                    op,
                    ErrorCode.INVALID_STATUS,
                    f"Invalid status! Allowed statuses are {', '.join(ALLOWED_STATUSES)}",
                    status=status,
                )

        with self._ledger.transaction(ad_id) as txn:
            ad = txn.store.get(ad_id)
            if ad is None:
                return self._reject(op, ErrorCode.NOT_FOUND, _not_found_message(ad_id), id=ad_id)
            if ad.owner != owner:
                return self._reject(
                    op, ErrorCode.UNAUTHORIZED, "Only the owner can edit the ad!", id=ad_id
                )

            updated = ad.edited(
                item_type=item_type,
                item_description=item_description,
                status=new_status,
                now=self._ledger.now(),
            )
            txn.store.insert(updated)

        if updated.status != ad.status:
            logger.debug("Ad %s status %s -> %s", ad_id, ad.status, updated.status)
        return ServiceResult.success(op, updated.to_payload())

    @store_guarded
    def delete_ad(self, ad_id: str, owner: str) -> ServiceResult:
        """Remove an ad; the result carries the pre-deletion snapshot."""
        op = "delete_ad"
        if not ad_id or not owner:
            return self._reject(
                op, ErrorCode.INVALID_PARAMETERS, "Invalid parameters for deleting ad"
            )

        with self._ledger.transaction(ad_id) as txn:
            ad = txn.store.get(ad_id)
            if ad is None:
                return self._reject(op, ErrorCode.NOT_FOUND, _not_found_message(ad_id), id=ad_id)
            if ad.owner != owner:
                return self._reject(
                    op, ErrorCode.UNAUTHORIZED, "Only the owner can delete the ad!", id=ad_id
                )
            txn.store.remove(ad_id)

        logger.debug("Deleted ad %s", ad_id)
        return ServiceResult.success(op, ad.to_payload())

    @store_guarded
    def bid_on_ad(self, ad_id: str, bidder: str, amount: Any) -> ServiceResult:
        """Append a bid from *bidder* to an OPEN ad.

        Rejections, in order: ad not open, bidder is the owner, bidder
        already has a bid on this ad.
        """
        op = "bid_on_ad"
        if not ad_id or not bidder or not is_valid_amount(amount):
            return self._reject(
                op, ErrorCode.INVALID_PARAMETERS, "Invalid parameters for bidding on ad"
            )

        with self._ledger.transaction(ad_id) as txn:
            ad = txn.store.get(ad_id)
            if ad is None:
                return self._reject(op, ErrorCode.NOT_FOUND, _not_found_message(ad_id), id=ad_id)
            if not ad.is_open:
                return self._reject(
                    op,
                    ErrorCode.AD_NOT_OPEN,
                    "Ad is no longer open",
                    id=ad_id,
                    status=str(ad.status),
                )
            if ad.owner == bidder:
                return self._reject(op, ErrorCode.SELF_BID, "You can't bid on your own ad!")
            if ad.has_bid_from(bidder):
                return self._reject(
                    op,
                    ErrorCode.DUPLICATE_BID,
                    f"{bidder} has already bid on this ad!",
                    bidder=bidder,
                )

            updated = ad.with_bid(Bid(bidder=bidder, amount=amount))
            txn.store.insert(updated)

        logger.debug("Bid %s on ad %s by %s", amount, ad_id, bidder)
        warnings: list[str] = []
        if amount <= 0:
            warnings.append(f"Bid amount {amount} is not positive")
        return ServiceResult.success(op, updated.to_payload(), warnings=warnings)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @store_guarded
    def get_all_ads(self) -> ServiceResult:
        """Every ad in key order. An empty ledger is a success."""
        with self._ledger.reader() as store:
            ads = store.values()
        return ServiceResult.success("get_all_ads", _list_data(ads))

    @store_guarded
    def get_ad_by_id(self, ad_id: str) -> ServiceResult:
        op = "get_ad_by_id"
        with self._ledger.reader() as store:
            ad = store.get(ad_id)
        if ad is None:
            return self._reject(
                op, ErrorCode.NOT_FOUND, f"{_not_found_message(ad_id)}!", id=ad_id
            )
        return ServiceResult.success(op, ad.to_payload())

    @store_guarded
    def get_ads_by_owner(self, owner: str) -> ServiceResult:
        """Ads whose owner matches exactly.

        Unlike :meth:`get_all_ads`, finding nothing is a ``NOT_FOUND`` failure.
        """
        op = "get_ads_by_owner"
        with self._ledger.reader() as store:
            ads = [ad for ad in store.values() if ad.owner == owner]
        if not ads:
            return self._reject(op, ErrorCode.NOT_FOUND, f"No ads found for {owner}", owner=owner)
        return ServiceResult.success(op, _list_data(ads))
