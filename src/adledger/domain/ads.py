"""Ad and Bid models plus the listing status lifecycle.

Status is a closed set. Unlike most lifecycles there is no transition
map: the owner may move an ad between any two statuses by explicit
update. Only OPEN accepts new bids, and placing a bid never changes
the status.
"""

from __future__ import annotations

import math
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class AdStatus(StrEnum):
    """Listing status."""

    OPEN = "OPEN"
    CLOSED = "CLOSED"
    BOUGHT = "BOUGHT"


ALLOWED_STATUSES: tuple[str, ...] = tuple(s.value for s in AdStatus)


def parse_status(value: str) -> AdStatus | None:
    """Return the matching AdStatus, or None if *value* is not a member.

    Matching is exact (case-sensitive) against the enum values.
    """
    try:
        return AdStatus(value)
    except ValueError:
        return None


def is_valid_amount(amount: Any) -> bool:
    """Check that *amount* is a real, finite number (bools excluded).

    Ints beyond float range are rejected.
    """
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        return False
    try:
        return math.isfinite(float(amount))
    except OverflowError:
        return False


class Bid(BaseModel):
    """An offer placed on an ad."""

    model_config = ConfigDict(frozen=True)

    bidder: str
    amount: float


class Ad(BaseModel):
    """A listing with its accumulated bids.

    Serialized with the camelCase names of the external interface
    (``itemType``, ``createdAt`` ...); Python code uses snake_case.
    Timestamps are integer nanoseconds since the epoch.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    owner: str
    item_type: str = Field(alias="itemType")
    item_description: str = Field(alias="itemDescription")
    bids: tuple[Bid, ...] = ()
    status: AdStatus = AdStatus.OPEN
    created_at: int = Field(alias="createdAt")
    updated_at: int | None = Field(default=None, alias="updatedAt")

    @property
    def is_open(self) -> bool:
        return self.status is AdStatus.OPEN

    def has_bid_from(self, bidder: str) -> bool:
        return any(bid.bidder == bidder for bid in self.bids)

    def with_bid(self, bid: Bid) -> Ad:
        """Return a copy with *bid* appended. Status and updated_at are untouched."""
        return self.model_copy(update={"bids": (*self.bids, bid)})

    def edited(
        self,
        *,
        item_type: str,
        item_description: str,
        status: AdStatus | None,
        now: int,
    ) -> Ad:
        """Return a copy with owner edits applied and ``updated_at`` stamped.

        Empty values fall back to the current field; a None status keeps
        the current status.
        """
        return self.model_copy(
            update={
                "item_type": item_type or self.item_type,
                "item_description": item_description or self.item_description,
                "status": status or self.status,
                "updated_at": now,
            }
        )

    def to_payload(self) -> dict[str, Any]:
        """JSON-safe dict using the external field names."""
        return self.model_dump(mode="json", by_alias=True)
