"""AdStore — ordered key→Ad record store over a SQLAlchemy connection.

The store exposes exactly four primitives: :meth:`get`, :meth:`insert`,
:meth:`remove` and :meth:`values`. It knows nothing about ownership or
bidding rules; the lifecycle engine in the service layer owns those.

The caller owns the transaction: pass a ``Connection`` obtained from
``engine.begin()`` so that an insert (ad row + bid rows) is atomic.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import delete, insert, select

from adledger.domain.ads import Ad, AdStatus, Bid
from adledger.infrastructure.database.schema import ads, bids

if TYPE_CHECKING:
    from sqlalchemy import Connection, Row


class AdStore:
    """Record store keyed by ad ID, iterated in key order."""

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def get(self, ad_id: str) -> Ad | None:
        """Return the ad stored under *ad_id*, or None."""
        row = self._conn.execute(select(ads).where(ads.c.id == ad_id)).first()
        if row is None:
            return None
        return self._to_ad(row, self._load_bids(ad_id))

    def insert(self, ad: Ad) -> None:
        """Store *ad* under its ID, replacing any previous record."""
        self._conn.execute(delete(bids).where(bids.c.ad_id == ad.id))
        self._conn.execute(delete(ads).where(ads.c.id == ad.id))
        self._conn.execute(
            insert(ads).values(
                id=ad.id,
                owner=ad.owner,
                item_type=ad.item_type,
                item_description=ad.item_description,
                status=str(ad.status),
                created_at=ad.created_at,
                updated_at=ad.updated_at,
            )
        )
        if ad.bids:
            self._conn.execute(
                insert(bids),
                [
                    {"ad_id": ad.id, "position": i, "bidder": b.bidder, "amount": b.amount}
                    for i, b in enumerate(ad.bids)
                ],
            )

    def remove(self, ad_id: str) -> Ad | None:
        """Delete the record under *ad_id*; return what was removed."""
        existing = self.get(ad_id)
        if existing is None:
            return None
        self._conn.execute(delete(bids).where(bids.c.ad_id == ad_id))
        self._conn.execute(delete(ads).where(ads.c.id == ad_id))
        return existing

    def values(self) -> list[Ad]:
        """All stored ads in key order."""
        rows = self._conn.execute(select(ads).order_by(ads.c.id)).fetchall()
        bid_rows = self._conn.execute(
            select(bids).order_by(bids.c.ad_id, bids.c.position)
        ).fetchall()

        by_ad: dict[str, list[Bid]] = {}
        for b in bid_rows:
            by_ad.setdefault(b.ad_id, []).append(Bid(bidder=b.bidder, amount=b.amount))

        return [self._to_ad(row, by_ad.get(row.id, [])) for row in rows]

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _load_bids(self, ad_id: str) -> list[Bid]:
        rows = self._conn.execute(
            select(bids.c.bidder, bids.c.amount)
            .where(bids.c.ad_id == ad_id)
            .order_by(bids.c.position)
        ).fetchall()
        return [Bid(bidder=r.bidder, amount=r.amount) for r in rows]

    @staticmethod
    def _to_ad(row: Row, ad_bids: list[Bid]) -> Ad:
        return Ad(
            id=row.id,
            owner=row.owner,
            item_type=row.item_type,
            item_description=row.item_description,
            bids=tuple(ad_bids),
            status=AdStatus(row.status),
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
