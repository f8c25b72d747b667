"""SQLAlchemy Core table definitions for the ledger database.

One row per ad in ``ads``; its bids live in ``bids`` ordered by
``position`` (insertion order). The ``(ad_id, bidder)`` unique
constraint backs the one-bid-per-bidder rule at the storage level.
"""

from __future__ import annotations

from sqlalchemy import (
    REAL,
    BigInteger,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Table,
    Text,
    UniqueConstraint,
)

metadata = MetaData()

ads = Table(
    "ads",
    metadata,
    Column("id", Text, primary_key=True),
    Column("owner", Text, nullable=False),
    Column("item_type", Text, nullable=False),
    Column("item_description", Text, nullable=False),
    Column("status", Text, nullable=False),
    Column("created_at", BigInteger, nullable=False),  # epoch nanoseconds
    Column("updated_at", BigInteger),  # NULL until first edit
)

bids = Table(
    "bids",
    metadata,
    Column("ad_id", Text, ForeignKey("ads.id", ondelete="CASCADE"), nullable=False),
    Column("position", Integer, nullable=False),
    Column("bidder", Text, nullable=False),
    Column("amount", REAL, nullable=False),
    UniqueConstraint("ad_id", "position"),
    UniqueConstraint("ad_id", "bidder"),
)

Index("ix_ads_owner", ads.c.owner)
Index("ix_ads_status", ads.c.status)
Index("ix_bids_ad", bids.c.ad_id)
