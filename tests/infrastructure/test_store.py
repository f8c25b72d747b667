"""Tests for the AdStore record store and database setup."""

from __future__ import annotations

from pathlib import Path

import pytest
from sqlalchemy import insert, inspect, select
from sqlalchemy.exc import IntegrityError

from adledger.domain.ads import Ad, AdStatus, Bid
from adledger.infrastructure.database.engine import init_database
from adledger.infrastructure.database.schema import ads, bids
from adledger.infrastructure.store import AdStore


def _ad(ad_id: str, owner: str = "owner", **overrides: object) -> Ad:
    fields: dict[str, object] = {
        "id": ad_id,
        "owner": owner,
        "item_type": "bike",
        "item_description": "red bike",
        "created_at": 10,
    }
    fields.update(overrides)
    return Ad(**fields)  # type: ignore[arg-type]


@pytest.fixture
def engine(tmp_path: Path):
    eng = init_database(tmp_path)
    try:
        yield eng
    finally:
        eng.dispose()


class TestInitDatabase:
    def test_creates_tables(self, engine) -> None:
        names = set(inspect(engine).get_table_names())
        assert {"ads", "bids"} <= names

    def test_db_location(self, tmp_path: Path, engine) -> None:
        assert (tmp_path / ".adledger" / "adledger.db").is_file()

    def test_custom_location(self, tmp_path: Path) -> None:
        eng = init_database(tmp_path, directory="data", filename="x.db")
        eng.dispose()
        assert (tmp_path / "data" / "x.db").is_file()

    def test_idempotent(self, tmp_path: Path) -> None:
        init_database(tmp_path).dispose()
        init_database(tmp_path).dispose()


class TestAdStore:
    def test_get_missing(self, engine) -> None:
        with engine.connect() as conn:
            assert AdStore(conn).get("nope") is None

    def test_insert_then_get(self, engine) -> None:
        ad = _ad("a1", bids=(Bid(bidder="x", amount=5), Bid(bidder="y", amount=7.5)))
        with engine.begin() as conn:
            AdStore(conn).insert(ad)
        with engine.connect() as conn:
            assert AdStore(conn).get("a1") == ad

    def test_insert_replaces(self, engine) -> None:
        with engine.begin() as conn:
            store = AdStore(conn)
            store.insert(_ad("a1", bids=(Bid(bidder="x", amount=1),)))
            store.insert(
                _ad(
                    "a1",
                    item_type="car",
                    status=AdStatus.CLOSED,
                    updated_at=20,
                    bids=(Bid(bidder="x", amount=1), Bid(bidder="y", amount=2)),
                )
            )
        with engine.connect() as conn:
            stored = AdStore(conn).get("a1")
            count = len(conn.execute(select(ads.c.id)).fetchall())
        assert count == 1
        assert stored is not None
        assert stored.item_type == "car"
        assert stored.status is AdStatus.CLOSED
        assert stored.updated_at == 20
        assert [b.bidder for b in stored.bids] == ["x", "y"]

    def test_remove_returns_snapshot(self, engine) -> None:
        ad = _ad("a1", bids=(Bid(bidder="x", amount=1),))
        with engine.begin() as conn:
            store = AdStore(conn)
            store.insert(ad)
            assert store.remove("a1") == ad
            assert store.get("a1") is None
            assert conn.execute(select(bids)).fetchall() == []

    def test_remove_missing(self, engine) -> None:
        with engine.begin() as conn:
            assert AdStore(conn).remove("nope") is None

    def test_values_in_key_order(self, engine) -> None:
        with engine.begin() as conn:
            store = AdStore(conn)
            for ad_id in ("c", "a", "b"):
                store.insert(_ad(ad_id, bids=(Bid(bidder=f"{ad_id}-1", amount=1),)))
        with engine.connect() as conn:
            values = AdStore(conn).values()
        assert [ad.id for ad in values] == ["a", "b", "c"]
        assert [ad.bids[0].bidder for ad in values] == ["a-1", "b-1", "c-1"]

    def test_values_empty(self, engine) -> None:
        with engine.connect() as conn:
            assert AdStore(conn).values() == []

    def test_duplicate_bidder_rejected_by_schema(self, engine) -> None:
        with engine.begin() as conn:
            AdStore(conn).insert(_ad("a1", bids=(Bid(bidder="x", amount=1),)))
        with pytest.raises(IntegrityError), engine.begin() as conn:
            conn.execute(insert(bids).values(ad_id="a1", position=1, bidder="x", amount=2))
