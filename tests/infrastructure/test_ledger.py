"""Tests for the Ledger repository."""

from __future__ import annotations

import dataclasses
import threading
from pathlib import Path

import pytest

from adledger.config.settings import LedgerSettings
from adledger.domain.ads import Ad
from adledger.infrastructure.ledger import Ledger


def _ad(ad_id: str) -> Ad:
    return Ad(id=ad_id, owner="o", item_type="t", item_description="d", created_at=1)


class TestLedger:
    def test_root_and_settings(self, ledger: Ledger, ledger_root: Path) -> None:
        assert ledger.root == ledger_root
        assert ledger.settings.ledger_root == ledger_root

    def test_injected_collaborators(self, ledger_settings: LedgerSettings) -> None:
        lg = Ledger(
            ledger_settings,
            id_factory=lambda: "fixed-id",
            owner_factory=lambda: "fixed-owner",
            clock=lambda: 42,
        )
        try:
            assert lg.new_id() == "fixed-id"
            assert lg.new_owner() == "fixed-owner"
            assert lg.now() == 42
        finally:
            lg.close()

    def test_default_clock_is_nanoseconds(self, ledger: Ledger) -> None:
        # Anything after 2020 in ns is > 1.5e18
        assert ledger.now() > 1_500_000_000_000_000_000

    def test_transaction_commits(self, ledger: Ledger) -> None:
        with ledger.transaction("a") as txn:
            txn.store.insert(_ad("a"))
        with ledger.reader() as store:
            assert store.get("a") is not None

    def test_transaction_exposes_only_the_store(self, ledger: Ledger) -> None:
        with ledger.transaction("a") as txn:
            assert [f.name for f in dataclasses.fields(txn)] == ["store"]

    def test_transaction_rolls_back_on_error(self, ledger: Ledger) -> None:
        with pytest.raises(RuntimeError), ledger.transaction("a") as txn:
            txn.store.insert(_ad("a"))
            raise RuntimeError("boom")
        with ledger.reader() as store:
            assert store.get("a") is None

    def test_data_survives_reopen(self, ledger_settings: LedgerSettings) -> None:
        first = Ledger(ledger_settings)
        with first.transaction("a") as txn:
            txn.store.insert(_ad("a"))
        first.close()

        second = Ledger(ledger_settings)
        try:
            with second.reader() as store:
                assert store.get("a") == _ad("a")
        finally:
            second.close()

    def test_transaction_lock_is_per_key(self, ledger: Ledger) -> None:
        entered = threading.Event()
        release = threading.Event()
        other_done = threading.Event()

        def hold_a() -> None:
            with ledger.transaction("a"):
                entered.set()
                release.wait(timeout=5)

        def write_b() -> None:
            with ledger.transaction("b") as txn:
                txn.store.insert(_ad("b"))
            other_done.set()

        t1 = threading.Thread(target=hold_a)
        t1.start()
        assert entered.wait(timeout=5)
        t2 = threading.Thread(target=write_b)
        t2.start()
        # "b" does not wait for "a"
        assert other_done.wait(timeout=5)
        release.set()
        t1.join()
        t2.join()

    def test_lock_entries_released_after_use(self, ledger: Ledger) -> None:
        for i in range(50):
            with ledger.transaction(f"missing-{i}") as txn:
                assert txn.store.get(f"missing-{i}") is None
        with ledger.transaction("a") as txn:
            txn.store.insert(_ad("a"))
        assert ledger._locks == {}

    def test_lock_entry_released_after_error(self, ledger: Ledger) -> None:
        with pytest.raises(RuntimeError), ledger.transaction("a"):
            raise RuntimeError("boom")
        assert ledger._locks == {}

    def test_waiters_share_one_lock(self, ledger: Ledger) -> None:
        entered = threading.Event()
        release = threading.Event()
        order: list[str] = []

        def holder() -> None:
            with ledger.transaction("a"):
                entered.set()
                release.wait(timeout=5)
                order.append("holder")

        def waiter() -> None:
            with ledger.transaction("a"):
                order.append("waiter")

        t1 = threading.Thread(target=holder)
        t1.start()
        assert entered.wait(timeout=5)
        t2 = threading.Thread(target=waiter)
        t2.start()
        t2.join(timeout=0.2)
        assert t2.is_alive()
        assert ledger._locks["a"].users == 2
        release.set()
        t1.join()
        t2.join()
        assert order == ["holder", "waiter"]
        assert ledger._locks == {}
