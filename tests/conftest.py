"""Shared pytest fixtures and test helpers for adledger tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from adledger.config.settings import LedgerSettings
from adledger.infrastructure.ledger import Ledger


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's ADLEDGER_* environment out of the tests."""
    monkeypatch.delenv("ADLEDGER_CONFIG", raising=False)
    monkeypatch.delenv("ADLEDGER_LEDGER_ROOT", raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def ledger_root(tmp_path: Path) -> Path:
    """Temporary directory that holds the ledger's data directory."""
    return tmp_path


@pytest.fixture
def ledger_settings(ledger_root: Path) -> LedgerSettings:
    return LedgerSettings.from_cli(ledger_root=ledger_root)


@pytest.fixture
def ledger(ledger_settings: LedgerSettings) -> Iterator[Ledger]:
    """Ledger on a fresh SQLite database with real ID and clock sources."""
    lg = Ledger(ledger_settings)
    try:
        yield lg
    finally:
        lg.close()


@pytest.fixture
def _isolated_ledger(ledger_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp directory so the CLI creates an isolated ledger.

    Use via ``@pytest.mark.usefixtures("_isolated_ledger")`` on command test
    classes.
    """
    monkeypatch.chdir(ledger_root)


class StepClock:
    """Deterministic clock: each call advances by one second (in ns)."""

    def __init__(self, start: int = 1_700_000_000_000_000_000) -> None:
        self.value = start

    def __call__(self) -> int:
        self.value += 1_000_000_000
        return self.value


# ---------------------------------------------------------------------------
# Shared test helpers (used across service test modules)
# ---------------------------------------------------------------------------


def create_ad(
    ledger: Ledger, item_type: str = "bike", item_description: str = "red bike"
) -> dict[str, Any]:
    """Create an ad via AdService, asserting success."""
    from adledger.services.ads import AdService

    result = AdService(ledger).create_ad(item_type, item_description)
    assert result.ok, result.error
    return result.data
