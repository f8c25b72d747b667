"""Ledger — repository owning the database and the ad record store.

The Ledger is the single dependency injected into every service. It owns
the database engine plus the collaborators the lifecycle engine needs
from the outside world: the ID generators and the clock.

Writes go through :meth:`Ledger.transaction`, which serializes access per
ad ID with a lock and wraps the work in one database transaction, so a
read-modify-write on an ad is atomic and a failure leaves no partial write.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from adledger.domain.ids import new_ad_id, new_owner_id
from adledger.infrastructure.database.engine import init_database
from adledger.infrastructure.store import AdStore

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from sqlalchemy.engine import Engine

    from adledger.config.settings import LedgerSettings

logger = logging.getLogger(__name__)


@dataclass
class LedgerTransaction:
    """Active write transaction: the store bound to its connection."""

    store: AdStore


@dataclass
class _KeyLock:
    """Lock for one ad key plus the number of threads holding or awaiting it."""

    lock: threading.Lock = field(default_factory=threading.Lock)
    users: int = 0


class Ledger:
    """Repository encapsulating database access and external collaborators.

    Constructed once at CLI startup from :class:`LedgerSettings` and stored
    on the app context. Tests may inject deterministic ``id_factory``,
    ``owner_factory`` and ``clock`` callables.
    """

    def __init__(
        self,
        settings: LedgerSettings,
        *,
        id_factory: Callable[[], str] = new_ad_id,
        owner_factory: Callable[[], str] = new_owner_id,
        clock: Callable[[], int] = time.time_ns,
    ) -> None:
        self._settings = settings
        self._engine: Engine = init_database(
            self.root,
            directory=settings.store.directory,
            filename=settings.store.filename,
        )
        self._id_factory = id_factory
        self._owner_factory = owner_factory
        self._clock = clock
        self._locks: dict[str, _KeyLock] = {}
        self._locks_guard = threading.Lock()

    @property
    def root(self) -> Path:
        """The ledger root directory."""
        return self._settings.ledger_root

    @property
    def engine(self) -> Engine:
        """The underlying SQLAlchemy engine (for direct access when needed)."""
        return self._engine

    @property
    def settings(self) -> LedgerSettings:
        """The resolved settings for this ledger."""
        return self._settings

    def new_id(self) -> str:
        return self._id_factory()

    def new_owner(self) -> str:
        return self._owner_factory()

    def now(self) -> int:
        """Current time in epoch nanoseconds."""
        return self._clock()

    def close(self) -> None:
        """Release pooled database connections."""
        self._engine.dispose()

    @contextmanager
    def _locked(self, key: str) -> Iterator[None]:
        """Hold the lock for *key*; the entry is dropped once nobody uses it."""
        with self._locks_guard:
            entry = self._locks.setdefault(key, _KeyLock())
            entry.users += 1
        try:
            with entry.lock:
                yield
        finally:
            with self._locks_guard:
                entry.users -= 1
                if entry.users == 0:
                    del self._locks[key]

    @contextmanager
    def transaction(self, key: str) -> Iterator[LedgerTransaction]:
        """Exclusive write transaction for the ad stored under *key*.

        Holds the per-ad lock for the whole block, so two writers on the
        same ad never interleave their get-then-insert. The database
        transaction commits when the block exits normally and rolls back
        on any exception.

        Usage::

            with ledger.transaction(ad_id) as txn:
                ad = txn.store.get(ad_id)
                txn.store.insert(ad.with_bid(bid))
        """
        with self._locked(key), self._engine.begin() as conn:
            yield LedgerTransaction(store=AdStore(conn))

    @contextmanager
    def reader(self) -> Iterator[AdStore]:
        """Read-only store on a plain connection."""
        with self._engine.connect() as conn:
            yield AdStore(conn)
