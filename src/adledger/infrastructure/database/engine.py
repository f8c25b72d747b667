"""Database engine setup for SQLite with WAL mode.

The DB is stored at ``{ledger_root}/{store.directory}/{store.filename}``
(``.adledger/adledger.db`` by default).

SQLAlchemy Core (not ORM) is used: the record store only needs
get/insert/remove/list over two tables.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

from adledger.infrastructure.database.schema import metadata


def create_db_engine(db_path: Path) -> Engine:
    """Create a SQLite engine with WAL mode and foreign keys enabled.

    Pooled connections may be handed to any thread; per-ad locking in
    :class:`~adledger.infrastructure.ledger.Ledger` serializes writers.
    """
    engine = create_engine(
        f"sqlite:///{db_path}",
        echo=False,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def init_database(
    ledger_root: Path,
    *,
    directory: str = ".adledger",
    filename: str = "adledger.db",
) -> Engine:
    """Initialize the ledger database under *ledger_root*.

    Creates the data directory and all tables from :data:`schema.metadata`.
    Idempotent: safe to call on an existing ledger.

    Returns the engine ready for use.
    """
    data_dir = ledger_root / directory
    data_dir.mkdir(parents=True, exist_ok=True)

    engine = create_db_engine(data_dir / filename)
    metadata.create_all(engine)
    return engine
