"""SQLite database engine and schema via SQLAlchemy Core."""

from adledger.infrastructure.database.engine import create_db_engine, init_database
from adledger.infrastructure.database.schema import ads, bids, metadata

__all__ = [
    "ads",
    "bids",
    "create_db_engine",
    "init_database",
    "metadata",
]
