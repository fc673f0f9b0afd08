"""SQLite storage implementations."""

from idistr.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)
from idistr.infrastructure.storage.sqlite.state_store import SQLiteStateStore

__all__ = [
    "ConnectionPool",
    "SQLiteStateStore",
    "close_pool",
    "get_connection",
    "get_pool",
    "get_transaction",
]
