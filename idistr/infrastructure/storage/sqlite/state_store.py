"""SQLite implementation of the durable key-value state."""

from datetime import datetime

from idistr.config import get_logger
from idistr.core.interfaces import IStateStore
from idistr.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)


class SQLiteStateStore(IStateStore):
    """Serialized values keyed by namespaced strings in the ``local_state`` table."""

    async def get(self, key: str) -> str | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT value FROM local_state WHERE key = ?",
                (key,),
            )
            row = await cursor.fetchone()
            return row["value"] if row else None

    async def set(self, key: str, value: str) -> None:
        async with get_transaction() as conn:
            await conn.execute(
                """
                INSERT INTO local_state (key, value, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                (key, value, datetime.utcnow().isoformat()),
            )

    async def delete(self, key: str) -> None:
        async with get_transaction() as conn:
            await conn.execute("DELETE FROM local_state WHERE key = ?", (key,))

    async def delete_prefix(self, prefix: str) -> int:
        """Delete every key starting with the prefix; returns the count removed."""
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "DELETE FROM local_state WHERE substr(key, 1, ?) = ?",
                (len(prefix), prefix),
            )
            removed = cursor.rowcount
        logger.debug("local_state_prefix_deleted", prefix=prefix, removed=removed)
        return removed
