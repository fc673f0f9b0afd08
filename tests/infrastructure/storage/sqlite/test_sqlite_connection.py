"""Unit tests for the SQLite connection pool."""

from pathlib import Path

from idistr.infrastructure.storage.sqlite.connection import ConnectionPool


class TestConnectionPool:
    def test_defaults(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path)
        assert pool.pool_size == 2
        assert pool.busy_timeout == 5000
        assert not pool.initialized

    async def test_initialize_creates_directory_and_schema(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path, pool_size=1)
        await pool.initialize()
        try:
            assert temp_db_path.parent.exists()
            async with pool.acquire() as conn:
                cursor = await conn.execute(
                    "SELECT name FROM sqlite_master WHERE type='table' AND name='local_state'"
                )
                assert await cursor.fetchone() is not None
        finally:
            await pool.close()
        assert not pool.initialized

    async def test_transaction_rolls_back(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path, pool_size=1)
        try:
            try:
                async with pool.transaction() as conn:
                    await conn.execute(
                        "INSERT INTO local_state (key, value, updated_at) VALUES ('k', 'v', 'now')"
                    )
                    raise RuntimeError("abort")
            except RuntimeError:
                pass
            async with pool.acquire() as conn:
                cursor = await conn.execute("SELECT COUNT(*) FROM local_state")
                row = await cursor.fetchone()
                assert row[0] == 0
        finally:
            await pool.close()
