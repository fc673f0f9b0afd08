"""Tests for SQLiteStateStore."""

from idistr.core.services import CartLedger
from idistr.infrastructure.storage.sqlite import SQLiteStateStore


class TestSQLiteStateStore:
    async def test_get_missing(self, sqlite_pool):
        assert await SQLiteStateStore().get("idistr.U1.cart") is None

    async def test_set_overwrites(self, sqlite_pool):
        store = SQLiteStateStore()
        await store.set("idistr.U1.store", '"S1"')
        await store.set("idistr.U1.store", '"S2"')
        assert await store.get("idistr.U1.store") == '"S2"'

    async def test_delete(self, sqlite_pool):
        store = SQLiteStateStore()
        await store.set("k", "v")
        await store.delete("k")
        assert await store.get("k") is None

    async def test_delete_prefix_is_literal(self, sqlite_pool):
        store = SQLiteStateStore()
        await store.set("ns_1.cart", "[]")
        await store.set("ns_1.store", '""')
        await store.set("nsX1.cart", "[]")
        assert await store.delete_prefix("ns_1.") == 2
        assert await store.get("nsX1.cart") == "[]"

    async def test_ledger_survives_restart(self, sqlite_pool, products):
        first = CartLedger(SQLiteStateStore(), namespace="idistr.U1")
        await first.load()
        await first.add(products[0], 2)

        second = CartLedger(SQLiteStateStore(), namespace="idistr.U1")
        await second.load()
        assert second.get("P1").qty == 2
