"""Pytest fixtures for SQLite storage tests."""

from collections.abc import AsyncGenerator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

import idistr.infrastructure.storage.sqlite.connection as conn_module


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path."""
    return tmp_path / "state" / "test.db"


@pytest.fixture
def mock_settings(temp_db_path: Path) -> MagicMock:
    settings = MagicMock()
    settings.state.db_path = temp_db_path
    settings.state.pool_size = 1
    settings.state.busy_timeout = 1000
    return settings


@pytest.fixture
async def sqlite_pool(mock_settings: MagicMock) -> AsyncGenerator[None, None]:
    """Point the global pool at a temporary database."""
    conn_module._pool = None
    with patch.object(conn_module, "get_settings", return_value=mock_settings):
        yield
        await conn_module.close_pool()
