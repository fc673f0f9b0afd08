"""Local state storage."""

from idistr.config import get_settings
from idistr.core.interfaces import IStateStore
from idistr.infrastructure.storage.memory import MemoryStateStore
from idistr.infrastructure.storage.sqlite import SQLiteStateStore

_state_store: IStateStore | None = None


def get_state_store() -> IStateStore:
    """Get singleton state store for the configured backend."""
    global _state_store
    if _state_store is None:
        if get_settings().state.backend == "memory":
            _state_store = MemoryStateStore()
        else:
            _state_store = SQLiteStateStore()
    return _state_store


def reset_state_store() -> None:
    global _state_store
    _state_store = None


__all__ = ["MemoryStateStore", "SQLiteStateStore", "get_state_store", "reset_state_store"]
