"""
Persistent field: a value mirrored to a durable state store key.

The value is rehydrated once with ``load()`` and written back on every
``set()``. Storage faults never propagate: a corrupt or unreadable value
falls back to the initial value, and failed writes are logged and dropped
so a full or broken store cannot block cart editing.
"""

import copy
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from pydantic import TypeAdapter

from idistr.config import get_logger
from idistr.core.interfaces.state_store import IStateStore

logger = get_logger(__name__)

T = TypeVar("T")


class PersistentField(Generic[T]):
    """
    A typed value bound to one durable key.

    ``serialize`` / ``deserialize`` default to JSON through a pydantic
    ``TypeAdapter`` for ``value_type``, so a stored value that no longer
    matches the type counts as corrupt.
    """

    def __init__(
        self,
        store: IStateStore,
        key: str,
        initial: T,
        value_type: Any,
        serialize: Callable[[T], str] | None = None,
        deserialize: Callable[[str], T] | None = None,
    ):
        self._store = store
        self.key = key
        self._initial = initial
        adapter: TypeAdapter[T] = TypeAdapter(value_type)
        self._serialize = serialize or (lambda v: adapter.dump_json(v).decode("utf-8"))
        self._deserialize = deserialize or adapter.validate_json
        self._value: T = self._fresh_initial()
        self._loaded = False

    def _fresh_initial(self) -> T:
        return copy.deepcopy(self._initial)

    @property
    def value(self) -> T:
        return self._value

    @property
    def loaded(self) -> bool:
        return self._loaded

    async def load(self) -> T:
        """Rehydrate from the store; never raises."""
        try:
            raw = await self._store.get(self.key)
        except Exception as e:
            logger.warning("persistent_field_read_failed", key=self.key, error=str(e))
            raw = None

        if raw is None:
            self._value = self._fresh_initial()
        else:
            try:
                self._value = self._deserialize(raw)
            except Exception as e:
                logger.warning("persistent_field_corrupt", key=self.key, error=str(e))
                self._value = self._fresh_initial()

        self._loaded = True
        return self._value

    async def set(self, value: T) -> None:
        """Replace the value and mirror it to the store; write errors are swallowed."""
        self._value = value
        try:
            await self._store.set(self.key, self._serialize(value))
        except Exception as e:
            logger.warning("persistent_field_write_failed", key=self.key, error=str(e))

    async def reset(self) -> None:
        """Restore the initial value and drop the durable key."""
        self._value = self._fresh_initial()
        try:
            await self._store.delete(self.key)
        except Exception as e:
            logger.warning("persistent_field_delete_failed", key=self.key, error=str(e))
