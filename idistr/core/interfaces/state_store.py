"""Abstract interface for durable local key-value state."""

from abc import ABC, abstractmethod


class IStateStore(ABC):
    """
    Durable string key-value store used by persistent fields.

    Values are opaque serialized strings. No cross-instance coordination:
    the last writer of a key wins.
    """

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Return the raw value for a key, or None if absent."""
        pass

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Write the raw value for a key."""
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Delete a key; absent keys are ignored."""
        pass

    @abstractmethod
    async def delete_prefix(self, prefix: str) -> int:
        """Delete every key starting with prefix and return how many were removed."""
        pass
