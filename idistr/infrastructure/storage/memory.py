"""In-process state store, used when durable storage is disabled and in tests."""

from idistr.core.interfaces import IStateStore


class MemoryStateStore(IStateStore):
    """Dictionary-backed state; lost when the process exits."""

    def __init__(self, initial: dict[str, str] | None = None):
        self.data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self.data.get(key)

    async def set(self, key: str, value: str) -> None:
        self.data[key] = value

    async def delete(self, key: str) -> None:
        self.data.pop(key, None)

    async def delete_prefix(self, prefix: str) -> int:
        keys = [k for k in self.data if k.startswith(prefix)]
        for key in keys:
            del self.data[key]
        return len(keys)
