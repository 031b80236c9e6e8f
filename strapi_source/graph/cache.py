"""In-memory implementation of the async cache collaborator."""

import copy
from typing import Any


class InMemoryCache:
    """Process-local key/value cache.

    Values are deep-copied on the way in and out so callers cannot mutate
    cached entries. Writes are last-writer-wins.
    """

    def __init__(self) -> None:
        self._entries: dict[str, Any] = {}

    async def get(self, key: str) -> Any:
        """Return the cached value, or None on a miss."""
        if key not in self._entries:
            return None
        return copy.deepcopy(self._entries[key])

    async def set(self, key: str, value: Any) -> None:
        self._entries[key] = copy.deepcopy(value)

    def keys(self) -> list[str]:
        return list(self._entries)
