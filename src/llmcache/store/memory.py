"""In-memory store for tests and local runs.

Implements the same surface as StoreClient against process-local dicts,
following Redis semantics for list ranges, overwrites and deletes. Expiry
requests are recorded in ``ttls`` so tests can check them; they are not
enforced.
"""

import copy
import logging
from typing import Any

from llmcache.store.protocol import ListDirection

logger = logging.getLogger(__name__)


def redis_range(items: list[Any], start: int, stop: int) -> list[Any]:
    """Slice a list the way LRANGE does (inclusive, negative from the tail)."""
    length = len(items)
    if start < 0:
        start = max(length + start, 0)
    if stop < 0:
        stop = length + stop
    if start >= length or start > stop:
        return []
    return items[start : stop + 1]


class InMemoryStoreClient:
    """Process-local stand-in for the key/value store.

    Call reset() between tests to clear state.
    """

    def __init__(self):
        self.keys = InMemoryKeys(self)
        self.lists = InMemoryLists(self)
        self.reset()

    def reset(self):
        """Reset all store state."""
        self.values: dict[str, Any] = {}
        self.list_items: dict[str, list[Any]] = {}
        self.ttls: dict[str, int] = {}
        self.flows_executed = 0

    def flow(self) -> "InMemoryFlow":
        return InMemoryFlow(self)

    def exists(self, key: str) -> bool:
        return key in self.values or key in self.list_items

    def delete(self, *keys: str) -> int:
        """Delete keys and return how many existed."""
        removed = 0
        for key in keys:
            if self.exists(key):
                removed += 1
            self.values.pop(key, None)
            self.list_items.pop(key, None)
            self.ttls.pop(key, None)
        logger.debug(f"In-memory store: deleted {removed} of {len(keys)} keys")
        return removed


class InMemoryKeys:
    def __init__(self, store: InMemoryStoreClient):
        self._store = store

    async def get(self, key: str) -> Any | None:
        return copy.deepcopy(self._store.values.get(key))

    async def set(self, key: str, value: Any, ttl_seconds: int | None = None) -> None:
        # A plain set discards the previous expiry
        self._store.list_items.pop(key, None)
        self._store.ttls.pop(key, None)
        self._store.values[key] = copy.deepcopy(value)
        if ttl_seconds is not None:
            self._store.ttls[key] = ttl_seconds

    async def expire(self, key: str, seconds: int) -> None:
        if self._store.exists(key):
            self._store.ttls[key] = seconds


class InMemoryLists:
    def __init__(self, store: InMemoryStoreClient):
        self._store = store

    async def push(
        self, key: str, values: list[Any], direction: ListDirection = "right"
    ) -> int:
        items = self._store.list_items.setdefault(key, [])
        for value in values:
            if direction == "left":
                items.insert(0, copy.deepcopy(value))
            else:
                items.append(copy.deepcopy(value))
        return len(items)

    async def range(self, key: str, start: int, stop: int) -> list[Any]:
        items = self._store.list_items.get(key, [])
        return copy.deepcopy(redis_range(items, start, stop))


class InMemoryFlow:
    def __init__(self, store: InMemoryStoreClient):
        self._store = store
        self._deletes: list[tuple[str, ...]] = []

    def delete(self, *keys: str) -> "InMemoryFlow":
        self._deletes.append(keys)
        return self

    async def execute(self) -> list[Any]:
        self._store.flows_executed += 1
        return [self._store.delete(*keys) for keys in self._deletes]
