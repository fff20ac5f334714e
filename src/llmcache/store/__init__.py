"""Store clients: the HTTP API client and an in-memory equivalent."""

from llmcache.store.client import FlowBuilder, KeysAPI, ListsAPI, StoreClient
from llmcache.store.memory import InMemoryStoreClient, redis_range
from llmcache.store.protocol import (
    FlowBackend,
    KeysBackend,
    ListDirection,
    ListsBackend,
    StoreBackend,
)

__all__ = [
    "StoreClient",
    "KeysAPI",
    "ListsAPI",
    "FlowBuilder",
    "InMemoryStoreClient",
    "redis_range",
    "StoreBackend",
    "KeysBackend",
    "ListsBackend",
    "FlowBackend",
    "ListDirection",
]
