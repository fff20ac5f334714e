"""The store operations the conversation cache relies on."""

from typing import Any, Literal, Protocol

ListDirection = Literal["left", "right"]


class KeysBackend(Protocol):
    """Scalar key/value operations."""

    async def get(self, key: str) -> Any | None: ...

    async def set(self, key: str, value: Any, ttl_seconds: int | None = None) -> None: ...

    async def expire(self, key: str, seconds: int) -> None: ...


class ListsBackend(Protocol):
    """Ordered list operations with Redis index semantics.

    Range indexes are inclusive at both ends and negative indexes count
    from the tail (-1 is the last item).
    """

    async def push(
        self, key: str, values: list[Any], direction: ListDirection = "right"
    ) -> int: ...

    async def range(self, key: str, start: int, stop: int) -> list[Any]: ...


class FlowBackend(Protocol):
    """Batch of commands sent to the store in one round trip."""

    def delete(self, *keys: str) -> "FlowBackend": ...

    async def execute(self) -> list[Any]: ...


class StoreBackend(Protocol):
    """A key/value + list store client."""

    keys: KeysBackend
    lists: ListsBackend

    def flow(self) -> FlowBackend: ...
