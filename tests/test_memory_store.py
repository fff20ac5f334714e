"""Unit tests for the in-memory store."""

import pytest
from llmcache.store import InMemoryStoreClient, redis_range


class TestRedisRange:
    """Test LRANGE index semantics."""

    @pytest.mark.parametrize(
        "start,stop,expected",
        [
            (0, -1, ["a", "b", "c", "d"]),
            (-2, -1, ["c", "d"]),
            (-10, -1, ["a", "b", "c", "d"]),
            (1, 2, ["b", "c"]),
            (2, 100, ["c", "d"]),
            (5, -1, []),
            (3, 1, []),
        ],
    )
    def test_ranges(self, start, stop, expected):
        """Inclusive ranges with negative indexes from the tail."""
        assert redis_range(["a", "b", "c", "d"], start, stop) == expected

    def test_empty_list(self):
        """Any range of an empty list is empty."""
        assert redis_range([], -3, -1) == []


class TestInMemoryStoreClient:
    """Test the in-memory store client."""

    @pytest.mark.asyncio
    async def test_set_clears_previous_ttl(self):
        """A plain set drops the expiry, a set with ttl applies it."""
        store = InMemoryStoreClient()
        await store.keys.set("k", "v", 10)
        assert store.ttls["k"] == 10

        await store.keys.set("k", "w")

        assert "k" not in store.ttls
        assert await store.keys.get("k") == "w"

    @pytest.mark.asyncio
    async def test_expire_missing_key_is_noop(self):
        """Expiring a key that does not exist records nothing."""
        store = InMemoryStoreClient()

        await store.keys.expire("missing", 10)

        assert store.ttls == {}

    @pytest.mark.asyncio
    async def test_left_push(self):
        """Left pushes prepend each value in turn."""
        store = InMemoryStoreClient()
        await store.lists.push("l", ["a"])

        length = await store.lists.push("l", ["b", "c"], direction="left")

        assert length == 3
        assert await store.lists.range("l", 0, -1) == ["c", "b", "a"]

    @pytest.mark.asyncio
    async def test_flow_delete_counts_existing_keys(self):
        """A batched delete reports how many keys existed."""
        store = InMemoryStoreClient()
        await store.keys.set("a", 1)
        await store.lists.push("b", [1])

        results = await store.flow().delete("a", "b", "c").execute()

        assert results == [2]
        assert not store.exists("a")
        assert not store.exists("b")

    @pytest.mark.asyncio
    async def test_values_are_copied(self):
        """Stored values are not shared with the caller."""
        store = InMemoryStoreClient()
        value = {"tone": "casual"}
        await store.keys.set("k", value)

        value["tone"] = "formal"

        assert await store.keys.get("k") == {"tone": "casual"}

    @pytest.mark.asyncio
    async def test_reset(self):
        """reset() clears every record."""
        store = InMemoryStoreClient()
        await store.keys.set("k", "v", 5)
        await store.lists.push("l", ["a"])

        store.reset()

        assert await store.keys.get("k") is None
        assert await store.lists.range("l", 0, -1) == []
        assert store.ttls == {}
