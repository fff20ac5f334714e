"""Shared fixtures: an in-memory store and a fake store HTTP API."""

import json

import httpx
import pytest
from llmcache import LLMCache
from llmcache.store import InMemoryStoreClient, StoreClient

BASE_URL = "http://store.test"


class FakeStoreAPI:
    """httpx handler serving the store REST API from an in-memory store."""

    def __init__(self, api_version: str = "v1"):
        self.api_version = api_version
        self.store = InMemoryStoreClient()
        self.requests: list[httpx.Request] = []
        self.fail_status: int | None = None

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_status is not None:
            return httpx.Response(self.fail_status, json={"error": "store unavailable"})

        path = request.url.path
        if path == "/health":
            return httpx.Response(200, json={"status": "ok"})

        prefix = f"/{self.api_version}/"
        if not path.startswith(prefix):
            return httpx.Response(404, json={"error": "unknown route"})
        resource, _, rest = path[len(prefix):].partition("/")
        body = json.loads(request.content) if request.content else {}

        if resource == "keys":
            if request.method == "POST" and rest.endswith("/expire"):
                await self.store.keys.expire(rest[: -len("/expire")], body["seconds"])
                return httpx.Response(200, json={"ok": True})
            if request.method == "GET":
                value = await self.store.keys.get(rest)
                if value is None:
                    return httpx.Response(404, json={"error": "not found"})
                return httpx.Response(200, json={"value": value})
            if request.method == "PUT":
                await self.store.keys.set(rest, body["value"], body.get("ttl"))
                return httpx.Response(200, json={"ok": True})

        if resource == "lists":
            if request.method == "GET" and rest.endswith("/range"):
                items = await self.store.lists.range(
                    rest[: -len("/range")],
                    int(request.url.params["start"]),
                    int(request.url.params["stop"]),
                )
                return httpx.Response(200, json={"items": items})
            if request.method == "POST":
                length = await self.store.lists.push(
                    rest, body["values"], body.get("direction", "right")
                )
                return httpx.Response(200, json={"length": length})

        if resource == "flow" and request.method == "POST":
            flow = self.store.flow()
            for command in body["commands"]:
                if command["op"] == "del":
                    flow.delete(*command["keys"])
            return httpx.Response(200, json={"results": await flow.execute()})

        return httpx.Response(404, json={"error": "unknown route"})


@pytest.fixture
def memory_store():
    """In-memory store client."""
    return InMemoryStoreClient()


@pytest.fixture
def cache(memory_store):
    """LLMCache over the in-memory store, no expiry."""
    return LLMCache(memory_store)


@pytest.fixture
def store_api():
    """Fake store HTTP API."""
    return FakeStoreAPI()


@pytest.fixture
def store_client(store_api):
    """StoreClient wired to the fake store API."""
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(store_api))
    return StoreClient(BASE_URL, http_client=http_client)


@pytest.fixture
def http_cache(store_client):
    """LLMCache talking HTTP to the fake store API."""
    return LLMCache(store_client)


def make_messages(count: int = 5) -> list[dict]:
    """Alternating user/assistant messages with increasing timestamps."""
    return [
        {
            "role": "user" if i % 2 == 0 else "assistant",
            "content": f"Message {i + 1}",
            "timestamp": 1_700_000_000_000 + i * 1000,
        }
        for i in range(count)
    ]
