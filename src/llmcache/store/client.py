"""Client for the key/value store HTTP API."""

import logging
from typing import Any
from urllib.parse import quote

import httpx

from llmcache.config import ConfigurationError
from llmcache.store.protocol import ListDirection

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class StoreClient:
    """HTTP client for the key/value store.

    Mirrors the store's REST surface: ``keys`` for scalar values, ``lists``
    for ordered lists and ``flow()`` for batched commands. Errors from the
    store are logged and re-raised as the httpx exceptions they are.
    """

    def __init__(
        self,
        base_url: str,
        api_version: str = "v1",
        timeout: float = DEFAULT_TIMEOUT,
        http_client: httpx.AsyncClient | None = None,
    ):
        """Initialize the store client.

        Args:
            base_url: Store endpoint, e.g. http://localhost:3000
            api_version: Version segment prefixed to every API path
            timeout: Request timeout in seconds, ignored if http_client is given
            http_client: Pre-built httpx client (shared pools, test transports)

        Raises:
            ConfigurationError: If base_url is empty

        """
        if not base_url:
            raise ConfigurationError("A store base URL is required")
        self.base_url = base_url.rstrip("/")
        self.api_version = api_version
        self._owns_http = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout)
        self.keys = KeysAPI(self)
        self.lists = ListsAPI(self)

    def flow(self) -> "FlowBuilder":
        """Start a batch of commands executed in one request."""
        return FlowBuilder(self)

    def url(self, *segments: str) -> str:
        """Build an API URL, percent-encoding each path segment."""
        path = "/".join(quote(segment, safe="") for segment in segments)
        return f"{self.base_url}/{self.api_version}/{path}"

    async def request(
        self, method: str, url: str, *, allow_not_found: bool = False, **kwargs: Any
    ) -> httpx.Response:
        """Send a request and raise on any non-2xx status.

        With allow_not_found, a 404 response is returned instead of raised.
        """
        try:
            response = await self._http.request(method, url, **kwargs)
            if allow_not_found and response.status_code == 404:
                return response
            response.raise_for_status()
            return response
        except httpx.HTTPStatusError as e:
            logger.error(
                f"Store HTTP error: {method} {url} -> "
                f"{e.response.status_code} {e.response.text}"
            )
            raise
        except httpx.RequestError as e:
            logger.error(f"Store request error: {method} {url}: {e}")
            raise

    async def health_check(self) -> dict:
        """Check if the store API is healthy."""
        try:
            response = await self._http.get(f"{self.base_url}/health")
            response.raise_for_status()
            return response.json()
        except Exception as e:
            logger.warning(f"Store health check failed: {e}")
            return {"status": "error", "error": str(e)}

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this client created it."""
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> "StoreClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


class KeysAPI:
    """Scalar key operations."""

    def __init__(self, client: StoreClient):
        self._client = client

    async def get(self, key: str) -> Any | None:
        """Get a value, or None if the key does not exist."""
        response = await self._client.request(
            "GET", self._client.url("keys", key), allow_not_found=True
        )
        if response.status_code == 404:
            return None
        return response.json().get("value")

    async def set(self, key: str, value: Any, ttl_seconds: int | None = None) -> None:
        """Set a value, replacing any previous value and expiry."""
        body: dict[str, Any] = {"value": value}
        if ttl_seconds is not None:
            body["ttl"] = ttl_seconds
        await self._client.request("PUT", self._client.url("keys", key), json=body)

    async def expire(self, key: str, seconds: int) -> None:
        """Set the time to live of an existing key."""
        await self._client.request(
            "POST", self._client.url("keys", key, "expire"), json={"seconds": seconds}
        )


class ListsAPI:
    """List operations."""

    def __init__(self, client: StoreClient):
        self._client = client

    async def push(
        self, key: str, values: list[Any], direction: ListDirection = "right"
    ) -> int:
        """Push values onto a list and return its new length."""
        response = await self._client.request(
            "POST",
            self._client.url("lists", key),
            json={"values": values, "direction": direction},
        )
        return int(response.json()["length"])

    async def range(self, key: str, start: int, stop: int) -> list[Any]:
        """Get list items between two inclusive indexes."""
        response = await self._client.request(
            "GET",
            self._client.url("lists", key, "range"),
            params={"start": start, "stop": stop},
        )
        return response.json().get("items") or []


class FlowBuilder:
    """Accumulates commands and sends them to the store as one batch."""

    def __init__(self, client: StoreClient):
        self._client = client
        self._commands: list[dict[str, Any]] = []

    def delete(self, *keys: str) -> "FlowBuilder":
        self._commands.append({"op": "del", "keys": list(keys)})
        return self

    async def execute(self) -> list[Any]:
        """Send the batch and return one result per command."""
        response = await self._client.request(
            "POST", self._client.url("flow"), json={"commands": self._commands}
        )
        return response.json().get("results", [])
