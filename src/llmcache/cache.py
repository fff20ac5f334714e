"""Conversation cache for LLM chats.

Stores, per user, the message history, the selected model and aggregated
conversation metadata in a key/value + list store. The store client is
injected; durability, expiry enforcement and networking are its concern.
"""

import logging
from collections.abc import Mapping
from typing import Any, Literal

import httpx

from llmcache.codec import Codec, PydanticJsonCodec
from llmcache.config import ConfigurationError, Settings, settings
from llmcache.keys import DEFAULT_KEY_PREFIX, ConversationKeys, conversation_keys
from llmcache.models import (
    ConversationMetadata,
    Message,
    MessageInput,
    merge_conversation_metadata,
)
from llmcache.store import StoreBackend, StoreClient

logger = logging.getLogger(__name__)

TTLRefresh = Literal["sliding", "fixed"]


def _check_ttl(name: str, value: int | None) -> int | None:
    if value is not None and value <= 0:
        raise ConfigurationError(f"{name} must be a positive number of seconds, got {value}")
    return value


class LLMCache:
    """Per-user conversation state on top of a store client."""

    def __init__(
        self,
        client: StoreBackend,
        *,
        conversation_ttl_seconds: int | None = None,
        model_ttl_seconds: int | None = None,
        key_prefix: str = DEFAULT_KEY_PREFIX,
        ttl_refresh: TTLRefresh = "sliding",
        message_codec: Codec[Message] | None = None,
        metadata_codec: Codec[ConversationMetadata] | None = None,
    ):
        """Initialize the cache.

        Args:
            client: Store client (StoreClient, InMemoryStoreClient, ...)
            conversation_ttl_seconds: Expiry for history and metadata
            model_ttl_seconds: Expiry for the model selection, falls back to
                conversation_ttl_seconds
            key_prefix: Namespace for every key written
            ttl_refresh: "sliding" reapplies the history TTL on every append,
                "fixed" only when the append creates the list
            message_codec: Codec for history entries
            metadata_codec: Codec for the metadata record

        Raises:
            ConfigurationError: If a TTL is not positive

        """
        self.client = client
        self.conversation_ttl_seconds = _check_ttl(
            "conversation_ttl_seconds", conversation_ttl_seconds
        )
        self.model_ttl_seconds = _check_ttl("model_ttl_seconds", model_ttl_seconds)
        self.key_prefix = key_prefix
        self.ttl_refresh = ttl_refresh
        self.message_codec = message_codec or PydanticJsonCodec(Message)
        self.metadata_codec = metadata_codec or PydanticJsonCodec(ConversationMetadata)

    @classmethod
    def create(
        cls,
        base_url: str,
        api_version: str = "v1",
        *,
        timeout: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
        **options: Any,
    ) -> "LLMCache":
        """Build a cache talking to the store API at base_url.

        Raises:
            ConfigurationError: If base_url is empty or a TTL is invalid

        """
        client = StoreClient(
            base_url, api_version=api_version, timeout=timeout, http_client=http_client
        )
        return cls(client, **options)

    @classmethod
    def from_settings(
        cls, config: Settings, http_client: httpx.AsyncClient | None = None
    ) -> "LLMCache":
        """Build a cache from Settings."""
        return cls.create(
            config.store_base_url,
            config.store_api_version,
            timeout=config.store_timeout_seconds,
            http_client=http_client,
            conversation_ttl_seconds=config.conversation_ttl_seconds,
            model_ttl_seconds=config.model_ttl_seconds,
            key_prefix=config.key_prefix,
            ttl_refresh=config.ttl_refresh,
        )

    def keys_for(self, user_id: str) -> ConversationKeys:
        return conversation_keys(user_id, self.key_prefix)

    @property
    def effective_model_ttl(self) -> int | None:
        if self.model_ttl_seconds is not None:
            return self.model_ttl_seconds
        return self.conversation_ttl_seconds

    # ============= Messages =============

    async def add_message(
        self, user_id: str, message: MessageInput | Message | Mapping[str, Any]
    ) -> None:
        """Append a message to the user's history.

        A missing timestamp is set to the current time.
        """
        if isinstance(message, Message):
            normalized = message
        else:
            if not isinstance(message, MessageInput):
                message = MessageInput.model_validate(message)
            normalized = message.to_message()

        key = self.keys_for(user_id).messages
        length = await self.client.lists.push(key, [self.message_codec.encode(normalized)])
        logger.debug(f"Appended {normalized.role} message to {key} (length={length})")

        ttl = self.conversation_ttl_seconds
        if ttl is None:
            return
        if self.ttl_refresh == "sliding" or length == 1:
            await self.client.keys.expire(key, ttl)

    async def get_conversation_window(
        self, user_id: str, last_n: int | None = None
    ) -> list[Message]:
        """Return the user's messages in the order they were appended.

        Args:
            user_id: User identifier
            last_n: Only return the last N messages. None or a value <= 0
                returns the whole history; a value larger than the history
                also returns the whole history.

        """
        key = self.keys_for(user_id).messages
        start = -last_n if last_n and last_n > 0 else 0
        items = await self.client.lists.range(key, start, -1)
        return [self.message_codec.decode(item) for item in items]

    # ============= Model selection =============

    async def set_model(self, user_id: str, model_name: str) -> None:
        """Set the LLM model used for a user (e.g. 'gemini-1.5-pro')."""
        key = self.keys_for(user_id).model
        await self.client.keys.set(key, model_name, self.effective_model_ttl)
        logger.debug(f"Set model for {user_id} to {model_name}")

    async def get_model(self, user_id: str) -> str | None:
        """Get the model configured for a user, or None if unset."""
        value = await self.client.keys.get(self.keys_for(user_id).model)
        return None if value is None else str(value)

    # ============= Conversation metadata =============

    async def get_conversation_metadata(self, user_id: str) -> ConversationMetadata | None:
        raw = await self.client.keys.get(self.keys_for(user_id).metadata)
        return None if raw is None else self.metadata_codec.decode(raw)

    async def upsert_conversation_metadata(
        self,
        user_id: str,
        partial: ConversationMetadata | Mapping[str, Any],
    ) -> ConversationMetadata:
        """Merge a partial update into the stored metadata and save it.

        Nested maps are merged key by key and present scalars overwrite the
        stored value (see merge_conversation_metadata). The read and the
        write are separate requests, so concurrent upserts for the same user
        can lose an update.

        Returns:
            The merged metadata as written

        """
        key = self.keys_for(user_id).metadata
        current = await self.get_conversation_metadata(user_id)
        merged = merge_conversation_metadata(current, partial)
        await self.client.keys.set(
            key, self.metadata_codec.encode(merged), self.conversation_ttl_seconds
        )
        logger.debug(f"Upserted conversation metadata for {user_id}")
        return merged

    # ============= Lifecycle =============

    async def clear_history(self, user_id: str) -> None:
        """Delete the history, model and metadata of a user in one batch."""
        keys = self.keys_for(user_id)
        await self.client.flow().delete(*keys.all()).execute()
        logger.info(f"Cleared conversation state for {user_id}")

    async def aclose(self) -> None:
        """Close the store client, if it holds resources."""
        close = getattr(self.client, "aclose", None)
        if close is not None:
            await close()


# Global instance (initialized on first use)
_llm_cache: LLMCache | None = None


def get_llm_cache(base_url: str | None = None) -> LLMCache:
    """Get the process-wide LLMCache instance.

    Args:
        base_url: Store endpoint. Only needed on the first call when
            LLM_CACHE_STORE_BASE_URL is not set.

    Raises:
        ConfigurationError: If no base URL is available on first use

    """
    global _llm_cache
    if _llm_cache is None:
        url = base_url or settings.store_base_url
        if not url:
            raise ConfigurationError(
                "A store base URL is required the first time the LLM cache is initialized"
            )
        _llm_cache = LLMCache.from_settings(settings.model_copy(update={"store_base_url": url}))
    return _llm_cache
