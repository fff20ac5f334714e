"""Conversation cache for LLM chats backed by a key/value store."""

from llmcache.cache import LLMCache, get_llm_cache
from llmcache.config import ConfigurationError, Settings
from llmcache.models import ConversationMetadata, Message, MessageInput

__all__ = [
    "LLMCache",
    "get_llm_cache",
    "ConfigurationError",
    "Settings",
    "ConversationMetadata",
    "Message",
    "MessageInput",
]
