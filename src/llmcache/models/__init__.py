"""Shared Pydantic models for llmcache."""

from llmcache.models.conversation import (
    Attachment,
    Message,
    MessageInput,
    MessageMetadata,
    Role,
    TokenUsage,
    ToolCall,
    now_ms,
)
from llmcache.models.metadata import (
    ConversationMetadata,
    Sentiment,
    merge_conversation_metadata,
)

__all__ = [
    # Messages
    "Attachment",
    "Message",
    "MessageInput",
    "MessageMetadata",
    "Role",
    "TokenUsage",
    "ToolCall",
    "now_ms",
    # Conversation metadata
    "ConversationMetadata",
    "Sentiment",
    "merge_conversation_metadata",
]
