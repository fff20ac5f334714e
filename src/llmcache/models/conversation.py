"""Conversation message models."""

import time
from typing import Any, Literal

from pydantic import Field

from llmcache.models.base import CamelModel

Role = Literal["user", "assistant", "system"]


def now_ms() -> int:
    """Current time in epoch milliseconds."""
    return int(time.time() * 1000)


class TokenUsage(CamelModel):
    """Token counters for a message or a whole conversation."""

    prompt_tokens: int | None = Field(None, description="Prompt tokens")
    completion_tokens: int | None = Field(None, description="Completion tokens")
    total_tokens: int | None = Field(None, description="Prompt plus completion tokens")


class ToolCall(CamelModel):
    """A tool invocation made while producing a message."""

    name: str = Field(..., description="Tool name")
    id: str | None = Field(None, description="Tool call ID")
    arguments: dict[str, Any] | None = Field(None, description="Tool arguments")
    result: Any | None = Field(None, description="Tool result, if recorded")


class Attachment(CamelModel):
    """A file or resource attached to a message."""

    name: str | None = Field(None, description="Display name")
    url: str | None = Field(None, description="Location of the attachment")
    mime_type: str | None = Field(None, description="MIME type")
    size_bytes: int | None = Field(None, description="Size in bytes")


class MessageMetadata(CamelModel):
    """Optional per-message details."""

    token_usage: TokenUsage | None = None
    tool_calls: list[ToolCall] | None = None
    attachments: list[Attachment] | None = None
    latency_ms: int | None = Field(None, description="Generation latency")
    language: str | None = None
    labels: list[str] | None = None
    extra: dict[str, Any] | None = Field(None, description="Free-form fields")


class Message(CamelModel):
    """A single message in a conversation."""

    role: Role = Field(..., description="Message role")
    content: str = Field(..., description="Message content")
    timestamp: int = Field(..., description="Epoch milliseconds")
    metadata: MessageMetadata | None = None


class MessageInput(CamelModel):
    """A message about to be appended; the timestamp may be omitted."""

    role: Role = Field(..., description="Message role")
    content: str = Field(..., description="Message content")
    timestamp: int | None = Field(None, description="Epoch milliseconds, defaults to now")
    metadata: MessageMetadata | None = None

    def to_message(self) -> Message:
        """Normalize into a stored message, stamping it if needed."""
        return Message(
            role=self.role,
            content=self.content,
            timestamp=self.timestamp if self.timestamp is not None else now_ms(),
            metadata=self.metadata,
        )
