"""Aggregated per-user conversation metadata and its merge rules."""

from collections.abc import Mapping
from typing import Any, Literal

from pydantic import Field

from llmcache.models.base import CamelModel
from llmcache.models.conversation import TokenUsage

Sentiment = Literal["positive", "neutral", "negative"]

# Fields merged key by key instead of replaced
NESTED_MAP_FIELDS = ("token_usage", "user_preferences", "tool_state", "extra")


class ConversationMetadata(CamelModel):
    """Metadata kept alongside a user's message history.

    Every field is optional, so the same model is used both for the stored
    record and for partial updates.
    """

    summary: str | None = Field(None, description="Running summary of the conversation")
    total_turns: int | None = Field(None, description="Number of turns so far")
    last_interaction_at: int | None = Field(
        None, description="Epoch milliseconds of the last interaction"
    )
    token_usage: TokenUsage | None = Field(None, description="Aggregated token counters")
    sentiment: Sentiment | None = None
    goal: str | None = Field(None, description="What the user is trying to do")
    user_preferences: dict[str, Any] | None = None
    tool_state: dict[str, Any] | None = None
    extra: dict[str, Any] | None = Field(None, description="Free-form fields")


def merge_conversation_metadata(
    current: ConversationMetadata | None,
    update: ConversationMetadata | Mapping[str, Any],
) -> ConversationMetadata:
    """Merge a partial update into the current metadata.

    A field counts as present in ``update`` when it is not None. Present
    scalar fields overwrite the current value. The nested maps in
    NESTED_MAP_FIELDS are shallow-merged, with incoming keys winning.
    Fields absent from the update keep their current value.

    Args:
        current: Stored metadata, or None if nothing is stored yet
        update: Partial metadata, as a model or a camelCase/snake_case mapping

    Returns:
        The merged metadata. Neither argument is modified.

    """
    if not isinstance(update, ConversationMetadata):
        update = ConversationMetadata.model_validate(update)

    merged = current.model_dump(exclude_none=True) if current else {}
    for field, value in update.model_dump(exclude_none=True).items():
        if field in NESTED_MAP_FIELDS:
            merged[field] = {**merged.get(field, {}), **value}
        else:
            merged[field] = value

    return ConversationMetadata.model_validate(merged)
