"""Key derivation for a user's conversation records."""

from dataclasses import dataclass

DEFAULT_KEY_PREFIX = "llm-cache"


@dataclass(frozen=True)
class ConversationKeys:
    """The three store keys that hold one user's conversation."""

    messages: str
    model: str
    metadata: str

    def all(self) -> tuple[str, str, str]:
        return (self.messages, self.model, self.metadata)


def conversation_keys(user_id: str, prefix: str = DEFAULT_KEY_PREFIX) -> ConversationKeys:
    """Derive the store keys for a user.

    Args:
        user_id: Opaque user identifier
        prefix: Namespace shared by every key this package writes

    Returns:
        ConversationKeys of the form ``{prefix}:{user_id}:{record}``

    Raises:
        ValueError: If user_id is empty

    """
    if not user_id:
        raise ValueError("user_id must be a non-empty string")
    base = f"{prefix}:{user_id}"
    return ConversationKeys(
        messages=f"{base}:messages",
        model=f"{base}:model",
        metadata=f"{base}:metadata",
    )
