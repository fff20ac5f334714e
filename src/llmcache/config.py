"""Configuration management."""

from typing import Literal

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(ValueError):
    """Raised when the cache cannot be built from the given configuration."""


class Settings(BaseSettings):
    """LLM cache settings."""

    # Store endpoint
    store_base_url: str = ""
    store_api_version: str = "v1"
    store_timeout_seconds: float = 10.0

    @computed_field
    @property
    def store_api_url(self) -> str:
        """Versioned API root of the store."""
        return f"{self.store_base_url.rstrip('/')}/{self.store_api_version}"

    # Key space
    key_prefix: str = "llm-cache"

    # Expiry (seconds). Model TTL falls back to the conversation TTL.
    conversation_ttl_seconds: int | None = Field(None, gt=0)
    model_ttl_seconds: int | None = Field(None, gt=0)
    ttl_refresh: Literal["sliding", "fixed"] = "sliding"

    model_config = SettingsConfigDict(
        env_prefix="LLM_CACHE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


# Global settings instance
settings = Settings()
