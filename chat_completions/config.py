"""
Configuration management using pydantic-settings.
Loads from OPENAI_* environment variables and ./.env
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from chat_completions.constants import (
    DEFAULT_BASE_URL,
    DEFAULT_EMPTY_MESSAGES_LIMIT,
    DEFAULT_TIMEOUT,
)


class ClientSettings(BaseSettings):
    """Client settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_prefix="OPENAI_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Authentication
    api_key: str = ""
    organization: str = ""

    # Transport
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT

    # Streaming
    empty_messages_limit: int = DEFAULT_EMPTY_MESSAGES_LIMIT


@lru_cache
def get_settings() -> ClientSettings:
    """Get cached settings instance."""
    return ClientSettings()
