"""Tests for client settings and constructor fallbacks."""

import pytest

from chat_completions import (
    CHAT_COMPLETION_MODELS,
    DEFAULT_EMPTY_MESSAGES_LIMIT,
    AsyncChatClient,
    ChatClient,
    ClientSettings,
    get_settings,
)


class TestClientSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self) -> None:
        """Test settings defaults without environment."""
        settings = ClientSettings()

        assert settings.api_key == ""
        assert settings.base_url == "https://api.openai.com/v1"
        assert settings.organization == ""
        assert settings.timeout == 600.0
        assert settings.empty_messages_limit == DEFAULT_EMPTY_MESSAGES_LIMIT

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test OPENAI_* variables populate settings."""
        monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
        monkeypatch.setenv("OPENAI_BASE_URL", "http://proxy:8080/v1")
        monkeypatch.setenv("OPENAI_EMPTY_MESSAGES_LIMIT", "10")

        settings = ClientSettings()

        assert settings.api_key == "sk-env"
        assert settings.base_url == "http://proxy:8080/v1"
        assert settings.empty_messages_limit == 10

    def test_env_file(self, tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test settings are read from .env in the working directory."""
        (tmp_path / ".env").write_text("OPENAI_API_KEY=sk-dotenv\nOPENAI_ORGANIZATION=org-9\n")
        monkeypatch.chdir(tmp_path)

        settings = ClientSettings()

        assert settings.api_key == "sk-dotenv"
        assert settings.organization == "org-9"

    def test_get_settings_cached(self) -> None:
        """Test get_settings returns one shared instance."""
        assert get_settings() is get_settings()


class TestClientFallbacks:
    """Tests for clients falling back to settings."""

    def test_sync_client_uses_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test unset constructor arguments come from the environment."""
        monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
        monkeypatch.setenv("OPENAI_BASE_URL", "http://proxy:8080/v1/")
        monkeypatch.setenv("OPENAI_TIMEOUT", "30")
        get_settings.cache_clear()

        client = ChatClient()

        assert client.api_key == "sk-env"
        assert client.base_url == "http://proxy:8080/v1"
        assert client.timeout == 30.0
        assert client.allowed_models == CHAT_COMPLETION_MODELS

    def test_explicit_arguments_win(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test constructor arguments override the environment."""
        monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
        get_settings.cache_clear()

        client = AsyncChatClient(api_key="sk-arg", allowed_models=["gpt-4"], empty_messages_limit=0)

        assert client.api_key == "sk-arg"
        assert client.allowed_models == frozenset({"gpt-4"})
        assert client.empty_messages_limit == 0
