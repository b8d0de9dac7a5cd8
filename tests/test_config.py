"""
Tests for configuration module.
"""

import pytest

from nin_terminal.core.config import Settings, settings


class TestSettings:
    def test_settings_instance(self):
        assert isinstance(settings, Settings)

    def test_settings_singleton(self):
        from nin_terminal.core.config import settings as settings2

        assert settings is settings2

    def test_defaults(self, settings_factory):
        config = settings_factory()

        assert config.GROWW_BASE_URL == "https://api.groww.in"
        assert config.BINANCE_BASE_URL == "https://api.binance.com"
        assert config.MCP_PORT == 8765
        assert config.MCP_PATH == "/mcp"
        assert config.TOOL_TIMEOUT_SECONDS == 30.0


class TestCredentials:
    def test_missing_credentials_lists_every_unset_key(self, settings_factory):
        config = settings_factory()

        assert config.missing_credentials() == [
            "GROWW_API_KEY",
            "BINANCE_API_KEY",
            "BINANCE_SECRET_KEY",
        ]
        assert config.groww_configured is False
        assert config.binance_configured is False

    def test_whitespace_keys_count_as_unset(self, settings_factory):
        config = settings_factory(GROWW_API_KEY="  ", BINANCE_API_KEY=" key ")

        assert config.GROWW_API_KEY == ""
        assert config.BINANCE_API_KEY == "key"
        assert "GROWW_API_KEY" in config.missing_credentials()

    def test_binance_needs_both_keys(self, settings_factory):
        config = settings_factory(BINANCE_API_KEY="key", BINANCE_SECRET_KEY="secret")

        assert config.binance_configured is True
        assert config.missing_credentials() == ["GROWW_API_KEY"]


class TestConfigLoading:
    def test_environment_variables_are_read(self, monkeypatch):
        monkeypatch.setenv("GROWW_API_KEY", "env-groww-key")
        monkeypatch.setenv("MCP_TYPE", "streamable-http")
        monkeypatch.setenv("TOOL_TIMEOUT_SECONDS", "12.5")

        config = Settings(_env_file=None)

        assert config.GROWW_API_KEY == "env-groww-key"
        assert config.MCP_TYPE == "streamable-http"
        assert config.TOOL_TIMEOUT_SECONDS == 12.5

    def test_unknown_transport_is_rejected(self, monkeypatch):
        monkeypatch.setenv("MCP_TYPE", "websocket")

        with pytest.raises(ValueError):
            Settings(_env_file=None)
