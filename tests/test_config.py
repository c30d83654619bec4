"""
Tests for connection settings and mode selection.
"""

import pytest
from pydantic import ValidationError

from worldanvil_mcp.config import (
    DEFAULT_PROXY_URL,
    DEFAULT_USER_AGENT,
    WorldAnvilConfig,
)


class TestModeSelection:
    """Direct mode whenever an application key exists, proxy otherwise."""

    def test_app_key_selects_direct_mode(self):
        config = WorldAnvilConfig(app_key="key", auth_token="token")
        assert config.mode == "direct"
        assert config.base_url == "https://www.worldanvil.com/api/external/boromir"
        assert config.effective_proxy_url is None

    def test_no_app_key_selects_proxy_mode(self):
        config = WorldAnvilConfig(auth_token="token")
        assert config.mode == "proxy"

    def test_proxy_mode_uses_default_proxy(self):
        config = WorldAnvilConfig(auth_token="token")
        assert config.effective_proxy_url == DEFAULT_PROXY_URL
        assert config.base_url == DEFAULT_PROXY_URL

    def test_custom_proxy_url(self):
        config = WorldAnvilConfig(auth_token="token", proxy_url="https://my-proxy.example.com")
        assert config.base_url == "https://my-proxy.example.com"

    def test_direct_mode_preferred_over_configured_proxy(self):
        config = WorldAnvilConfig(
            app_key="key", auth_token="token", proxy_url="https://my-proxy.example.com"
        )
        assert config.mode == "direct"
        assert config.effective_proxy_url is None
        assert config.base_url.startswith("https://www.worldanvil.com")

    def test_trailing_slashes_stripped_from_proxy_url(self):
        config = WorldAnvilConfig(auth_token="token", proxy_url="https://my-proxy.example.com///")
        assert config.proxy_url == "https://my-proxy.example.com"

    def test_custom_api_host(self):
        config = WorldAnvilConfig(app_key="key", api_host="staging.worldanvil.com")
        assert config.base_url == "https://staging.worldanvil.com/api/external/boromir"


class TestValidation:
    """Field constraints and normalisation."""

    def test_defaults(self):
        config = WorldAnvilConfig()
        assert config.timeout == 30.0
        assert config.max_retries == 3
        assert config.user_agent == DEFAULT_USER_AGENT
        assert config.log_level == "INFO"

    def test_log_level_upper_cased(self):
        assert WorldAnvilConfig(log_level="debug").log_level == "DEBUG"

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            WorldAnvilConfig(timeout=0)

    def test_at_least_one_attempt(self):
        with pytest.raises(ValidationError):
            WorldAnvilConfig(max_retries=0)


class TestFromEnv:
    """Loading settings from WA_* environment variables."""

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("WA_APP_KEY", "env-key")
        monkeypatch.setenv("WA_AUTH_TOKEN", "env-token")
        monkeypatch.setenv("WA_TIMEOUT", "12.5")
        monkeypatch.setenv("WA_MAX_RETRIES", "5")
        monkeypatch.setenv("WA_LOG_LEVEL", "warning")

        config = WorldAnvilConfig.from_env()

        assert config.app_key == "env-key"
        assert config.auth_token == "env-token"
        assert config.timeout == 12.5
        assert config.max_retries == 5
        assert config.log_level == "WARNING"

    def test_empty_environment_gives_proxy_mode(self):
        config = WorldAnvilConfig.from_env()
        assert config.app_key is None
        assert config.auth_token is None
        assert config.mode == "proxy"

    def test_empty_variable_ignored(self, monkeypatch):
        monkeypatch.setenv("WA_APP_KEY", "")
        assert WorldAnvilConfig.from_env().mode == "proxy"

    def test_overrides_win_over_environment(self, monkeypatch):
        monkeypatch.setenv("WA_AUTH_TOKEN", "env-token")
        monkeypatch.setenv("WA_PROXY_URL", "https://env-proxy.example.com/")

        config = WorldAnvilConfig.from_env(auth_token="override", proxy_url=None)

        assert config.auth_token == "override"
        assert config.proxy_url == "https://env-proxy.example.com"
