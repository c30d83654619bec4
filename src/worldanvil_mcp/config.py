"""
Connection settings for the World Anvil Boromir API.

Settings come from environment variables (optionally loaded from a .env file
by the server entry point) and can be overridden per field in code.

Two connection modes exist:
- direct: the caller owns an application key and talks to worldanvil.com
- proxy: a key-injecting proxy adds the application key; the caller only
  supplies a user auth token
"""

import os
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator


DEFAULT_API_HOST = "www.worldanvil.com"
DEFAULT_API_PATH = "/api/external/boromir"
DEFAULT_PROXY_URL = "https://worldanvil-proxy.wlcarden.workers.dev"
DEFAULT_USER_AGENT = "WorldAnvil-MCP/1.0"

# Environment variable -> config field
_ENV_FIELDS = {
    "WA_APP_KEY": "app_key",
    "WA_AUTH_TOKEN": "auth_token",
    "WA_PROXY_URL": "proxy_url",
    "WA_API_HOST": "api_host",
    "WA_TIMEOUT": "timeout",
    "WA_MAX_RETRIES": "max_retries",
    "WA_LOG_LEVEL": "log_level",
}


class WorldAnvilConfig(BaseModel):
    """Settings used by WorldAnvilClient.

    Attributes:
        app_key: World Anvil application key (direct mode only).
        auth_token: User authentication token, always required for requests.
        proxy_url: Base URL of a key-injecting proxy.
        api_host: API hostname used in direct mode.
        api_path: API path prefix used in direct mode.
        timeout: Per-request timeout in seconds.
        max_retries: Attempts made for rate-limited or failing requests.
        retry_backoff: Base delay in seconds, doubled on every retry.
        user_agent: User-Agent header sent with every request.
        log_level: Logging level name for the server entry points.
    """

    app_key: str | None = Field(default=None, description="World Anvil application key")
    auth_token: str | None = Field(default=None, description="World Anvil user auth token")
    proxy_url: str | None = Field(default=None, description="Key-injecting proxy base URL")
    api_host: str = Field(default=DEFAULT_API_HOST, description="API hostname (direct mode)")
    api_path: str = Field(default=DEFAULT_API_PATH, description="API path prefix (direct mode)")
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")
    max_retries: int = Field(default=3, ge=1, description="Attempts per request")
    retry_backoff: float = Field(default=0.75, ge=0, description="Base retry delay in seconds")
    user_agent: str = Field(default=DEFAULT_USER_AGENT)
    log_level: str = Field(default="INFO")

    @field_validator("proxy_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.rstrip("/") or None

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()

    @classmethod
    def from_env(cls, **overrides: Any) -> "WorldAnvilConfig":
        """Build a config from WA_* environment variables.

        Keyword overrides that are not None take precedence over the
        environment.
        """
        values: dict[str, Any] = {}
        for env_name, field_name in _ENV_FIELDS.items():
            env_value = os.getenv(env_name)
            if env_value:
                values[field_name] = env_value
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    @property
    def mode(self) -> Literal["direct", "proxy"]:
        """Direct when an application key is present, proxy otherwise."""
        return "direct" if self.app_key else "proxy"

    @property
    def effective_proxy_url(self) -> str | None:
        """Proxy in use, or None in direct mode (a configured proxy is ignored)."""
        if self.mode == "direct":
            return None
        return self.proxy_url or DEFAULT_PROXY_URL

    @property
    def base_url(self) -> str:
        """Base URL that endpoint paths are appended to."""
        if self.mode == "direct":
            return f"https://{self.api_host}{self.api_path}"
        # The proxy owns the /api/external/boromir prefix
        return self.effective_proxy_url
