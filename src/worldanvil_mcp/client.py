"""
Async HTTP client for the World Anvil Boromir API.

One httpx.AsyncClient is opened per request, so a WorldAnvilClient holds no
connection state and can be shared freely between tool calls.

Rate limiting (World Anvil sits behind Cloudflare) and gateway errors are
retried with exponential backoff; every other failure is raised as a
WorldAnvilError subclass carrying a user-facing message.
"""

import asyncio
import json
import logging
from typing import Any

import httpx

from .config import WorldAnvilConfig
from .errors import WorldAnvilAPIError, WorldAnvilConfigError, WorldAnvilNetworkError
from .resources import get_resource

logger = logging.getLogger("worldanvil-mcp")


DEFAULT_LIMIT = 50
DEFAULT_OFFSET = 0
RETRYABLE_STATUS_CODES = {429, 502, 503, 504}
_BODY_METHODS = {"POST", "PUT", "PATCH"}


def pagination_body(offset: int | None = None, limit: int | None = None) -> dict[str, Any]:
    """Build a list request body. World Anvil expects the numbers as strings."""
    return {
        "limit": str(limit if limit is not None else DEFAULT_LIMIT),
        "offset": str(offset if offset is not None else DEFAULT_OFFSET),
    }


def _error_message(response: httpx.Response) -> str:
    """Extract a readable error detail from a failed response."""
    try:
        parsed = response.json()
    except ValueError:
        return response.text
    if isinstance(parsed, dict) and parsed.get("error"):
        error = parsed["error"]
        return json.dumps(error) if isinstance(error, (dict, list)) else str(error)
    return json.dumps(parsed)


class WorldAnvilClient:
    """
    Client for the World Anvil Boromir API.

    Runs in direct mode (application key + auth token sent to worldanvil.com)
    or proxy mode (auth token only, the proxy injects the application key).
    See WorldAnvilConfig.mode for how the mode is chosen.

    Attributes:
        config: Connection settings
    """

    def __init__(
        self,
        config: WorldAnvilConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            config: Connection settings. Read from WA_* environment variables if omitted.
            transport: Optional httpx transport (used by tests to stub the API).

        Raises:
            WorldAnvilConfigError: If no auth token is configured.
        """
        self.config = config if config is not None else WorldAnvilConfig.from_env()
        if not self.config.auth_token:
            raise WorldAnvilConfigError(
                "WA_AUTH_TOKEN is required. Generate a token in your World Anvil "
                "account settings and set it in the environment or .env file."
            )
        self._transport = transport

    @property
    def mode(self) -> str:
        return self.config.mode

    @property
    def app_key(self) -> str | None:
        """Application key sent upstream (None in proxy mode)."""
        return self.config.app_key if self.mode == "direct" else None

    @property
    def proxy_url(self) -> str | None:
        return self.config.effective_proxy_url

    @property
    def base_url(self) -> str:
        return self.config.base_url

    def _headers(self, method: str) -> dict[str, str]:
        headers = {
            "x-auth-token": self.config.auth_token,
            "Accept": "application/json",
            "User-Agent": self.config.user_agent,
        }
        if self.app_key:
            headers["x-application-key"] = self.app_key
        if method in _BODY_METHODS:
            headers["Content-Type"] = "application/json"
        return headers

    async def _backoff(self, attempt: int) -> None:
        await asyncio.sleep(self.config.retry_backoff * (2 ** attempt))

    # =========================================================================
    # HTTP
    # =========================================================================

    async def request(
        self,
        endpoint: str,
        method: str = "GET",
        body: dict[str, Any] | None = None,
    ) -> Any:
        """
        Send a request to the API and return the decoded response.

        Args:
            endpoint: Endpoint path including query string (e.g. "/article?id=1")
            method: HTTP method
            body: JSON body for POST/PUT/PATCH requests

        Returns:
            Decoded JSON, or the raw text when the body is not JSON

        Raises:
            WorldAnvilAPIError: On a non-2xx response
            WorldAnvilNetworkError: If the API cannot be reached after retries
        """
        method = method.upper()
        url = f"{self.base_url}{endpoint}"
        content = json.dumps(body) if body is not None and method in _BODY_METHODS else None
        attempts = self.config.max_retries

        for attempt in range(attempts):
            retries_left = attempt < attempts - 1
            logger.debug(f"{method} {endpoint} (attempt {attempt + 1})")

            try:
                async with httpx.AsyncClient(
                    timeout=self.config.timeout, transport=self._transport
                ) as client:
                    response = await client.request(
                        method, url, headers=self._headers(method), content=content
                    )
            except httpx.RequestError as e:
                detail = str(e) or type(e).__name__
                if retries_left:
                    logger.warning(f"Request to {endpoint} failed ({detail}), retrying")
                    await self._backoff(attempt)
                    continue
                raise WorldAnvilNetworkError(detail) from e

            if response.status_code in RETRYABLE_STATUS_CODES and retries_left:
                logger.warning(
                    f"World Anvil returned {response.status_code} for {endpoint}, "
                    f"attempt {attempt + 1}/{attempts}"
                )
                await self._backoff(attempt)
                continue

            if not response.is_success:
                raise WorldAnvilAPIError(response.status_code, _error_message(response))

            try:
                return response.json()
            except ValueError:
                return response.text

        # range(attempts) always returns or raises on the final attempt
        raise WorldAnvilNetworkError(f"No attempts made for {endpoint}")

    # =========================================================================
    # Generic resource operations
    # =========================================================================

    async def get_entity(
        self, resource: str, entity_id: str | int, granularity: int | None = None
    ) -> Any:
        """Fetch one resource by id."""
        spec = get_resource(resource)
        endpoint = f"{spec.path}?id={entity_id}"
        level = granularity if granularity is not None else spec.granularity
        if level is not None:
            endpoint += f"&granularity={level}"
        return await self.request(endpoint)

    async def list_entities(
        self,
        resource: str,
        parent_id: str | int | None = None,
        offset: int | None = None,
        limit: int | None = None,
        extra: dict[str, Any] | None = None,
    ) -> Any:
        """List resources under a parent (world, notebook, map, ...)."""
        spec = get_resource(resource)
        endpoint = spec.list_path
        if spec.list_parent is not None:
            endpoint += f"?id={parent_id}"
        body = pagination_body(offset, limit)
        if extra:
            body.update(extra)
        return await self.request(endpoint, "POST", body)

    async def create_entity(self, resource: str, data: dict[str, Any]) -> Any:
        spec = get_resource(resource)
        return await self.request(spec.path, "PUT", data)

    async def update_entity(
        self, resource: str, entity_id: str | int, data: dict[str, Any]
    ) -> Any:
        spec = get_resource(resource)
        return await self.request(f"{spec.path}?id={entity_id}", "PATCH", data)

    async def delete_entity(self, resource: str, entity_id: str | int) -> Any:
        spec = get_resource(resource)
        return await self.request(f"{spec.path}?id={entity_id}", "DELETE")

    # =========================================================================
    # Endpoints with their own shape
    # =========================================================================

    async def get_identity(self) -> Any:
        """Get the authenticated user's identity."""
        return await self.request("/identity")

    async def list_worlds(self) -> Any:
        """List the authenticated user's worlds.

        The endpoint is scoped by user id, so the identity is fetched first.
        """
        identity = await self.get_identity()
        user_id = identity.get("id") if isinstance(identity, dict) else None
        if user_id is None:
            # 502: upstream answered, but not with a usable identity
            raise WorldAnvilAPIError(
                502, f"Malformed identity response (no user id): {json.dumps(identity)}"
            )
        return await self.request(f"/user/worlds?id={user_id}", "POST", {})

    async def list_articles(
        self,
        world_id: str | int,
        offset: int | None = None,
        limit: int | None = None,
        category: dict[str, Any] | None = None,
    ) -> Any:
        """List articles in a world; category {"id": "-1"} means all categories."""
        return await self.list_entities(
            "article",
            world_id,
            offset=offset,
            limit=limit,
            extra={"category": category if category is not None else {"id": "-1"}},
        )

    async def list_blocks_in_folder(
        self, folder_id: str | int, offset: int | None = None, limit: int | None = None
    ) -> Any:
        return await self.request(
            f"/blockfolder/blocks?id={folder_id}", "POST", pagination_body(offset, limit)
        )
