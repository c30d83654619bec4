"""
Key-injecting pass-through proxy for the World Anvil API.

Lets MCP users work without their own application key: the proxy holds
WA_APP_KEY and adds it to every forwarded request, while each user still
sends their own x-auth-token. Point the MCP server at it with WA_PROXY_URL.

Routes:
- <any path>?<query> - forwarded to https://www.worldanvil.com/api/external/boromir<path>?<query>

Environment:
- WA_APP_KEY: application key injected upstream (required)
- WA_PROXY_HOST / WA_PROXY_PORT: listen address (default 127.0.0.1:8787)
"""

import logging
import os

import httpx
import uvicorn
from dotenv import load_dotenv
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse, Response
from starlette.routing import Route

from .config import DEFAULT_API_HOST, DEFAULT_API_PATH

logger = logging.getLogger("worldanvil-mcp.proxy")


DEFAULT_UPSTREAM = f"https://{DEFAULT_API_HOST}{DEFAULT_API_PATH}"
PROXY_USER_AGENT = "WorldAnvil-MCP-Proxy/1.0"
ALLOWED_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]
UPSTREAM_TIMEOUT = 30.0

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, PATCH, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, x-auth-token",
}

# Hop-by-hop or recomputed headers that must not be copied between legs
_SKIP_REQUEST_HEADERS = {"host", "content-length", "connection", "x-application-key", "user-agent"}
_SKIP_RESPONSE_HEADERS = {"content-length", "content-encoding", "transfer-encoding", "connection"}


def create_proxy_app(
    app_key: str | None = None,
    upstream: str = DEFAULT_UPSTREAM,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Starlette:
    """
    Build the proxy ASGI app.

    Args:
        app_key: Application key to inject. Without it every request fails with 500.
        upstream: Base URL requests are forwarded to
        transport: Optional httpx transport (used by tests to stub World Anvil)

    Returns:
        Starlette application
    """
    upstream = upstream.rstrip("/")

    async def forward(request: Request) -> Response:
        if request.method not in ALLOWED_METHODS:
            return PlainTextResponse("Method not allowed", status_code=405)

        if not app_key:
            logger.error("WA_APP_KEY is not set, refusing to forward")
            return JSONResponse(
                {"error": "Proxy misconfigured: WA_APP_KEY secret not set"},
                status_code=500,
            )

        if not request.headers.get("x-auth-token"):
            return JSONResponse(
                {"error": "Missing x-auth-token header. You must provide your WorldAnvil Auth Token."},
                status_code=401,
            )

        target = f"{upstream}{request.url.path}"
        if request.url.query:
            target += f"?{request.url.query}"

        headers = {
            name: value
            for name, value in request.headers.items()
            if name.lower() not in _SKIP_REQUEST_HEADERS
        }
        headers["x-application-key"] = app_key
        headers["User-Agent"] = PROXY_USER_AGENT

        body = await request.body()
        logger.debug(f"{request.method} {request.url.path} -> {target}")

        try:
            async with httpx.AsyncClient(timeout=UPSTREAM_TIMEOUT, transport=transport) as client:
                upstream_response = await client.request(
                    request.method, target, headers=headers, content=body or None
                )
        except httpx.RequestError as e:
            logger.warning(f"Upstream request failed: {e}")
            return JSONResponse(
                {"error": f"Proxy error: {e}"},
                status_code=502,
                headers=CORS_HEADERS,
            )

        response_headers = {
            name: value
            for name, value in upstream_response.headers.items()
            if name.lower() not in _SKIP_RESPONSE_HEADERS
        }
        response_headers.update(CORS_HEADERS)

        return Response(
            content=upstream_response.content,
            status_code=upstream_response.status_code,
            headers=response_headers,
        )

    return Starlette(
        routes=[
            Route(
                "/{path:path}",
                forward,
                methods=ALLOWED_METHODS + ["OPTIONS"],
            ),
        ],
    )


def main() -> None:
    """Run the proxy with uvicorn."""
    load_dotenv()
    logging.basicConfig(level=os.getenv("WA_LOG_LEVEL", "INFO").upper())

    app_key = os.getenv("WA_APP_KEY")
    if not app_key:
        logger.warning("❌ WA_APP_KEY is not set; every request will be rejected")

    host = os.getenv("WA_PROXY_HOST", "127.0.0.1")
    port = int(os.getenv("WA_PROXY_PORT", "8787"))
    logger.info(f"🛡️ World Anvil proxy listening on http://{host}:{port}")
    uvicorn.run(create_proxy_app(app_key=app_key), host=host, port=port, log_level="info")


if __name__ == "__main__":
    main()
