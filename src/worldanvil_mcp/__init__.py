"""
World Anvil MCP Server - World Anvil API tools with Markdown to BBCode conversion, built with FastMCP.
"""

from .bbcode import convert, convert_fields
from .client import WorldAnvilClient
from .config import WorldAnvilConfig
from .errors import (
    UnknownResourceError,
    WorldAnvilAPIError,
    WorldAnvilConfigError,
    WorldAnvilError,
    WorldAnvilNetworkError,
)

try:
    from importlib.metadata import version as _get_version
    __version__ = _get_version("worldanvil-mcp")
except Exception:
    __version__ = "1.4.0"  # Fallback if metadata unavailable
__all__ = [
    "convert",
    "convert_fields",
    "WorldAnvilClient",
    "WorldAnvilConfig",
    "WorldAnvilError",
    "WorldAnvilConfigError",
    "WorldAnvilAPIError",
    "WorldAnvilNetworkError",
    "UnknownResourceError",
]
