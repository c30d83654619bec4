"""
Exceptions raised by the World Anvil client layer.

Markdown conversion never raises; everything here concerns configuration,
resource lookup and HTTP calls.
"""


class WorldAnvilError(Exception):
    """Base exception for World Anvil client errors."""
    pass


class WorldAnvilConfigError(WorldAnvilError):
    """Raised when credentials or connection settings are missing."""
    pass


class WorldAnvilAPIError(WorldAnvilError):
    """Raised when the API answers with a non-2xx status.

    Attributes:
        status_code: HTTP status returned by World Anvil (or the proxy).
        message: Error detail extracted from the response body.
    """

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"API Error ({status_code}): {message}")


class WorldAnvilNetworkError(WorldAnvilError):
    """Raised when the API cannot be reached."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Network Error: {detail}")


class UnknownResourceError(WorldAnvilError, KeyError):
    """Raised when a resource name is not in the resource table."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown World Anvil resource: '{name}'")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]
