"""Error taxonomy shared by use cases and the HTTP layer.

Each error carries the HTTP status it maps to and a message that is safe to
show to the client. Internal detail travels in ``__cause__`` and in logs.
"""

from __future__ import annotations


class PortfolioError(Exception):
    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInput(PortfolioError):
    """Client-supplied data is missing or malformed."""

    status_code = 400
    default_message = "Invalid request"

    def __init__(self, field: str, message: str | None = None):
        self.field = field
        super().__init__(message or f"Invalid or missing field: {field}")


class MethodNotAllowed(PortfolioError):
    status_code = 405
    default_message = "Method not allowed"


class StorageUnavailable(PortfolioError):
    """Backing store unreachable, failing, or too slow."""

    status_code = 500
    default_message = "Storage is temporarily unavailable"


class StorageConflict(PortfolioError):
    """Optimistic update kept colliding until attempts ran out."""

    status_code = 500
    default_message = "Concurrent update conflict"
