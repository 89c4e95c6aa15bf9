"""
Error types raised by the render pipeline.
Routers translate these into HTTP responses; nothing below the router knows about HTTP.
"""
from typing import List, Optional


class ShareableError(Exception):
    """Base class for render pipeline failures."""

    status_code = 500
    error = "Failed to render page"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_detail(self) -> dict:
        return {"error": self.error, "message": self.message}


class InputError(ShareableError):
    """A request parameter is missing or malformed."""

    status_code = 400
    error = "Invalid request"


class ForbiddenOrigin(ShareableError):
    """The requested URL's origin is not on the allowlist."""

    status_code = 403
    error = "Host not allowed"

    ALL_HOSTS_ALLOWED = "all hosts allowed"

    def __init__(self, url: str, allowed_origins: Optional[List[str]] = None):
        super().__init__(f"URL '{url}' is not in the list of allowed hosts")
        self.url = url
        self.allowed_origins = list(allowed_origins or [])

    def to_detail(self) -> dict:
        detail = super().to_detail()
        detail["allowed_origins"] = self.allowed_origins or self.ALL_HOSTS_ALLOWED
        return detail


class ContentNotReady(ShareableError):
    """The page never produced shareable content."""

    status_code = 404
    error = "Template not found"


class SessionFailure(ShareableError):
    """Browser launch, navigation or capture failed."""


class StorageFailure(SessionFailure):
    """Writing the rendered image to the cache failed."""
