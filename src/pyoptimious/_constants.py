"""Internal constants shared across the library."""

DEFAULT_INTERVAL_SECONDS: float = 30.0
USER_AGENT = "pyoptimious"
ACCEPT = "application/json"

#: Maximum number of body characters quoted in error messages and logs.
BODY_PREVIEW_CHARS = 200


def is_success_status(status: int) -> bool:
    """Return ``True`` for 2xx HTTP status codes."""
    return 200 <= status < 300
