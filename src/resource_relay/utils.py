"""Utility functions."""

from httpx import Headers
from starlette.datastructures import MutableHeaders

_EXCLUDED_HEADERS = frozenset(
    [
        b"content-length",
        b"content-encoding",
        b"transfer-encoding",
        b"connection",
        b"keep-alive",
    ]
)


def safe_headers(headers: Headers) -> MutableHeaders:
    """Scrub headers that should not be relayed to the client.

    Repeated headers (e.g. ``Set-Cookie``) are kept as separate entries.
    """
    return MutableHeaders(
        raw=[
            (key.lower(), value)
            for key, value in headers.raw
            if key.lower() not in _EXCLUDED_HEADERS
        ]
    )
