"""Transport module - HTTP communication."""

from .http_client import BookerHttpClient, JSON_HEADERS

__all__ = [
    "BookerHttpClient",
    "JSON_HEADERS",
]
