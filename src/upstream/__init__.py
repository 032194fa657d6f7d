"""Upstream HTTP access - export only."""

from .http_client import SharedHttpClient, get_shared_http_client, shutdown_shared_http_client
from .response import UpstreamResponse

__all__ = [
    "SharedHttpClient",
    "UpstreamResponse",
    "get_shared_http_client",
    "shutdown_shared_http_client",
]
