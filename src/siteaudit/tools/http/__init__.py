"""HTTP helpers for siteaudit."""

from .client import HTTPClient, HTTPResponse

__all__ = [
    "HTTPClient",
    "HTTPResponse",
]
