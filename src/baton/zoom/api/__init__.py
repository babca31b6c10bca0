"""Zoom REST API access."""

from baton.zoom.api.auth import TokenInfo, ZoomTokenProvider
from baton.zoom.api.client import ApiPage, ZoomClient

__all__ = [
    "ApiPage",
    "TokenInfo",
    "ZoomClient",
    "ZoomTokenProvider",
]
