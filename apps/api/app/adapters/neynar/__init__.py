"""Neynar social-graph adapters."""

from .base import NeynarError, NeynarErrorKind, SocialGraphClient
from .http_client import NeynarHttpClient
from .provider import NeynarClientProvider

__all__ = [
    "NeynarError",
    "NeynarErrorKind",
    "SocialGraphClient",
    "NeynarHttpClient",
    "NeynarClientProvider",
]
