"""Auth verifier adapters."""

from .base import AuthVerificationError, TokenVerifier
from .mock_auth import MockTokenVerifier
from .quick_auth import QuickAuthTokenVerifier

__all__ = [
    "AuthVerificationError",
    "TokenVerifier",
    "MockTokenVerifier",
    "QuickAuthTokenVerifier",
]
