"""Authentication provider interfaces."""

from abc import ABC, abstractmethod

from app.schemas.auth import AuthPrincipal


class AuthVerificationError(Exception):
    """Raised when a token is rejected by the trust service."""


class TokenVerifier(ABC):
    """Provider-neutral token verification interface."""

    @abstractmethod
    def verify_token(self, token: str, *, domain: str) -> AuthPrincipal:
        """Verify a token bound to ``domain`` and return its principal."""


__all__ = ["AuthVerificationError", "TokenVerifier"]
