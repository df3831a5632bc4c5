"""Mock auth verifier for local development and tests."""

from app.adapters.auth.base import AuthVerificationError, TokenVerifier
from app.schemas.auth import AuthPrincipal


class MockTokenVerifier(TokenVerifier):
    """Accepts deterministic test tokens only.

    Expected token format:
    - ``test:<subject>``
    - ``test:<subject>:<domain>``; the domain must match the request domain
    """

    def verify_token(self, token: str, *, domain: str) -> AuthPrincipal:
        parts = token.split(":", 2)
        if len(parts) not in (2, 3) or parts[0] != "test":
            raise AuthVerificationError("Invalid bearer token")

        subject = parts[1].strip()
        if len(parts) == 3 and parts[2].strip() != domain:
            raise AuthVerificationError("Bearer token domain mismatch")

        return AuthPrincipal(subject=subject or None, domain=domain)


__all__ = ["MockTokenVerifier"]
