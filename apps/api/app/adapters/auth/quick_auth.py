"""Farcaster Quick Auth token verifier adapter."""

from __future__ import annotations

from functools import lru_cache

import jwt
from jwt.exceptions import InvalidTokenError, PyJWKClientConnectionError, PyJWKClientError

from app.adapters.auth.base import AuthVerificationError, TokenVerifier
from app.schemas.auth import AuthPrincipal

QUICK_AUTH_ALGORITHMS = ["EdDSA", "ES256", "RS256"]


@lru_cache(maxsize=8)
def _jwk_client(jwks_url: str) -> jwt.PyJWKClient:
    return jwt.PyJWKClient(jwks_url, cache_keys=True)


class QuickAuthTokenVerifier(TokenVerifier):
    """Verifies Quick Auth JWTs against the issuing service's published keys.

    The token audience must equal the domain the request was served from and
    the issuer must be the configured Quick Auth origin. Signing keys are
    fetched from ``<origin>/.well-known/jwks.json`` and cached per process.
    """

    def __init__(self, origin: str = "https://auth.farcaster.xyz") -> None:
        self._origin = origin.rstrip("/")

    @property
    def jwks_url(self) -> str:
        return f"{self._origin}/.well-known/jwks.json"

    def _signing_key(self, token: str):
        try:
            return _jwk_client(self.jwks_url).get_signing_key_from_jwt(token)
        except PyJWKClientConnectionError:
            # Trust service outage is not a token problem.
            raise
        except (PyJWKClientError, InvalidTokenError) as exc:
            raise AuthVerificationError(f"Unusable token signing key: {exc}") from exc

    def verify_token(self, token: str, *, domain: str) -> AuthPrincipal:
        signing_key = self._signing_key(token)
        try:
            claims = jwt.decode(
                token,
                key=signing_key.key,
                algorithms=QUICK_AUTH_ALGORITHMS,
                audience=domain,
                issuer=self._origin,
                options={"require": ["exp", "iss", "aud"]},
            )
        except InvalidTokenError as exc:
            raise AuthVerificationError(str(exc) or "Invalid token") from exc

        subject = claims.get("sub")
        return AuthPrincipal(subject=str(subject) if subject is not None else None, domain=domain)


__all__ = ["QuickAuthTokenVerifier"]
