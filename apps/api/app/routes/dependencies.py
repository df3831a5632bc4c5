"""Dependency wiring for routes."""

from __future__ import annotations

import logging
from secrets import compare_digest
from typing import Annotated
from uuid import uuid4

from fastapi import Depends, Request, Security
from fastapi.security import APIKeyHeader, HTTPAuthorizationCredentials, HTTPBearer

from app.adapters.auth import (
    AuthVerificationError,
    MockTokenVerifier,
    QuickAuthTokenVerifier,
    TokenVerifier,
)
from app.adapters.farcaster import PrimaryAddressClient
from app.adapters.neynar import NeynarClientProvider
from app.core.config import Settings, get_settings
from app.core.logging_safety import safe_log_identifier, token_fingerprint
from app.errors import ApiError
from app.schemas.auth import AuthPrincipal
from app.services.neynar import NeynarService

bearer_scheme = HTTPBearer(auto_error=False, scheme_name="quickAuth")
internal_secret_scheme = APIKeyHeader(
    name="X-Internal-Secret",
    auto_error=False,
    scheme_name="internalSecret",
)
logger = logging.getLogger(__name__)


def _request_correlation_id(request: Request) -> str:
    existing = getattr(request.state, "correlation_id", None)
    if isinstance(existing, str) and existing:
        return existing

    correlation_id = request.headers.get("X-Correlation-Id")
    if correlation_id:
        request.state.correlation_id = correlation_id
        return correlation_id

    generated = f"req-{uuid4()}"
    request.state.correlation_id = generated
    return generated


def get_token_verifier(settings: Annotated[Settings, Depends(get_settings)]) -> TokenVerifier:
    """Resolve provider adapter from configuration."""
    if settings.auth_provider == "quick_auth":
        return QuickAuthTokenVerifier(origin=settings.quick_auth_origin)
    return MockTokenVerifier()


def get_auth_domain(request: Request, settings: Annotated[Settings, Depends(get_settings)]) -> str:
    """Domain the token audience must be bound to."""
    return settings.auth_domain or request.headers.get("host") or settings.default_host


async def get_authenticated_principal(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Security(bearer_scheme)],
    verifier: Annotated[TokenVerifier, Depends(get_token_verifier)],
    domain: Annotated[str, Depends(get_auth_domain)],
) -> AuthPrincipal:
    """Validate the Quick Auth bearer token and attach the principal to request context."""
    safe_correlation_id = safe_log_identifier(_request_correlation_id(request), prefix="cid")
    if credentials is None or credentials.scheme.lower() != "bearer" or not credentials.credentials:
        logger.warning(
            "auth.rejected correlation_id=%s method=%s path=%s reason=invalid_or_missing_bearer",
            safe_correlation_id,
            request.method,
            request.url.path,
        )
        raise ApiError(status_code=401, message="Missing or invalid authorization header")

    try:
        principal = verifier.verify_token(credentials.credentials, domain=domain)
    except AuthVerificationError as exc:
        logger.info(
            "auth.rejected correlation_id=%s method=%s path=%s reason=invalid_token token=%s detail=%s",
            safe_correlation_id,
            request.method,
            request.url.path,
            token_fingerprint(credentials.credentials),
            exc,
        )
        raise ApiError(status_code=401, message="Invalid token") from exc
    except Exception as exc:
        logger.exception(
            "auth.error correlation_id=%s method=%s path=%s",
            safe_correlation_id,
            request.method,
            request.url.path,
        )
        raise ApiError(status_code=500, message="Internal server error") from exc

    request.state.auth_principal = principal
    return principal


async def get_authenticated_fid(
    request: Request,
    principal: Annotated[AuthPrincipal, Depends(get_authenticated_principal)],
) -> int:
    """Parse the verified token subject as a Farcaster ID."""
    safe_correlation_id = safe_log_identifier(_request_correlation_id(request), prefix="cid")
    subject = principal.subject or ""
    fid = int(subject) if subject.isascii() and subject.isdigit() else 0
    if fid <= 0:
        logger.warning(
            "auth.rejected correlation_id=%s subject=%s reason=invalid_subject",
            safe_correlation_id,
            safe_log_identifier(principal.subject, prefix="sub"),
        )
        raise ApiError(status_code=401, message="Invalid token payload")

    logger.info(
        "auth.accepted correlation_id=%s method=%s path=%s fid=%s",
        safe_correlation_id,
        request.method,
        request.url.path,
        fid,
    )
    return fid


async def require_internal_secret(
    request: Request,
    internal_secret: Annotated[str | None, Security(internal_secret_scheme)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> None:
    """Validate the shared secret for server-to-server endpoints."""
    expected = settings.internal_secret
    if not expected or internal_secret is None or not compare_digest(internal_secret, expected):
        logger.warning(
            "internal.auth_rejected correlation_id=%s method=%s path=%s reason=invalid_internal_secret",
            safe_log_identifier(_request_correlation_id(request), prefix="cid"),
            request.method,
            request.url.path,
        )
        raise ApiError(status_code=401, message="Invalid internal authentication")


def get_primary_address_client(settings: Annotated[Settings, Depends(get_settings)]) -> PrimaryAddressClient:
    return PrimaryAddressClient(url=settings.primary_address_url, timeout=settings.http_timeout_seconds)


def get_neynar_provider(request: Request) -> NeynarClientProvider:
    return request.app.state.neynar_provider


def get_neynar_service(
    provider: Annotated[NeynarClientProvider, Depends(get_neynar_provider)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> NeynarService:
    return NeynarService(provider, target_url=settings.app_url)
