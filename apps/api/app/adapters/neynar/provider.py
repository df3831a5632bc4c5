"""Lazily constructed Neynar client handle."""

from __future__ import annotations

from collections.abc import Callable
import logging

from app.adapters.neynar.base import NeynarError, NeynarErrorKind, SocialGraphClient
from app.adapters.neynar.http_client import NeynarHttpClient
from app.core.config import Settings

logger = logging.getLogger(__name__)


class NeynarClientProvider:
    """Owns the single Neynar client of an application instance.

    The client is built on the first successful ``get_client()`` call and
    reused afterwards without re-validating configuration. Until then every
    call reloads settings, so a missing API key can be fixed in the
    environment without a restart.
    """

    def __init__(
        self,
        load_settings: Callable[[], Settings] = Settings,
        client_factory: Callable[[Settings], SocialGraphClient] = NeynarHttpClient.from_settings,
    ) -> None:
        self._load_settings = load_settings
        self._client_factory = client_factory
        self._client: SocialGraphClient | None = None

    @property
    def is_ready(self) -> bool:
        return self._client is not None

    def get_client(self) -> SocialGraphClient:
        if self._client is None:
            settings = self._load_settings()
            if not settings.neynar_api_key:
                logger.error("neynar.client_unavailable reason=api_key_missing")
                raise NeynarError(NeynarErrorKind.API_KEY_MISSING, "NEYNAR_API_KEY not configured")
            self._client = self._client_factory(settings)
            logger.info("neynar.client_ready base_url=%s", settings.neynar_base_url)
        return self._client


__all__ = ["NeynarClientProvider"]
