"""Neynar HTTP API client."""

from __future__ import annotations

import logging

import httpx

from app.adapters.neynar.base import NeynarError, NeynarErrorKind, SocialGraphClient
from app.core.config import Settings
from app.schemas.neynar import BulkUsersResponse, FrameNotification, PublishNotificationsResponse

logger = logging.getLogger(__name__)


class NeynarHttpClient(SocialGraphClient):
    """Calls the Neynar v2 REST API over a shared ``httpx.AsyncClient``."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.neynar.com/v2",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not api_key:
            raise ValueError("API key is required for NeynarHttpClient.")
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers={"accept": "application/json", "x-api-key": api_key},
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> NeynarHttpClient:
        return cls(
            api_key=settings.neynar_api_key or "",
            base_url=settings.neynar_base_url,
            timeout=settings.http_timeout_seconds,
        )

    async def _request(self, method: str, path: str, **kwargs) -> dict:
        response = await self._client.request(method, path, **kwargs)
        if response.status_code == 429:
            logger.warning("neynar.rate_limited method=%s path=%s", method, path)
            raise NeynarError(NeynarErrorKind.RATE_LIMITED, "Neynar rate limit exceeded")
        response.raise_for_status()
        return response.json()

    async def fetch_bulk_users(self, fids: list[int]) -> BulkUsersResponse:
        payload = await self._request(
            "GET",
            "/farcaster/user/bulk",
            params={"fids": ",".join(str(fid) for fid in fids)},
        )
        return BulkUsersResponse.model_validate(payload)

    async def publish_frame_notifications(
        self,
        target_fids: list[int],
        notification: FrameNotification,
    ) -> PublishNotificationsResponse:
        payload = await self._request(
            "POST",
            "/farcaster/frame/notifications/",
            json={"target_fids": target_fids, "notification": notification.model_dump()},
        )
        return PublishNotificationsResponse.model_validate(payload)

    async def publish_cast(self, signer_uuid: str, text: str, embeds: list[str] | None = None) -> dict:
        body: dict = {"signer_uuid": signer_uuid, "text": text}
        if embeds:
            body["embeds"] = [{"url": url} for url in embeds]
        return await self._request("POST", "/farcaster/cast", json=body)


__all__ = ["NeynarHttpClient"]
