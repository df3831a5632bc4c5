"""Farcaster primary-address lookup."""

from __future__ import annotations

import logging

import httpx

logger = logging.getLogger(__name__)


class PrimaryAddressClient:
    """Best-effort resolver for an FID's primary Ethereum address.

    Every failure, including non-OK responses and malformed payloads, is
    reported as ``None``.
    """

    def __init__(
        self,
        url: str = "https://api.farcaster.xyz/fc/primary-address",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = url
        self._timeout = timeout
        self._transport = transport

    async def fetch_primary_address(self, fid: int) -> str | None:
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.get(self._url, params={"fid": fid, "protocol": "ethereum"})
            if not response.is_success:
                logger.info("primary_address.unavailable fid=%s status=%s", fid, response.status_code)
                return None
            address = response.json()["result"]["address"]["address"]
        except Exception:
            logger.exception("primary_address.lookup_failed fid=%s", fid)
            return None

        return address if isinstance(address, str) and address else None


__all__ = ["PrimaryAddressClient"]
