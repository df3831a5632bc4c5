"""Neynar service layer: user lookup, notifications, and casts."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging

from app.adapters.neynar import NeynarClientProvider, NeynarError, NeynarErrorKind
from app.schemas.neynar import (
    FrameNotification,
    NeynarUser,
    NotificationDeliveryStatus,
    NotificationRequest,
    NotificationState,
)

logger = logging.getLogger(__name__)


class UserLookupStatus(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    INDETERMINATE = "indeterminate"


@dataclass(slots=True, frozen=True)
class UserLookup:
    status: UserLookupStatus
    user: NeynarUser | None = None


@dataclass(slots=True, frozen=True)
class NotificationResult:
    state: NotificationState
    error: BaseException | None = None

    @classmethod
    def success(cls) -> NotificationResult:
        return cls(NotificationState.SUCCESS)

    @classmethod
    def no_token(cls) -> NotificationResult:
        return cls(NotificationState.NO_TOKEN)

    @classmethod
    def rate_limited(cls) -> NotificationResult:
        return cls(NotificationState.RATE_LIMITED)

    @classmethod
    def failed(cls, error: BaseException) -> NotificationResult:
        return cls(NotificationState.ERROR, error)


def _ensure_valid_fid(fid: int) -> None:
    if isinstance(fid, bool) or not isinstance(fid, int) or fid <= 0:
        raise NeynarError(NeynarErrorKind.INVALID_FID, f"Invalid FID: {fid!r}")


class NeynarService:
    def __init__(self, provider: NeynarClientProvider, target_url: str) -> None:
        self._provider = provider
        self._target_url = target_url

    async def lookup_user(self, fid: int) -> UserLookup:
        """Classify a profile lookup as found, not found, or indeterminate.

        Classified ``NeynarError``s other than a missing user (configuration,
        rate limiting, invalid FID) propagate to the caller.
        """
        _ensure_valid_fid(fid)
        client = self._provider.get_client()
        try:
            response = await client.fetch_bulk_users([fid])
        except NeynarError:
            raise
        except Exception:
            logger.exception("neynar.user_lookup_failed fid=%s", fid)
            return UserLookup(UserLookupStatus.INDETERMINATE)

        if not response.users:
            return UserLookup(UserLookupStatus.NOT_FOUND)
        return UserLookup(UserLookupStatus.FOUND, response.users[0])

    async def resolve_user(self, fid: int) -> NeynarUser | None:
        """Return the profile for ``fid``.

        Raises ``NeynarError(USER_NOT_FOUND)`` when Neynar knows no such user,
        but returns ``None`` when the lookup itself could not complete.
        """
        lookup = await self.lookup_user(fid)
        if lookup.status is UserLookupStatus.NOT_FOUND:
            raise NeynarError(NeynarErrorKind.USER_NOT_FOUND, f"User with FID {fid} not found")
        return lookup.user

    async def send_notification(self, request: NotificationRequest) -> NotificationResult:
        try:
            _ensure_valid_fid(request.fid)
            client = self._provider.get_client()
            notification = FrameNotification(
                title=request.title,
                body=request.body,
                target_url=self._target_url,
            )
            response = await client.publish_frame_notifications([request.fid], notification)

            if not response.notification_deliveries:
                logger.info("notification.no_token fid=%s", request.fid)
                return NotificationResult.no_token()

            delivery = response.notification_deliveries[0]
            if delivery.status == NotificationDeliveryStatus.FAILED:
                logger.warning("notification.delivery_failed fid=%s error=%s", request.fid, delivery.error)
                raise NeynarError(NeynarErrorKind.NOTIFICATION_FAILED, "Failed to deliver notification")

            logger.info("notification.sent fid=%s status=%s", request.fid, delivery.status)
            return NotificationResult.success()
        except NeynarError as exc:
            if exc.kind is NeynarErrorKind.RATE_LIMITED:
                logger.warning("notification.rate_limited fid=%s", request.fid)
                return NotificationResult.rate_limited()
            raise
        except Exception as exc:
            logger.exception("notification.error fid=%s", request.fid)
            return NotificationResult.failed(exc)

    async def publish_cast(self, signer_uuid: str, text: str, embeds: list[str] | None = None) -> None:
        try:
            client = self._provider.get_client()
            await client.publish_cast(signer_uuid, text, embeds)
        except Exception as exc:
            logger.warning("cast.publish_failed error_type=%s", type(exc).__name__)
            raise NeynarError(NeynarErrorKind.NOTIFICATION_FAILED, "Failed to publish cast", exc) from exc


__all__ = [
    "NeynarService",
    "NotificationResult",
    "UserLookup",
    "UserLookupStatus",
]
