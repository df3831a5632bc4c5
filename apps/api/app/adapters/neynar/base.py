"""Neynar client interfaces and error taxonomy."""

from abc import ABC, abstractmethod
from enum import Enum

from app.schemas.neynar import BulkUsersResponse, FrameNotification, PublishNotificationsResponse


class NeynarErrorKind(str, Enum):
    API_KEY_MISSING = "API_KEY_MISSING"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    NOTIFICATION_FAILED = "NOTIFICATION_FAILED"
    RATE_LIMITED = "RATE_LIMITED"
    INVALID_FID = "INVALID_FID"


class NeynarError(Exception):
    """Classified failure of a Neynar operation.

    ``cause`` keeps the lower-level exception, when there is one, for
    diagnostics; it is also chained as ``__cause__`` by the raise sites.
    """

    def __init__(self, kind: NeynarErrorKind, message: str, cause: BaseException | None = None) -> None:
        self.kind = NeynarErrorKind(kind)
        self.message = message
        self.cause = cause
        super().__init__(message)

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


class SocialGraphClient(ABC):
    """Transport-neutral view of the Neynar API used by the service layer."""

    @abstractmethod
    async def fetch_bulk_users(self, fids: list[int]) -> BulkUsersResponse:
        """Fetch user profiles for the given FIDs."""

    @abstractmethod
    async def publish_frame_notifications(
        self,
        target_fids: list[int],
        notification: FrameNotification,
    ) -> PublishNotificationsResponse:
        """Send a frame notification to the given FIDs."""

    @abstractmethod
    async def publish_cast(self, signer_uuid: str, text: str, embeds: list[str] | None = None) -> dict:
        """Publish a cast on behalf of a signer."""


__all__ = ["NeynarError", "NeynarErrorKind", "SocialGraphClient"]
