import pytest

from app.adapters.neynar import NeynarClientProvider, NeynarError, NeynarErrorKind, SocialGraphClient
from app.core.config import Settings
from app.schemas.neynar import (
    BulkUsersResponse,
    NeynarUser,
    NotificationDelivery,
    NotificationRequest,
    NotificationState,
    PublishNotificationsResponse,
)
from app.services.neynar import NeynarService, NotificationResult


class _StoreBackedClient(SocialGraphClient):
    def __init__(self, users=(), deliveries=(), cast_error=None):
        self._users = {user.fid: user for user in users}
        self._deliveries = list(deliveries)
        self._cast_error = cast_error

    async def fetch_bulk_users(self, fids):
        return BulkUsersResponse(users=[self._users[fid] for fid in fids if fid in self._users])

    async def publish_frame_notifications(self, target_fids, notification):
        return PublishNotificationsResponse(notification_deliveries=self._deliveries)

    async def publish_cast(self, signer_uuid, text, embeds=None):
        if self._cast_error is not None:
            raise self._cast_error
        return {"success": True}


def _service(client: SocialGraphClient) -> NeynarService:
    provider = NeynarClientProvider(
        load_settings=lambda: Settings(neynar_api_key="test-key"),
        client_factory=lambda _settings: client,
    )
    return NeynarService(provider, target_url="https://miniapp.example")


@pytest.mark.p0
@pytest.mark.test_id("NY_001")
@pytest.mark.parametrize("api_key", [None, ""])
def test_ny_001(api_key):
    """Given no API key, when the client is requested repeatedly, then every call fails as configuration missing."""
    provider = NeynarClientProvider(load_settings=lambda: Settings(neynar_api_key=api_key))

    for _ in range(3):
        with pytest.raises(NeynarError) as exc_info:
            provider.get_client()
        assert exc_info.value.kind is NeynarErrorKind.API_KEY_MISSING


@pytest.mark.p0
@pytest.mark.test_id("NY_002")
@pytest.mark.anyio
async def test_ny_002():
    """Given a stored user, when it is resolved, then the returned profile carries the requested fid."""
    service = _service(_StoreBackedClient(users=[NeynarUser(fid=3, username="three")]))

    user = await service.resolve_user(3)

    assert user.fid == 3


@pytest.mark.p0
@pytest.mark.test_id("NY_003")
@pytest.mark.anyio
async def test_ny_003():
    """Given an absent user, when it is resolved, then user-not-found is raised rather than None returned."""
    service = _service(_StoreBackedClient())

    with pytest.raises(NeynarError) as exc_info:
        await service.resolve_user(404)

    assert exc_info.value.kind is NeynarErrorKind.USER_NOT_FOUND


@pytest.mark.p0
@pytest.mark.test_id("NY_004")
@pytest.mark.anyio
async def test_ny_004():
    """Given zero delivery records, when a notification is sent, then the result is exactly no_token."""
    result = await _service(_StoreBackedClient()).send_notification(
        NotificationRequest(fid=1, title="Hello", body="World")
    )

    assert result == NotificationResult(NotificationState.NO_TOKEN)


@pytest.mark.p0
@pytest.mark.test_id("NY_005")
@pytest.mark.anyio
async def test_ny_005():
    """Given a successful delivery, when a notification is sent, then the result is exactly success."""
    client = _StoreBackedClient(deliveries=[NotificationDelivery(fid=1, status="success")])

    result = await _service(client).send_notification(NotificationRequest(fid=1, title="Hello", body="World"))

    assert result == NotificationResult(NotificationState.SUCCESS)


@pytest.mark.p0
@pytest.mark.test_id("NY_006")
@pytest.mark.anyio
async def test_ny_006():
    """Given a failing submission, when a cast is published, then notification-failed is raised with the cause attached."""
    cause = ConnectionError("reset by peer")
    service = _service(_StoreBackedClient(cast_error=cause))

    with pytest.raises(NeynarError) as exc_info:
        await service.publish_cast("signer-1", "gm", ["https://example.com"])

    assert exc_info.value.kind is NeynarErrorKind.NOTIFICATION_FAILED
    assert exc_info.value.cause is cause
    assert exc_info.value.__cause__ is cause
