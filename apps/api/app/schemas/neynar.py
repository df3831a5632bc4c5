"""Neynar social-graph schemas."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class PrimaryAddresses(BaseModel):
    model_config = ConfigDict(extra="ignore")

    eth_address: str | None = None
    sol_address: str | None = None


class VerifiedAddresses(BaseModel):
    model_config = ConfigDict(extra="ignore")

    eth_addresses: list[str] = Field(default_factory=list)
    sol_addresses: list[str] = Field(default_factory=list)
    primary: PrimaryAddresses | None = None


class NeynarUser(BaseModel):
    """Read-only projection of a Neynar user object."""

    model_config = ConfigDict(extra="ignore")

    fid: int
    username: str
    display_name: str | None = None
    pfp_url: str | None = None
    custody_address: str | None = None
    follower_count: int = 0
    following_count: int = 0
    verified_addresses: VerifiedAddresses = Field(default_factory=VerifiedAddresses)

    @property
    def primary_address(self) -> str | None:
        addresses = self.verified_addresses
        if addresses.primary is not None and addresses.primary.eth_address:
            return addresses.primary.eth_address
        if addresses.eth_addresses:
            return addresses.eth_addresses[0]
        return None


class BulkUsersResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    users: list[NeynarUser] = Field(default_factory=list)


class FrameNotification(BaseModel):
    title: str
    body: str
    target_url: str


class NotificationDeliveryStatus(str, Enum):
    SUCCESS = "success"
    TOKEN_DISABLED = "token_disabled"
    FAILED = "failed"
    RATE_LIMITED = "rate_limited"
    INVALID_TOKEN = "invalid_token"
    INVALID_TARGET_URL = "invalid_target_url"


class NotificationDelivery(BaseModel):
    model_config = ConfigDict(extra="ignore")

    fid: int
    status: NotificationDeliveryStatus | str
    error: str | None = None


class PublishNotificationsResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    notification_deliveries: list[NotificationDelivery] = Field(default_factory=list)


class NotificationState(str, Enum):
    SUCCESS = "success"
    NO_TOKEN = "no_token"
    RATE_LIMITED = "rate_limited"
    ERROR = "error"


class NotificationRequest(BaseModel):
    fid: int = Field(gt=0)
    title: str = Field(min_length=1, max_length=32)
    body: str = Field(min_length=1, max_length=128)


class NotificationResponse(BaseModel):
    state: NotificationState


class PublishCastRequest(BaseModel):
    signer_uuid: str = Field(min_length=1)
    text: str = Field(min_length=1)
    embeds: list[str] | None = Field(default=None, max_length=2)


class UserResponse(BaseModel):
    fid: int
    username: str
    display_name: str | None = None
    pfp_url: str | None = None
    follower_count: int
    following_count: int
    primary_address: str | None = None
