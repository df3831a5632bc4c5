"""Authentication schemas."""

from pydantic import BaseModel, ConfigDict, Field


class AuthPrincipal(BaseModel):
    """Verified token claims normalized by a token verifier."""

    subject: str | None = None
    domain: str = Field(min_length=1)


class MeResponse(BaseModel):
    """Identity of the caller behind a verified Quick Auth token."""

    model_config = ConfigDict(populate_by_name=True)

    fid: int
    primary_address: str | None = Field(default=None, alias="primaryAddress")
