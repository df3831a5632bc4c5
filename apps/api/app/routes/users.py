"""Farcaster user profile routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from app.errors import ApiError
from app.routes.dependencies import get_authenticated_fid, get_neynar_service
from app.schemas.error import ErrorResponse
from app.schemas.neynar import UserResponse
from app.services.neynar import NeynarService, UserLookupStatus

router = APIRouter(prefix="/users", tags=["Users"])


@router.get(
    "/{fid}",
    response_model=UserResponse,
    responses={
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
async def get_user(
    fid: Annotated[int, Path(gt=0)],
    _: Annotated[int, Depends(get_authenticated_fid)],
    service: Annotated[NeynarService, Depends(get_neynar_service)],
) -> UserResponse:
    lookup = await service.lookup_user(fid)
    if lookup.status is UserLookupStatus.NOT_FOUND:
        raise ApiError(status_code=404, message="User not found")
    if lookup.status is UserLookupStatus.INDETERMINATE or lookup.user is None:
        raise ApiError(status_code=502, message="User lookup unavailable")

    user = lookup.user
    return UserResponse(
        fid=user.fid,
        username=user.username,
        display_name=user.display_name,
        pfp_url=user.pfp_url,
        follower_count=user.follower_count,
        following_count=user.following_count,
        primary_address=user.primary_address,
    )
