"""Quick Auth identity route."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.adapters.farcaster import PrimaryAddressClient
from app.routes.dependencies import get_authenticated_fid, get_primary_address_client
from app.schemas.auth import MeResponse
from app.schemas.error import ErrorResponse

router = APIRouter(tags=["Auth"])


@router.get(
    "/me",
    response_model=MeResponse,
    response_model_exclude_none=True,
    responses={401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def get_me(
    fid: Annotated[int, Depends(get_authenticated_fid)],
    address_client: Annotated[PrimaryAddressClient, Depends(get_primary_address_client)],
) -> MeResponse:
    primary_address = await address_client.fetch_primary_address(fid)
    return MeResponse(fid=fid, primary_address=primary_address)
