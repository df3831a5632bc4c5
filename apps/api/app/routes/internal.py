"""Internal server-to-server routes for notifications and casts."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from app.routes.dependencies import get_neynar_service, require_internal_secret
from app.schemas.error import ErrorResponse
from app.schemas.neynar import NotificationRequest, NotificationResponse, PublishCastRequest
from app.services.neynar import NeynarService

router = APIRouter(tags=["Internal"], dependencies=[Depends(require_internal_secret)])


@router.post(
    "/notifications",
    response_model=NotificationResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def post_notification(
    payload: NotificationRequest,
    service: Annotated[NeynarService, Depends(get_neynar_service)],
) -> NotificationResponse:
    result = await service.send_notification(payload)
    return NotificationResponse(state=result.state)


@router.post(
    "/casts",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def post_cast(
    payload: PublishCastRequest,
    service: Annotated[NeynarService, Depends(get_neynar_service)],
) -> Response:
    await service.publish_cast(payload.signer_uuid, payload.text, payload.embeds)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
