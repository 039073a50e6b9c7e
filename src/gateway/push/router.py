"""
Push subscription and delivery endpoints.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Header, Request
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from gateway.auth.middleware import CurrentPrincipalDep
from gateway.config import Settings, get_settings
from gateway.push.repository import PushSubscriptionRepository
from gateway.push.schemas import SendRequest, SubscribeRequest, SuccessResponse
from gateway.push.service import PushService
from gateway.shared.database import get_db_session
from gateway.shared.exceptions import ValidationError

router = APIRouter(prefix="/api/portal/push", tags=["push"])


def get_push_service(
    session: Annotated[AsyncSession, Depends(get_db_session)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> PushService:
    """Dependency for the push service."""
    return PushService(PushSubscriptionRepository(session), webhook_secret=settings.push_webhook_secret)


@router.post("/subscribe", response_model=SuccessResponse)
async def subscribe(
    data: SubscribeRequest,
    principal: CurrentPrincipalDep,
    service: Annotated[PushService, Depends(get_push_service)],
) -> SuccessResponse:
    await service.subscribe(principal, data.subscription, data.user_id)
    return SuccessResponse()


@router.post("/send")
async def send(
    request: Request,
    service: Annotated[PushService, Depends(get_push_service)],
    authorization: Annotated[str | None, Header()] = None,
) -> dict:
    """Queue a notification for every subscription of a user.

    Called by automation with `Authorization: Bearer <PUSH_WEBHOOK_SECRET>`.
    The secret is checked before the body is read.
    """
    service.authorize_sender(authorization)
    try:
        data = SendRequest.model_validate_json(await request.body() or b"{}")
    except PydanticValidationError as e:
        raise ValidationError("Invalid request", {"errors": str(e)}) from e

    result = await service.send_to_user(data.user_id, data.title, data.body, data.url)
    if result.sent == 0:
        return {"sent": 0}
    return {"sent": result.sent, "message": "Push notification queued", "payload": result.payload}
