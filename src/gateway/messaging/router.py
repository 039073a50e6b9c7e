"""
Outbound SMS endpoint.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from gateway.auth.middleware import CurrentPrincipalDep
from gateway.messaging.repository import ConversationRepository
from gateway.messaging.schemas import SendSmsRequest, SendSmsResponse
from gateway.messaging.service import MessagingService
from gateway.messaging.telnyx import TelnyxMessagingClient
from gateway.shared.database import get_db_session
from gateway.telephony.config import TelephonyConfig, get_telephony_config

router = APIRouter(prefix="/api/telnyx", tags=["messaging"])


def get_messaging_service(
    session: Annotated[AsyncSession, Depends(get_db_session)],
    config: Annotated[TelephonyConfig, Depends(get_telephony_config)],
) -> MessagingService:
    """Dependency for the messaging service."""
    return MessagingService(TelnyxMessagingClient(config), ConversationRepository(session))


@router.post("/sms", response_model=SendSmsResponse, response_model_by_alias=True)
async def send_sms(
    data: SendSmsRequest,
    principal: CurrentPrincipalDep,
    service: Annotated[MessagingService, Depends(get_messaging_service)],
) -> SendSmsResponse:
    """Send an SMS and append it to the lead conversation."""
    result = await service.send_outbound_sms(
        principal,
        data.to,
        data.text,
        from_number=data.from_number,
        lead_id=data.lead_id,
    )
    return SendSmsResponse(message_id=result.provider_message_id)
