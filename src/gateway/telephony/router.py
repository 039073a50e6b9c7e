"""
FastAPI router for call control.

Routing webhook rules:
- Twilio must always receive a TwiML document, even on failure
- No I/O in the webhook: the response is a pure function of the request fields
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from gateway.auth.middleware import CurrentPrincipalDep
from gateway.shared.logging import get_logger
from gateway.telephony.config import TelephonyConfig, get_telephony_config
from gateway.telephony.schemas import TriggerCallRequest, TriggerCallResponse, VoiceTokenResponse
from gateway.telephony.service import CallControlService
from gateway.telephony.twiml import ERROR_MESSAGE, say_twiml
from gateway.telephony.voice_token import VoiceTokenService

logger = get_logger(__name__)

router = APIRouter(tags=["telephony"])

TWIML_MEDIA_TYPE = "text/xml"


def get_call_control_service(
    config: Annotated[TelephonyConfig, Depends(get_telephony_config)],
) -> CallControlService:
    """Dependency for the call control service."""
    return CallControlService(config)


def get_voice_token_service(
    config: Annotated[TelephonyConfig, Depends(get_telephony_config)],
) -> VoiceTokenService:
    return VoiceTokenService(config)


@router.post(
    "/api/trigger-call",
    response_model=TriggerCallResponse,
    response_model_by_alias=True,
    response_model_exclude_none=True,
)
async def trigger_call(
    data: TriggerCallRequest,
    service: Annotated[CallControlService, Depends(get_call_control_service)],
) -> TriggerCallResponse:
    """Place an outbound assistant call to the requested number.

    Returns `success: false` (HTTP 200) when the calling provider is not configured.
    """
    result = await service.initiate_outbound_call(
        data.phone,
        name=data.name,
        variables={"projectType": data.project_type},
    )
    return TriggerCallResponse(success=result.success, call_id=result.call_id, message=result.message)


async def _routing_fields(request: Request) -> dict[str, str]:
    fields: dict[str, str] = dict(request.query_params)
    if request.method == "POST":
        form = await request.form()
        fields.update({k: v for k, v in form.items() if isinstance(v, str)})
    return fields


@router.api_route("/api/portal/calls/voice", methods=["GET", "POST"])
async def voice_webhook(
    request: Request,
    service: Annotated[CallControlService, Depends(get_call_control_service)],
) -> Response:
    """Call-routing webhook. Always answers with TwiML."""
    try:
        fields = await _routing_fields(request)
        decision = service.route_call(
            fields.get("To"),
            caller_id_hint=fields.get("CallerId"),
            source_hint=fields.get("From"),
        )
        twiml = decision.twiml
    except Exception:
        logger.exception("Routing webhook failed")
        twiml = say_twiml(ERROR_MESSAGE)
    return Response(content=twiml, media_type=TWIML_MEDIA_TYPE)


@router.get("/api/portal/calls/token", response_model=VoiceTokenResponse, response_model_by_alias=True)
async def voice_token(
    principal: CurrentPrincipalDep,
    service: Annotated[VoiceTokenService, Depends(get_voice_token_service)],
):
    """Issue a browser dialer access token."""
    result = service.issue()
    if not result.configured:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "error": "Twilio not configured",
                "configured": False,
                "missing": list(result.missing),
            },
        )
    logger.info("Voice token issued", extra={"principal_id": principal.id})
    return VoiceTokenResponse(token=result.token, caller_id=result.caller_id)
