"""
Call control: outbound call initiation and call-routing responses.
"""

from dataclasses import dataclass
from typing import Any

from gateway.shared.exceptions import ValidationError
from gateway.shared.logging import get_logger
from gateway.shared.phone import format_phone, normalize_phone
from gateway.telephony.config import TelephonyConfig, get_telephony_config
from gateway.telephony.twiml import RoutingDecision, build_routing_response
from gateway.telephony.vapi import OutboundCallRequest, VapiClient

logger = get_logger(__name__)


@dataclass(frozen=True)
class OutboundCallResult:
    """Result of an outbound call attempt.

    `success=False` with no exception means the calling provider is not
    configured and the caller should degrade gracefully.
    """

    success: bool
    call_id: str | None = None
    message: str | None = None


class CallControlService:
    """Stateless per invocation; every method is safe to call concurrently."""

    def __init__(
        self,
        config: TelephonyConfig | None = None,
        client: VapiClient | None = None,
    ) -> None:
        self._config = config or get_telephony_config()
        self._client = client or VapiClient(self._config)

    async def initiate_outbound_call(
        self,
        phone: str | None,
        name: str | None = None,
        variables: dict[str, Any] | None = None,
    ) -> OutboundCallResult:
        """Place an outbound assistant call to `phone`.

        Raises:
            ValidationError: If no destination is given.
            ProviderError: If the calling provider rejects the request.
        """
        if not (phone or "").strip():
            raise ValidationError("Phone number is required")

        if not self._config.calling_configured:
            logger.info("Calling provider not configured; skipping outbound call")
            return OutboundCallResult(success=False, message="Calling provider not configured")

        number = normalize_phone(phone)
        request = OutboundCallRequest(
            number=number,
            name=name,
            variable_values={"customerName": name, **(variables or {})},
        )
        call_id = await self._client.create_call(request)
        return OutboundCallResult(success=True, call_id=call_id)

    def route_call(
        self,
        destination: str | None,
        caller_id_hint: str | None = None,
        source_hint: str | None = None,
    ) -> RoutingDecision:
        """Build the routing response for a provider's call-control webhook.

        `source_hint` (the inbound From) is logged and otherwise ignored.
        """
        decision = build_routing_response(
            destination,
            caller_id_hint=caller_id_hint,
            caller_id_override=self._config.twilio_caller_id,
        )
        if decision.destination is None:
            logger.warning("Routing webhook without destination", extra={"from": source_hint})
        else:
            logger.info(
                "Routing call",
                extra={
                    "to": format_phone(decision.destination),
                    "from": source_hint,
                    "caller_id": decision.caller_id,
                },
            )
        return decision
