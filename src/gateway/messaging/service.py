"""
Outbound SMS dispatch with conversation logging.

Sending and logging are two independent steps: once the provider accepted
the message, a failed log write is reported in logs only.
"""

from dataclasses import dataclass

from gateway.auth.middleware import Principal
from gateway.messaging.models import ConversationMessage
from gateway.messaging.repository import ConversationRepositoryProtocol
from gateway.messaging.telnyx import TelnyxMessagingClient
from gateway.shared.exceptions import ValidationError
from gateway.shared.logging import get_logger
from gateway.shared.phone import format_phone, normalize_phone

logger = get_logger(__name__)

ASSISTANT_ROLE = "assistant"


@dataclass(frozen=True)
class SmsDispatchResult:
    provider_message_id: str | None
    logged: bool


class MessagingService:
    """Sends tenant-originated SMS and records them in the conversation log."""

    def __init__(
        self,
        client: TelnyxMessagingClient,
        repository: ConversationRepositoryProtocol,
    ) -> None:
        self._client = client
        self._repository = repository

    async def send_outbound_sms(
        self,
        principal: Principal,
        to: str | None,
        text: str | None,
        from_number: str | None = None,
        lead_id: str | None = None,
    ) -> SmsDispatchResult:
        """Send an SMS on behalf of `principal` and log it.

        Raises:
            ValidationError: If `to` or `text` is missing.
            NotConfiguredError: If the messaging provider is not configured.
            ProviderError: If the provider rejects the message (nothing is logged).
        """
        if not to or not text:
            raise ValidationError("Both 'to' and 'text' are required")

        destination = normalize_phone(to)
        sender = normalize_phone(from_number) if from_number else None

        message_id = await self._client.send_sms(destination, text, from_number=sender)
        logger.info(
            "SMS sent",
            extra={
                "principal_id": principal.id,
                "to": format_phone(destination),
                "message_id": message_id,
            },
        )

        record = ConversationMessage(
            lead_id=lead_id or None,
            role=ASSISTANT_ROLE,
            content=text,
            phone_number=destination,
            is_unknown_lead=not lead_id,
        )
        try:
            await self._repository.add(record)
        except Exception as e:
            logger.error(
                "sms_log_write_failed",
                extra={"message_id": message_id, "to": format_phone(destination), "error": str(e)},
            )
            return SmsDispatchResult(provider_message_id=message_id, logged=False)

        return SmsDispatchResult(provider_message_id=message_id, logged=True)
