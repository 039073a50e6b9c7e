"""
Messaging provider REST adapter (Telnyx).
"""

from typing import Any

import httpx

from gateway.shared.exceptions import NotConfiguredError, ProviderError
from gateway.shared.logging import get_logger
from gateway.shared.phone import normalize_phone
from gateway.telephony.config import TelephonyConfig

logger = get_logger(__name__)

PROVIDER_NAME = "telnyx"
INBOUND_SMS_WEBHOOK_PATH = "/api/telnyx/webhooks/sms-inbound"


class TelnyxMessagingClient:
    """Sends SMS through the messaging provider."""

    def __init__(
        self,
        config: TelephonyConfig,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config
        self._http_client = http_client

    def build_payload(self, to: str, text: str, from_number: str | None = None) -> dict[str, Any]:
        """Build the send-message body.

        Raises:
            NotConfiguredError: If no sender is given and no default number is configured.
        """
        sender = from_number or self._config.telnyx_phone_number
        if not sender:
            raise NotConfiguredError("TELNYX_PHONE_NUMBER is not set")
        return {
            "to": normalize_phone(to),
            "from": normalize_phone(sender),
            "text": text,
            "webhook_url": self._config.get_webhook_url(INBOUND_SMS_WEBHOOK_PATH),
        }

    async def send_sms(self, to: str, text: str, from_number: str | None = None) -> str:
        """Send one SMS.

        Args:
            to: Destination number, any format.
            text: Message body.
            from_number: Sender override; defaults to TELNYX_PHONE_NUMBER.

        Returns:
            Provider message id.

        Raises:
            NotConfiguredError: If the API key or sender number is missing.
            ProviderError: On a non-2xx response or a transport failure.
        """
        if not self._config.telnyx_api_key:
            raise NotConfiguredError("TELNYX_API_KEY is not set")

        url = f"{self._config.telnyx_base_url.rstrip('/')}/messages"
        headers = {"Authorization": f"Bearer {self._config.telnyx_api_key}"}
        payload = self.build_payload(to, text, from_number)

        try:
            if self._http_client is not None:
                response = await self._http_client.post(url, json=payload, headers=headers)
            else:
                async with httpx.AsyncClient(timeout=self._config.provider_timeout_seconds) as client:
                    response = await client.post(url, json=payload, headers=headers)
        except httpx.RequestError as e:
            logger.error("Messaging provider request failed", extra={"error": str(e)})
            raise ProviderError(f"Messaging provider request failed: {e}", provider=PROVIDER_NAME) from e

        if not response.is_success:
            logger.error(
                "Messaging provider rejected message",
                extra={"status_code": response.status_code, "error": response.text},
            )
            raise ProviderError(
                f"Telnyx API error {response.status_code}: {response.text}",
                provider=PROVIDER_NAME,
                provider_status=response.status_code,
            )

        try:
            body = response.json()
        except ValueError:
            body = None
        data = body.get("data") if isinstance(body, dict) else None
        if not isinstance(data, dict):
            logger.error("Messaging provider returned an unreadable body", extra={"error": response.text})
            raise ProviderError(response.text, provider=PROVIDER_NAME, provider_status=response.status_code)
        return data.get("id")
