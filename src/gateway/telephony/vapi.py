"""
Calling provider REST adapter (Vapi outbound phone calls).
"""

from dataclasses import dataclass, field
from typing import Any

import httpx

from gateway.shared.exceptions import ProviderError
from gateway.shared.logging import get_logger
from gateway.telephony.config import TelephonyConfig

logger = get_logger(__name__)

PROVIDER_NAME = "vapi"


@dataclass(frozen=True)
class OutboundCallRequest:
    """Request to place an outbound assistant call."""

    number: str
    name: str | None = None
    variable_values: dict[str, Any] = field(default_factory=dict)


class VapiClient:
    """Creates outbound calls through the calling provider's REST API."""

    def __init__(
        self,
        config: TelephonyConfig,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the adapter.

        Args:
            config: Provider credentials and base URL.
            http_client: Optional pre-built client (tests inject a MockTransport client).
        """
        self._config = config
        self._http_client = http_client

    def build_payload(self, request: OutboundCallRequest) -> dict[str, Any]:
        return {
            "assistantId": self._config.vapi_assistant_id,
            "customer": {
                "number": request.number,
                "name": request.name,
            },
            "assistantOverrides": {
                "variableValues": dict(request.variable_values),
            },
        }

    async def create_call(self, request: OutboundCallRequest) -> str:
        """Create an outbound call.

        Args:
            request: Normalized destination and assistant variables.

        Returns:
            Provider-assigned call identifier.

        Raises:
            ProviderError: On a non-2xx response (raw body as message) or a transport failure.
        """
        url = f"{self._config.vapi_base_url.rstrip('/')}/call/phone"
        headers = {"Authorization": f"Bearer {self._config.vapi_api_key}"}
        payload = self.build_payload(request)

        logger.info("Initiating outbound call", extra={"to": request.number, "provider": PROVIDER_NAME})

        try:
            if self._http_client is not None:
                response = await self._http_client.post(url, json=payload, headers=headers)
            else:
                async with httpx.AsyncClient(timeout=self._config.provider_timeout_seconds) as client:
                    response = await client.post(url, json=payload, headers=headers)
        except httpx.RequestError as e:
            logger.error("Calling provider request failed", extra={"error": str(e)})
            raise ProviderError(f"Calling provider request failed: {e}", provider=PROVIDER_NAME) from e

        if not response.is_success:
            logger.error(
                "Calling provider rejected call",
                extra={"status_code": response.status_code, "error": response.text},
            )
            raise ProviderError(response.text, provider=PROVIDER_NAME, provider_status=response.status_code)

        try:
            data = response.json()
        except ValueError:
            data = None
        if not isinstance(data, dict):
            logger.error("Calling provider returned an unreadable body", extra={"error": response.text})
            raise ProviderError(response.text, provider=PROVIDER_NAME, provider_status=response.status_code)

        call_id = data.get("id")
        logger.info("Outbound call created", extra={"call_id": call_id, "to": request.number})
        return call_id
