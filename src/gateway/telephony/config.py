"""
Telephony and messaging provider configuration.

Single source of truth for provider credentials: services receive a
TelephonyConfig instance and never read raw os.getenv("TWILIO_*") themselves.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class TelephonyConfig(BaseSettings):
    """Provider credentials and endpoints from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Calling provider (outbound AI assistant calls)
    vapi_api_key: str = Field(default="")
    vapi_assistant_id: str = Field(default="")
    vapi_base_url: str = Field(default="https://api.vapi.ai")

    # Twilio Voice (browser dialer + call routing webhook)
    twilio_account_sid: str = Field(default="")
    twilio_api_key_sid: str = Field(default="")
    twilio_api_key_secret: str = Field(default="")
    twilio_twiml_app_sid: str = Field(default="")
    twilio_caller_id: str = Field(
        default="",
        description="Caller id forced on every dialed call; empty falls back to the request hint",
    )

    # Messaging provider
    telnyx_api_key: str = Field(default="")
    telnyx_phone_number: str = Field(default="")
    telnyx_base_url: str = Field(default="https://api.telnyx.com/v2")

    # Webhook base URL providers call back into
    webhook_base_url: str = Field(default="http://localhost:8000")

    provider_timeout_seconds: float = Field(default=30.0, gt=0, le=120)

    @property
    def calling_configured(self) -> bool:
        return bool(self.vapi_api_key and self.vapi_assistant_id)

    def missing_voice_token_settings(self) -> list[str]:
        """Names of the Twilio settings required to mint a voice access token that are unset."""
        required = {
            "TWILIO_ACCOUNT_SID": self.twilio_account_sid,
            "TWILIO_API_KEY_SID": self.twilio_api_key_sid,
            "TWILIO_API_KEY_SECRET": self.twilio_api_key_secret,
            "TWILIO_TWIML_APP_SID": self.twilio_twiml_app_sid,
        }
        return [name for name, value in required.items() if not value]

    def get_webhook_url(self, path: str) -> str:
        base = self.webhook_base_url.rstrip("/")
        return f"{base}{path}"


@lru_cache(maxsize=1)
def get_telephony_config() -> TelephonyConfig:
    """Return the cached TelephonyConfig loaded from OS env + .env."""
    return TelephonyConfig()
