"""
Twilio Voice access tokens for the browser dialer.
"""

from dataclasses import dataclass

from twilio.jwt.access_token import AccessToken
from twilio.jwt.access_token.grants import VoiceGrant

from gateway.shared.logging import get_logger, mask_secret
from gateway.telephony.config import TelephonyConfig, get_telephony_config

logger = get_logger(__name__)

VOICE_TOKEN_IDENTITY = "power-dialer"
VOICE_TOKEN_TTL_SECONDS = 3600


@dataclass(frozen=True)
class VoiceTokenResult:
    configured: bool
    token: str | None = None
    caller_id: str | None = None
    missing: tuple[str, ...] = ()


class VoiceTokenService:
    def __init__(self, config: TelephonyConfig | None = None) -> None:
        self._config = config or get_telephony_config()

    def issue(self) -> VoiceTokenResult:
        missing = self._config.missing_voice_token_settings()
        if missing:
            logger.info("Twilio voice not configured", extra={"missing": missing})
            return VoiceTokenResult(configured=False, missing=tuple(missing))

        token = AccessToken(
            self._config.twilio_account_sid,
            self._config.twilio_api_key_sid,
            self._config.twilio_api_key_secret,
            identity=VOICE_TOKEN_IDENTITY,
            ttl=VOICE_TOKEN_TTL_SECONDS,
        )
        token.add_grant(
            VoiceGrant(
                outgoing_application_sid=self._config.twilio_twiml_app_sid,
                incoming_allow=False,
            )
        )
        jwt = token.to_jwt()
        logger.info(
            "Issued voice access token",
            extra={"account_sid": mask_secret(self._config.twilio_account_sid)},
        )
        return VoiceTokenResult(
            configured=True,
            token=jwt.decode("utf-8") if isinstance(jwt, bytes) else str(jwt),
            caller_id=self._config.twilio_caller_id or None,
        )
