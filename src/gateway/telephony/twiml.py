"""
Call-routing responses for the Twilio voice webhook.

Twilio may deliver the same webhook more than once, so everything here is a
pure function of its arguments: no I/O, no state.
"""

from dataclasses import dataclass

from gateway.shared.phone import normalize_phone

RING_TIMEOUT_SECONDS = 30
RECORD_MODE = "record-from-answer-dual"

NO_DESTINATION_MESSAGE = "No phone number provided."
ERROR_MESSAGE = "An error occurred. Please try again."


@dataclass(frozen=True)
class RoutingDecision:
    """What the routing webhook told the provider to do."""

    destination: str | None
    caller_id: str | None
    twiml: str


def _twiml(s: str) -> str:
    return '<?xml version="1.0" encoding="UTF-8"?>\n<Response>\n' + s + "\n</Response>"


def _xml_escape(text: str) -> str:
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&apos;")
    )


def say_twiml(message: str) -> str:
    """TwiML that speaks a message and lets the call end."""
    return _twiml(f"  <Say>{_xml_escape(message)}</Say>")


def dial_twiml(number: str, caller_id: str) -> str:
    """TwiML that dials a number with the fixed ring timeout, recording from answer."""
    return _twiml(
        f'  <Dial callerId="{_xml_escape(caller_id)}" timeout="{RING_TIMEOUT_SECONDS}" '
        f'record="{RECORD_MODE}">\n'
        f"    <Number>{_xml_escape(number)}</Number>\n"
        "  </Dial>"
    )


def build_routing_response(
    destination: str | None,
    caller_id_hint: str | None = None,
    caller_id_override: str | None = None,
) -> RoutingDecision:
    """Produce call-control instructions for an in-progress call.

    Caller id precedence: configured override, then the explicit caller-id
    hint, then the normalized destination itself.
    """
    destination = (destination or "").strip()
    if not destination:
        return RoutingDecision(destination=None, caller_id=None, twiml=say_twiml(NO_DESTINATION_MESSAGE))

    number = normalize_phone(destination)
    caller_id = (caller_id_override or "").strip() or (caller_id_hint or "").strip() or number
    return RoutingDecision(destination=number, caller_id=caller_id, twiml=dial_twiml(number, caller_id))
