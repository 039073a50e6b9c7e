"""
Call control: outbound assistant calls, the call-routing webhook and
browser dialer access tokens.
"""

from gateway.telephony.config import TelephonyConfig, get_telephony_config
from gateway.telephony.service import CallControlService, OutboundCallResult
from gateway.telephony.twiml import RoutingDecision, build_routing_response

__all__ = [
    "CallControlService",
    "OutboundCallResult",
    "RoutingDecision",
    "TelephonyConfig",
    "build_routing_response",
    "get_telephony_config",
]
