"""
Phone number normalization.

Both the call-control and messaging paths key persisted numbers through
`normalize_phone`, so the same handset always ends up as the same string.
This is a best-effort heuristic for E.164-shaped output, not validation.
"""

import re

DEFAULT_COUNTRY_CODE = "1"

_NON_DIGITS = re.compile(r"\D")


def normalize_phone(raw: str) -> str:
    """Canonicalize a phone number to `+<country code><national number>`.

    - 10 digits: domestic, the default country code is prepended.
    - 11 digits starting with the default country code: `+` is prepended.
    - anything else: `+` followed by the digits, which preserves an
      international number that already carried a leading `+`.

    Never raises; malformed input still yields a `+`-prefixed digit string.
    """
    digits = _NON_DIGITS.sub("", raw or "")
    if len(digits) == 10:
        return f"+{DEFAULT_COUNTRY_CODE}{digits}"
    # 11-digit domestic and already-international numbers both just need the `+`.
    return f"+{digits}"


def format_phone(raw: str | None) -> str:
    """Format a NANP number for display, e.g. `(704) 555-1234`."""
    if not raw:
        return "-"
    digits = _NON_DIGITS.sub("", raw)
    if len(digits) == 11 and digits.startswith(DEFAULT_COUNTRY_CODE):
        digits = digits[1:]
    if len(digits) == 10:
        return f"({digits[:3]}) {digits[3:6]}-{digits[6:]}"
    return raw
