"""
Transcript scrubbing for card data.

Replaces the digits of card number and CVC values in a serialized
request/response transcript, keeping the surrounding JSON intact. Handles
both plain (``"number":"4111"``) and escaped (``\\"number\\":\\"4111``)
quoting.
"""
from __future__ import annotations

import re
from typing import Optional

REDACTED = "[REDACTED]"

_SENSITIVE_FIELDS = ("number", "cvc")
_PATTERNS = [
    re.compile(r'(\\?"' + field + r'\\?"\s*:\s*\\?")\d+')
    for field in _SENSITIVE_FIELDS
]


def scrub(transcript: Optional[str]) -> Optional[str]:
    if not transcript:
        return transcript
    for pattern in _PATTERNS:
        transcript = pattern.sub(lambda m: m.group(1) + REDACTED, transcript)
    return transcript
