"""
Token lifetime helpers

Lifetimes are configured as "<amount><unit>" with unit one of s, m, h, d
(e.g. "5m", "1h"). Anything else falls back to five minutes.
"""

import re
from datetime import timedelta

_EXPIRATION_PATTERN = re.compile(r"^(\d+)([smhd])$")

_UNIT_SECONDS = {"s": 1, "m": 60, "h": 60 * 60, "d": 24 * 60 * 60}
_UNIT_NAMES = {"s": "second", "m": "minute", "h": "hour", "d": "day"}

DEFAULT_LIFETIME = timedelta(minutes=5)
DEFAULT_LIFETIME_TEXT = "5 minutes"


def parse_expiration(expiration: str) -> timedelta:
    match = _EXPIRATION_PATTERN.match((expiration or "").strip())
    if not match:
        return DEFAULT_LIFETIME
    amount, unit = match.groups()
    return timedelta(seconds=int(amount) * _UNIT_SECONDS[unit])


def humanize_expiration(expiration: str) -> str:
    """Readable lifetime, e.g. 5m -> 5 minutes, 1h -> 1 hour"""
    match = _EXPIRATION_PATTERN.match((expiration or "").strip())
    if not match:
        return DEFAULT_LIFETIME_TEXT
    amount, unit = match.groups()
    name = _UNIT_NAMES[unit]
    return f"{amount} {name}" if int(amount) == 1 else f"{amount} {name}s"
