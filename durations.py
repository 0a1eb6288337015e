"""
Parsing and formatting of human readable durations like "8h30m" or "9 hours 15 minutes"
"""

import re
from datetime import timedelta
from decimal import Decimal

from errors import InvalidDurationError

UNIT_SECONDS = {
    "s": 1,
    "sec": 1,
    "secs": 1,
    "second": 1,
    "seconds": 1,
    "m": 60,
    "min": 60,
    "mins": 60,
    "minute": 60,
    "minutes": 60,
    "h": 3600,
    "hr": 3600,
    "hrs": 3600,
    "hour": 3600,
    "hours": 3600,
    "d": 86400,
    "day": 86400,
    "days": 86400,
    "w": 604800,
    "wk": 604800,
    "wks": 604800,
    "week": 604800,
    "weeks": 604800,
}

_SIGN_RE = re.compile(r"^\s*([+-]?)\s*(.*?)\s*$", re.DOTALL)
_CLOCK_RE = re.compile(r"^(\d+):([0-5]\d)(?::([0-5]\d))?$")
_PAIR_RE = re.compile(r"(\d+(?:\.\d+)?|\.\d+)\s*([a-z]+)")
_SEPARATOR_RE = re.compile(r"(?:\s|,|\band\b)*")


def parse_duration(text: str) -> timedelta:
    """
    Parse a human readable duration into a signed timedelta.

    Accepts compact ("8h30m"), verbose ("9 hours 15 minutes") and clock ("00:30")
    notation. Fractions are allowed and truncated to whole seconds.

    Raises:
        InvalidDurationError: if no unit-quantity pair is found or text is left over.
    """
    match = _SIGN_RE.match(text.lower())
    sign, body = match.group(1), match.group(2)
    if not body:
        raise InvalidDurationError(text)

    clock = _CLOCK_RE.match(body)
    if clock:
        hours, minutes, seconds = clock.groups()
        total = Decimal(int(hours) * 3600 + int(minutes) * 60 + int(seconds or 0))
    else:
        total = _sum_pairs(body, text)

    seconds = int(total)  # int() truncates toward zero
    try:
        return timedelta(seconds=-seconds if sign == "-" else seconds)
    except OverflowError:
        raise InvalidDurationError(text) from None


def _sum_pairs(body: str, original: str) -> Decimal:
    total = Decimal(0)
    pos = _SEPARATOR_RE.match(body).end()
    found = False

    while pos < len(body):
        pair = _PAIR_RE.match(body, pos)
        if not pair or pair.group(2) not in UNIT_SECONDS:
            raise InvalidDurationError(original)
        total += Decimal(pair.group(1)) * UNIT_SECONDS[pair.group(2)]
        found = True
        pos = _SEPARATOR_RE.match(body, pair.end()).end()

    if not found:
        raise InvalidDurationError(original)
    return total


def round_to_minutes(value: timedelta) -> timedelta:
    """Drop the seconds part of a duration, truncating toward zero."""
    seconds = int(value.total_seconds())
    minutes = abs(seconds) // 60
    return timedelta(minutes=-minutes if seconds < 0 else minutes)


def format_duration(value: timedelta) -> str:
    """Render a duration as compact text, e.g. "8h 30m" or "-15m"."""
    seconds = int(value.total_seconds())
    sign = "-" if seconds < 0 else ""
    seconds = abs(seconds)

    hours, rest = divmod(seconds, 3600)
    minutes, seconds = divmod(rest, 60)

    parts = []
    if hours:
        parts.append(f"{hours}h")
    if minutes:
        parts.append(f"{minutes}m")
    if seconds:
        parts.append(f"{seconds}s")
    if not parts:
        return "0m"
    return sign + " ".join(parts)
