"""Rate-limit information carried in response headers."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta
from fractions import Fraction
from typing import Any

_UNITS = {
    "ns": 1,
    "us": 1_000,
    "\u00b5s": 1_000,
    "\u03bcs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}
_NUMBER = re.compile(r"([0-9]*)(?:\.([0-9]*))?")
_UNIT = re.compile(r"[^0-9.]*")
_INTEGER = re.compile(r"[+-]?[0-9]+")
_INT64_MAX = 2**63 - 1
_INT64_MIN = -(2**63)


def parse_duration(text: str) -> timedelta:
    """Parse a duration such as ``"1h2m3.5s"`` or ``"20ms"``."""
    rest = text
    negative = False
    if rest and rest[0] in "+-":
        negative = rest[0] == "-"
        rest = rest[1:]
    if rest == "0":
        return timedelta(0)
    if not rest:
        raise ValueError(f"invalid duration {text!r}")

    total = Fraction(0)
    while rest:
        match = _NUMBER.match(rest)
        whole, frac = match.group(1), match.group(2)
        if not whole and not frac:
            raise ValueError(f"invalid duration {text!r}")
        rest = rest[match.end():]
        unit = _UNIT.match(rest).group(0)
        if not unit:
            raise ValueError(f"missing unit in duration {text!r}")
        if unit not in _UNITS:
            raise ValueError(f"unknown unit {unit!r} in duration {text!r}")
        rest = rest[len(unit):]
        value = Fraction(int(whole or "0"))
        if frac:
            value += Fraction(int(frac), 10 ** len(frac))
        total += value * _UNITS[unit]

    nanoseconds = int(total)
    limit = -_INT64_MIN if negative else _INT64_MAX
    if nanoseconds > limit:
        raise ValueError(f"invalid duration {text!r}")
    delta = timedelta(microseconds=nanoseconds // 1000)
    return -delta if negative else delta


class ResetTime(str):
    """A reset interval as sent by the server, e.g. ``"6m0s"``."""

    def time(self) -> datetime:
        """The moment the limit resets; now when the interval cannot be parsed."""
        try:
            delta = parse_duration(self)
        except ValueError:
            delta = timedelta(0)
        return datetime.now().astimezone() + delta


@dataclass(frozen=True)
class RateLimitHeaders:
    limit_requests: int = 0
    limit_tokens: int = 0
    remaining_requests: int = 0
    remaining_tokens: int = 0
    reset_requests: ResetTime = ResetTime("")
    reset_tokens: ResetTime = ResetTime("")


def _header(headers: Mapping[str, Any], name: str) -> str:
    for key, value in headers.items():
        if key.lower() == name:
            if isinstance(value, (list, tuple)):
                return str(value[0]) if value else ""
            return str(value)
    return ""


def _atoi(text: str) -> int:
    if not _INTEGER.fullmatch(text):
        return 0
    return max(_INT64_MIN, min(_INT64_MAX, int(text)))


def rate_limit_headers(headers: Mapping[str, Any]) -> RateLimitHeaders:
    """Read the rate-limit headers; missing or malformed counts become 0."""
    return RateLimitHeaders(
        limit_requests=_atoi(_header(headers, "x-ratelimit-limit-requests")),
        limit_tokens=_atoi(_header(headers, "x-ratelimit-limit-tokens")),
        remaining_requests=_atoi(_header(headers, "x-ratelimit-remaining-requests")),
        remaining_tokens=_atoi(_header(headers, "x-ratelimit-remaining-tokens")),
        reset_requests=ResetTime(_header(headers, "x-ratelimit-reset-requests")),
        reset_tokens=ResetTime(_header(headers, "x-ratelimit-reset-tokens")),
    )