"""Signed bearer tokens with a shared secret and an expiry claim."""

import math
import re
import time
from collections.abc import Mapping
from datetime import timedelta
from typing import Any

import jwt

from src.constants import JWT_ALGORITHM

# Seconds per unit; unit names follow the usual "1h"/"7d"/"2 days" shorthand
_UNIT_SECONDS: dict[str, float] = {}
for _names, _seconds in (
    (("milliseconds", "millisecond", "msecs", "msec", "ms"), 0.001),
    (("seconds", "second", "secs", "sec", "s"), 1),
    (("minutes", "minute", "mins", "min", "m"), 60),
    (("hours", "hour", "hrs", "hr", "h"), 60 * 60),
    (("days", "day", "d"), 24 * 60 * 60),
    (("weeks", "week", "w"), 7 * 24 * 60 * 60),
    (("years", "year", "yrs", "yr", "y"), 365.25 * 24 * 60 * 60),
):
    for _name in _names:
        _UNIT_SECONDS[_name] = _seconds

_DURATION_RE = re.compile(r"^(-?\d*\.?\d+) *([a-z]+)?$", re.IGNORECASE)


class TokenError(Exception):
    """Base class for token verification failures."""


class TokenExpiredError(TokenError):
    """Token signature is valid but its expiry has passed."""


class TokenInvalidError(TokenError):
    """Token is malformed or was not signed with the expected secret."""


def parse_duration(value: str | int | float | timedelta) -> timedelta:
    """Convert an expiry expression into a timedelta.

    Numbers are seconds. Strings take a unit suffix ("90s", "1h", "7d",
    "2 days"); a bare numeric string is read as milliseconds.

    Raises:
        ValueError: The expression is not a recognised duration.
    """
    if isinstance(value, timedelta):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Invalid duration: {value!r}")
    if isinstance(value, int | float):
        return timedelta(seconds=value)

    text = value.strip()
    match = _DURATION_RE.match(text) if len(text) <= 100 else None
    if not match:
        raise ValueError(f"Invalid duration: {value!r}")

    amount, unit = match.groups()
    unit_seconds = _UNIT_SECONDS.get((unit or "ms").lower())
    if unit_seconds is None:
        raise ValueError(f"Invalid duration unit: {unit!r}")
    return timedelta(seconds=float(amount) * unit_seconds)


def create_token(
    payload: Mapping[str, Any],
    secret: str,
    expire_time: str | int | timedelta,
) -> str:
    """Sign `payload` with `secret`, expiring `expire_time` after now.

    Adds `iat` and `exp` claims (whole seconds since the epoch).

    Raises:
        ValueError: `expire_time` is not a duration, or the payload already
            carries an `exp` claim.
    """
    if "exp" in payload:
        raise ValueError("Payload already has an 'exp' claim")

    lifetime = parse_duration(expire_time)
    issued_at = payload.get("iat") or int(time.time())
    claims = {
        **payload,
        "iat": issued_at,
        "exp": math.floor(issued_at + lifetime.total_seconds()),
    }
    return jwt.encode(claims, secret, algorithm=JWT_ALGORITHM)


def verify_token(token: str, secret: str) -> dict[str, Any]:
    """Verify `token` against `secret` and return its claims.

    Raises:
        TokenExpiredError: The token's expiry has passed.
        TokenInvalidError: Bad signature, malformed token or other
            verification failure.
    """
    try:
        return jwt.decode(token, secret, algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError as e:
        raise TokenExpiredError("Token has expired") from e
    except jwt.InvalidSignatureError as e:
        raise TokenInvalidError("Invalid token signature") from e
    except jwt.InvalidTokenError as e:
        raise TokenInvalidError(f"Invalid token: {e}") from e
