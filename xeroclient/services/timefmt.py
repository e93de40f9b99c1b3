"""Conversion between Xero's legacy ``/Date(...)/`` strings and RFC 3339.

The Xero API returns dates in the old .NET JSON format, e.g.
``/Date(1494201600000+0000)/``: epoch milliseconds optionally followed by a
signed offset. Records are normalized to RFC 3339 so they read the same way
the API expects to receive them.

The offset is added to (or subtracted from) the Unix time as raw seconds,
not converted from minutes or ``hhmm``. For the ``+0000`` offsets the API
sends in practice this makes no difference; for anything else the result is
shifted by that many seconds. This arithmetic is kept as-is on purpose and
is pinned down by the tests.
"""

import re
from datetime import date, datetime, timedelta, timezone
from typing import Optional, Union

from xeroclient.core.errors import MalformedTimestampError

_KEEP = re.compile(r"[0-9+-]")
_INTEGER = re.compile(r"[+-]?[0-9]+")
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _format_utc(value: datetime) -> str:
    # Four-digit years even before 1000, which strftime does not pad on every platform
    return (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}Z"
    )


def _parse_int(value: str, original: str) -> int:
    if not _INTEGER.fullmatch(value):
        raise MalformedTimestampError(original)
    return int(value)


def _millis_to_seconds(millis: int) -> int:
    # Truncate toward zero
    seconds = abs(millis) // 1000
    return seconds if millis >= 0 else -seconds


def decode(legacy: str, is_utc: bool = True) -> str:
    """Convert a legacy ``/Date(<millis>[+|-]<offset>)/`` string to RFC 3339.

    Args:
        legacy: The value as returned by the API. Empty strings are passed through.
        is_utc: Keep the trailing ``Z``. Pass False for fields the API expects
            without a zone designator, which are then read as local times.

    Returns:
        The RFC 3339 string, or "" for empty input

    Raises:
        MalformedTimestampError: If the value has no parseable timestamp
    """
    if legacy == "":
        return ""

    compact = "".join(_KEEP.findall(legacy))

    if "+" in compact:
        millis, offset = compact.split("+", 1)
        unix = _millis_to_seconds(_parse_int(millis, legacy)) + _parse_int(offset, legacy)
    elif "-" in compact:
        millis, offset = compact.split("-", 1)
        unix = _millis_to_seconds(_parse_int(millis, legacy)) - _parse_int(offset, legacy)
    else:
        unix = _millis_to_seconds(_parse_int(compact, legacy))

    try:
        formatted = _format_utc(_EPOCH + timedelta(seconds=unix))
    except (OverflowError, OSError, ValueError) as e:
        raise MalformedTimestampError(legacy) from e

    if is_utc:
        return formatted
    return formatted[:-1]


def encode(value: datetime, offset: int = 0) -> str:
    """Render a datetime in the legacy format.

    Naive datetimes are taken to be UTC. ``decode(encode(dt))`` gives back
    ``dt`` truncated to whole seconds; with a non-zero ``offset`` the decoded
    value moves by ``offset`` seconds.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    millis = (value - _EPOCH) // timedelta(milliseconds=1)
    sign = "-" if offset < 0 else "+"
    return f"/Date({millis}{sign}{abs(offset):04d})/"


def format_date(value: Union[date, datetime]) -> str:
    """Return a date-only RFC 3339 string at midnight UTC without a zone.

    Many Xero endpoints require dates in this shape on write.
    """
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}T00:00:00"


def today(now: Optional[datetime] = None) -> str:
    """Return today's date (UTC) formatted with ``format_date``."""
    now = now or datetime.now(timezone.utc)
    return format_date(now)


def modified_since_header(value: datetime) -> str:
    """Format a datetime for the ``If-Modified-Since`` header."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return _format_utc(value.astimezone(timezone.utc))
