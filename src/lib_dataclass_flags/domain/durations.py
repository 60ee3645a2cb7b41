"""Composite unit-suffixed duration literals (``1h15m``, ``1.5s``, ``300ms``).

Durations are parsed into :class:`datetime.timedelta`. The grammar is a
possibly signed sequence of ``<decimal><unit>`` terms with units ``ns``,
``us``/``µs``/``μs``, ``ms``, ``s``, ``m`` and ``h``; a bare ``0`` is also
accepted. Totals are computed in integer nanoseconds and must fit a signed
64-bit nanosecond count; the sub-microsecond remainder is truncated because
``timedelta`` stops at microseconds.
"""

from __future__ import annotations

import re
from datetime import timedelta
from decimal import Decimal
from typing import Final

from .errors import ConversionError

_NANOSECOND: Final[int] = 1
_MICROSECOND: Final[int] = 1_000 * _NANOSECOND
_MILLISECOND: Final[int] = 1_000 * _MICROSECOND
_SECOND: Final[int] = 1_000 * _MILLISECOND
_MINUTE: Final[int] = 60 * _SECOND
_HOUR: Final[int] = 60 * _MINUTE
_MAX_NANOSECONDS: Final[int] = (1 << 63) - 1

_UNITS: Final[dict[str, int]] = {
    "ns": _NANOSECOND,
    "us": _MICROSECOND,
    "µs": _MICROSECOND,
    "μs": _MICROSECOND,
    "ms": _MILLISECOND,
    "s": _SECOND,
    "m": _MINUTE,
    "h": _HOUR,
}
_TERM: Final[re.Pattern[str]] = re.compile(r"([0-9]*(?:\.[0-9]*)?)([^0-9.]*)")


def parse_duration(text: str) -> timedelta:
    """Parse a duration literal.

    Raises
    ------
    ConversionError
        For empty/malformed text, missing or unknown units, or totals beyond
        the signed 64-bit nanosecond range.

    Examples
    --------
    >>> parse_duration("1h15m")
    datetime.timedelta(seconds=4500)
    >>> parse_duration("-1.5s"), parse_duration("0")
    (datetime.timedelta(days=-1, seconds=86398, microseconds=500000), datetime.timedelta(0))
    >>> parse_duration("10")
    Traceback (most recent call last):
    ...
    lib_dataclass_flags.domain.errors.ConversionError: missing unit in duration "10"
    """

    body = text
    negative = False
    if body[:1] in ("+", "-"):
        negative = body[0] == "-"
        body = body[1:]
    if body == "0":
        return timedelta(0)
    if not body:
        raise ConversionError(f'invalid duration "{text}"')

    total = Decimal(0)
    position = 0
    while position < len(body):
        match = _TERM.match(body, position)
        number, unit = match.group(1), match.group(2)
        if not number or number == "." or match.end() == position:
            raise ConversionError(f'invalid duration "{text}"')
        if not unit:
            raise ConversionError(f'missing unit in duration "{text}"')
        if unit not in _UNITS:
            raise ConversionError(f'unknown unit "{unit}" in duration "{text}"')
        total += Decimal(number) * _UNITS[unit]
        position = match.end()

    nanoseconds = int(total)
    if nanoseconds > _MAX_NANOSECONDS:
        raise ConversionError(f'invalid duration "{text}"')
    if negative:
        nanoseconds = -nanoseconds
    return timedelta(microseconds=_truncate_micro(nanoseconds))


def _truncate_micro(nanoseconds: int) -> int:
    """Return whole microseconds in *nanoseconds*, rounding toward zero."""

    micro = abs(nanoseconds) // _MICROSECOND
    return -micro if nanoseconds < 0 else micro


def format_duration(value: timedelta) -> str:
    """Render *value* in the composite form accepted by :func:`parse_duration`.

    Examples
    --------
    >>> format_duration(timedelta(hours=1, minutes=15))
    '1h15m0s'
    >>> format_duration(timedelta(milliseconds=1.5)), format_duration(timedelta(seconds=-90.25))
    ('1.5ms', '-1m30.25s')
    >>> format_duration(timedelta(0))
    '0s'
    """

    nanoseconds = ((value.days * 86_400 + value.seconds) * 1_000_000 + value.microseconds) * _MICROSECOND
    if nanoseconds == 0:
        return "0s"
    sign = "-" if nanoseconds < 0 else ""
    remaining = abs(nanoseconds)
    if remaining < _SECOND:
        if remaining < _MICROSECOND:
            return f"{sign}{remaining}ns"
        if remaining < _MILLISECOND:
            return f"{sign}{_fraction(remaining, _MICROSECOND)}µs"
        return f"{sign}{_fraction(remaining, _MILLISECOND)}ms"

    hours, remaining = divmod(remaining, _HOUR)
    minutes, remaining = divmod(remaining, _MINUTE)
    rendered = f"{_fraction(remaining, _SECOND)}s"
    if hours or minutes:
        rendered = f"{minutes}m{rendered}"
    if hours:
        rendered = f"{hours}h{rendered}"
    return sign + rendered


def _fraction(amount: int, unit: int) -> str:
    whole, rest = divmod(amount, unit)
    if not rest:
        return str(whole)
    width = len(str(unit)) - 1
    return f"{whole}.{str(rest).rjust(width, '0').rstrip('0')}"
