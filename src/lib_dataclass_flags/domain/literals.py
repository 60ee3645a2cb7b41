"""Strict textual codecs for booleans and fixed-width numbers.

Purpose
-------
Python's ``int()``/``float()`` are generous (whitespace, unbounded width,
Unicode digits). Flag literals need the strict behaviour of a fixed-width
parser: a literal either fits the declared width or fails with a range error
that quotes it.

Contents
--------
* :func:`parse_bool` / :func:`format_bool`
* :func:`parse_int` / :func:`parse_uint` – base detection and width checks.
* :func:`parse_float` / :func:`format_float` – double and single precision.
"""

from __future__ import annotations

import math
import re
import struct
from typing import Final

from .errors import ConversionError, NumericRangeError

_TRUE_WORDS: Final[frozenset[str]] = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_WORDS: Final[frozenset[str]] = frozenset({"0", "f", "F", "FALSE", "false", "False"})
_PREFIXED_BASES: Final[dict[str, int]] = {"0x": 16, "0o": 8, "0b": 2}
_DIGITS: Final[re.Pattern[str]] = re.compile(r"[0-9A-Za-z]+(?:_[0-9A-Za-z]+)*")
_DECIMAL_FLOAT: Final[re.Pattern[str]] = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_SPECIAL_FLOAT: Final[re.Pattern[str]] = re.compile(r"[+-]?(?:inf|infinity|nan)", re.IGNORECASE)
_FLOAT32_MAX: Final[float] = struct.unpack("<f", b"\xff\xff\x7f\x7f")[0]


def _syntax_error(text: str) -> ConversionError:
    return ConversionError(f'parsing "{text}": invalid syntax')


def _range_error(text: str) -> NumericRangeError:
    return NumericRangeError(f'parsing "{text}": value out of range')


def parse_bool(text: str) -> bool:
    """Parse the accepted boolean spellings.

    Examples
    --------
    >>> parse_bool("T"), parse_bool("0")
    (True, False)
    """

    if text in _TRUE_WORDS:
        return True
    if text in _FALSE_WORDS:
        return False
    raise _syntax_error(text)


def format_bool(value: bool) -> str:
    return "true" if value else "false"


def parse_int(text: str, bits: int = 64) -> int:
    """Parse a signed integer literal that must fit in *bits*.

    Why
    ----
    Fields typed ``Int32`` must reject ``2200000000`` instead of silently
    storing a value no 32-bit consumer can represent.

    What
    ----
    Accepts an optional sign, then ``0x``/``0o``/``0b`` prefixes, a leading
    ``0`` for octal, or plain decimal digits; underscores may separate digits.

    Raises
    ------
    ConversionError
        For malformed text.
    NumericRangeError
        When the value does not fit the width.

    Examples
    --------
    >>> parse_int("0x1f"), parse_int("-010"), parse_int("1_000")
    (31, -8, 1000)
    >>> parse_int("2200000000", 32)
    Traceback (most recent call last):
    ...
    lib_dataclass_flags.domain.errors.NumericRangeError: parsing "2200000000": value out of range
    """

    sign = 1
    body = text
    if body[:1] in ("+", "-"):
        sign = -1 if body[0] == "-" else 1
        body = body[1:]
    value = sign * _parse_magnitude(text, body)
    limit = 1 << (bits - 1)
    if not -limit <= value < limit:
        raise _range_error(text)
    return value


def parse_uint(text: str, bits: int = 64) -> int:
    """Parse an unsigned integer literal that must fit in *bits*; signs are rejected.

    Examples
    --------
    >>> parse_uint("0b101"), parse_uint("4294967295", 32)
    (5, 4294967295)
    """

    value = _parse_magnitude(text, text)
    if value >= 1 << bits:
        raise _range_error(text)
    return value


def _parse_magnitude(text: str, body: str) -> int:
    if not body or body[0] not in "0123456789":
        raise _syntax_error(text)
    base = 10
    digits = body
    prefix = body[:2].lower()
    if prefix in _PREFIXED_BASES:
        base = _PREFIXED_BASES[prefix]
        digits = body[3:] if body[2:3] == "_" else body[2:]
    elif len(body) > 1 and body[0] == "0":
        base = 8
        digits = body[2:] if body[1:2] == "_" else body[1:]
    if not _DIGITS.fullmatch(digits):
        raise _syntax_error(text)
    try:
        return int(digits, base)
    except ValueError as exc:
        raise _syntax_error(text) from exc


def parse_float(text: str, bits: int = 64) -> float:
    """Parse a floating point literal at double (64) or single (32) precision.

    Single precision values are rounded to the nearest representable value;
    finite literals beyond the single precision range raise
    :class:`NumericRangeError`.

    Examples
    --------
    >>> parse_float("1.5e3"), parse_float("0x1p-2"), parse_float("0.1", 32)
    (1500.0, 0.25, 0.10000000149011612)
    """

    if _DECIMAL_FLOAT.fullmatch(text) or _SPECIAL_FLOAT.fullmatch(text):
        value = float(text)
    elif text.lower().lstrip("+-").startswith("0x"):
        try:
            value = float.fromhex(text)
        except (ValueError, OverflowError) as exc:
            raise _syntax_error(text) from exc
    else:
        raise _syntax_error(text)
    if math.isinf(value) and not _SPECIAL_FLOAT.fullmatch(text):
        raise _range_error(text)
    if bits == 32:
        return _to_float32(text, value)
    return value


def _to_float32(text: str, value: float) -> float:
    if math.isnan(value) or math.isinf(value):
        return value
    try:
        rounded = struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError as exc:
        raise _range_error(text) from exc
    if math.isinf(rounded) or abs(rounded) > _FLOAT32_MAX:
        raise _range_error(text)
    return rounded


def format_float(value: float, bits: int = 64) -> str:
    """Return the shortest text that parses back to *value* at the given precision.

    Examples
    --------
    >>> format_float(15.0), format_float(parse_float("0.1", 32), 32)
    ('15.0', '0.1')
    """

    if bits != 32 or math.isnan(value) or math.isinf(value):
        return repr(value)
    for precision in range(1, 10):
        candidate = f"{value:.{precision}g}"
        try:
            rounded = _to_float32(candidate, float(candidate))
        except NumericRangeError:
            # short candidates near the single precision limit round past it
            continue
        if rounded == value:
            return candidate
    return repr(value)
