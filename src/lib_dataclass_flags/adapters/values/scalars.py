"""Flag-value adapters for the builtin scalar types.

Purpose
-------
Provide the default registry entries: one small adapter class per value kind,
each pairing a strict parser from :mod:`lib_dataclass_flags.domain.literals`
or :mod:`lib_dataclass_flags.domain.durations` with its formatter. The
classes double as factories: ``IntValue(5)`` is an adapter holding ``5``.

Contents
--------
* :class:`ScalarValue` – shared ``set``/``get``/``__str__`` machinery.
* ``BoolValue``, ``IntValue``, ``Int32Value``, ``Int64Value``, ``UIntValue``,
  ``UInt32Value``, ``UInt64Value``, ``Float32Value``, ``Float64Value``,
  ``StringValue``, ``DurationValue``.
* :data:`DEFAULT_ADAPTERS` – ``(annotation, factory)`` pairs in registry order.
"""

from __future__ import annotations

import functools
from datetime import timedelta
from typing import Any, Callable, ClassVar, Final

from ...domain.durations import format_duration, parse_duration
from ...domain.literals import format_bool, format_float, parse_bool, parse_float, parse_int, parse_uint
from ...domain.types import Float32, Int32, Int64, UInt, UInt32, UInt64


class ScalarValue:
    """Base class holding one parsed value.

    Subclasses set :attr:`value_type` and the ``parse``/``render`` callables.
    ``set`` parses before assigning, so failures never touch the stored value.
    """

    value_type: ClassVar[Any] = object
    parse: ClassVar[Callable[[str], Any]]
    render: ClassVar[Callable[[Any], str]] = str

    def __init__(self, value: Any) -> None:
        self.value = value

    def set(self, text: str) -> None:
        self.value = type(self).parse(text)

    def get(self) -> Any:
        return self.value

    def __str__(self) -> str:
        return type(self).render(self.value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.value!r})"


class BoolValue(ScalarValue):
    value_type = bool
    parse = staticmethod(parse_bool)
    render = staticmethod(format_bool)

    def is_bool_flag(self) -> bool:
        return True


class IntValue(ScalarValue):
    """Plain ``int`` fields: signed 64-bit."""

    value_type = int
    parse = staticmethod(functools.partial(parse_int, bits=64))


class Int32Value(ScalarValue):
    value_type = Int32
    parse = staticmethod(functools.partial(parse_int, bits=32))


class Int64Value(ScalarValue):
    value_type = Int64
    parse = staticmethod(functools.partial(parse_int, bits=64))


class UIntValue(ScalarValue):
    value_type = UInt
    parse = staticmethod(functools.partial(parse_uint, bits=64))


class UInt32Value(ScalarValue):
    value_type = UInt32
    parse = staticmethod(functools.partial(parse_uint, bits=32))


class UInt64Value(ScalarValue):
    value_type = UInt64
    parse = staticmethod(functools.partial(parse_uint, bits=64))


class Float32Value(ScalarValue):
    value_type = Float32
    parse = staticmethod(functools.partial(parse_float, bits=32))
    render = staticmethod(functools.partial(format_float, bits=32))


class Float64Value(ScalarValue):
    """Plain ``float`` fields: double precision."""

    value_type = float
    parse = staticmethod(functools.partial(parse_float, bits=64))
    render = staticmethod(format_float)


class StringValue(ScalarValue):
    value_type = str
    parse = staticmethod(str)


class DurationValue(ScalarValue):
    """``timedelta`` fields using the ``1h15m`` literal form.

    Examples
    --------
    >>> value = DurationValue(timedelta(seconds=1))
    >>> value.set("1h15m")
    >>> str(value)
    '1h15m0s'
    """

    value_type = timedelta
    parse = staticmethod(parse_duration)
    render = staticmethod(format_duration)


DEFAULT_ADAPTERS: Final[tuple[tuple[Any, Callable[[Any], ScalarValue]], ...]] = (
    (bool, BoolValue),
    (int, IntValue),
    (Int32, Int32Value),
    (Int64, Int64Value),
    (UInt, UIntValue),
    (UInt32, UInt32Value),
    (UInt64, UInt64Value),
    (Float32, Float32Value),
    (float, Float64Value),
    (str, StringValue),
    (timedelta, DurationValue),
)
"""Builtin ``(annotation, factory)`` pairs, in the order they enter the registry."""
