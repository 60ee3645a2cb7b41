"""Builtin scalar adapters: parse, keep on failure, format."""

from __future__ import annotations

from datetime import timedelta

import pytest

from lib_dataclass_flags.adapters.values.scalars import (
    DEFAULT_ADAPTERS,
    BoolValue,
    DurationValue,
    Float32Value,
    Float64Value,
    Int32Value,
    IntValue,
    StringValue,
    UInt32Value,
    UInt64Value,
)
from lib_dataclass_flags.domain.errors import ConversionError, NumericRangeError
from lib_dataclass_flags.domain.types import Float32, Int32, Int64, UInt, UInt32, UInt64


def test_default_adapter_table_covers_builtin_kinds() -> None:
    annotations = [annotation for annotation, _ in DEFAULT_ADAPTERS]
    assert annotations == [bool, int, Int32, Int64, UInt, UInt32, UInt64, Float32, float, str, timedelta]
    for annotation, factory in DEFAULT_ADAPTERS:
        assert factory(None).value_type is annotation


@pytest.mark.parametrize(
    ("adapter", "text", "expected", "rendered"),
    [
        (BoolValue(False), "true", True, "true"),
        (IntValue(0), "-0x10", -16, "-16"),
        (Int32Value(0), "2147483647", 2147483647, "2147483647"),
        (UInt64Value(0), "18446744073709551615", 2**64 - 1, "18446744073709551615"),
        (Float64Value(0.0), "114", 114.0, "114.0"),
        (Float32Value(0.0), "112.5", 112.5, "112.5"),
        (StringValue(""), " spaced ", " spaced ", " spaced "),
        (DurationValue(timedelta(0)), "1m", timedelta(minutes=1), "1m0s"),
    ],
)
def test_set_get_and_format(adapter, text: str, expected, rendered: str) -> None:
    adapter.set(text)
    assert adapter.get() == expected
    assert str(adapter) == rendered


def test_failed_set_keeps_previous_value() -> None:
    value = UInt32Value(9)
    with pytest.raises(NumericRangeError):
        value.set("4300000000")
    with pytest.raises(ConversionError):
        value.set("nine")
    assert value.get() == 9


def test_only_bool_is_a_presence_flag() -> None:
    assert BoolValue(False).is_bool_flag() is True
    assert not hasattr(IntValue(0), "is_bool_flag")


def test_repr_names_the_adapter() -> None:
    assert repr(IntValue(3)) == "IntValue(3)"
