"""ArgparseFlagSet: spellings, presence flags, leftovers and error surfaces."""

from __future__ import annotations

import logging

import pytest

from lib_dataclass_flags.adapters.flagset.argparse_flagset import ArgparseFlagSet
from lib_dataclass_flags.adapters.values.scalars import BoolValue, Int32Value, IntValue, StringValue
from lib_dataclass_flags.domain.errors import (
    ConversionError,
    FlagParseError,
    FlagRedefinedError,
    NumericRangeError,
)


class ShoutValue:
    """Custom adapter raising a plain ValueError."""

    def __init__(self) -> None:
        self.text = ""

    def set(self, text: str) -> None:
        if not text.isupper():
            raise ValueError("must be upper case")
        self.text = text

    def get(self) -> str:
        return self.text

    def __str__(self) -> str:
        return self.text


@pytest.fixture()
def flags() -> ArgparseFlagSet:
    flag_set = ArgparseFlagSet("test")
    flag_set.var(IntValue(1), "count", "Set Options.count")
    flag_set.var(BoolValue(False), "verbose", "Set Options.verbose")
    flag_set.var(StringValue("x"), "name", "Set Options.name")
    return flag_set


def _values(flag_set: ArgparseFlagSet) -> dict[str, object]:
    return {flag.name: flag.value.get() for flag in flag_set}


def test_single_and_double_dash_spellings(flags: ArgparseFlagSet) -> None:
    flags.parse(["-count=3", "--name", "demo"])
    assert _values(flags) == {"count": 3, "name": "demo", "verbose": False}


def test_presence_flag_does_not_consume_next_argument(flags: ArgparseFlagSet) -> None:
    flags.parse(["--verbose", "input.txt"])
    assert _values(flags)["verbose"] is True
    assert flags.args == ["input.txt"]


def test_presence_flag_accepts_explicit_false(flags: ArgparseFlagSet) -> None:
    flags.parse(["--verbose", "--verbose=false"])
    assert _values(flags)["verbose"] is False


def test_repeated_flags_overwrite(flags: ArgparseFlagSet) -> None:
    flags.parse(["--count=1", "--count=2"])
    assert _values(flags)["count"] == 2


def test_double_dash_ends_flags(flags: ArgparseFlagSet) -> None:
    flags.parse(["--count=5", "--", "--verbose"])
    assert _values(flags)["verbose"] is False
    assert flags.args == ["--verbose"]


def test_unknown_flag_is_rejected(flags: ArgparseFlagSet) -> None:
    with pytest.raises(FlagParseError, match="flag provided but not defined: --missing"):
        flags.parse(["--missing=1"])


def test_missing_value_is_a_parse_error(flags: ArgparseFlagSet) -> None:
    with pytest.raises(FlagParseError):
        flags.parse(["--count"])


def test_overflow_keeps_range_error_class() -> None:
    flag_set = ArgparseFlagSet("test")
    flag_set.var(Int32Value(1), "i", "Set T.i")
    with pytest.raises(NumericRangeError) as exc:
        flag_set.parse(["--i=2200000000"])
    assert str(exc.value) == 'invalid value "2200000000" for flag -i: parsing "2200000000": value out of range'
    assert flag_set.lookup("i").value.get() == 1


def test_plain_value_errors_become_conversion_errors() -> None:
    flag_set = ArgparseFlagSet("test")
    flag_set.var(ShoutValue(), "shout", "Set T.shout")
    with pytest.raises(ConversionError, match='invalid value "hi" for flag -shout: must be upper case'):
        flag_set.parse(["--shout=hi"])


def test_redefinition_is_rejected(flags: ArgparseFlagSet) -> None:
    with pytest.raises(FlagRedefinedError, match="test flag redefined: count"):
        flags.var(IntValue(0), "count", "again")


def test_lookup_and_registry_views(flags: ArgparseFlagSet) -> None:
    assert flags.lookup("absent") is None
    assert "count" in flags
    assert len(flags) == 3
    assert [flag.name for flag in flags] == ["count", "name", "verbose"]
    assert flags.lookup("name").default == "x"


def test_parse_logs_summary(flags: ArgparseFlagSet, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="lib_dataclass_flags")
    flags.parse(["a", "b"])
    record = caplog.records[-1]
    assert record.getMessage() == "flag_set_parsed"
    assert getattr(record, "context") == {"flag_set": "test", "arguments": 2, "remaining": 2}
    assert flags.parsed


def test_abbreviated_flag_is_rejected(flags: ArgparseFlagSet) -> None:
    with pytest.raises(FlagParseError, match="flag provided but not defined: -cou"):
        flags.parse(["-cou", "4"])
    assert _values(flags)["count"] == 1


def test_ambiguous_abbreviation_raises_instead_of_exiting() -> None:
    flag_set = ArgparseFlagSet("test")
    flag_set.var(BoolValue(False), "verbose", "Set Options.verbose")
    flag_set.var(BoolValue(False), "version", "Set Options.version")
    with pytest.raises(FlagParseError, match="flag provided but not defined: -ver"):
        flag_set.parse(["-ver"])


def test_detached_value_may_look_like_a_flag(flags: ArgparseFlagSet) -> None:
    flags.parse(["--count", "-3", "--name", "x"])
    assert _values(flags)["count"] == -3


def test_parse_failures_are_logged_as_errors(flags: ArgparseFlagSet, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="lib_dataclass_flags")
    with pytest.raises(FlagParseError):
        flags.parse(["--missing"])
    record = caplog.records[-1]
    assert (record.levelno, record.getMessage()) == (logging.ERROR, "flag_set_parse_failed")
    assert getattr(record, "context") == {
        "flag_set": "test",
        "error": "flag provided but not defined: --missing",
    }
    assert not flags.parsed
