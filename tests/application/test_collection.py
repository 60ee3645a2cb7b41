"""ListValue text format and element-wise decoding."""

from __future__ import annotations

from datetime import timedelta

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lib_dataclass_flags.adapters.values.scalars import DurationValue, Int32Value, IntValue, StringValue
from lib_dataclass_flags.application.collection import ListValue, join_list, split_list
from lib_dataclass_flags.domain.errors import ConversionError, NumericRangeError
from lib_dataclass_flags.domain.types import Int32

TEXTS = st.lists(
    st.text(alphabet=st.characters(blacklist_categories=("Cs",), blacklist_characters="\x00"), max_size=6),
    max_size=5,
)


def test_split_handles_quotes() -> None:
    assert split_list('a," b ",c') == ["a", " b ", "c"]
    assert split_list('""') == [""]
    assert split_list("a,,b") == ["a", "", "b"]


def test_doubled_quotes_survive_at_element_end() -> None:
    text = 'a,"say ""hi"""'
    assert split_list(text) == ["a", 'say "hi"']
    assert join_list(["a", 'say "hi"']) == text


def test_split_rejects_broken_quoting() -> None:
    with pytest.raises(ConversionError):
        split_list('"open')


@given(TEXTS)
def test_join_then_split_restores_elements(items: list[str]) -> None:
    assert split_list(join_list(items)) == items


def test_set_decodes_each_element() -> None:
    values = ListValue(DurationValue(timedelta(0)))
    values.set("1s,1m")
    assert values.get() == [timedelta(seconds=1), timedelta(minutes=1)]
    assert str(values) == "1s,1m0s"


def test_failure_names_token_and_keeps_contents() -> None:
    values = ListValue(Int32Value(0), [Int32(1)], ["1"])
    with pytest.raises(NumericRangeError) as exc:
        values.set("5,2200000000")
    assert str(exc.value).startswith('invalid list element "2200000000": ')
    assert values.get() == [1]
    assert str(values) == "1"


def test_repeated_set_overwrites() -> None:
    values = ListValue(IntValue(0))
    values.set("1,2")
    values.set("3")
    assert values.get() == [3]


def test_empty_text_is_empty_list() -> None:
    values = ListValue(StringValue(""), ["seed"], ["seed"])
    values.set("")
    assert values.get() == []
    assert str(values) == ""


def test_get_returns_a_fresh_list() -> None:
    values = ListValue(IntValue(0), [1], ["1"])
    values.get().append(2)
    assert values.get() == [1]


def test_element_type_follows_element_adapter() -> None:
    assert ListValue(Int32Value(0)).element_type is Int32
    assert ListValue(IntValue(0)).value_type_of(5) is int
