from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import pytest

from lib_dataclass_flags.domain.errors import UnresolvedAnnotationError
from lib_dataclass_flags.domain.fields import exported_fields, field_table, is_frozen, is_struct_type


@dataclass
class Sample:
    name: str = field(default="", metadata={"flag": "name", "cli": ""})
    limit: Optional[int] = None
    _hidden: int = 0


@dataclass(frozen=True)
class Frozen:
    name: str = ""


def test_field_table_resolves_string_annotations() -> None:
    table = field_table(Sample)
    assert [slot.name for slot in table] == ["name", "limit", "_hidden"]
    assert table[1].annotation == Optional[int]
    assert [slot.exported for slot in table] == [True, True, False]


def test_exported_fields_skip_private_names() -> None:
    assert [slot.name for slot in exported_fields(Sample)] == ["name", "limit"]


def test_empty_tag_counts_as_absent() -> None:
    slot = field_table(Sample)[0]
    assert slot.tag("flag") == "name"
    assert slot.tag("cli") is None


def test_struct_and_frozen_checks() -> None:
    assert is_struct_type(Sample)
    assert not is_struct_type(Sample())
    assert not is_struct_type(int)
    assert is_frozen(Frozen)
    assert not is_frozen(Sample)


def test_unresolvable_local_annotations_raise_binding_error() -> None:
    @dataclass
    class Inner:
        count: int = field(default=0, metadata={"flag": "count"})

    @dataclass
    class Outer:
        inner: Inner = field(default_factory=Inner)

    with pytest.raises(UnresolvedAnnotationError, match="\"Outer\": name 'Inner' is not defined"):
        field_table(Outer)
    assert field_table(Inner)[0].annotation is int
