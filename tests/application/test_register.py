"""Registrar: tag routing, list fallback and error context."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import pytest

from lib_dataclass_flags.adapters.flagset.argparse_flagset import ArgparseFlagSet
from lib_dataclass_flags.adapters.values.scalars import IntValue
from lib_dataclass_flags.application.collection import ListValue
from lib_dataclass_flags.application.options import flag_type
from lib_dataclass_flags.application.register import register_struct
from lib_dataclass_flags.core import build_options
from lib_dataclass_flags.domain.errors import (
    FlagRedefinedError,
    NoAdapterError,
    NoExportedFieldsError,
    UninitializedOptionalError,
)


class Opaque:
    def __init__(self, token: str) -> None:
        self.token = token


class OpaqueValue:
    def __init__(self, opaque: Opaque) -> None:
        self.opaque = opaque

    def set(self, text: str) -> None:
        self.opaque = Opaque(text)

    def get(self) -> Opaque:
        return self.opaque

    def __str__(self) -> str:
        return self.opaque.token


@dataclass
class Leaf:
    level: int = field(default=2, metadata={"flag": "level"})


@dataclass
class Branch:
    leaf: Optional[Leaf] = None
    note: str = "untagged"


@dataclass
class Tree:
    name: str = field(default="root", metadata={"flag": "name"})
    branch: Branch = field(default_factory=Branch)
    sizes: list[int] = field(default_factory=lambda: [1, 2], metadata={"flag": "sizes"})
    maybe: list[Optional[int]] = field(default_factory=list, metadata={"flag": "maybe"})
    _private: complex = field(default=1j, metadata={"flag": "private"})


@dataclass
class OnlyPrivate:
    _hidden: str = ""


@dataclass
class Holder:
    first: str = field(default="a", metadata={"flag": "first"})
    nested: OnlyPrivate = field(default_factory=OnlyPrivate)


@dataclass
class Unsupported:
    ok: int = field(default=0, metadata={"flag": "ok"})
    ratio: complex = field(default=0j, metadata={"flag": "ratio"})


@dataclass
class UnsupportedList:
    ratios: list[complex] = field(default_factory=list, metadata={"flag": "ratios"})


@dataclass
class MaybeOpaque:
    value: Optional[Opaque] = field(default=None, metadata={"flag": "opaque"})


@dataclass
class Twice:
    a: int = field(default=0, metadata={"flag": "same"})
    b: int = field(default=0, metadata={"flag": "same"})


def test_registers_tagged_fields_through_untagged_nesting() -> None:
    flags = ArgparseFlagSet()
    names = register_struct(flags, Tree(), build_options())

    assert names == ["name", "level", "sizes", "maybe"]
    assert flags.lookup("level").usage == "Set Leaf.level"
    assert flags.lookup("level").default == "2"
    assert flags.lookup("private") is None


def test_list_fields_get_element_wise_adapters() -> None:
    flags = ArgparseFlagSet()
    register_struct(flags, Tree(), build_options())

    sizes = flags.lookup("sizes").value
    assert isinstance(sizes, ListValue)
    assert sizes.get() == [1, 2]
    assert flags.lookup("sizes").default == "1,2"
    maybe = flags.lookup("maybe").value
    assert isinstance(maybe.element, IntValue)
    assert maybe.get() == []


def test_observer_sees_every_registration() -> None:
    seen: list[tuple[str, str]] = []
    register_struct(ArgparseFlagSet(), Leaf(), build_options(), lambda name, where, _value: seen.append((name, where)))
    assert seen == [("level", "Leaf.level")]


def test_nested_struct_without_public_fields() -> None:
    flags = ArgparseFlagSet()
    with pytest.raises(NoExportedFieldsError) as exc:
        register_struct(flags, Holder(), build_options())
    assert str(exc.value) == (
        'unable to register flag for field Holder.nested: unable to register flags for type "OnlyPrivate": '
        "no exported fields"
    )
    assert exc.value.field_path == ("nested",)
    assert "first" in flags


def test_root_without_public_fields() -> None:
    with pytest.raises(NoExportedFieldsError, match='type "OnlyPrivate": no exported fields'):
        register_struct(ArgparseFlagSet(), OnlyPrivate(), build_options())


def test_missing_adapter_names_field_type_and_keeps_earlier_flags() -> None:
    flags = ArgparseFlagSet()
    with pytest.raises(NoAdapterError) as exc:
        register_struct(flags, Unsupported(), build_options())
    assert str(exc.value) == "unable to register flag for field Unsupported.ratio: no flag factory registered for complex"
    assert "ok" in flags


def test_missing_element_adapter_names_element_type() -> None:
    with pytest.raises(NoAdapterError, match="no flag factory registered for complex$"):
        register_struct(ArgparseFlagSet(), UnsupportedList(), build_options())


def test_none_optional_without_zero_value() -> None:
    with pytest.raises(UninitializedOptionalError) as exc:
        register_struct(ArgparseFlagSet(), MaybeOpaque(), build_options(flag_type(Opaque, OpaqueValue)))
    assert str(exc.value).startswith("unable to register flag for field MaybeOpaque.value: ")


def test_present_optional_custom_type_registers() -> None:
    flags = ArgparseFlagSet()
    register_struct(flags, MaybeOpaque(Opaque("tok")), build_options(flag_type(Opaque, OpaqueValue)))
    assert flags.lookup("opaque").default == "tok"


def test_duplicate_flag_names_are_rejected_with_context() -> None:
    with pytest.raises(FlagRedefinedError, match="unable to register flag for field Twice.b: "):
        register_struct(ArgparseFlagSet(), Twice(), build_options())
