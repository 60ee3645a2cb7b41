"""Field walker that copies parsed flag values back into a dataclass.

Purpose
-------
Mirror :mod:`lib_dataclass_flags.application.register`: walk the destination
with the same options, find each tagged field's flag by its computed name and
assign the adapter's value, converted to the field's exact annotation.

Contents
    - ``load_struct``: public entry point for one destination instance.
    - ``_load_fields`` / ``_load_field``: recursive stanzas.
    - ``_value_for``: adapter result converted for the destination field.

System Role
    Assignments go through ``setattr`` by field name; the walker never holds
    references into instance storage.
"""

from __future__ import annotations

from typing import Any, Callable

from ..domain.errors import FlagBindingError, FlagNotRegisteredError, NotSettableError, TypeMismatchError
from ..domain.fields import FieldSlot, exported_fields, is_frozen, is_struct_type
from ..domain.shapes import (
    convert_value_to,
    deref_fully,
    describe_type,
    is_fully_present,
    sequence_element_type,
    shape_of,
    type_of_value,
    wrap,
    zero_value,
)
from .collection import ListValue
from .options import Options
from .ports import FlagSet, FlagValue

Observer = Callable[[str, str, Any], None]
"""Callback receiving ``(flag_name, "Owner.field", assigned_value)`` after each assignment."""


def load_struct(
    flags: FlagSet,
    destination: Any,
    options: Options,
    observer: Observer | None = None,
) -> list[str]:
    """Assign every tagged field reachable from *destination* from *flags*.

    Returns
    -------
    list[str]
        Flag names read, in walk order. Assignments made before a failure
        are kept.
    """

    loaded: list[str] = []

    def _record(name: str, owner_field: str, value: Any) -> None:
        loaded.append(name)
        if observer is not None:
            observer(name, owner_field, value)

    _load_fields(flags, destination, options, _record)
    return loaded


def _load_fields(flags: FlagSet, instance: Any, options: Options, record: Observer) -> None:
    struct_type = type(instance)
    owner = describe_type(struct_type)
    if is_frozen(struct_type):
        raise NotSettableError(f'unable to load flags into "{owner}": dataclass is frozen')
    for slot in exported_fields(struct_type):
        try:
            _load_field(flags, owner, slot, instance, options, record)
        except FlagBindingError as exc:
            raise exc.within("load", owner, slot.name) from exc


def _load_field(
    flags: FlagSet,
    owner: str,
    slot: FieldSlot,
    instance: Any,
    options: Options,
    record: Observer,
) -> None:
    tag = slot.tag(options.tag_name)
    if tag is None:
        shape = shape_of(slot.annotation)
        if is_struct_type(shape.base):
            current = getattr(instance, slot.name)
            if not is_fully_present(current, slot.annotation):
                current = wrap(zero_value(shape.base), shape.layers)
                setattr(instance, slot.name, current)
            _load_fields(flags, deref_fully(current, slot.annotation), options, record)
        return

    name = options.flag_name(tag)
    flag = flags.lookup(name)
    if flag is None:
        raise FlagNotRegisteredError(f'unable to lookup flag "{name}"; was register_flags called?')
    value = _value_for(flag.value, slot.annotation)
    setattr(instance, slot.name, value)
    record(name, f"{owner}.{slot.name}", value)


def _value_for(flag_value: FlagValue, annotation: Any) -> Any:
    getter = getattr(flag_value, "get", None)
    if not callable(getter):
        raise TypeMismatchError(f"flag value {type(flag_value).__name__} does not expose its value")

    if isinstance(flag_value, ListValue):
        base = shape_of(annotation).base
        element_type = sequence_element_type(base)
        if element_type is None:
            raise TypeMismatchError(f"cannot load a list flag into a field of type {describe_type(annotation)}")
        items = [
            convert_value_to(item, flag_value.value_type_of(item), element_type) for item in flag_value.get()
        ]
        return convert_value_to(items, base, annotation)

    result = getter()
    source_type = getattr(flag_value, "value_type", None) or type_of_value(result)
    return convert_value_to(result, source_type, annotation)
