"""Field walker that registers one flag per tagged dataclass field.

Purpose
-------
Walk a template dataclass, resolve an adapter for every tagged field and hand
it to a :class:`~lib_dataclass_flags.application.ports.FlagSet`. Remains free
of I/O so alternative composition roots can reuse it.

Contents
    - ``register_struct``: public entry point for one template instance.
    - ``_register_fields`` / ``_register_field``: recursive stanzas mirroring
      the tag routing rules.
    - ``_list_value``: the element-wise fallback for list fields.

Tag routing
-----------
No tag: dereference; recurse when the base is a dataclass, otherwise skip the
field silently. Tag: the flag is named ``prefix + tag``.
"""

from __future__ import annotations

from typing import Any, Callable

from ..domain.errors import FlagBindingError, NoAdapterError, NoExportedFieldsError
from ..domain.fields import FieldSlot, exported_fields, is_struct_type
from ..domain.shapes import deref_fully, describe_type, sequence_element_type, shape_of, zero_value
from .collection import ListValue
from .options import Options, flag_value_for
from .ports import FlagSet, FlagValue

Observer = Callable[[str, str, FlagValue], None]
"""Callback receiving ``(flag_name, "Owner.field", value)`` after each registration."""


def register_struct(
    flags: FlagSet,
    template: Any,
    options: Options,
    observer: Observer | None = None,
) -> list[str]:
    """Register flags for every tagged field reachable from *template*.

    Returns
    -------
    list[str]
        Flag names in registration order. Flags registered before a failure
        stay registered.
    """

    registered: list[str] = []

    def _record(name: str, owner_field: str, value: FlagValue) -> None:
        registered.append(name)
        if observer is not None:
            observer(name, owner_field, value)

    _register_fields(flags, type(template), template, options, _record)
    return registered


def _register_fields(flags: FlagSet, struct_type: type, instance: Any, options: Options, record: Observer) -> None:
    owner = describe_type(struct_type)
    slots = exported_fields(struct_type)
    if not slots:
        raise NoExportedFieldsError(f'unable to register flags for type "{owner}": no exported fields')
    for slot in slots:
        try:
            _register_field(flags, owner, slot, getattr(instance, slot.name), options, record)
        except FlagBindingError as exc:
            raise exc.within("register", owner, slot.name) from exc


def _register_field(
    flags: FlagSet,
    owner: str,
    slot: FieldSlot,
    value: Any,
    options: Options,
    record: Observer,
) -> None:
    tag = slot.tag(options.tag_name)
    if tag is None:
        if is_struct_type(shape_of(slot.annotation).base):
            nested = deref_fully(value, slot.annotation)
            _register_fields(flags, type(nested), nested, options, record)
        return

    flag_value = flag_value_for(value, slot.annotation, options)
    if flag_value is None:
        flag_value = _list_value(value, slot.annotation, options)
    name = options.flag_name(tag)
    flags.var(flag_value, name, f"Set {owner}.{slot.name}")
    record(name, f"{owner}.{slot.name}", flag_value)


def _list_value(value: Any, annotation: Any, options: Options) -> ListValue:
    """Build a :class:`ListValue` for a list field whose type has no direct adapter."""

    element_type = sequence_element_type(shape_of(annotation).base)
    if element_type is None:
        raise NoAdapterError(f"no flag factory registered for {describe_type(annotation)}")

    element: FlagValue | None = None
    values: list[Any] = []
    texts: list[str] = []
    for item in deref_fully(value, annotation):
        element = flag_value_for(item, element_type, options)
        if element is None:
            raise NoAdapterError(f"no flag factory registered for {describe_type(element_type)}")
        values.append(element.get())
        texts.append(str(element))
    if element is None:
        element = flag_value_for(zero_value(element_type), element_type, options)
        if element is None:
            raise NoAdapterError(f"no flag factory registered for {describe_type(element_type)}")
    return ListValue(element, values, texts)
