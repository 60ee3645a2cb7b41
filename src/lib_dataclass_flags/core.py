"""Composition root for ``lib_dataclass_flags``.

Purpose
-------
Provide the entry points that wire the default adapter table into the
registrar and the loader, validate root values, and emit structured
observability signals. Exports only stable, consumer-ready APIs.

Contents
--------
* :data:`_DEFAULT_FLAG_TYPES` – the builtin adapter options in registry order.
* :func:`build_options` – default options plus caller overrides.
* :func:`register_flags` – bind a template dataclass's tagged fields to flags.
* :func:`load_from_flags` – copy parsed values into a destination dataclass.
* :func:`parse_into` – register, parse and load in one call.
* :func:`_root_instance` – shared validation of template/destination roots.

System Role
-----------
This module connects the value adapters and the argparse flag set with the
application walkers. It is the canonical location for adjusting the default
adapter table.
"""

from __future__ import annotations

from typing import Any, Sequence

from .adapters.flagset.argparse_flagset import ArgparseFlagSet
from .adapters.values.scalars import DEFAULT_ADAPTERS
from .application.load import load_struct
from .application.options import Option, Options, apply_options, flag_prefix, flag_type, tag_name
from .application.ports import FlagSet, FlagValue
from .application.register import register_struct
from .domain.errors import (
    ConversionError,
    FlagBindingError,
    FlagNotRegisteredError,
    FlagParseError,
    FlagRedefinedError,
    NoAdapterError,
    NoExportedFieldsError,
    NotAStructError,
    NotSettableError,
    NumericRangeError,
    TypeMismatchError,
    UninitializedOptionalError,
    UnresolvedAnnotationError,
)
from .domain.fields import is_struct_type
from .domain.shapes import describe_type, zero_value
from .observability import log_debug, log_info, make_event

# Builtin adapters keyed by canonical type. ``flag_type`` overrides passed by
# callers replace entries for the same type without changing their position.
_DEFAULT_FLAG_TYPES: tuple[Option, ...] = tuple(flag_type(annotation, factory) for annotation, factory in DEFAULT_ADAPTERS)


def build_options(*options: Option) -> Options:
    """Return the default :class:`Options` with *options* applied in order.

    Examples
    --------
    >>> opts = build_options(tag_name("cli"), flag_prefix("svc-"))
    >>> opts.tag_name, opts.flag_name("port"), len(opts.flag_types)
    ('cli', 'svc-port', 11)
    """

    return apply_options((*_DEFAULT_FLAG_TYPES, *options))


def register_flags(flags: FlagSet, template: Any, *options: Option) -> tuple[str, ...]:
    """Register one flag per tagged field reachable from *template*.

    Why
    ----
    Callers declare their configuration once as a dataclass; this turns the
    declaration into flags without per-field boilerplate.

    What
    ----
    Walks *template* (an instance, or a class seeded with its zero value),
    building an adapter per tagged field from the field's current value and
    registering it under ``prefix + tag`` with usage ``Set <Owner>.<field>``.

    Parameters
    ----------
    flags:
        Any :class:`~lib_dataclass_flags.application.ports.FlagSet`.
    template:
        Dataclass instance (or class) providing defaults.
    options:
        ``tag_name``/``flag_prefix``/``flag_type`` instructions.

    Returns
    -------
    tuple[str, ...]
        Registered flag names, in field order.

    Raises
    ------
    FlagBindingError
        Any subclass; messages carry the complete ``Owner.field`` path. Flags
        registered before the failure remain registered.

    Examples
    --------
    >>> from dataclasses import dataclass, field
    >>> @dataclass
    ... class Demo:
    ...     port: int = field(default=8080, metadata={"flag": "port"})
    >>> flags = ArgparseFlagSet("demo")
    >>> register_flags(flags, Demo())
    ('port',)
    >>> flags.lookup("port").usage
    'Set Demo.port'
    """

    resolved = build_options(*options)
    instance = _root_instance(template, "register")

    def _observe(name: str, owner_field: str, value: FlagValue) -> None:
        log_debug("flag_registered", **make_event(name, owner_field, {"default": str(value)}))

    try:
        names = register_struct(flags, instance, resolved, _observe)
    except FlagBindingError as exc:
        log_debug("register_failed", **make_event(None, describe_type(type(instance)), {"error": str(exc)}))
        raise
    log_info("flags_registered", **make_event(None, describe_type(type(instance)), {"count": len(names)}))
    return tuple(names)


def load_from_flags(flags: FlagSet, destination: Any, *options: Option) -> Any:
    """Copy the values held by *flags* into the tagged fields of *destination*.

    Must be called with the same tag name and prefix used for registration.
    Returns *destination* (or the zero instance built when a class is given).

    Raises
    ------
    NotSettableError
        When *destination* (or a nested dataclass) is frozen.
    FlagNotRegisteredError
        When a computed flag name is unknown to *flags*.
    TypeMismatchError / ConversionError
        When a flag's value cannot be represented in its field.
    """

    resolved = build_options(*options)
    instance = _root_instance(destination, "load")

    def _observe(name: str, owner_field: str, value: Any) -> None:
        log_debug("flag_loaded", **make_event(name, owner_field))

    try:
        names = load_struct(flags, instance, resolved, _observe)
    except FlagBindingError as exc:
        log_debug("load_failed", **make_event(None, describe_type(type(instance)), {"error": str(exc)}))
        raise
    log_info("flags_loaded", **make_event(None, describe_type(type(instance)), {"count": len(names)}))
    return instance


def parse_into(
    template: Any,
    arguments: Sequence[str],
    *options: Option,
    flags: FlagSet | None = None,
) -> Any:
    """Register *template*, parse *arguments* and load the result into *template*.

    A fresh :class:`ArgparseFlagSet` is used unless *flags* is given; leftover
    positional arguments remain available on ``flags.args``.

    Examples
    --------
    >>> from dataclasses import dataclass, field
    >>> @dataclass
    ... class Demo:
    ...     name: str = field(default="world", metadata={"flag": "name"})
    ...     loud: bool = field(default=False, metadata={"flag": "loud"})
    >>> parse_into(Demo(), ["--name", "flags", "-loud"])
    Demo(name='flags', loud=True)
    """

    flag_set: FlagSet = flags if flags is not None else ArgparseFlagSet(_flag_set_name(template))
    instance = _root_instance(template, "register")
    register_flags(flag_set, instance, *options)
    flag_set.parse(arguments)
    return load_from_flags(flag_set, instance, *options)


def _root_instance(value: Any, action: str) -> Any:
    """Return *value* when it is a dataclass instance; instantiate dataclass classes.

    Examples
    --------
    >>> _root_instance(42, "register")
    Traceback (most recent call last):
    ...
    lib_dataclass_flags.domain.errors.NotAStructError: unable to register flags for "int": not a dataclass
    """

    if is_struct_type(value):
        return zero_value(value)
    if not is_struct_type(type(value)):
        raise NotAStructError(f'unable to {action} flags for "{describe_type(type(value))}": not a dataclass')
    return value


def _flag_set_name(template: Any) -> str:
    struct_type = template if isinstance(template, type) else type(template)
    return struct_type.__name__.lower()


__all__ = [
    "ConversionError",
    "FlagBindingError",
    "FlagNotRegisteredError",
    "FlagParseError",
    "FlagRedefinedError",
    "NoAdapterError",
    "NoExportedFieldsError",
    "NotAStructError",
    "NotSettableError",
    "NumericRangeError",
    "TypeMismatchError",
    "UninitializedOptionalError",
    "UnresolvedAnnotationError",
    "build_options",
    "flag_prefix",
    "flag_type",
    "load_from_flags",
    "parse_into",
    "register_flags",
    "tag_name",
]
