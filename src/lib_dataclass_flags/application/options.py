"""Binding options: tag key, name prefix and the adapter registry.

Purpose
-------
Thread one immutable :class:`Options` value through every register/load call
instead of consulting a global registry. Options are assembled from small
:class:`Option` instructions so callers can list only what they override.

Contents
--------
* :class:`AdapterSpec` – registered annotation plus its factory.
* :class:`Options` – frozen configuration shared by one pass.
* :func:`tag_name` / :func:`flag_prefix` / :func:`flag_type` – option builders.
* :func:`apply_options` – fold builders into an :class:`Options` value.
* :func:`flag_value_for` – registry lookup and factory invocation.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Callable, Iterable, Mapping

from ..domain.shapes import convert_value_to, shape_of
from .ports import AdapterFactory, FlagValue

Option = Callable[["Options"], "Options"]
"""An instruction transforming one :class:`Options` value into the next."""


@dataclass(frozen=True, slots=True)
class AdapterSpec:
    """Registry entry: the annotation an adapter expects and how to build it."""

    value_type: Any
    factory: AdapterFactory


@dataclass(frozen=True, slots=True)
class Options:
    """Immutable configuration for a single register or load pass.

    Attributes
    ----------
    tag_name:
        Metadata key that selects a field for binding.
    flag_prefix:
        Prepended to every computed flag name.
    flag_types:
        Read-only mapping from canonical base type to :class:`AdapterSpec`, in
        registration order.
    """

    tag_name: str = "flag"
    flag_prefix: str = ""
    flag_types: Mapping[Any, AdapterSpec] = field(default_factory=lambda: MappingProxyType({}))

    def flag_name(self, tag: str) -> str:
        return self.flag_prefix + tag


def tag_name(name: str) -> Option:
    """Select fields by the metadata key *name* instead of ``"flag"``."""

    return lambda options: replace(options, tag_name=name)


def flag_prefix(prefix: str) -> Option:
    """Prepend *prefix* to every flag name."""

    return lambda options: replace(options, flag_prefix=prefix)


def flag_type(annotation: Any, factory: AdapterFactory) -> Option:
    """Register *factory* for every field whose canonical type matches *annotation*.

    *annotation* may itself be wrapped (``Ref[Choice]``); the factory then
    receives values converted to that wrapped form. An entry already present
    for the same canonical type is replaced in place.

    Examples
    --------
    >>> options = apply_options([flag_type(complex, lambda value: value)])
    >>> list(options.flag_types) == [complex]
    True
    """

    def _apply(options: Options) -> Options:
        registry = dict(options.flag_types)
        registry[shape_of(annotation).base] = AdapterSpec(annotation, factory)
        return replace(options, flag_types=MappingProxyType(registry))

    return _apply


def apply_options(instructions: Iterable[Option], base: Options | None = None) -> Options:
    """Fold *instructions* over *base* (a fresh :class:`Options` when omitted)."""

    options = base if base is not None else Options()
    for instruction in instructions:
        options = instruction(options)
    return options


def flag_value_for(value: Any, annotation: Any, options: Options) -> FlagValue | None:
    """Build the adapter registered for *annotation*'s canonical type, seeded with *value*.

    Returns ``None`` when nothing is registered; the caller decides whether
    that is an error.
    """

    spec = options.flag_types.get(shape_of(annotation).base)
    if spec is None:
        return None
    return spec.factory(convert_value_to(value, annotation, spec.value_type))
