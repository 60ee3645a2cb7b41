"""Indirection resolver: canonical types, wrapping depth and depth conversion.

Purpose
-------
Describe every annotation as a canonical base plus the wrapping layers around
it, and move values between two annotations that share a base but differ in
wrapping. The registrar relies on this to hand adapters their concrete value;
the loader relies on it to write adapter results back into fields of any
depth.

Contents
--------
* :data:`OPTIONAL` / :data:`REF` – the two wrapping layer kinds.
* :class:`Shape` – ``(base, layers)`` view of an annotation.
* :func:`shape_of` – annotation to :class:`Shape`.
* :func:`describe_type` – readable type names for error messages.
* :func:`zero_value` – zero value for an annotation.
* :func:`deref_fully` / :func:`is_fully_present` – strip layers from a value.
* :func:`wrap` – add layers around a base value.
* :func:`convert_value_to` – depth-polymorphic conversion.
* :func:`type_of_value` – infer an annotation from a runtime value.
* :func:`sequence_element_type` – element annotation of list types.

Layer kinds
-----------
``Optional[T]`` (or ``T | None``) stores the bare value or ``None``.
``Ref[T]`` stores a :class:`~lib_dataclass_flags.domain.types.Ref` cell or
``None``. Both count as one layer of depth.
"""

from __future__ import annotations

import collections.abc
import dataclasses
import enum
import types
from dataclasses import MISSING, dataclass
from datetime import timedelta
from typing import Any, Final, Union, get_args, get_origin

from .errors import ConversionError, UninitializedOptionalError
from .fields import field_table, is_struct_type
from .types import Ref

OPTIONAL: Final[str] = "optional"
REF: Final[str] = "ref"

_NONE_TYPE: Final[type] = type(None)
_UNION_ORIGINS: Final[tuple[Any, ...]] = (Union, types.UnionType)
_SEQUENCE_ORIGINS: Final[tuple[Any, ...]] = (
    list,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
)
_BUILTIN_ZEROS: Final[dict[Any, Any]] = {
    bool: False,
    int: 0,
    float: 0.0,
    str: "",
}


@dataclass(frozen=True)
class Shape:
    """Canonical view of an annotation.

    Attributes
    ----------
    base:
        Annotation with every wrapping layer removed; two annotations share a
        canonical type iff their bases are equal.
    layers:
        Wrapping kinds, outermost first.

    Examples
    --------
    >>> from typing import Optional
    >>> shape_of(Optional[Ref[int]])
    Shape(base=<class 'int'>, layers=('optional', 'ref'))
    """

    base: Any
    layers: tuple[str, ...] = ()

    @property
    def depth(self) -> int:
        return len(self.layers)


def shape_of(annotation: Any) -> Shape:
    """Split *annotation* into its base and wrapping layers.

    Unions other than ``X | None`` are left as the base; no adapter ever
    matches them.
    """

    layers: list[str] = []
    current = annotation
    while True:
        origin = get_origin(current)
        if origin in _UNION_ORIGINS:
            args = get_args(current)
            members = [arg for arg in args if arg is not _NONE_TYPE]
            if len(args) == 2 and len(members) == 1:
                layers.append(OPTIONAL)
                current = members[0]
                continue
            break
        if origin is Ref or current is Ref:
            layers.append(REF)
            args = get_args(current)
            current = args[0] if args else Any
            continue
        break
    return Shape(current, tuple(layers))


def describe_type(annotation: Any) -> str:
    """Return a compact, readable name for *annotation*.

    Examples
    --------
    >>> from typing import Optional
    >>> describe_type(Optional[list[int]]), describe_type(Ref[str])
    ('Optional[list[int]]', 'Ref[str]')
    """

    if annotation is _NONE_TYPE:
        return "None"
    origin = get_origin(annotation)
    if origin in _UNION_ORIGINS:
        args = get_args(annotation)
        members = [arg for arg in args if arg is not _NONE_TYPE]
        if len(args) == 2 and len(members) == 1:
            return f"Optional[{describe_type(members[0])}]"
        return " | ".join(describe_type(arg) for arg in args)
    if origin is not None:
        args = get_args(annotation)
        name = describe_type(origin)
        if not args:
            return name
        return f"{name}[{', '.join(describe_type(arg) for arg in args)}]"
    name = getattr(annotation, "__qualname__", None) or getattr(annotation, "__name__", None)
    if isinstance(name, str) and name:
        return name
    return repr(annotation).replace("typing.", "")


def sequence_element_type(annotation: Any) -> Any | None:
    """Return the element annotation when *annotation* is a list type, else ``None``.

    Examples
    --------
    >>> sequence_element_type(list[str]), sequence_element_type(str)
    (<class 'str'>, None)
    """

    if annotation is list:
        return Any
    origin = get_origin(annotation)
    if origin not in _SEQUENCE_ORIGINS:
        return None
    args = get_args(annotation)
    return args[0] if args else Any


def zero_value(annotation: Any) -> Any:
    """Return the zero value of *annotation*.

    Why
    ----
    A ``None`` met while dereferencing must still produce a concrete seed for
    adapters and a concrete target for nested dataclasses.

    What
    ----
    ``None`` for wrapped annotations; builtin zeros for ``bool``/``int``/
    ``float``/``str``/``timedelta``/lists (``NewType`` aliases follow their
    supertype); dataclasses built from their defaults with zero values for the
    required fields; the first member of an ``Enum``; otherwise ``base()``.

    Raises
    ------
    UninitializedOptionalError
        When the type cannot be constructed without arguments.

    Examples
    --------
    >>> from typing import Optional
    >>> from lib_dataclass_flags.domain.types import Int32
    >>> zero_value(Optional[str]), zero_value(Int32), zero_value(list[int])
    (None, 0, [])
    """

    shape = shape_of(annotation)
    if shape.layers:
        return None
    base = shape.base
    supertype = getattr(base, "__supertype__", None)
    if supertype is not None:
        return zero_value(supertype)
    if base in _BUILTIN_ZEROS:
        return _BUILTIN_ZEROS[base]
    if base is timedelta:
        return timedelta(0)
    if sequence_element_type(base) is not None:
        return []
    if is_struct_type(base):
        return _zero_struct(base)
    if isinstance(base, type) and issubclass(base, enum.Enum):
        members = list(base)
        if members:
            return members[0]
        raise UninitializedOptionalError(f"enum {describe_type(base)} has no members to use as a zero value")
    if isinstance(base, type):
        try:
            return base()
        except TypeError as exc:
            raise UninitializedOptionalError(
                f"uninitialized optional: {describe_type(base)} has no zero value"
            ) from exc
    raise UninitializedOptionalError(f"uninitialized optional: {describe_type(base)} has no zero value")


def _zero_struct(struct_type: type) -> Any:
    """Instantiate *struct_type* supplying zero values for fields without defaults."""

    annotations = {slot.name: slot.annotation for slot in field_table(struct_type)}
    required = {
        item.name: zero_value(annotations[item.name])
        for item in dataclasses.fields(struct_type)
        if item.init and item.default is MISSING and item.default_factory is MISSING
    }
    return struct_type(**required)


def deref_fully(value: Any, annotation: Any) -> Any:
    """Strip every wrapping layer of *value* typed as *annotation*.

    A ``None`` at any layer yields the zero value of the base; unwrapped inputs
    are returned unchanged.

    Examples
    --------
    >>> from typing import Optional
    >>> deref_fully(Ref(Ref(5)), Ref[Ref[int]]), deref_fully(None, Optional[int])
    (5, 0)
    """

    shape = shape_of(annotation)
    for layer in shape.layers:
        if value is None:
            return zero_value(shape.base)
        value = _unwrap(value, layer)
    return value


def is_fully_present(value: Any, annotation: Any) -> bool:
    """Return ``False`` when any wrapping layer of *value* is ``None``."""

    for layer in shape_of(annotation).layers:
        if value is None:
            return False
        value = _unwrap(value, layer)
    return True


def wrap(value: Any, layers: tuple[str, ...]) -> Any:
    """Add *layers* (outermost first) around a base *value*."""

    for layer in reversed(layers):
        if layer == REF:
            value = Ref(value)
    return value


def convert_value_to(value: Any, source_type: Any, target_type: Any) -> Any:
    """Convert *value* typed as *source_type* into *target_type*.

    Why
    ----
    Adapters work on one representation while fields declare another; the two
    may only differ by wrapping depth.

    What
    ----
    * identical annotations: *value* is returned unchanged;
    * deeper target: inner layers are re-boxed, outer layers added;
    * shallower target: outer layers stripped, a ``None`` on the way yields
      ``zero_value(target_type)``;
    * equal depth, different kinds: re-boxed layer by layer.

    Raises
    ------
    ConversionError
        When the canonical bases differ; never coerces.

    Examples
    --------
    >>> from typing import Optional
    >>> convert_value_to(7, int, Ref[Ref[int]])
    Ref(Ref(7))
    >>> convert_value_to(Ref(None), Ref[Ref[int]], int)
    0
    >>> convert_value_to("7", str, int)
    Traceback (most recent call last):
    ...
    lib_dataclass_flags.domain.errors.ConversionError: cannot convert between str and int: differ by more than optional wrapping
    """

    if source_type == target_type:
        return value
    source = shape_of(source_type)
    target = shape_of(target_type)
    if source.base != target.base:
        raise ConversionError(
            f"cannot convert between {describe_type(source_type)} and {describe_type(target_type)}: "
            "differ by more than optional wrapping"
        )
    if source.depth < target.depth:
        extra = target.depth - source.depth
        inner = _rebox(value, source.layers, target.layers[extra:], target.base)
        return wrap(inner, target.layers[:extra])
    extra = source.depth - target.depth
    for layer in source.layers[:extra]:
        if value is None:
            return zero_value(target_type)
        value = _unwrap(value, layer)
    return _rebox(value, source.layers[extra:], target.layers, target.base)


def type_of_value(value: Any) -> Any:
    """Infer an annotation for a runtime *value* (``Ref`` cells are looked through).

    Examples
    --------
    >>> type_of_value(Ref(1.5))
    lib_dataclass_flags.domain.types.Ref[float]
    """

    if isinstance(value, Ref):
        return Ref[type_of_value(value.value)]  # type: ignore[misc]
    return type(value)


def _unwrap(value: Any, layer: str) -> Any:
    if layer == REF:
        if not isinstance(value, Ref):
            raise ConversionError(f"expected a Ref cell, got {describe_type(type(value))}")
        return value.value
    return value


def _rebox(value: Any, source_layers: tuple[str, ...], target_layers: tuple[str, ...], base: Any) -> Any:
    """Translate *value* between two equal-length layer stacks."""

    if source_layers == target_layers:
        return value
    if value is None:
        return None
    inner = _rebox(_unwrap(value, source_layers[0]), source_layers[1:], target_layers[1:], base)
    if target_layers[0] == REF:
        return Ref(inner)
    return inner
