"""Value type identities understood by the default adapter registry.

Purpose
-------
Python has a single ``int`` and a single ``float``; flags need distinct
identities for the fixed-width numeric kinds so the registry can pick the
right range check. The identities are :func:`typing.NewType` aliases: values
stay plain ``int``/``float`` at runtime while annotations carry the width.

Contents
--------
* ``Int32`` / ``Int64`` / ``UInt`` / ``UInt32`` / ``UInt64`` / ``Float32`` –
  fixed-width annotations. Plain ``int`` is a signed 64-bit value and plain
  ``float`` is double precision.
* :class:`Ref` – explicit pointer cell adding one wrapping layer.
"""

from __future__ import annotations

from typing import Any, Generic, NewType, TypeVar

Int32 = NewType("Int32", int)
Int64 = NewType("Int64", int)
UInt = NewType("UInt", int)
UInt32 = NewType("UInt32", int)
UInt64 = NewType("UInt64", int)
Float32 = NewType("Float32", float)

T = TypeVar("T")


class Ref(Generic[T]):
    """Mutable single-slot cell used as an explicit indirection layer.

    Why
    ----
    ``Optional[Optional[T]]`` collapses to ``Optional[T]``, so nesting depth
    beyond one needs a real box. ``Ref[T]`` fields hold either a ``Ref`` or
    ``None``; custom adapters can also share a ``Ref`` with the field they
    populate.

    Examples
    --------
    >>> cell = Ref(3)
    >>> cell.value = 4
    >>> cell == Ref(4), cell
    (True, Ref(4))
    """

    __slots__ = ("value",)

    def __init__(self, value: T) -> None:
        self.value = value

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Ref):
            return NotImplemented
        return self.value == other.value

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Ref({self.value!r})"
