"""Application-layer ports describing adapter responsibilities.

Purpose
-------
Define the structural contracts the registrar and the loader depend on so
they can orchestrate behaviour without knowing concrete value adapters or the
flag parser in use.

Contents
--------
* :class:`FlagValue` – the mutable, name-bound unit that parses, formats and
  holds one configuration value.
* :class:`BoolFlag` – optional capability marking presence flags.
* :data:`AdapterFactory` – builds a :class:`FlagValue` around an initial value.
* :class:`Flag` – record stored by a flag set for each registered name.
* :class:`FlagSet` – registry of named flags plus the argument parsing step.

System Role
-----------
These protocols enforce Dependency Inversion (DIP). The default adapters in
``lib_dataclass_flags.adapters`` implement them; callers may plug their own
factories and flag sets.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterator, Protocol, Sequence, runtime_checkable


@runtime_checkable
class FlagValue(Protocol):
    """Parse, format and hold one flag value.

    Why
    ----
    The flag parser only ever talks text; fields want typed values. A
    ``FlagValue`` bridges both and is the only state mutated during parsing.

    Methods
    -------
    :meth:`set`
        Replace the stored value from text; raise ``ConversionError`` (or any
        ``ValueError``) on malformed text without changing the stored value.
    :meth:`get`
        Return the stored value.
    ``__str__``
        Return the stored value's textual form.

    Optional members
    ----------------
    ``is_bool_flag()``
        Return ``True`` when the flag may appear without a value.
    ``value_type``
        Annotation describing :meth:`get`'s result. When absent, the loader
        infers it from the returned value.
    """

    def set(self, text: str) -> None:
        """Parse *text* into the stored value."""

    def get(self) -> Any:
        """Return the stored value."""


@runtime_checkable
class BoolFlag(Protocol):
    """Capability for flags that accept the bare ``--name`` presence form."""

    def is_bool_flag(self) -> bool:
        """Return ``True`` when no explicit value is required."""


AdapterFactory = Callable[[Any], FlagValue]
"""Callable invoked with the initial value (already converted to the registered type)."""


@dataclass(slots=True)
class Flag:
    """A registered flag as kept by a :class:`FlagSet`.

    Attributes
    ----------
    name:
        Name without dashes.
    usage:
        Human readable description naming the owning type and field.
    value:
        The :class:`FlagValue` bound to the name.
    default:
        Text of the value at registration time.
    """

    name: str
    usage: str
    value: FlagValue
    default: str


@runtime_checkable
class FlagSet(Protocol):
    """Registry of named flags that also parses argument lists.

    Why
    ----
    Tokenising ``--name=value`` / ``--name value`` is not the binder's job; it
    only needs to register values by name and find them again after parsing.
    """

    args: list[str]

    def var(self, value: FlagValue, name: str, usage: str) -> None:
        """Register *value* under *name*."""

    def lookup(self, name: str) -> Flag | None:
        """Return the flag registered under *name* or ``None``."""

    def parse(self, arguments: Sequence[str]) -> None:
        """Feed *arguments* to the registered values."""

    def __iter__(self) -> Iterator[Flag]:
        """Iterate registered flags in name order."""
