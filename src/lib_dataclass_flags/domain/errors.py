"""Domain-level exception hierarchy.

Purpose
-------
Expose the stable error taxonomy shared by the registrar, the loader, the
value adapters, and consuming applications. The hierarchy lives in the domain
layer so every outer layer can raise and catch it without import cycles.

Contents
--------
* :class:`FlagBindingError` – umbrella base class carrying the field path.
* :class:`NotAStructError` / :class:`NotSettableError` – the root value is not
  a (mutable) dataclass.
* :class:`NoExportedFieldsError` – a dataclass exposes no public fields.
* :class:`NoAdapterError` – no flag-value adapter matches a field type.
* :class:`UninitializedOptionalError` – a ``None`` optional cannot seed a flag.
* :class:`TypeMismatchError` – stored flag and destination field disagree.
* :class:`FlagNotRegisteredError` – load found no flag for a computed name.
* :class:`ConversionError` / :class:`NumericRangeError` – incompatible types
  or malformed/overflowing literals.
* :class:`FlagParseError` / :class:`FlagRedefinedError` – flag set failures.

System Role
-----------
Every recursion level of the registrar and the loader re-raises failures via
:meth:`FlagBindingError.within`, so the outermost error names the complete
field path while keeping the raised class catchable.
"""

from __future__ import annotations


class FlagBindingError(Exception):
    """Base type for all exceptions emitted by ``lib_dataclass_flags``.

    Why
    ----
    Provide a single catch-all type for consumers that do not need fine-grained
    handling.

    What
    ----
    Stores the message plus ``field_path``: the dataclass field names, outermost
    first, the error travelled through before reaching the caller.

    Examples
    --------
    >>> error = NoAdapterError("no flag factory registered for complex")
    >>> wrapped = error.within("register", "Options", "ratio")
    >>> str(wrapped)
    'unable to register flag for field Options.ratio: no flag factory registered for complex'
    >>> type(wrapped).__name__, wrapped.field_path
    ('NoAdapterError', ('ratio',))
    """

    def __init__(self, message: str, *, field_path: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.field_path = field_path

    def within(self, action: str, owner: str, field: str) -> FlagBindingError:
        """Return a same-class copy annotated with the enclosing ``owner.field``."""

        return type(self)(
            f"unable to {action} flag for field {owner}.{field}: {self}",
            field_path=(field, *self.field_path),
        )


class NotAStructError(FlagBindingError):
    """Raised when the root value handed to register/load is not a dataclass."""


class NotSettableError(NotAStructError):
    """Raised when a load destination is a frozen dataclass and cannot be assigned."""


class NoExportedFieldsError(FlagBindingError):
    """Raised when a walked dataclass exposes no public (non-underscore) fields.

    Why
    ----
    An untagged nested dataclass without public fields can never contribute a
    flag; silently skipping it would hide a misconfigured template.
    """


class NoAdapterError(FlagBindingError):
    """Raised when neither the registry nor the list path can adapt a tagged field."""


class UninitializedOptionalError(FlagBindingError):
    """Raised when a ``None`` optional must be dereferenced but its type has no zero value."""


class TypeMismatchError(FlagBindingError):
    """Raised when the registered flag kind does not fit the destination field."""


class FlagNotRegisteredError(FlagBindingError):
    """Signals that load computed a flag name that registration never produced.

    Typical Sources
    ---------------
    Register and load called with different tag names or prefixes.
    """


class ConversionError(FlagBindingError, ValueError):
    """Raised for incompatible base types or malformed textual input.

    Subclasses :class:`ValueError` as well so callers treating bad input
    generically keep working.
    """


class NumericRangeError(ConversionError):
    """Raised when a numeric literal parses but overflows the declared width."""


class FlagParseError(FlagBindingError):
    """Raised by a flag set for argument-level problems (unknown flag, missing value)."""


class FlagRedefinedError(FlagBindingError):
    """Raised when a flag name is registered twice on the same flag set."""


class UnresolvedAnnotationError(FlagBindingError):
    """Raised when a dataclass's string annotations cannot be evaluated.

    Typical Sources
    ---------------
    Dataclasses declared inside a function under postponed annotations that
    refer to other local classes.
    """
