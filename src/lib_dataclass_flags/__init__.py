"""Public package surface for binding command-line flags to dataclass fields.

Declare configuration once as a dataclass whose fields carry
``metadata={"flag": "name"}``; :func:`register_flags` turns it into flags and
:func:`load_from_flags` copies the parsed values back. The names exported
here are the stable API; submodules are implementation detail.
"""

from __future__ import annotations

from .adapters.flagset.argparse_flagset import ArgparseFlagSet
from .application.collection import ListValue
from .application.options import AdapterSpec, Option, Options, flag_prefix, flag_type, tag_name
from .application.ports import BoolFlag, Flag, FlagSet, FlagValue
from .core import build_options, load_from_flags, parse_into, register_flags
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
from .domain.types import Float32, Int32, Int64, Ref, UInt, UInt32, UInt64
from .observability import get_logger

__all__ = [
    "AdapterSpec",
    "ArgparseFlagSet",
    "BoolFlag",
    "ConversionError",
    "Flag",
    "FlagBindingError",
    "FlagNotRegisteredError",
    "FlagParseError",
    "FlagRedefinedError",
    "FlagSet",
    "FlagValue",
    "Float32",
    "Int32",
    "Int64",
    "ListValue",
    "NoAdapterError",
    "NoExportedFieldsError",
    "NotAStructError",
    "NotSettableError",
    "NumericRangeError",
    "Option",
    "Options",
    "Ref",
    "TypeMismatchError",
    "UInt",
    "UInt32",
    "UInt64",
    "UninitializedOptionalError",
    "UnresolvedAnnotationError",
    "build_options",
    "flag_prefix",
    "flag_type",
    "get_logger",
    "load_from_flags",
    "parse_into",
    "register_flags",
    "tag_name",
]
