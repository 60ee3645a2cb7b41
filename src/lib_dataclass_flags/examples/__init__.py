"""Sample dataclasses used by the CLI defaults, the doctests and the test-suite."""

from .service import Choice, ChoiceOptions, ChoiceValue, ListenOptions, ServiceOptions, TLSOptions, choice_flag_type

__all__ = [
    "Choice",
    "ChoiceOptions",
    "ChoiceValue",
    "ListenOptions",
    "ServiceOptions",
    "TLSOptions",
    "choice_flag_type",
]
