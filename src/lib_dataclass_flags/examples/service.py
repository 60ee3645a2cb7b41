"""Sample configuration dataclasses.

``ServiceOptions`` is the default target of the CLI; it covers optional,
duration and list fields plus nested dataclasses reached without tags.
``ChoiceOptions`` shows a caller-supplied adapter for an :class:`enum.Enum`
used directly, behind a :class:`~lib_dataclass_flags.domain.types.Ref` and
inside lists.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Optional

from ..application.options import flag_type
from ..domain.types import Ref, UInt32


@dataclass
class TLSOptions:
    enabled: bool = field(default=False, metadata={"flag": "tls"})
    cert: str = field(default="", metadata={"flag": "tls-cert"})


@dataclass
class ListenOptions:
    host: str = field(default="127.0.0.1", metadata={"flag": "host"})
    port: UInt32 = field(default=UInt32(8080), metadata={"flag": "port"})
    tls: Optional[TLSOptions] = None


@dataclass
class ServiceOptions:
    """Options of a small network service.

    Examples
    --------
    >>> from lib_dataclass_flags import parse_into
    >>> opts = parse_into(ServiceOptions(), ["--msg=my message", "--elapsed=1h15m", "--values=100,15,20"])
    >>> opts.msg, opts.elapsed, opts.values
    ('my message', datetime.timedelta(seconds=4500), [100, 15, 20])
    """

    msg: Optional[str] = field(default=None, metadata={"flag": "msg"})
    elapsed: timedelta = field(default=timedelta(seconds=30), metadata={"flag": "elapsed"})
    values: list[int] = field(default_factory=list, metadata={"flag": "values"})
    listen: ListenOptions = field(default_factory=ListenOptions)
    notes: str = ""
    _secret: str = ""


class Choice(enum.Enum):
    A = "ChoiceA"
    B = "ChoiceB"
    C = "ChoiceC"


class ChoiceValue:
    """Adapter parsing :class:`Choice` members by their value text."""

    def __init__(self, choice: Choice) -> None:
        self.choice = choice

    def set(self, text: str) -> None:
        try:
            self.choice = Choice(text)
        except ValueError:
            raise ValueError(f'invalid choice: "{text}"') from None

    def get(self) -> Choice:
        return self.choice

    def __str__(self) -> str:
        return str(self.choice.value)


choice_flag_type = flag_type(Choice, ChoiceValue)
"""Option registering :class:`ChoiceValue` for every ``Choice`` field."""


@dataclass
class ChoiceOptions:
    first: Choice = field(default=Choice.A, metadata={"flag": "first"})
    second: Optional[Ref[Choice]] = field(default=None, metadata={"flag": "second"})
    extra: list[Choice] = field(default_factory=list, metadata={"flag": "extra"})
    extra_refs: list[Ref[Choice]] = field(default_factory=list, metadata={"flag": "extraextra"})
