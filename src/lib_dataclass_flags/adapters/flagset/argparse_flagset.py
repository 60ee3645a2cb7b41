"""Flag set adapter built on :mod:`argparse`.

Purpose
-------
Implement the :class:`~lib_dataclass_flags.application.ports.FlagSet` port
with the standard library parser so registered values receive their text
straight from the command line.

Key behaviours
--------------
* Each flag answers to ``-name`` and ``--name``; values may be attached with
  ``=`` or given as the next argument.
* Presence flags (``is_bool_flag()``) accept the bare form and an explicit
  ``--name=false``.
* Values are handed to ``FlagValue.set`` on every occurrence, so repeated
  flags overwrite.
* Failures from ``set`` are re-raised with the same class and a message of the
  form ``invalid value "<text>" for flag -<name>: <cause>``.
* Unknown or abbreviated dash-prefixed arguments raise :class:`FlagParseError`
  (logged through ``log_error``). Everything else left over lands in
  :attr:`ArgparseFlagSet.args`.
"""

from __future__ import annotations

import argparse
from typing import Any, Iterator, Sequence

from ...application.ports import BoolFlag, Flag, FlagValue
from ...domain.errors import ConversionError, FlagBindingError, FlagParseError, FlagRedefinedError
from ...observability import log_debug, log_error


class _SetFlagValue(argparse.Action):
    """Argparse action forwarding the raw text to the bound flag value."""

    def __init__(self, option_strings: Sequence[str], dest: str, *, flag: Flag, **kwargs: Any) -> None:
        super().__init__(option_strings, dest, **kwargs)
        self.flag = flag

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Any,
        option_string: str | None = None,
    ) -> None:
        text = str(values)
        try:
            self.flag.value.set(text)
        except FlagBindingError as exc:
            raise type(exc)(f'invalid value "{text}" for flag -{self.flag.name}: {exc}') from exc
        except ValueError as exc:
            raise ConversionError(f'invalid value "{text}" for flag -{self.flag.name}: {exc}') from exc


class ArgparseFlagSet:
    """Named flag registry whose :meth:`parse` step is delegated to argparse.

    Examples
    --------
    >>> from lib_dataclass_flags.adapters.values.scalars import BoolValue, IntValue
    >>> flags = ArgparseFlagSet("demo")
    >>> flags.var(IntValue(1), "workers", "Set Options.workers")
    >>> flags.var(BoolValue(False), "verbose", "Set Options.verbose")
    >>> flags.parse(["--workers=4", "--verbose", "input.txt"])
    >>> flags.lookup("workers").value.get(), flags.lookup("verbose").value.get(), flags.args
    (4, True, ['input.txt'])
    """

    def __init__(self, name: str = "flags") -> None:
        self.name = name
        self.args: list[str] = []
        self.parsed = False
        self._flags: dict[str, Flag] = {}
        self._presence: set[str] = set()
        self._parser = argparse.ArgumentParser(
            prog=name,
            add_help=False,
            allow_abbrev=False,
            exit_on_error=False,
        )

    def var(self, value: FlagValue, name: str, usage: str) -> None:
        """Register *value* under *name*; a second registration of a name is an error."""

        if name in self._flags:
            raise FlagRedefinedError(f"{self.name} flag redefined: {name}")
        flag = Flag(name=name, usage=usage, value=value, default=str(value))
        option_strings = (f"-{name}", f"--{name}")
        self._parser.add_argument(
            *option_strings,
            dest=f"flag_{len(self._flags)}",
            action=_SetFlagValue,
            flag=flag,
            default=argparse.SUPPRESS,
            help=usage,
            metavar="VALUE",
        )
        if isinstance(value, BoolFlag) and value.is_bool_flag():
            self._presence.update(option_strings)
        self._flags[name] = flag

    def lookup(self, name: str) -> Flag | None:
        return self._flags.get(name)

    def parse(self, arguments: Sequence[str]) -> None:
        """Parse *arguments*, updating the registered values in place.

        Raises
        ------
        FlagParseError
            For undefined (including abbreviated) flags or flags missing their value.
        ConversionError
            (or a subclass) when a value rejects its text.
        """

        arguments = list(arguments)
        head, tail = arguments, []
        if "--" in arguments:
            cut = arguments.index("--")
            head, tail = arguments[:cut], arguments[cut + 1 :]
        try:
            self._reject_undefined(head)
            try:
                _, remaining = self._parser.parse_known_args(self._explicit_presence(head))
            except argparse.ArgumentError as exc:
                raise FlagParseError(str(exc)) from exc
            for argument in remaining:
                if argument.startswith("-") and argument != "-":
                    raise FlagParseError(f"flag provided but not defined: {argument.split('=', 1)[0]}")
        except FlagBindingError as exc:
            log_error("flag_set_parse_failed", flag_set=self.name, error=str(exc))
            raise
        self.args = [*remaining, *tail]
        self.parsed = True
        log_debug("flag_set_parsed", flag_set=self.name, arguments=len(arguments), remaining=len(self.args))

    def _reject_undefined(self, arguments: Sequence[str]) -> None:
        """Raise for dash-prefixed arguments naming no registered flag.

        argparse still resolves single-dash prefixes of registered names, so
        names are matched exactly here before it sees them. An argument
        following a detached valued flag is that flag's value.
        """

        expects_value = False
        for argument in arguments:
            if expects_value:
                expects_value = False
                continue
            if not argument.startswith("-") or argument == "-":
                continue
            spelled = argument.split("=", 1)[0]
            name = spelled[2:] if spelled.startswith("--") else spelled[1:]
            if name not in self._flags:
                raise FlagParseError(f"flag provided but not defined: {spelled}")
            expects_value = "=" not in argument and argument not in self._presence

    def _explicit_presence(self, arguments: Sequence[str]) -> list[str]:
        """Spell bare presence flags as ``--name=true`` so they never consume the next argument."""

        return [f"{argument}=true" if argument in self._presence else argument for argument in arguments]

    def __iter__(self) -> Iterator[Flag]:
        return iter(sorted(self._flags.values(), key=lambda flag: flag.name))

    def __len__(self) -> int:
        return len(self._flags)

    def __contains__(self, name: object) -> bool:
        return name in self._flags
