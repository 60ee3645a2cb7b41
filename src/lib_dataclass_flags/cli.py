"""CLI adapter for ``lib_dataclass_flags`` built on ``lib_cli_exit_tools``.

Purpose
-------
Let developers inspect which flags a configuration dataclass produces and try
argument lists against it without writing Python code.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :func:`cli` – root command that wires global traceback handling into
  ``lib_cli_exit_tools``.
* :func:`cli_info` – prints distribution metadata for quick diagnostics.
* :func:`cli_flags` – lists the flags registered for a dataclass as JSON.
* :func:`cli_parse` – registers, parses and loads, printing the result as JSON.
* :func:`main` – entry point used by ``console_scripts`` registration.

System Role
-----------
The CLI lives in the outermost layer. It calls the composition root
(:func:`register_flags` / :func:`load_from_flags`) and never reaches into the
walkers directly. ``lib_cli_exit_tools`` centralises the exit code strategy so
library errors surface with consistent exit codes.
"""

from __future__ import annotations

import dataclasses
import enum
import importlib
import json
import sys
from datetime import timedelta
from importlib import metadata
from typing import Any, Final, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click

from .adapters.flagset.argparse_flagset import ArgparseFlagSet
from .application.options import Option, flag_prefix, tag_name
from .core import load_from_flags, register_flags
from .domain.durations import format_duration
from .domain.fields import is_struct_type
from .domain.types import Ref

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000

DEFAULT_TARGET: Final[str] = "lib_dataclass_flags.examples:ServiceOptions"


def _resolve_version() -> str:
    """Return the installed package version, ``"0.0.0"`` when not installed."""

    try:
        return metadata.version("lib_dataclass_flags")
    except metadata.PackageNotFoundError:
        return "0.0.0"


@click.group(
    help="Bind command-line flags to dataclass fields",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=False,
)
@click.version_option(
    version=_resolve_version(),
    prog_name="lib_dataclass_flags",
    message="lib_dataclass_flags version %(version)s",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool) -> None:
    """Root command configuring traceback handling for all subcommands.

    Side Effects
        Mutates ``lib_cli_exit_tools.config.traceback`` and
        ``lib_cli_exit_tools.config.traceback_force_color``.
    """

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print basic distribution metadata so users can confirm installation."""

    try:
        meta = metadata.metadata("lib_dataclass_flags")
    except metadata.PackageNotFoundError:
        click.echo("lib_dataclass_flags (metadata unavailable)")
        return
    click.echo(f"Info for {meta.get('Name', 'lib_dataclass_flags')}:")
    click.echo(f"  Version         : {meta.get('Version', _resolve_version())}")
    click.echo(f"  Requires-Python : {meta.get('Requires-Python', '>=3.10')}")
    summary = meta.get("Summary")
    if summary:
        click.echo(f"  Summary         : {summary}")


def _binding_options(func: Any) -> Any:
    """Attach the ``--target``/``--tag``/``--prefix`` options shared by both commands."""

    func = click.option("--prefix", default="", help="Prefix prepended to every flag name")(func)
    func = click.option("--tag", default="flag", show_default=True, help="Field metadata key holding flag names")(func)
    func = click.option(
        "--target",
        default=DEFAULT_TARGET,
        show_default=True,
        help="Dataclass to bind, as module:QualifiedName",
    )(func)
    return func


@cli.command("flags", context_settings=CLICK_CONTEXT_SETTINGS)
@_binding_options
@click.option("--indent", type=int, default=2, show_default=True, help="JSON indent size")
def cli_flags(target: str, tag: str, prefix: str, indent: int) -> None:
    """List the flags registered for TARGET as JSON.

    Examples
    --------
    >>> from click.testing import CliRunner
    >>> result = CliRunner().invoke(cli, ["flags", "--indent", "0"])
    >>> json.loads(result.output)[0]["name"]
    'elapsed'
    """

    flags = ArgparseFlagSet("flags")
    register_flags(flags, _import_target(target), *_options(tag, prefix))
    payload = [{"name": flag.name, "default": flag.default, "usage": flag.usage} for flag in flags]
    click.echo(json.dumps(payload, indent=indent))


@cli.command(
    "parse",
    context_settings={**CLICK_CONTEXT_SETTINGS, "ignore_unknown_options": True},
)
@_binding_options
@click.option("--indent", type=int, default=None, help="Pretty-print JSON output with the provided indent size")
@click.argument("arguments", nargs=-1, type=click.UNPROCESSED)
def cli_parse(target: str, tag: str, prefix: str, indent: Optional[int], arguments: Sequence[str]) -> None:
    """Parse ARGUMENTS against TARGET's flags and print the loaded dataclass.

    Place ``--`` before the arguments so they are never read as options of
    this command. Positional leftovers are reported under ``"args"``.
    """

    options = _options(tag, prefix)
    template = _import_target(target)
    flags = ArgparseFlagSet(template.__name__.lower())
    register_flags(flags, template, *options)
    flags.parse(list(arguments))
    loaded = load_from_flags(flags, template, *options)
    payload = {"config": _exported_dict(loaded), "args": flags.args}
    click.echo(json.dumps(payload, indent=indent, default=_json_default))


def _options(tag: str, prefix: str) -> tuple[Option, ...]:
    return (tag_name(tag), flag_prefix(prefix))


def _import_target(target: str) -> type:
    """Resolve ``module:QualifiedName`` to a dataclass class."""

    module_name, _, qualname = target.partition(":")
    if not module_name or not qualname:
        raise click.BadParameter("Target must look like module:ClassName.", param_hint="--target")
    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as exc:
        raise click.BadParameter(f"Cannot import {module_name}: {exc}", param_hint="--target") from exc
    for part in qualname.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise click.BadParameter(f"{module_name} has no attribute {qualname}", param_hint="--target") from exc
    if not is_struct_type(obj):
        raise click.BadParameter(f"{target} is not a dataclass", param_hint="--target")
    return obj


def _exported_dict(instance: Any) -> dict[str, Any]:
    return dataclasses.asdict(instance, dict_factory=lambda items: {k: v for k, v in items if not k.startswith("_")})


def _json_default(value: Any) -> Any:
    """Render flag-only value kinds: durations in flag text, ``Ref`` cells unwrapped."""

    if isinstance(value, timedelta):
        return format_duration(value)
    if isinstance(value, Ref):
        return value.value
    if isinstance(value, enum.Enum):
        return value.value
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI with shared exit handling and return the exit code."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name="lib_dataclass_flags",
            )
        except BaseException as exc:  # noqa: BLE001 - funnel through shared printers
            lib_cli_exit_tools.print_exception_message(
                trace_back=lib_cli_exit_tools.config.traceback,
                length_limit=(
                    _TRACEBACK_VERBOSE_LIMIT if lib_cli_exit_tools.config.traceback else _TRACEBACK_SUMMARY_LIMIT
                ),
            )
            return lib_cli_exit_tools.get_system_exit_code(exc)
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


if __name__ == "__main__":  # pragma: no cover - exercised via console entry point
    raise SystemExit(main(sys.argv[1:]))
