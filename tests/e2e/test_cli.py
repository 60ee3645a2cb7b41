"""End-to-end CLI coverage for the ``flags`` and ``parse`` commands.

These tests drive the Click group directly through ``CliRunner`` and the
``main`` entry point so exit-code handling via ``lib_cli_exit_tools`` is
exercised as well.
"""

from __future__ import annotations

import json

import lib_cli_exit_tools
from click.testing import CliRunner

from lib_dataclass_flags import FlagParseError
from lib_dataclass_flags import cli


def _runner() -> CliRunner:
    """Return a fresh CLI runner so each test starts from a clean state."""

    return CliRunner()


def test_cli_flags_lists_default_target() -> None:
    """`cli flags` should describe every flag of the sample service options."""

    result = _runner().invoke(cli.cli, ["flags"])
    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert [entry["name"] for entry in payload] == [
        "elapsed",
        "host",
        "msg",
        "port",
        "tls",
        "tls-cert",
        "values",
    ]
    by_name = {entry["name"]: entry for entry in payload}
    assert by_name["elapsed"]["default"] == "30s"
    assert by_name["port"] == {"name": "port", "default": "8080", "usage": "Set ListenOptions.port"}


def test_cli_flags_honours_prefix() -> None:
    result = _runner().invoke(cli.cli, ["flags", "--prefix", "svc-"])
    assert result.exit_code == 0
    assert all(entry["name"].startswith("svc-") for entry in json.loads(result.output))


def test_cli_flags_with_other_tag_finds_nothing() -> None:
    """A tag key no field uses leaves only untagged fields, which are skipped."""

    result = _runner().invoke(cli.cli, ["flags", "--tag", "cli"])
    assert result.exit_code == 0
    assert json.loads(result.output) == []


def test_cli_parse_prints_loaded_config() -> None:
    """`cli parse` should register, parse and load, rendering durations in flag form."""

    result = _runner().invoke(
        cli.cli,
        ["parse", "--", "--msg=my message", "--elapsed=1h15m", "--values=100,15,20", "--tls", "leftover"],
    )
    assert result.exit_code == 0
    payload = json.loads(result.output)
    config = payload["config"]
    assert config["msg"] == "my message"
    assert config["elapsed"] == "1h15m0s"
    assert config["values"] == [100, 15, 20]
    assert config["listen"]["tls"] == {"enabled": True, "cert": ""}
    assert "_secret" not in config
    assert payload["args"] == ["leftover"]


def test_cli_parse_with_custom_target() -> None:
    result = _runner().invoke(
        cli.cli,
        ["parse", "--target", "lib_dataclass_flags.examples:TLSOptions", "--", "--tls-cert=/tmp/c.pem"],
    )
    assert result.exit_code == 0
    assert json.loads(result.output)["config"] == {"enabled": False, "cert": "/tmp/c.pem"}


def test_cli_parse_surfaces_library_errors() -> None:
    result = _runner().invoke(cli.cli, ["parse", "--", "--nope=1"])
    assert result.exit_code != 0
    assert isinstance(result.exception, FlagParseError)


def test_cli_rejects_malformed_target() -> None:
    result = _runner().invoke(cli.cli, ["flags", "--target", "no-colon"])
    assert result.exit_code == 2


def test_cli_rejects_non_dataclass_target() -> None:
    result = _runner().invoke(cli.cli, ["flags", "--target", "lib_dataclass_flags.examples:Choice"])
    assert result.exit_code == 2


def test_main_returns_exit_code_on_failure() -> None:
    exit_code = cli.main(["parse", "--", "--port=99999999999"])
    assert exit_code != 0


def test_main_succeeds_for_info() -> None:
    assert cli.main(["info"]) == 0


def test_cli_main_restores_traceback_flag() -> None:
    """`cli main` should restore lib_cli_exit_tools tracebacks after execution."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    exit_code = cli.main(["--traceback", "flags"], restore_traceback=True)
    assert exit_code == 0
    assert getattr(lib_cli_exit_tools.config, "traceback", False) == previous_traceback
