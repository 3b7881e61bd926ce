"""Tests for the shell CLI command and UdpShell.

CLI tests only run lines that never open a socket; socket behaviour is
covered with the in-memory transport.
"""

from __future__ import annotations

import asyncio
import json

import pytest
from click.testing import CliRunner

from tests.conftest import FakeTransport
from udpctl.cli import cli
from udpctl.config.settings import UdpSettings
from udpctl.output.console import create_console, get_output
from udpctl.shell import UdpShell


@pytest.mark.usefixtures("_isolated_config")
class TestShellCommand:
    def test_help_line(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["shell", "-e", "help"])
        assert result.exit_code == 0
        assert "linksecurity" in result.output
        assert "OK: help" in result.output

    def test_linksecurity_round_trip(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["shell", "-e", "linksecurity", "-e", "linksecurity disable", "-e", "linksecurity"]
        )
        assert result.exit_code == 0
        assert result.output.index("Enabled") < result.output.index("Disabled")

    def test_unknown_command_exits_nonzero(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["shell", "-e", "BIND ::1 5000"])
        assert result.exit_code == 1
        assert "INVALID_COMMAND" in result.output

    def test_send_without_open_is_transport_failure(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["shell", "-e", "send ::1 5000 hi"])
        assert result.exit_code == 1
        assert "TRANSPORT_FAILURE" in result.output

    def test_json_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "shell", "-e", "send"])
        assert result.exit_code == 1
        data = json.loads(result.output.strip().splitlines()[-1])
        assert data["ok"] is False
        assert data["error"]["code"] == "INVALID_ARGS"

    def test_unbalanced_quotes(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["shell", "-e", 'send "oops'])
        assert result.exit_code == 1
        assert "INVALID_ARGS" in result.output

    def test_interactive_until_exit(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["shell"], input="help\n\nexit\nhelp\n")
        assert result.exit_code == 0
        assert result.output.count("OK: help") == 1

    def test_interactive_until_eof(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["shell"], input="linksecurity\n")
        assert result.exit_code == 0
        assert "Enabled" in result.output

    def test_examples(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["shell", "--examples"])
        assert result.exit_code == 0
        assert "send -s 5" in result.output


class TestUdpShell:
    def _run(self, lines: list[str], transport: FakeTransport, **settings_kwargs: object) -> tuple[int, str, str]:
        out = create_console(no_color=True)
        err = create_console(no_color=True)

        async def scenario() -> int:
            shell = UdpShell(
                UdpSettings.from_cli(config_path="/nonexistent/udpctl.toml", **settings_kwargs),
                console=out,
                err_console=err,
                transport=transport,
            )
            try:
                failures = await shell.run_script(lines)
                if transport.callback is not None:
                    transport.deliver(b"reply", "fe80::1", 1234)
                return failures
            finally:
                shell.shutdown()

        failures = asyncio.run(scenario())
        return failures, get_output(out), get_output(err)

    def test_end_to_end(self, transport: FakeTransport) -> None:
        failures, out, err = self._run(["open", "connect fe80::1 1234", "send -s 5"], transport)
        assert failures == 0
        assert err == ""
        assert transport.sent[0].payload == b"01234"
        assert "5 bytes from fe80::1 1234 reply" in out
        assert transport.close_calls == 1

    def test_failures_counted(self, transport: FakeTransport) -> None:
        failures, _out, err = self._run(["open", "open", "bnd"], transport)
        assert failures == 2
        assert "ALREADY_OPEN" in err
        assert "INVALID_COMMAND" in err

    def test_blank_lines_skipped(self, transport: FakeTransport) -> None:
        failures, out, _err = self._run(["", "   "], transport)
        assert failures == 0
        assert out == ""

    def test_quiet(self, transport: FakeTransport) -> None:
        _failures, out, _err = self._run(["send ::1 9 hi"], transport, quiet=True)
        assert out.strip() == "OK: send"
