"""Root CLI group for udpctl with global flags and command registration."""

from __future__ import annotations

import click

from udpctl import __version__
from udpctl.commands import register_commands
from udpctl.commands._base import UdpGroup
from udpctl.commands._context import AppContext
from udpctl.config.settings import UdpSettings


@click.group(
    cls=UdpGroup,
    invoke_without_command=True,
    examples="""\
        udpctl shell
        udpctl -v shell -e open -e "bind :: 5000" --wait 30
        udpctl --json shell -e "send ::1 5000 hello"
        udpctl commands""",
)
@click.version_option(version=__version__, prog_name="udpctl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging to stderr.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """udpctl — interactive UDP socket test endpoint."""
    ctx.ensure_object(dict)
    settings = UdpSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
