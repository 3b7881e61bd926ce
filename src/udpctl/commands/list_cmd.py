"""Command: list the interpreter's command table."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from udpctl.commands._base import UdpCommand

if TYPE_CHECKING:
    from udpctl.commands._context import AppContext


@click.command(
    "commands",
    cls=UdpCommand,
    examples="""\
        udpctl commands
        udpctl --json commands""",
)
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List interpreter commands in table order."""
    from udpctl.services.interpreter import command_names
    from udpctl.services.result import ServiceResult

    names = command_names()
    if app.settings.json_output:
        app.emit(ServiceResult(ok=True, op="commands", data={"commands": names}))
        return
    for name in names:
        click.echo(name)
