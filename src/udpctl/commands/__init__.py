"""Subcommand modules for udpctl.

Provides register_commands() which uses deferred imports to keep
``udpctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register standalone commands on the root CLI group."""
    from udpctl.commands.list_cmd import list_cmd
    from udpctl.commands.shell import shell

    cli.add_command(shell)
    cli.add_command(list_cmd)
