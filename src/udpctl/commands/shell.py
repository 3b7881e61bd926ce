"""Command: run the UDP interpreter, interactively or from ``-e`` lines."""

from __future__ import annotations

import asyncio
import sys
from typing import TYPE_CHECKING

import click

from udpctl.commands._base import UdpCommand

if TYPE_CHECKING:
    from udpctl.commands._context import AppContext


@click.command(
    cls=UdpCommand,
    examples="""\
        # Interactive prompt
        udpctl shell

        # Open, connect and send a 5-byte filler datagram, then listen 2s
        udpctl shell -e open -e "connect fe80::1 1234" -e "send -s 5" --wait 2

        # Explicit destination, hex payload
        udpctl shell -e open -e "send ::1 5000 -x 48656c6c6f"

        # Disable link security for subsequent sends
        udpctl shell -e "linksecurity disable" -e linksecurity""",
)
@click.option(
    "-e",
    "--execute",
    "lines",
    multiple=True,
    help="Run a command line non-interactively (repeatable).",
)
@click.option(
    "--wait",
    type=click.FloatRange(min=0.0),
    default=0.0,
    show_default=True,
    help="Seconds to keep receiving after the last -e line.",
)
@click.pass_obj
def shell(app: AppContext, lines: tuple[str, ...], wait: float) -> None:
    """Open the UDP interpreter (help, bind, connect, close, open, send, linksecurity)."""
    from udpctl.config.logging import bind_shell_context
    from udpctl.output.console import create_console
    from udpctl.shell import UdpShell

    bind_shell_context(mode="script" if lines else "interactive")

    async def _main() -> int:
        udp_shell = UdpShell(
            app.settings,
            console=create_console(file=sys.stdout),
            err_console=create_console(file=sys.stderr),
        )
        try:
            if lines:
                return await udp_shell.run_script(lines, wait=wait)
            await udp_shell.run_interactive()
            return 0
        finally:
            udp_shell.shutdown()

    failures = asyncio.run(_main())
    if failures:
        raise SystemExit(1)
