"""Rich Console factory, theme, and the console-backed output sink.

Shell output goes to a real terminal Console; tests and formatting use a
Console backed by a StringIO buffer. In non-TTY environments (tests,
pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO
from typing import TextIO

from rich.console import Console
from rich.theme import Theme

UDP_THEME = Theme(
    {
        "udp.ok": "bold green",
        "udp.error": "bold red",
        "udp.op": "bold cyan",
        "udp.key": "dim",
        "udp.rx": "magenta",
    }
)


def create_console(
    *,
    file: TextIO | None = None,
    no_color: bool = False,
    width: int | None = None,
) -> Console:
    """Create a Console writing to *file* (a fresh StringIO when omitted).

    Args:
        file: Destination stream, e.g. ``sys.stdout`` for the shell.
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=file if file is not None else StringIO(),
        theme=UDP_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


class ConsoleSink:
    """OutputSink that prints each line to a Rich Console, verbatim."""

    def __init__(self, console: Console, style: str | None = None) -> None:
        self._console = console
        self._style = style

    def line(self, text: str) -> None:
        self._console.print(text, style=self._style, markup=False, highlight=False, soft_wrap=True)
