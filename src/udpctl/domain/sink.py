"""Line-oriented output sink shared by the interpreter and receive path."""

from __future__ import annotations

from typing import Protocol


class OutputSink(Protocol):
    def line(self, text: str) -> None: ...


class ListSink:
    """Collects emitted lines in memory."""

    def __init__(self) -> None:
        self.lines: list[str] = []

    def line(self, text: str) -> None:
        self.lines.append(text)
