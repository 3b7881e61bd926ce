"""Rendering of inbound datagrams, one output line each.

Line format::

    <length> bytes from <address> <port> <text>

``length`` is the full content length. At most ``max_length - 1`` bytes
are rendered; the text stops at the first NUL byte. Oversized datagrams
are truncated, never rejected.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from udpctl.domain.sink import OutputSink
    from udpctl.infrastructure.transport import ReceivedDatagram

DEFAULT_MAX_LENGTH = 1500


class ReceiveFormatter:
    """Receive callback that renders datagrams to an output sink.

    Holds no reference to the session; it only reads the datagram.
    """

    def __init__(self, output: OutputSink, max_length: int = DEFAULT_MAX_LENGTH) -> None:
        self._output = output
        self._max_length = max_length

    def __call__(self, datagram: ReceivedDatagram) -> None:
        self._output.line(self.render(datagram))

    def render(self, datagram: ReceivedDatagram) -> str:
        start = datagram.offset
        raw = datagram.payload[start : start + self._max_length - 1]
        text = raw.split(b"\0", 1)[0].decode("utf-8", errors="replace")
        return f"{datagram.length} bytes from {datagram.peer.address} {datagram.peer.port} {text}"
