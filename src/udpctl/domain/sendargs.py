"""Argument-shape resolution for the ``send`` command.

Accepted forms::

    send             <text>
    send             <type> <value>
    send <ip> <port> <text>
    send <ip> <port> <type> <value>

where ``<type>`` is ``-t`` (text), ``-s`` (auto-generated, value is a
length) or ``-x`` (hex). Resolution walks the tokens through three
states: DESTINATION, MARKER, VALUE. The walk is resumable: the caller
resolves the destination, allocates its message, and only then resolves
the payload tokens.
"""

from __future__ import annotations

from enum import StrEnum
from ipaddress import IPv6Address

from udpctl.domain.args import Arg
from udpctl.domain.errors import InvalidArgs

MIN_SEND_ARGS = 1
MAX_SEND_ARGS = 4


class PayloadKind(StrEnum):
    TEXT = "text"
    AUTO = "auto"
    HEX = "hex"


MARKERS: dict[str, PayloadKind] = {
    "-t": PayloadKind.TEXT,
    "-s": PayloadKind.AUTO,
    "-x": PayloadKind.HEX,
}


class SendArgState(StrEnum):
    DESTINATION = "destination"
    MARKER = "marker"
    VALUE = "value"
    RESOLVED = "resolved"


class SendArgs:
    """Stepwise resolver over the tokens of one ``send`` invocation.

    Args:
        args: The tokens after ``send``.

    Raises:
        InvalidArgs: Token count outside 1..4.
    """

    def __init__(self, args: list[Arg]) -> None:
        count = len(args)
        if not MIN_SEND_ARGS <= count <= MAX_SEND_ARGS:
            raise InvalidArgs(f"send takes {MIN_SEND_ARGS}-{MAX_SEND_ARGS} arguments, got {count}")
        self._args = args
        self._index = 0
        self.state = SendArgState.DESTINATION if count > 2 else SendArgState.MARKER
        self.address: IPv6Address | None = None
        self.port: int | None = None
        self.kind = PayloadKind.TEXT

    def destination(self) -> tuple[IPv6Address | None, int | None]:
        """Resolve the explicit ``<ip> <port>`` pair, if the form has one.

        Returns ``(None, None)`` when the connected peer is to be used.

        Raises:
            ParseFailure: The explicit destination does not parse.
        """
        if self.state is SendArgState.DESTINATION:
            self.address = self._args[0].parse_as_ip6_address()
            self.port = self._args[1].parse_as_uint16()
            self._index = 2
            self.state = SendArgState.MARKER
        return self.address, self.port

    def payload(self) -> tuple[PayloadKind, Arg]:
        """Resolve the optional marker and the value token after it.

        Tokens after the value are ignored.

        Raises:
            InvalidArgs: A marker with no value after it.
        """
        self.destination()
        while True:
            if self.state is SendArgState.MARKER:
                marker = MARKERS.get(self._args[self._index].value)
                if marker is not None:
                    self.kind = marker
                    self._index += 1
                self.state = SendArgState.VALUE
            elif self.state is SendArgState.VALUE:
                if self._index >= len(self._args):
                    raise InvalidArgs(f"Missing value after '{self._args[self._index - 1]}'")
                self.state = SendArgState.RESOLVED
            else:
                return self.kind, self._args[self._index]
