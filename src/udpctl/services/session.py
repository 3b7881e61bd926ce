"""The single datagram socket managed by the interpreter.

The session tracks an explicit open/closed state instead of asking the
transport, holds the link-security flag read at send time, and owns the
outgoing message for the duration of one ``send``.
"""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from udpctl.domain.errors import AlreadyOpen, InvalidArgs, NoBufs
from udpctl.domain.payload import (
    DEFAULT_HEX_CHUNK_SIZE,
    prepare_auto_generated_payload,
    prepare_hex_string_payload,
    prepare_text_payload,
)
from udpctl.domain.sendargs import PayloadKind, SendArgs
from udpctl.infrastructure.message import Message, MessagePriority, MessageSettings
from udpctl.infrastructure.transport import SockAddr

if TYPE_CHECKING:
    from udpctl.domain.args import Arg
    from udpctl.infrastructure.transport import ReceiveCallback, Transport

logger = logging.getLogger(__name__)


class SessionState(StrEnum):
    CLOSED = "closed"
    OPEN = "open"


def _parse_sockaddr(args: list[Arg]) -> SockAddr:
    """Parse ``<ip> <port>``; exactly two tokens are required."""
    if len(args) != 2:
        raise InvalidArgs(f"Expected <ip> <port>, got {len(args)} arguments")
    address = args[0].parse_as_ip6_address()
    port = args[1].parse_as_uint16()
    return SockAddr(address, port)


class UdpSession:
    """One socket, its link-security flag, and its open/closed state.

    Args:
        transport: The datagram transport all calls are forwarded to.
        on_receive: Callback registered with the transport on ``open``.
        link_security: Initial link-security flag for outgoing messages.
        hex_chunk_size: Segment size used when decoding ``-x`` payloads.
    """

    def __init__(
        self,
        transport: Transport,
        on_receive: ReceiveCallback,
        *,
        link_security: bool = True,
        hex_chunk_size: int = DEFAULT_HEX_CHUNK_SIZE,
    ) -> None:
        self._transport = transport
        self._on_receive = on_receive
        self._hex_chunk_size = hex_chunk_size
        self.link_security = link_security
        self.state = SessionState.CLOSED

    @property
    def is_open(self) -> bool:
        return self.state is SessionState.OPEN

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def open(self) -> None:
        if self.is_open:
            raise AlreadyOpen("Socket is already open")
        self._transport.open(self._on_receive)
        self.state = SessionState.OPEN

    def close(self) -> None:
        """Close the socket. Safe on a session that was never opened."""
        self._transport.close()
        self.state = SessionState.CLOSED

    def bind(self, args: list[Arg]) -> SockAddr:
        sockaddr = _parse_sockaddr(args)
        self._transport.bind(sockaddr)
        return sockaddr

    def connect(self, args: list[Arg]) -> SockAddr:
        sockaddr = _parse_sockaddr(args)
        self._transport.connect(sockaddr)
        return sockaddr

    # ------------------------------------------------------------------
    # Send
    # ------------------------------------------------------------------

    def message_settings(self) -> MessageSettings:
        return MessageSettings(link_security=self.link_security, priority=MessagePriority.NORMAL)

    def send(self, args: list[Arg]) -> dict[str, Any]:
        """Build one datagram from *args* and hand it to the transport.

        The destination is resolved before the message is allocated and
        the payload tokens after it.

        INVARIANT: the message is freed on every failure path; on success
        the transport owns it.
        """
        send_args = SendArgs(args)
        address, port = send_args.destination()
        peer: SockAddr | None = None
        if address is not None and port is not None:
            peer = SockAddr(address, port)

        settings = self.message_settings()
        message = self._transport.new_message(settings)
        if message is None:
            raise NoBufs("No message buffers available")

        try:
            kind, value = send_args.payload()
            self._fill(message, kind, value)
            length = len(message)
            self._transport.send(message, peer)
        except Exception:
            message.free()
            raise

        logger.debug("send kind=%s length=%d peer=%s", kind, length, peer)
        return {
            "kind": str(kind),
            "length": length,
            "peer": str(peer) if peer else None,
            "link_security": settings.link_security,
        }

    def _fill(self, message: Message, kind: PayloadKind, value: Arg) -> None:
        if kind is PayloadKind.AUTO:
            prepare_auto_generated_payload(message, value.parse_as_uint16())
        elif kind is PayloadKind.HEX:
            prepare_hex_string_payload(message, value.value, chunk_size=self._hex_chunk_size)
        else:
            prepare_text_payload(message, value.value)
