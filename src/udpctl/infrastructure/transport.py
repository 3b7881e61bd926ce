"""Socket-backed UDP/IPv6 transport driven by an asyncio event loop.

The transport owns one non-blocking ``AF_INET6``/``SOCK_DGRAM`` socket per
``open``. Every call returns immediately: the socket never blocks, and
inbound datagrams are delivered through ``loop.add_reader`` on the same
loop that runs command handlers, so a receive callback can only run
between two commands.

``OSError`` raised by the socket layer is surfaced as
:class:`TransportFailure`.
"""

from __future__ import annotations

import asyncio
import logging
import socket
from collections.abc import Callable
from dataclasses import dataclass
from ipaddress import IPv6Address
from typing import Protocol

from udpctl.domain.errors import TransportFailure
from udpctl.infrastructure.message import Message, MessagePool, MessageSettings

logger = logging.getLogger(__name__)

MAX_DATAGRAM_SIZE = 65535


@dataclass(frozen=True)
class SockAddr:
    """An IPv6 address and UDP port."""

    address: IPv6Address
    port: int

    def __str__(self) -> str:
        return f"[{self.address}]:{self.port}"


@dataclass(frozen=True)
class ReceivedDatagram:
    """One inbound datagram, valid for the duration of the receive callback.

    Attributes:
        payload: The raw datagram bytes.
        offset: Start of the application content within *payload*.
        peer: Sender address and port.
    """

    payload: bytes
    peer: SockAddr
    offset: int = 0

    @property
    def length(self) -> int:
        return len(self.payload) - self.offset


ReceiveCallback = Callable[[ReceivedDatagram], None]


class Transport(Protocol):
    """Operations the session needs from a datagram transport."""

    def open(self, callback: ReceiveCallback) -> None: ...

    def bind(self, sockaddr: SockAddr) -> None: ...

    def connect(self, sockaddr: SockAddr) -> None: ...

    def close(self) -> None: ...

    def new_message(self, settings: MessageSettings) -> Message | None: ...

    def send(self, message: Message, peer: SockAddr | None) -> None: ...


def _to_sockaddr(addr: tuple[str, int, int, int] | tuple[str, int]) -> SockAddr:
    host = addr[0].split("%", 1)[0]
    return SockAddr(IPv6Address(host), addr[1])


class UdpTransport:
    """:class:`Transport` over a real IPv6 UDP socket."""

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop,
        pool: MessagePool | None = None,
    ) -> None:
        self._loop = loop
        self._pool = pool or MessagePool()
        self._sock: socket.socket | None = None
        self._callback: ReceiveCallback | None = None

    def is_open(self) -> bool:
        return self._sock is not None

    def _require_socket(self) -> socket.socket:
        if self._sock is None:
            raise TransportFailure("Socket is not open")
        return self._sock

    def open(self, callback: ReceiveCallback) -> None:
        try:
            sock = socket.socket(socket.AF_INET6, socket.SOCK_DGRAM)
        except OSError as exc:
            raise TransportFailure(f"Cannot open socket: {exc}") from exc
        try:
            sock.setblocking(False)
            self._loop.add_reader(sock.fileno(), self._on_readable)
        except OSError as exc:
            sock.close()
            raise TransportFailure(f"Cannot register socket: {exc}") from exc
        except Exception:
            sock.close()
            raise
        self._sock = sock
        self._callback = callback
        logger.debug("Opened UDP socket fd=%d", sock.fileno())

    def bind(self, sockaddr: SockAddr) -> None:
        sock = self._require_socket()
        try:
            sock.bind((str(sockaddr.address), sockaddr.port))
        except OSError as exc:
            raise TransportFailure(f"Cannot bind {sockaddr}: {exc}") from exc
        logger.debug("Bound to %s", sockaddr)

    def connect(self, sockaddr: SockAddr) -> None:
        sock = self._require_socket()
        try:
            sock.connect((str(sockaddr.address), sockaddr.port))
        except OSError as exc:
            raise TransportFailure(f"Cannot connect to {sockaddr}: {exc}") from exc
        logger.debug("Connected to %s", sockaddr)

    def close(self) -> None:
        if self._sock is None:
            return
        sock, self._sock = self._sock, None
        self._callback = None
        self._loop.remove_reader(sock.fileno())
        sock.close()
        logger.debug("Closed UDP socket")

    def new_message(self, settings: MessageSettings) -> Message | None:
        return self._pool.new_message(settings)

    def send(self, message: Message, peer: SockAddr | None) -> None:
        """Transmit *message* and free it.

        With *peer* None the connected peer is used. The message is only
        freed here on success; on failure it stays with the caller.
        """
        sock = self._require_socket()
        data = message.to_bytes()
        try:
            if peer is None:
                sock.send(data)
            else:
                sock.sendto(data, (str(peer.address), peer.port))
        except OSError as exc:
            raise TransportFailure(f"Send failed: {exc}") from exc
        logger.debug(
            "Sent %d bytes to %s (link_security=%s)",
            len(data),
            peer or "connected peer",
            message.settings.link_security,
        )
        message.free()

    def _on_readable(self) -> None:
        if self._sock is None:
            return
        try:
            data, addr = self._sock.recvfrom(MAX_DATAGRAM_SIZE)
        except (BlockingIOError, InterruptedError):
            return
        except OSError:
            logger.debug("recvfrom failed", exc_info=True)
            return
        datagram = ReceivedDatagram(payload=data, peer=_to_sockaddr(addr))
        logger.debug("Received %d bytes from %s", datagram.length, datagram.peer)
        if self._callback is not None:
            self._callback(datagram)
