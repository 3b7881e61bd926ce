"""Shared pytest fixtures and test helpers for udpctl tests."""

from __future__ import annotations

import shlex
from dataclasses import dataclass, field
from ipaddress import IPv6Address

import pytest
from click.testing import CliRunner

from udpctl.domain.errors import TransportFailure
from udpctl.domain.sink import ListSink
from udpctl.infrastructure.message import Message, MessagePool, MessageSettings
from udpctl.infrastructure.transport import ReceiveCallback, ReceivedDatagram, SockAddr
from udpctl.output.receive import ReceiveFormatter
from udpctl.services.interpreter import Interpreter
from udpctl.services.result import ServiceResult
from udpctl.services.session import UdpSession


@dataclass
class SentDatagram:
    payload: bytes
    peer: SockAddr | None
    settings: MessageSettings


@dataclass
class FakeTransport:
    """In-memory Transport recording every call.

    Set ``fail_on`` to an operation name ("bind", "connect", "send",
    "close", "open") to make that call raise TransportFailure.
    """

    pool: MessagePool = field(default_factory=lambda: MessagePool(size=4, max_message_length=1280))
    sent: list[SentDatagram] = field(default_factory=list)
    bound: SockAddr | None = None
    connected: SockAddr | None = None
    callback: ReceiveCallback | None = None
    open_calls: int = 0
    close_calls: int = 0
    fail_on: str | None = None

    def _check(self, op: str) -> None:
        if self.fail_on == op:
            raise TransportFailure(f"{op} failed")

    def open(self, callback: ReceiveCallback) -> None:
        self._check("open")
        self.open_calls += 1
        self.callback = callback

    def bind(self, sockaddr: SockAddr) -> None:
        self._check("bind")
        self.bound = sockaddr

    def connect(self, sockaddr: SockAddr) -> None:
        self._check("connect")
        self.connected = sockaddr

    def close(self) -> None:
        self._check("close")
        self.close_calls += 1
        self.callback = None

    def new_message(self, settings: MessageSettings) -> Message | None:
        return self.pool.new_message(settings)

    def send(self, message: Message, peer: SockAddr | None) -> None:
        self._check("send")
        self.sent.append(SentDatagram(message.to_bytes(), peer or self.connected, message.settings))
        message.free()

    def deliver(self, payload: bytes, address: str, port: int, offset: int = 0) -> None:
        """Simulate an inbound datagram from ``address``:``port``."""
        assert self.callback is not None, "socket is not open"
        self.callback(ReceivedDatagram(payload=payload, peer=SockAddr(IPv6Address(address), port), offset=offset))


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def sink() -> ListSink:
    return ListSink()


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def session(transport: FakeTransport, sink: ListSink) -> UdpSession:
    return UdpSession(transport, ReceiveFormatter(sink))


@pytest.fixture
def interpreter(session: UdpSession, sink: ListSink) -> Interpreter:
    return Interpreter(session, sink)


@pytest.fixture
def _isolated_config(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run from an empty temp directory with no UDPCTL_* environment."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("UDPCTL_CONFIG", raising=False)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def run(interpreter: Interpreter, line: str) -> ServiceResult:
    """Tokenize *line* and dispatch it."""
    return interpreter.process(shlex.split(line))


def run_ok(interpreter: Interpreter, line: str) -> ServiceResult:
    result = run(interpreter, line)
    assert result.ok, result.error
    return result
