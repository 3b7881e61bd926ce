"""Tests for the ReceiveFormatter."""

from __future__ import annotations

from ipaddress import IPv6Address

from udpctl.domain.sink import ListSink
from udpctl.infrastructure.transport import ReceivedDatagram, SockAddr
from udpctl.output.receive import ReceiveFormatter

PEER = SockAddr(IPv6Address("fe80::1"), 1234)


def render(payload: bytes, *, offset: int = 0, max_length: int = 1500) -> str:
    return ReceiveFormatter(ListSink(), max_length=max_length).render(
        ReceivedDatagram(payload=payload, peer=PEER, offset=offset)
    )


class TestReceiveFormatter:
    def test_line_format(self) -> None:
        assert render(b"reply") == "5 bytes from fe80::1 1234 reply"

    def test_emits_one_line_per_datagram(self) -> None:
        sink = ListSink()
        formatter = ReceiveFormatter(sink)
        formatter(ReceivedDatagram(payload=b"a", peer=PEER))
        formatter(ReceivedDatagram(payload=b"bc", peer=PEER))
        assert sink.lines == ["1 bytes from fe80::1 1234 a", "2 bytes from fe80::1 1234 bc"]

    def test_empty_datagram(self) -> None:
        assert render(b"") == "0 bytes from fe80::1 1234 "

    def test_content_offset(self) -> None:
        assert render(b"HDRbody", offset=3) == "4 bytes from fe80::1 1234 body"

    def test_truncates_but_reports_full_length(self) -> None:
        line = render(b"x" * 2000)
        assert line.startswith("2000 bytes from fe80::1 1234 ")
        assert line.endswith("x" * 1499)
        assert not line.endswith("x" * 1500)

    def test_custom_max_length(self) -> None:
        assert render(b"abcdef", max_length=4) == "6 bytes from fe80::1 1234 abc"

    def test_text_stops_at_nul(self) -> None:
        assert render(b"ab\0cd") == "5 bytes from fe80::1 1234 ab"

    def test_invalid_utf8_is_replaced(self) -> None:
        assert render(b"\xff") == "1 bytes from fe80::1 1234 �"
