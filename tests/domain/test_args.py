"""Tests for the Arg token accessor."""

from __future__ import annotations

from ipaddress import IPv6Address

import pytest

from udpctl.domain.args import Arg, to_args
from udpctl.domain.errors import ErrorCode, ParseFailure


class TestParseAsIp6Address:
    def test_link_local(self) -> None:
        assert Arg("fe80::1").parse_as_ip6_address() == IPv6Address("fe80::1")

    def test_unspecified(self) -> None:
        assert Arg("::").parse_as_ip6_address() == IPv6Address("::")

    @pytest.mark.parametrize("token", ["fe80::zz", "127.0.0.1", "", "1:2:3"])
    def test_malformed(self, token: str) -> None:
        with pytest.raises(ParseFailure) as exc_info:
            Arg(token).parse_as_ip6_address()
        assert exc_info.value.code == ErrorCode.PARSE_FAILURE


class TestParseAsUint16:
    @pytest.mark.parametrize(
        ("token", "expected"),
        [("0", 0), ("1234", 1234), ("65535", 65535), ("0x10", 16), ("0XFFFF", 65535)],
    )
    def test_valid(self, token: str, expected: int) -> None:
        assert Arg(token).parse_as_uint16() == expected

    @pytest.mark.parametrize("token", ["65536", "-1", "12a", "", "0x", "1.5", "0x10000", "5\n", "0x1f\n", " 5"])
    def test_invalid(self, token: str) -> None:
        with pytest.raises(ParseFailure):
            Arg(token).parse_as_uint16()


class TestParseAsEnableDisable:
    def test_enable(self) -> None:
        assert Arg("enable").parse_as_enable_disable() is True

    def test_disable(self) -> None:
        assert Arg("disable").parse_as_enable_disable() is False

    @pytest.mark.parametrize("token", ["on", "Enable", "1", ""])
    def test_rejects_other_tokens(self, token: str) -> None:
        with pytest.raises(ParseFailure):
            Arg(token).parse_as_enable_disable()


class TestLiteralCompare:
    def test_equals_string(self) -> None:
        assert Arg("-s") == "-s"
        assert Arg("-s") != "-x"

    def test_equals_arg(self) -> None:
        assert Arg("a") == Arg("a")

    def test_length(self) -> None:
        assert len(Arg("hello")) == 5

    def test_to_args(self) -> None:
        assert to_args(["a", "b"]) == [Arg("a"), Arg("b")]
