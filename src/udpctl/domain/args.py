"""Typed accessors over a single command-line token.

An :class:`Arg` wraps one token produced by the line tokenizer. Each
``parse_as_*`` method either returns the parsed value or raises
:class:`ParseFailure`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from ipaddress import IPv6Address

from udpctl.domain.errors import ParseFailure

UINT16_MAX = 0xFFFF

_DECIMAL = re.compile(r"[0-9]+")
_HEX = re.compile(r"0[xX][0-9a-fA-F]+")


@dataclass(frozen=True)
class Arg:
    """One command-line token."""

    value: str

    def __eq__(self, other: object) -> bool:
        if isinstance(other, str):
            return self.value == other
        if isinstance(other, Arg):
            return self.value == other.value
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.value)

    def __len__(self) -> int:
        return len(self.value)

    def __str__(self) -> str:
        return self.value

    def parse_as_ip6_address(self) -> IPv6Address:
        """Parse an IPv6 literal (``fe80::1``, ``::1``...)."""
        try:
            return IPv6Address(self.value)
        except ValueError as exc:
            raise ParseFailure(f"Invalid IPv6 address '{self.value}'") from exc

    def parse_as_uint16(self) -> int:
        """Parse a decimal or ``0x``-prefixed hex value in ``0..65535``."""
        if _DECIMAL.fullmatch(self.value):
            number = int(self.value, 10)
        elif _HEX.fullmatch(self.value):
            number = int(self.value, 16)
        else:
            raise ParseFailure(f"Invalid number '{self.value}'")
        if number > UINT16_MAX:
            raise ParseFailure(f"Value '{self.value}' exceeds {UINT16_MAX}")
        return number

    def parse_as_enable_disable(self) -> bool:
        if self.value == "enable":
            return True
        if self.value == "disable":
            return False
        raise ParseFailure(f"Expected 'enable' or 'disable', got '{self.value}'")


def to_args(tokens: list[str]) -> list[Arg]:
    """Wrap raw tokens in :class:`Arg` accessors."""
    return [Arg(token) for token in tokens]
