"""Payload construction strategies for outgoing datagrams.

Three encodings fill a message:

- text: the token's UTF-8 bytes, verbatim
- auto-generated: a deterministic cyclic ``0-9A-Za-z`` filler of a given length
- hex: a contiguous hex-digit string decoded in bounded chunks

Builders append into anything with an ``append(bytes)`` method and stop at
the first error. Bytes already appended are left in place; the caller owns
the message and discards it on failure.
"""

from __future__ import annotations

import string
from enum import StrEnum
from typing import Protocol

from udpctl.domain.errors import ParseFailure

FILLER_ALPHABET = (string.digits + string.ascii_uppercase + string.ascii_lowercase).encode("ascii")
DEFAULT_HEX_CHUNK_SIZE = 50

_HEX_DIGITS = frozenset(string.hexdigits)


class Appendable(Protocol):
    def append(self, data: bytes) -> None: ...


class SegmentStatus(StrEnum):
    """Outcome of decoding one hex segment."""

    PENDING = "pending"
    DONE = "done"


# ── Auto-generated filler ─────────────────────────────────────────────


def filler_bytes(length: int) -> bytes:
    """Return the first *length* bytes of the cyclic filler sequence.

    >>> filler_bytes(11)
    b'0123456789A'
    """
    cycle = len(FILLER_ALPHABET)
    return bytes(FILLER_ALPHABET[i % cycle] for i in range(length))


def prepare_auto_generated_payload(message: Appendable, length: int) -> None:
    """Append *length* filler bytes to *message*, one byte at a time."""
    cycle = len(FILLER_ALPHABET)
    for i in range(length):
        message.append(FILLER_ALPHABET[i % cycle : i % cycle + 1])


# ── Hex string ────────────────────────────────────────────────────────


class HexSegmentDecoder:
    """Decode a hex-digit string into raw bytes, one bounded segment at a time.

    The digit count is validated up front so an odd-length string fails
    before any segment is produced. Non-hex characters are reported when
    the segment containing them is decoded.
    """

    def __init__(self, hex_string: str) -> None:
        if len(hex_string) % 2 != 0:
            raise ParseFailure(f"Hex string has an odd number of digits ({len(hex_string)})")
        self._hex = hex_string
        self._pos = 0

    def next_segment(self, size: int) -> tuple[bytes, SegmentStatus]:
        """Decode up to *size* bytes.

        Returns the decoded bytes and ``PENDING`` if input remains after
        them, or ``DONE`` once the string is exhausted.
        """
        end = min(self._pos + size * 2, len(self._hex))
        chunk = self._hex[self._pos : end]
        bad = next((c for c in chunk if c not in _HEX_DIGITS), None)
        if bad is not None:
            raise ParseFailure(f"Invalid hex character '{bad}'")
        self._pos = end
        status = SegmentStatus.DONE if end >= len(self._hex) else SegmentStatus.PENDING
        return bytes.fromhex(chunk), status


def prepare_hex_string_payload(
    message: Appendable,
    hex_string: str,
    *,
    chunk_size: int = DEFAULT_HEX_CHUNK_SIZE,
) -> None:
    """Decode *hex_string* into *message* in chunks of at most *chunk_size* bytes."""
    decoder = HexSegmentDecoder(hex_string)
    status = SegmentStatus.PENDING
    while status is SegmentStatus.PENDING:
        data, status = decoder.next_segment(chunk_size)
        message.append(data)


# ── Text ──────────────────────────────────────────────────────────────


def prepare_text_payload(message: Appendable, text: str) -> None:
    message.append(text.encode("utf-8"))
