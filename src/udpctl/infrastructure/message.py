"""Outgoing message buffers drawn from a bounded pool.

A :class:`Message` is allocated from a :class:`MessagePool`, filled with
``append`` and then either handed to the transport (which frees it once
sent) or freed by its owner. Exhausting the pool or growing a message past
its capacity raises :class:`NoBufs`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum

from udpctl.domain.errors import NoBufs

logger = logging.getLogger(__name__)


class MessagePriority(IntEnum):
    LOW = 0
    NORMAL = 1
    HIGH = 2


@dataclass(frozen=True)
class MessageSettings:
    """Per-message options fixed at allocation time."""

    link_security: bool = True
    priority: MessagePriority = MessagePriority.NORMAL


class Message:
    """A growable payload buffer with a hard capacity."""

    def __init__(self, pool: MessagePool, settings: MessageSettings, capacity: int) -> None:
        self._pool = pool
        self._buffer = bytearray()
        self._capacity = capacity
        self._freed = False
        self.settings = settings

    def __len__(self) -> int:
        return len(self._buffer)

    @property
    def freed(self) -> bool:
        return self._freed

    def append(self, data: bytes) -> None:
        if len(self._buffer) + len(data) > self._capacity:
            raise NoBufs(f"Message capacity of {self._capacity} bytes exceeded")
        self._buffer.extend(data)

    def to_bytes(self) -> bytes:
        return bytes(self._buffer)

    def free(self) -> None:
        """Return the message to its pool. Freeing twice is a no-op."""
        if self._freed:
            return
        self._freed = True
        self._pool.release(self)


class MessagePool:
    """Fixed number of message slots shared by all outgoing sends."""

    def __init__(self, size: int = 16, max_message_length: int = 1280) -> None:
        self.size = size
        self.max_message_length = max_message_length
        self._in_use = 0

    @property
    def in_use(self) -> int:
        return self._in_use

    def new_message(self, settings: MessageSettings) -> Message | None:
        """Allocate a message, or return None when every slot is taken."""
        if self._in_use >= self.size:
            logger.debug("Message pool exhausted (%d slots)", self.size)
            return None
        self._in_use += 1
        return Message(self, settings, self.max_message_length)

    def release(self, message: Message) -> None:
        self._in_use -= 1
