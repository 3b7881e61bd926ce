"""Error taxonomy for interpreter commands.

Handlers raise a :class:`UdpCtlError` subclass; the interpreter turns the
first one raised into a failed ``ServiceResult`` carrying its ``code``.
Parse errors keep their own code and are never folded into
``INVALID_ARGS``.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    """Stable error codes surfaced in ``ServiceError.code``."""

    INVALID_ARGS = "INVALID_ARGS"
    INVALID_COMMAND = "INVALID_COMMAND"
    ALREADY_OPEN = "ALREADY_OPEN"
    NO_BUFS = "NO_BUFS"
    PARSE_FAILURE = "PARSE_FAILURE"
    TRANSPORT_FAILURE = "TRANSPORT_FAILURE"


class UdpCtlError(Exception):
    """Base class for all interpreter errors."""

    code: ErrorCode

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidArgs(UdpCtlError):
    """Wrong token count or shape."""

    code = ErrorCode.INVALID_ARGS


class InvalidCommand(UdpCtlError):
    """Unknown sub-command name."""

    code = ErrorCode.INVALID_COMMAND


class AlreadyOpen(UdpCtlError):
    """``open`` called on an open session."""

    code = ErrorCode.ALREADY_OPEN


class NoBufs(UdpCtlError):
    """Message allocation or append ran out of buffer space."""

    code = ErrorCode.NO_BUFS


class ParseFailure(UdpCtlError):
    """Malformed address, integer, hex string, or enable/disable token."""

    code = ErrorCode.PARSE_FAILURE


class TransportFailure(UdpCtlError):
    """The socket layer rejected a bind/connect/send/close."""

    code = ErrorCode.TRANSPORT_FAILURE
