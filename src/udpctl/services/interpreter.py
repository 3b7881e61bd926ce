"""Table-driven dispatch of UDP sub-commands.

The command table is a fixed, alphabetically ordered tuple. Its order is
both the lookup order and the ``help`` listing order. Every handler takes
the argument tokens after the command name and returns a ServiceResult;
errors raised inside a handler become a failed result carrying the
error's code.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from udpctl.domain.args import Arg, to_args
from udpctl.domain.errors import InvalidCommand, UdpCtlError
from udpctl.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from udpctl.domain.sink import OutputSink
    from udpctl.services.session import UdpSession

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Command:
    """One entry of the command table."""

    name: str
    handler: Callable[[Interpreter, list[Arg]], ServiceResult]


class Interpreter:
    """Dispatches tokenized command lines against a :class:`UdpSession`."""

    def __init__(self, session: UdpSession, output: OutputSink) -> None:
        self.session = session
        self._output = output

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def process(self, tokens: list[str]) -> ServiceResult:
        """Run one command line, already split into tokens.

        With no tokens the command names are listed and the call succeeds
        regardless of listing errors.
        """
        if not tokens:
            try:
                self._process_help([])
            except UdpCtlError:
                logger.debug("help listing failed", exc_info=True)
            return ServiceResult(ok=True, op="help")

        name, args = tokens[0], to_args(tokens[1:])
        try:
            command = find_command(name)
            return command.handler(self, args)
        except UdpCtlError as exc:
            logger.debug("command %s failed: %s", name, exc.code)
            return ServiceResult(
                ok=False,
                op=name,
                error=ServiceError(code=str(exc.code), message=exc.message),
            )

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def _process_help(self, args: list[Arg]) -> ServiceResult:
        for command in COMMANDS:
            self._output.line(command.name)
        return ServiceResult(ok=True, op="help")

    def _process_bind(self, args: list[Arg]) -> ServiceResult:
        sockaddr = self.session.bind(args)
        return ServiceResult(
            ok=True,
            op="bind",
            data={"address": str(sockaddr.address), "port": sockaddr.port},
        )

    def _process_connect(self, args: list[Arg]) -> ServiceResult:
        sockaddr = self.session.connect(args)
        return ServiceResult(
            ok=True,
            op="connect",
            data={"address": str(sockaddr.address), "port": sockaddr.port},
        )

    def _process_close(self, args: list[Arg]) -> ServiceResult:
        self.session.close()
        return ServiceResult(ok=True, op="close")

    def _process_open(self, args: list[Arg]) -> ServiceResult:
        self.session.open()
        return ServiceResult(ok=True, op="open")

    def _process_send(self, args: list[Arg]) -> ServiceResult:
        return ServiceResult(ok=True, op="send", data=self.session.send(args))

    def _process_link_security(self, args: list[Arg]) -> ServiceResult:
        if not args:
            enabled = self.session.link_security
            self._output.line("Enabled" if enabled else "Disabled")
        else:
            self.session.link_security = args[0].parse_as_enable_disable()
            enabled = self.session.link_security
        return ServiceResult(ok=True, op="linksecurity", data={"link_security": enabled})


COMMANDS: tuple[Command, ...] = (
    Command("bind", Interpreter._process_bind),
    Command("close", Interpreter._process_close),
    Command("connect", Interpreter._process_connect),
    Command("help", Interpreter._process_help),
    Command("linksecurity", Interpreter._process_link_security),
    Command("open", Interpreter._process_open),
    Command("send", Interpreter._process_send),
)


def command_names() -> list[str]:
    return [command.name for command in COMMANDS]


def find_command(name: str) -> Command:
    """Exact, case-sensitive lookup in :data:`COMMANDS`."""
    for command in COMMANDS:
        if command.name == name:
            return command
    raise InvalidCommand(f"Unknown command '{name}'")
