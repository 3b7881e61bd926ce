"""UdpShell wires the transport, session, interpreter and output together.

One shell owns exactly one socket session. Command lines are tokenized
with :func:`shlex.split`, dispatched synchronously on the event loop, and
their results printed; inbound datagrams are printed by the receive
formatter whenever the loop is idle between two commands.
"""

from __future__ import annotations

import asyncio
import logging
import shlex
from typing import TYPE_CHECKING

from udpctl.domain.errors import ErrorCode
from udpctl.infrastructure.message import MessagePool
from udpctl.infrastructure.transport import UdpTransport
from udpctl.output.console import ConsoleSink
from udpctl.output.formatters import OutputSettings, format_result
from udpctl.output.receive import ReceiveFormatter
from udpctl.services.interpreter import Interpreter
from udpctl.services.result import ServiceError, ServiceResult
from udpctl.services.session import UdpSession

if TYPE_CHECKING:
    from collections.abc import Iterable

    from rich.console import Console

    from udpctl.config.settings import UdpSettings
    from udpctl.infrastructure.transport import Transport

logger = logging.getLogger(__name__)

EXIT_WORDS = frozenset({"exit", "quit"})


class UdpShell:
    """Interactive or scripted front end over one :class:`Interpreter`.

    Args:
        settings: Resolved settings (socket, payload, receive, shell sections).
        console: Console for command output and received datagrams.
        err_console: Console for failed command results.
        transport: Transport to drive; a real :class:`UdpTransport` on the
            running loop when omitted.
    """

    def __init__(
        self,
        settings: UdpSettings,
        *,
        console: Console,
        err_console: Console,
        transport: Transport | None = None,
    ) -> None:
        self.settings = settings
        self._console = console
        self._err_console = err_console
        if transport is None:
            pool = MessagePool(
                size=settings.socket.message_pool_size,
                max_message_length=settings.socket.max_message_length,
            )
            transport = UdpTransport(asyncio.get_running_loop(), pool)
        sink = ConsoleSink(console)
        self.formatter = ReceiveFormatter(sink, max_length=settings.receive.max_length)
        self.session = UdpSession(
            transport,
            self.formatter,
            link_security=settings.socket.link_security,
            hex_chunk_size=settings.payload.hex_chunk_size,
        )
        self.interpreter = Interpreter(self.session, sink)
        self._output_settings = OutputSettings(
            json_output=settings.json_output,
            quiet=settings.quiet,
        )

    def execute(self, line: str) -> ServiceResult:
        """Tokenize, dispatch and print one command line."""
        try:
            tokens = shlex.split(line)
        except ValueError as exc:
            result = ServiceResult(
                ok=False,
                op="tokenize",
                error=ServiceError(code=str(ErrorCode.INVALID_ARGS), message=str(exc)),
            )
        else:
            result = self.interpreter.process(tokens)
        self.emit(result)
        return result

    def emit(self, result: ServiceResult) -> None:
        output = format_result(result, settings=self._output_settings)
        console = self._console if result.ok else self._err_console
        console.print(output, markup=False, highlight=False, soft_wrap=True)

    async def run_script(self, lines: Iterable[str], *, wait: float = 0.0) -> int:
        """Execute *lines* in order, then keep receiving for *wait* seconds.

        Returns the number of failed commands.
        """
        failures = 0
        for line in lines:
            if not line.strip():
                continue
            if not self.execute(line).ok:
                failures += 1
            # Let pending receive callbacks run between commands.
            await asyncio.sleep(0)
        if wait > 0:
            await asyncio.sleep(wait)
        return failures

    async def run_interactive(self) -> None:
        """Read lines from stdin until EOF or ``exit``/``quit``."""
        prompt = self.settings.shell.prompt
        while True:
            try:
                line = await asyncio.to_thread(input, prompt)
            except EOFError:
                break
            if line.strip() in EXIT_WORDS:
                break
            if line.strip():
                self.execute(line)

    def shutdown(self) -> None:
        logger.debug("Shutting down shell (session %s)", self.session.state)
        self.session.close()
