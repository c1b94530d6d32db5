"""
Session loop and supervisor.

Batch mode sends a fixed list of commands and returns. Interactive mode
prompts for one line at a time while a `LivenessMonitor` watches the socket;
whichever finishes first, the next line or the monitor, decides what happens
next. A lost connection is handled here, not in the monitor: the terminal is
restored, the transport closed and a non-zero status returned to the caller.
"""

from __future__ import annotations

import asyncio
import signal
import threading
from typing import Iterable, Optional

import click
from loguru import logger

from scpicli.client.exchange import exchange
from scpicli.client.monitor import LivenessMonitor
from scpicli.client.source import InteractiveSource
from scpicli.client.transport import Transport, open_transport
from scpicli.types import ConnectionLostError, SessionConfig
from scpicli.util.terminal import TerminalState

EXIT_OK = 0
EXIT_FAILURE = 1

# sentinel for "no more input"
INPUT_END = None


class LineReader:
    """Runs the blocking prompt in a daemon thread, one line per request.

    A prompt left waiting when the session ends does not keep the process
    alive.
    """

    def __init__(self, source: InteractiveSource):
        self.source = source
        self._pending: Optional[asyncio.Future] = None

    def next_line(self) -> asyncio.Future:
        loop = asyncio.get_running_loop()
        fut = loop.create_future()
        self._pending = fut
        threading.Thread(
            target=self._read, args=(loop, fut), name="prompt", daemon=True
        ).start()
        return fut

    def _read(self, loop: asyncio.AbstractEventLoop, fut: asyncio.Future) -> None:
        exc = None
        try:
            line = self.source.readline()
        except (EOFError, KeyboardInterrupt):
            line = INPUT_END
        except Exception as e:
            line, exc = None, e

        try:
            loop.call_soon_threadsafe(_resolve, fut, line, exc)
        except RuntimeError:
            # event loop already closed: the session ended while prompting
            logger.trace("Discarding input received after session end")

    def interrupt(self) -> None:
        """End input from the event loop thread, e.g. on SIGINT."""
        if self._pending is not None:
            _resolve(self._pending, INPUT_END, None)


def _resolve(fut: asyncio.Future, result, exc) -> None:
    if fut.done():
        return
    if exc is not None:
        fut.set_exception(exc)
    else:
        fut.set_result(result)


class Session:
    """Drives exchanges over one transport for the life of a connection."""

    def __init__(
        self,
        config: SessionConfig,
        transport: Transport,
        terminal: Optional[TerminalState] = None,
    ):
        self.config = config
        self.transport = transport
        self.terminal = TerminalState() if terminal is None else terminal
        self._reader: Optional[LineReader] = None
        self._inflight: Optional[asyncio.Task] = None
        self._interrupted = False

    async def send(self, command: str) -> Optional[str]:
        """Exchange one command while holding the transport lock."""
        async with self.transport.lock:
            return await exchange(self.transport, command, self.config.timeout)

    async def run_batch(self, commands: Iterable[str]) -> None:
        for command in commands:
            response = await self.send(command)
            if response is not None:
                click.echo(response)

    def interrupt(self) -> None:
        """End the interactive session from the event loop thread, e.g. on SIGINT.

        Works both at the prompt and while a query is still waiting for its
        reply; the pending exchange is abandoned.
        """
        self._interrupted = True
        if self._reader is not None:
            self._reader.interrupt()
        if self._inflight is not None:
            self._inflight.cancel()

    async def run_interactive(self, source: InteractiveSource) -> int:
        self.terminal.save()
        self._interrupted = False
        monitor = LivenessMonitor(self.transport, self.config.heartbeat_interval)
        monitor_task = monitor.start()
        reader = self._reader = LineReader(source)

        loop = asyncio.get_running_loop()
        sigint_installed = _install_sigint(loop, self.interrupt)
        try:
            while not self._interrupted:
                next_line = reader.next_line()
                done, _ = await asyncio.wait(
                    {next_line, monitor_task}, return_when=asyncio.FIRST_COMPLETED
                )

                if monitor_task in done:
                    next_line.cancel()
                    try:
                        monitor_task.result()
                    except ConnectionLostError as e:
                        click.echo(f"\n{e}", err=True)
                        self.terminal.restore()
                        return EXIT_FAILURE

                line = next_line.result()
                if line is INPUT_END:
                    break

                source.add_history(line)
                self._inflight = asyncio.ensure_future(self.send(line))
                try:
                    response = await self._inflight
                except asyncio.CancelledError:
                    if not self._interrupted:
                        raise
                    logger.debug("Abandoned {!r} on interrupt", line)
                    break
                finally:
                    self._inflight = None
                if response is not None:
                    click.echo(response)

            self.terminal.restore()
            click.echo("\nExiting.")
            return EXIT_OK
        finally:
            if sigint_installed:
                loop.remove_signal_handler(signal.SIGINT)
            self._reader = None
            await monitor.stop()


def _install_sigint(loop: asyncio.AbstractEventLoop, callback) -> bool:
    try:
        loop.add_signal_handler(signal.SIGINT, callback)
    except (NotImplementedError, RuntimeError, ValueError):
        # windows event loops, or not running in the main thread
        return False
    return True


async def run_session(
    config: SessionConfig,
    commands: Optional[Iterable[str]] = None,
    source: Optional[InteractiveSource] = None,
) -> int:
    """Connect, run batch `commands` or an interactive prompt, and disconnect.

    Returns
    -------
    int
        Process exit status.

    Raises
    ------
    ScpiError
        On connect failure or a failed command write.
    """
    transport = await open_transport(config)
    try:
        session = Session(config, transport)
        if commands is not None:
            await session.run_batch(commands)
            return EXIT_OK

        if source is None:
            source = InteractiveSource(config.host)
        status = await session.run_interactive(source)
        logger.info("Interactive session ended with status {}", status)
        return status
    finally:
        transport.close()
