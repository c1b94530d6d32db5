"""
Background liveness check for interactive sessions.

While the prompt waits for keystrokes nothing touches the socket, so a peer
that hangs up would go unnoticed until the next command. The monitor peeks the
socket on a fixed interval and fails as soon as it sees end-of-stream.
"""

from __future__ import annotations

import asyncio
from typing import Optional

from loguru import logger

from scpicli.client.transport import PeekStatus, Transport
from scpicli.types import ConnectionLostError
from scpicli.util.defaults import DEFAULT_HEARTBEAT_INTERVAL


class LivenessMonitor:
    """Periodic non-consuming peek of a shared transport.

    `run` returns only by raising `ConnectionLostError`; the session
    supervisor awaits the task and decides how to shut down.
    """

    def __init__(self, transport: Transport, interval: float = DEFAULT_HEARTBEAT_INTERVAL):
        self.transport = transport
        self.interval = interval
        self._task: Optional[asyncio.Task] = None

    @property
    def task(self) -> Optional[asyncio.Task]:
        return self._task

    async def check(self) -> PeekStatus:
        """Take the lock for a single peek and release it."""
        async with self.transport.lock:
            return self.transport.peek()

    async def run(self) -> None:
        logger.debug("Liveness monitor started ({}s interval)", self.interval)
        while True:
            status = await self.check()
            if status is PeekStatus.CLOSED:
                logger.error("Connection to {} lost", self.transport)
                raise ConnectionLostError("Connection lost.")
            logger.trace("Heartbeat: {}", status.name)

            await asyncio.sleep(self.interval)

    def start(self) -> asyncio.Task:
        if self._task is None:
            self._task = asyncio.create_task(self.run(), name="liveness-monitor")
        return self._task

    async def stop(self) -> None:
        if self._task is None:
            return
        if not self._task.done():
            self._task.cancel()
        try:
            await self._task
        except (asyncio.CancelledError, ConnectionLostError):
            pass
        self._task = None
        logger.debug("Liveness monitor stopped")
