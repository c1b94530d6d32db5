"""
TCP transport shared between the exchange path and the liveness monitor.

The transport owns a non-blocking socket and a line buffer. All I/O goes
through the running event loop (`loop.sock_sendall`, `loop.sock_recv`), and
`peek` inspects the socket without consuming from it, so the liveness monitor
never steals bytes belonging to a query reply. Callers serialise access with
`Transport.lock`.
"""

from __future__ import annotations

import asyncio
import socket
from enum import Enum, auto
from typing import Optional

from loguru import logger

from scpicli.types import ScpiConnectError, SessionConfig

READ_CHUNK = 4096


class PeekStatus(Enum):
    """Outcome of a non-consuming look at the socket."""

    DATA = auto()  # bytes are waiting to be read
    WOULD_BLOCK = auto()  # open, nothing to read yet
    CLOSED = auto()  # end-of-stream or a dead socket


class Transport:
    """Duplex newline-framed byte stream over a single socket.

    Parameters
    ----------
    sock : socket.socket
        A connected stream socket. It is switched to non-blocking mode.
    host : str, optional
        Peer name, used for logging only.
    port : int, optional
        Peer port, used for logging only.

    Attributes
    ----------
    lock : asyncio.Lock
        Held by whichever side is using the stream: the exchange across a
        write and its reply, or the monitor across one peek.
    """

    def __init__(self, sock: socket.socket, host: str = "", port: int = 0):
        sock.setblocking(False)
        self._sock: Optional[socket.socket] = sock
        self._buffer = bytearray()
        self.host = host
        self.port = port
        self.lock = asyncio.Lock()

    def __repr__(self):
        state = "closed" if self.closed else "open"
        return f"Transport({self.host}:{self.port}, {state})"

    @property
    def closed(self) -> bool:
        return self._sock is None

    def _require_sock(self) -> socket.socket:
        if self._sock is None:
            raise ConnectionError("Transport is closed")
        return self._sock

    async def write(self, data: bytes) -> None:
        sock = self._require_sock()
        await asyncio.get_running_loop().sock_sendall(sock, data)
        logger.trace("Sent {!r}", data)

    async def readline(self) -> bytes:
        """Read up to and including the next ``\\n``.

        Bytes received beyond the newline stay buffered for the next call. If
        the read is cancelled (e.g. by a deadline) any partial line is kept.

        Raises
        ------
        ConnectionError
            If the peer closes the stream before a full line arrives.
        """
        sock = self._require_sock()
        loop = asyncio.get_running_loop()
        while True:
            idx = self._buffer.find(b"\n")
            if idx >= 0:
                line = bytes(self._buffer[: idx + 1])
                del self._buffer[: idx + 1]
                logger.trace("Received {!r}", line)
                return line
            chunk = await loop.sock_recv(sock, READ_CHUNK)
            if not chunk:
                raise ConnectionError("Connection closed by peer")
            self._buffer += chunk

    def peek(self) -> PeekStatus:
        """Check, without blocking or consuming, whether the peer is still there."""
        if self._buffer:
            return PeekStatus.DATA
        if self._sock is None:
            return PeekStatus.CLOSED
        try:
            data = self._sock.recv(1, socket.MSG_PEEK)
        except (BlockingIOError, InterruptedError):
            return PeekStatus.WOULD_BLOCK
        except OSError as e:
            logger.debug("Peek failed on {}: {}", self, e)
            return PeekStatus.CLOSED
        return PeekStatus.DATA if data else PeekStatus.CLOSED

    def close(self) -> None:
        if self._sock is not None:
            logger.debug("Closing {}", self)
            self._sock.close()
            self._sock = None
        self._buffer.clear()


def configure_keepalive(
    sock: socket.socket, idle: int, interval: int, count: int
) -> None:
    """Enable OS keepalive probes so dead peers are dropped by the kernel.

    Each option is only set where the platform exposes it; the probe count is
    not configurable on every platform.
    """
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_KEEPALIVE, 1)

    if hasattr(socket, "TCP_KEEPIDLE"):
        sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_KEEPIDLE, idle)
    elif hasattr(socket, "TCP_KEEPALIVE"):  # macOS
        sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_KEEPALIVE, idle)
    elif hasattr(socket, "SIO_KEEPALIVE_VALS"):  # older windows
        sock.ioctl(socket.SIO_KEEPALIVE_VALS, (1, idle * 1000, interval * 1000))
        return

    if hasattr(socket, "TCP_KEEPINTVL"):
        sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_KEEPINTVL, interval)
    if hasattr(socket, "TCP_KEEPCNT"):
        sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_KEEPCNT, count)


async def open_transport(config: SessionConfig) -> Transport:
    """Connect to ``config.host:config.port`` and configure keepalive."""
    logger.info("Connecting to {}:{}", config.host, config.port)
    try:
        sock = await asyncio.to_thread(
            socket.create_connection, (config.host, config.port)
        )
    except OSError as e:
        raise ScpiConnectError(
            f"Could not connect to {config.host}:{config.port}: {e}"
        ) from e

    try:
        configure_keepalive(
            sock,
            config.keepalive_idle,
            config.keepalive_interval,
            config.keepalive_count,
        )
    except OSError as e:
        sock.close()
        raise ScpiConnectError(
            f"Could not configure keepalive on {config.host}:{config.port}: {e}"
        ) from e

    transport = Transport(sock, config.host, config.port)
    logger.info("Connected to {}:{}", config.host, config.port)
    return transport
