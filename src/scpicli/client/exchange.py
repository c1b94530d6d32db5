"""
Send one command and, for queries, wait for its single-line reply.

A failed write ends the session: the outbound socket is broken and nothing
sent afterwards would arrive. A missing reply only affects the one command, so
a timeout or read error is reported to the user and the exchange returns
``None``.
"""

from __future__ import annotations

import asyncio
from typing import Optional, Protocol

import click
from loguru import logger

from scpicli.client.query import is_query
from scpicli.types import ExchangeWriteError

TIMEOUT_MSG = "Timed out waiting for query response"


class LineConnection(Protocol):
    """Anything the exchange can write a command to and read a line from."""

    async def write(self, data: bytes) -> None: ...

    async def readline(self) -> bytes: ...


def normalize_command(command: str) -> str:
    """Terminate `command` with exactly the one newline it may be missing."""
    if command.endswith("\n"):
        return command
    return command + "\n"


async def read_response(connection: LineConnection, deadline: float) -> str:
    """Read a single reply line within `deadline` seconds.

    Raises
    ------
    TimeoutError
        If no complete line arrives within the deadline.
    OSError
        If the connection fails or closes while reading.
    """
    try:
        line = await asyncio.wait_for(connection.readline(), timeout=deadline)
    except asyncio.TimeoutError as e:
        raise TimeoutError(TIMEOUT_MSG) from e
    return line.decode("utf-8", errors="replace")


async def exchange(
    connection: LineConnection, command: str, deadline: float
) -> Optional[str]:
    """Send `command` and return the reply if it is a query.

    Parameters
    ----------
    connection : LineConnection
        Transport to use. The caller is expected to hold its lock.
    command : str
        Command text, with or without a trailing newline.
    deadline : float
        Seconds to wait for a query reply.

    Returns
    -------
    Optional[str]
        The stripped reply, or None for commands, timeouts and read errors.

    Raises
    ------
    ExchangeWriteError
        If the command could not be written.
    """
    wire = normalize_command(command)

    try:
        await connection.write(wire.encode("utf-8"))
    except OSError as e:
        logger.error("Failed to send {!r}: {}", wire, e)
        raise ExchangeWriteError(f"Failed to send command: {e}", command) from e

    if not is_query(command):
        return None

    try:
        response = await read_response(connection, deadline)
    except TimeoutError as e:
        logger.warning("No response to {!r} within {}s", command.strip(), deadline)
        click.echo(str(e), err=True)
        return None
    except OSError as e:
        logger.warning("Error reading response to {!r}: {}", command.strip(), e)
        click.echo(f"Error reading query response: {e}", err=True)
        return None

    logger.debug("{!r} -> {!r}", command.strip(), response)
    return response.strip()
