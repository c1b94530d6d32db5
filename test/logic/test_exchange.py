"""Tests for the command/response exchange."""

import asyncio

import pytest

from scpicli.client import exchange, normalize_command
from scpicli.types import ExchangeWriteError, ScpiError


class ScriptedConnection:
    """Records writes and replays a canned reply line."""

    def __init__(self, reply=b"", read_delay=0.0, read_error=None, write_error=None):
        self.reply = reply
        self.read_delay = read_delay
        self.read_error = read_error
        self.write_error = write_error
        self.written = []
        self.reads = 0
        self.events = []

    async def write(self, data: bytes) -> None:
        self.events.append("write")
        if self.write_error is not None:
            raise self.write_error
        self.written.append(data)

    async def readline(self) -> bytes:
        self.events.append("read")
        self.reads += 1
        if self.read_delay:
            await asyncio.sleep(self.read_delay)
        if self.read_error is not None:
            raise self.read_error
        return self.reply


class TestNormalizeCommand:
    def test_adds_terminator(self):
        assert normalize_command("*RST") == "*RST\n"

    def test_does_not_double_terminate(self):
        assert normalize_command("*RST\n") == "*RST\n"

    def test_empty_command(self):
        assert normalize_command("") == "\n"


class TestExchange:
    @pytest.mark.asyncio
    async def test_query_response(self):
        conn = ScriptedConnection(reply=b"123\n")

        response = await exchange(conn, "QUERY?", 5)

        assert response == "123"
        assert conn.written == [b"QUERY?\n"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("command", ["X?", "X?\n"])
    async def test_terminator_normalized_before_read(self, command):
        conn = ScriptedConnection(reply=b"1\n")

        await exchange(conn, command, 5)

        assert conn.written == [b"X?\n"]
        assert conn.events == ["write", "read"]

    @pytest.mark.asyncio
    async def test_response_whitespace_stripped(self):
        conn = ScriptedConnection(reply=b"  +1.000E+00 \r\n")

        assert await exchange(conn, "MEAS:VOLT?", 5) == "+1.000E+00"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("command", ["*RST", "*SAV\n", 'HELLO:WORLD "GOODBYE"'])
    async def test_command_never_reads(self, command):
        conn = ScriptedConnection(reply=b"should not be read\n")

        assert await exchange(conn, command, 5) is None
        assert conn.reads == 0
        assert len(conn.written) == 1

    @pytest.mark.asyncio
    async def test_timeout_is_not_fatal(self, capsys):
        conn = ScriptedConnection(reply=b"late\n", read_delay=1.0)

        response = await exchange(conn, "*IDN?", 0.05)

        assert response is None
        assert "Timed out waiting for query response" in capsys.readouterr().err

    @pytest.mark.asyncio
    async def test_read_error_is_not_fatal(self, capsys):
        conn = ScriptedConnection(read_error=ConnectionError("Connection closed by peer"))

        response = await exchange(conn, "*IDN?", 5)

        assert response is None
        assert "Connection closed by peer" in capsys.readouterr().err

    @pytest.mark.asyncio
    async def test_write_error_is_fatal(self):
        conn = ScriptedConnection(write_error=BrokenPipeError("Broken pipe"))

        with pytest.raises(ExchangeWriteError) as excinfo:
            await exchange(conn, "*IDN?", 5)

        assert isinstance(excinfo.value, ScpiError)
        assert excinfo.value.command == "*IDN?"
        assert conn.reads == 0

    @pytest.mark.asyncio
    async def test_write_error_on_command_is_fatal(self):
        conn = ScriptedConnection(write_error=ConnectionResetError("reset"))

        with pytest.raises(ExchangeWriteError):
            await exchange(conn, "*RST", 5)
