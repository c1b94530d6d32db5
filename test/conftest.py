import asyncio
import contextlib

import pytest
import pytest_asyncio


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "slow: marks test as slow running test")
    config.addinivalue_line(
        "markers", "network: marks test that opens local TCP sockets"
    )


class FakeInstrument:
    """Local asyncio TCP server answering queries from a reply table."""

    def __init__(self):
        self.replies: dict[str, str] = {}
        self.reply_delay = 0.0
        self.received: list[str] = []
        self.port = None
        self._server = None
        self._writers: list[asyncio.StreamWriter] = []

    async def start(self):
        self._server = await asyncio.start_server(self._handle, "127.0.0.1", 0)
        self.port = self._server.sockets[0].getsockname()[1]

    async def _handle(self, reader, writer):
        self._writers.append(writer)
        while line := await reader.readline():
            text = line.decode()
            self.received.append(text)
            reply = self.replies.get(text.strip())
            if reply is not None:
                if self.reply_delay:
                    await asyncio.sleep(self.reply_delay)
                writer.write(reply.encode())
                await writer.drain()
        writer.close()

    async def hang_up(self):
        """Close every accepted connection from the server side."""
        for writer in self._writers:
            writer.close()
            with contextlib.suppress(ConnectionError):
                await writer.wait_closed()

    async def stop(self):
        await self.hang_up()
        self._server.close()
        with contextlib.suppress(asyncio.TimeoutError):
            await asyncio.wait_for(self._server.wait_closed(), timeout=1.0)


@pytest_asyncio.fixture
async def instrument():
    inst = FakeInstrument()
    await inst.start()
    yield inst
    await inst.stop()
