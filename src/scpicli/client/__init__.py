"""
Command/response client for line-oriented SCPI socket servers.

Examples
--------
```python
import asyncio
from scpicli.client import run_session
from scpicli.types import SessionConfig

config = SessionConfig(host="192.168.1.20")
asyncio.run(run_session(config, commands=["*RST", "*IDN?"]))
```
"""

from .exchange import exchange, normalize_command
from .monitor import LivenessMonitor
from .query import is_query
from .session import EXIT_FAILURE, EXIT_OK, Session, run_session
from .source import InteractiveSource, batch_commands, read_piped_stdin
from .transport import PeekStatus, Transport, configure_keepalive, open_transport

__all__ = [
    "EXIT_FAILURE",
    "EXIT_OK",
    "InteractiveSource",
    "LivenessMonitor",
    "PeekStatus",
    "Session",
    "Transport",
    "batch_commands",
    "configure_keepalive",
    "exchange",
    "is_query",
    "normalize_command",
    "open_transport",
    "read_piped_stdin",
    "run_session",
]
