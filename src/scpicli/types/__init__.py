"""
Shared types: session configuration and the client's exception hierarchy.

Error severity is decided where it is detected. Failures that end the session
are raised as `ScpiError` subclasses; per-command failures (a late or missing
query reply) are reported by the exchange and never raised.

Examples
--------
```python
from scpicli.types import SessionConfig
config = SessionConfig(host="192.168.1.20", timeout=2.0)
```
"""

from .config import SessionConfig


class ScpiError(Exception):
    """Base exception for session-ending communication errors."""

    pass


class ScpiConnectError(ScpiError):
    """Raised when the initial TCP connection cannot be established."""

    pass


class ExchangeWriteError(ScpiError):
    """Raised when a command cannot be written to the instrument."""

    def __init__(self, message, command=None):
        super().__init__(message)
        self.command = command


class ConnectionLostError(ScpiError):
    """Raised by the liveness monitor when the peer has closed the connection."""

    pass


__all__ = [
    "SessionConfig",
    "ScpiError",
    "ScpiConnectError",
    "ExchangeWriteError",
    "ConnectionLostError",
]
