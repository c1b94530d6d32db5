# -*- coding: utf-8 -*-
"""
Utility functions and constants for scpicli.

- Default ports, timeouts and keepalive settings
- Logging configuration and management
- Terminal state save/restore

See Also
--------
scpicli.util.logging : Logging configuration
scpicli.util.terminal : Terminal attribute handling
"""

from .defaults import (
    DEFAULT_HEARTBEAT_INTERVAL,
    DEFAULT_LOGLEVEL,
    DEFAULT_PORT,
    DEFAULT_TIMEOUT,
    HISTORY_LENGTH,
    KEEPALIVE_COUNT,
    KEEPALIVE_IDLE,
    KEEPALIVE_INTERVAL,
    SINGLE_LINE_ERR_LOG,
    TEST_LOGLEVEL,
)
from .logging import (
    clear_log,
    format_error_response,
    get_log_filename,
    log_default_path_client,
    shutdown_client_log,
    start_client_log,
)
from .terminal import TerminalState

__all__ = [
    "DEFAULT_HEARTBEAT_INTERVAL",
    "DEFAULT_LOGLEVEL",
    "DEFAULT_PORT",
    "DEFAULT_TIMEOUT",
    "HISTORY_LENGTH",
    "KEEPALIVE_COUNT",
    "KEEPALIVE_IDLE",
    "KEEPALIVE_INTERVAL",
    "SINGLE_LINE_ERR_LOG",
    "TEST_LOGLEVEL",
    "clear_log",
    "format_error_response",
    "get_log_filename",
    "log_default_path_client",
    "shutdown_client_log",
    "start_client_log",
    "TerminalState",
]
