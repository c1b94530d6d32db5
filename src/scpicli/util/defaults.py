# -*- coding: utf-8 -*-

import pathlib

DEFAULT_PORT = 9001
DEFAULT_TIMEOUT = 5  # seconds to wait for a query response
DEFAULT_HEARTBEAT_INTERVAL = 5  # seconds between liveness peeks
DEFAULT_LOGLEVEL = "INFO"
TEST_LOGLEVEL = "TRACE"
SINGLE_LINE_ERR_LOG = False  # reformat tracebacks into a single line

# socket-level keepalive, seconds / probe count
KEEPALIVE_IDLE = 4
KEEPALIVE_INTERVAL = 1
KEEPALIVE_COUNT = 4

HISTORY_LENGTH = 1000
LOG_DIR = pathlib.Path.home().joinpath(".scpicli")
