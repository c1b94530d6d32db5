# -*- coding: utf-8 -*-
"""
Loguru sink management for the client.

Responses and user-facing diagnostics are written with click to stdout/stderr;
the loguru log is a separate record of the session, kept in a file by default
so it never interleaves with instrument responses.
"""

import os
import sys
import traceback

from loguru import logger

from .defaults import DEFAULT_LOGLEVEL, LOG_DIR, SINGLE_LINE_ERR_LOG


def format_error_response():
    err_str = traceback.format_exc()
    if SINGLE_LINE_ERR_LOG:
        return "\t".join(line.strip() for line in err_str.splitlines())
    else:
        return err_str


def start_client_log(
    log_to_file=True,
    log_to_stderr=False,
    log_path=None,
    clear_prev=True,
    log_level=DEFAULT_LOGLEVEL,
):
    if log_path is None or log_path == "":
        log_path = log_default_path_client()
    else:
        log_path = os.path.abspath(log_path)

    if clear_prev:
        clear_log(log_path)

    # first remove (default) stderr output
    logger.remove()

    if log_to_file:
        os.makedirs(os.path.dirname(log_path), exist_ok=True)
        logger.add(log_path, level=log_level, enqueue=True, colorize=False)
        logger.our_log_path_attr = log_path
    if log_to_stderr:
        logger.add(sys.stderr, level=log_level, enqueue=True, colorize=True)
    if log_to_file:
        logger.info("Client log started at {}", log_path)
    else:
        logger.info("Client log started.")


def log_default_path_client() -> str:
    return str(LOG_DIR.joinpath("client.log"))


def clear_log(log_path: str):
    """
    Clear the logger file at the given path. Missing files are ignored.

    Arguments
    ---------
    log_path : str
        The path to the logger file. Can get the default path with
        log_default_path_client().
    """
    if os.path.exists(log_path):
        try:
            os.remove(log_path)
        except PermissionError:
            logger.error(
                f"Could not clear log file {log_path}. Permission denied. Continuing."
            )


def shutdown_client_log():
    try:
        logger.info("Closing down client log.")
        logger.complete()
        logger.remove()
    except Exception:
        logger.exception("Error shutting down client log - skipping.")


def get_log_filename() -> str:
    """Finds the logger filename."""
    if hasattr(logger, "our_log_path_attr"):
        return logger.our_log_path_attr
    else:
        return ""
