# -*- coding: utf-8 -*-
"""Snapshot and restore of the controlling terminal's tty attributes."""

import sys

from loguru import logger

try:
    import termios
except ImportError:  # windows
    termios = None


class TerminalState:
    """Saved tty attributes of a stream, restorable after an abrupt exit.

    The line editor puts the terminal into a non-canonical mode while it waits
    for a keystroke. If the session ends from underneath it, the attributes
    captured here are written back so the user's shell is left usable.
    """

    def __init__(self, stream=None):
        self.stream = sys.stdin if stream is None else stream
        self._attrs = None

    def save(self) -> bool:
        if termios is None or not _isatty(self.stream):
            return False
        try:
            self._attrs = termios.tcgetattr(self.stream.fileno())
        except termios.error as e:
            logger.debug("Could not read terminal attributes: {}", e)
            self._attrs = None
        return self._attrs is not None

    def restore(self) -> bool:
        if self._attrs is None:
            return False
        try:
            termios.tcsetattr(self.stream.fileno(), termios.TCSADRAIN, self._attrs)
        except termios.error as e:
            logger.warning("Could not restore terminal attributes: {}", e)
            return False
        logger.trace("Terminal attributes restored.")
        return True


def _isatty(stream) -> bool:
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False
