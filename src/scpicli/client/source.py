"""
Where commands come from: batch text or an interactive line editor.
"""

from __future__ import annotations

import sys
from typing import Optional, TextIO

import click
from loguru import logger

from scpicli.util.defaults import HISTORY_LENGTH

try:
    import readline
except ImportError:  # windows without a readline port: no history or editing
    readline = None

RESET = "\x1b[0m"


def batch_commands(text: str) -> list[str]:
    """Split batch text into one command per line.

    A trailing newline does not produce an extra empty command, and CRLF line
    endings are accepted. Blank lines in the middle are kept and sent as-is.
    """
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def read_piped_stdin(stream: Optional[TextIO] = None) -> Optional[str]:
    """Drain `stream` if it is a pipe or redirected file, else return None."""
    stream = sys.stdin if stream is None else stream
    if stream is None or stream.isatty():
        return None
    lines = [line.rstrip("\n") for line in stream]
    logger.debug("Read {} line(s) from redirected stdin", len(lines))
    return "\n".join(lines)


class InteractiveSource:
    """Prompted line input with readline editing and history.

    Auto-history is turned off so the session decides what is remembered;
    lines that begin with whitespace, and repeats of the previous line, are
    kept out of history.
    """

    def __init__(self, host: str, history_length: int = HISTORY_LENGTH, color: Optional[bool] = None):
        self.host = host
        self.plain_prompt = f"{host}> "
        if color is None:
            color = sys.stdout.isatty()
        if color:
            # \001 / \002 mark the escape codes as zero-width for readline
            start = click.style("", fg="green", reset=False)
            self.prompt = f"\001{start}\002{host}\001{RESET}\002> "
        else:
            self.prompt = self.plain_prompt

        if readline is not None:
            readline.set_auto_history(False)
            readline.set_history_length(history_length)

    def readline(self) -> str:
        """Block for the next line. Raises EOFError / KeyboardInterrupt at input end."""
        return input(self.prompt)

    def add_history(self, line: str) -> bool:
        if readline is None or not line or line[:1].isspace():
            return False
        length = readline.get_current_history_length()
        if length and readline.get_history_item(length) == line:
            return False
        readline.add_history(line)
        return True
