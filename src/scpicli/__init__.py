# -*- coding: utf-8 -*-
"""# scpicli

A lightweight interactive client for SCPI instruments that expose a raw TCP
socket. Commands are sent one per line; queries (commands whose header ends in
`?`) wait for a single-line reply.

- `scpicli.client`: transport, exchange, liveness monitor and session loop.
- `scpicli.cli`: the `scpi` command-line entry point.
- `scpicli.types`: session configuration and exceptions.
- `scpicli.util`: defaults, logging and terminal helpers.
"""

from ._version import __version__
