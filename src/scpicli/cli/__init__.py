"""
Command-line interface for scpicli.

The `scpi` command connects to an instrument's raw SCPI socket and either
runs an interactive prompt or, given `-c` or piped input, runs a batch of
commands and exits.

Examples
--------
Interactive prompt:
```bash
$ scpi 192.168.1.20
192.168.1.20> *IDN?
KEYSIGHT TECHNOLOGIES,E36312A,MY12345678,2.1.0-1.0.4-1.12
```

One-shot command:
```bash
$ scpi 192.168.1.20 5025 -c "*IDN?"
```

Batch from a file:
```bash
$ scpi 192.168.1.20 < setup.scpi
```

CLI Help
--------
```
$ scpi --help
Usage: scpi [OPTIONS] HOST [PORT]

  A lightweight interactive SCPI client that handles basic commands and
  queries.

Options:
  -t, --timeout FLOAT             Number of seconds to wait for a query
                                  response (default: 5)
  -c, --command TEXT              A command/query to run and immediately exit
  -ltf, --log-to-file / --no-log-to-file
  -lts, --log-to-stderr / --no-log-to-stderr
  -lp, --log-path TEXT
  -ll, --log-level TEXT
  --version                       Show the version and exit.
  --help                          Show this message and exit.
```
"""

from .base import cli

__all__ = ["cli"]
