import asyncio

import click
from loguru import logger

from scpicli._version import __version__
from scpicli.client import batch_commands, read_piped_stdin, run_session
from scpicli.types import ScpiError, SessionConfig
from scpicli.util import (
    DEFAULT_LOGLEVEL,
    DEFAULT_PORT,
    DEFAULT_TIMEOUT,
    format_error_response,
    shutdown_client_log,
    start_client_log,
)


@click.command(name="scpi")
@click.argument("host")
@click.argument(
    "port",
    type=click.IntRange(1, 65535),
    default=DEFAULT_PORT,
    required=False,
)
@click.option(
    "--timeout",
    "-t",
    type=click.FloatRange(min=0, min_open=True),
    default=DEFAULT_TIMEOUT,
    help=f"Number of seconds to wait for a query response (default: {DEFAULT_TIMEOUT})",
)
@click.option(
    "--command",
    "-c",
    default=None,
    help="A command/query to run and immediately exit",
)
@click.option(
    "--log-to-file/--no-log-to-file",
    "-ltf/",
    default=True,
    help="Enable/disable logging to file (default: enabled)",
)
@click.option(
    "--log-to-stderr/--no-log-to-stderr",
    "-lts/",
    default=False,
    help="Enable/disable console logging to stderr (default: disabled)",
)
@click.option(
    "--log-path",
    "-lp",
    default="",
    help="Custom path for log file (default: ~/.scpicli/client.log)",
)
@click.option(
    "--log-level",
    "-ll",
    default=DEFAULT_LOGLEVEL,
    help="Logging level (TRACE, DEBUG, INFO, WARNING, ERROR) (default: INFO)",
)
@click.version_option(__version__, prog_name="scpi")
@click.pass_context
def cli(
    ctx,
    host,
    port,
    timeout,
    command,
    log_to_file,
    log_to_stderr,
    log_path,
    log_level,
):
    """A lightweight interactive SCPI client that handles basic commands and queries.

    Connects to HOST on PORT (default: 9001). Commands are sent one per line;
    commands whose header ends in '?' wait for a one-line reply.

    Also accepts piped input or input redirected from a file (one command per
    line), which is run in place of the interactive prompt when -c is not
    given.
    """
    start_client_log(
        log_to_file=log_to_file,
        log_to_stderr=log_to_stderr,
        log_path=log_path,
        log_level=log_level.upper(),
    )

    if command is None:
        command = read_piped_stdin(click.get_text_stream("stdin"))

    commands = batch_commands(command) if command is not None else None
    try:
        config = SessionConfig(host=host, port=port, timeout=timeout)
    except ValueError as e:
        shutdown_client_log()
        raise click.UsageError(str(e))

    try:
        status = asyncio.run(run_session(config, commands=commands))
    except (ScpiError, OSError) as e:
        logger.error("Session failed: {}", e)
        logger.debug(format_error_response())
        click.echo(f"ERROR: {e}", err=True)
        status = 1
    except KeyboardInterrupt:
        # only reached where the event loop cannot trap SIGINT itself
        click.echo("\nExiting.")
        status = 0
    finally:
        shutdown_client_log()

    ctx.exit(status)
