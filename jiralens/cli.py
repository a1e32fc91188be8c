"""CLI interface for jiralens.

This module provides the Typer-based command-line interface:

    jiralens [TICKET_KEY]

The ticket key defaults to "AIP-6". On success the ticket report is printed
to stdout; on failure the error kind and message go to stderr and the
process exits with the error's exit code.
"""

import asyncio
from collections.abc import Callable, Coroutine
from typing import Annotated, TypeVar

import typer

from jiralens import DEFAULT_TICKET_KEY, SCRIPT_NAME
from jiralens.config.manager import load_credentials
from jiralens.config.settings import Credentials
from jiralens.integrations.models import Ticket
from jiralens.integrations.ticket_service import create_ticket_service
from jiralens.ui.report import render_ticket
from jiralens.utils.console import console_err, print_error, show_version
from jiralens.utils.errors import ExitCode, JiralensError
from jiralens.utils.logging import log_message, setup_logging

app = typer.Typer(
    name=SCRIPT_NAME,
    help=f"{SCRIPT_NAME} - Fetch a Jira ticket and print its details",
    add_completion=False,
    no_args_is_help=False,
)


T = TypeVar("T")


class AsyncLoopAlreadyRunningError(JiralensError):
    """Raised when trying to run async code in an existing event loop."""


def run_async(coro_factory: Callable[[], Coroutine[None, None, T]]) -> T:
    """Run an async coroutine from synchronous code.

    Takes a factory instead of a coroutine so the running-loop check happens
    before the coroutine is created.

    Raises:
        AsyncLoopAlreadyRunningError: If an event loop is already running
    """
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        loop = None

    if loop is not None:
        raise AsyncLoopAlreadyRunningError(
            "Cannot run async operation: an event loop is already running. "
            "Consider using 'await' directly or running from a synchronous environment."
        )

    return asyncio.run(coro_factory())


async def fetch_ticket(credentials: Credentials, ticket_key: str) -> Ticket:
    """Fetch one ticket, closing the HTTP client afterwards."""
    async with create_ticket_service(credentials) as service:
        return await service.get_ticket(ticket_key)


def _report_failure(ticket_key: str, error: JiralensError) -> None:
    log_message(f"Failed to fetch ticket {ticket_key}: {type(error).__name__}: {error}")
    print_error(f"Error fetching ticket ({type(error).__name__}): {error}")
    cause = error.__cause__
    if cause is not None and str(cause):
        console_err.print(f"Cause: {cause}", markup=False, highlight=False)


def version_callback(value: bool) -> None:
    """Display version and exit."""
    if value:
        show_version()
        raise typer.Exit()


@app.command()
def main(
    ticket: Annotated[
        str,
        typer.Argument(help="Jira ticket key, e.g. PROJ-123"),
    ] = DEFAULT_TICKET_KEY,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Fetch a Jira ticket and print its details."""
    setup_logging()
    log_message(f"Fetching Jira ticket: {ticket}")

    try:
        credentials = load_credentials()
        result = run_async(lambda: fetch_ticket(credentials, ticket))
    except JiralensError as e:
        _report_failure(ticket, e)
        raise typer.Exit(e.exit_code) from e
    except KeyboardInterrupt as e:
        print_error("Operation cancelled by user")
        raise typer.Exit(ExitCode.GENERAL_ERROR) from e

    render_ticket(result)


__all__ = [
    "app",
    "fetch_ticket",
    "main",
    "run_async",
]
