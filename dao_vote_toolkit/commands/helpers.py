"""Shared command helpers and utilities."""

import sys
from typing import Callable

from rich import print as rprint

from dao_vote_toolkit.shared.exceptions import (
    NonRetryableException,
    RetryableException,
    VoteVerificationException,
)


def handle_command_error(
    error: Exception, show_usage_fn: Callable[[], None] = None
) -> None:
    """
    Standard error handling for commands.

    Args:
        error: The exception that occurred
        show_usage_fn: Optional function to display usage instructions
    """
    if isinstance(error, VoteVerificationException):
        rprint(f"[red]Vote rejected ({error.code}):[/red] {error.message}")
    elif isinstance(error, (ValueError, NonRetryableException)):
        rprint(f"[red]Error:[/red] {str(error)}")
    elif isinstance(error, RetryableException):
        rprint(f"[yellow]Transient error:[/yellow] {str(error)}")
    else:
        rprint(f"[red]Unexpected error:[/red] {str(error)}")

    if show_usage_fn:
        show_usage_fn()

    sys.exit(1)
