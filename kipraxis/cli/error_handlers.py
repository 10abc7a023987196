"""Error handling for CLI commands."""

import sys
import traceback
from typing import Optional

import click
from pydantic import ValidationError

from kipraxis.cli.utils.formatters import format_error, format_warning
from kipraxis.errors import (
    InvalidBillingRule,
    InvalidDateRange,
    InvalidTimeValue,
    UsageDataError,
)


class CLIError(Exception):
    """Base exception for CLI errors with user-friendly messages."""

    exit_code = 1
    label = "Error"

    def __init__(self, message: str, recovery_hint: Optional[str] = None):
        self.message = message
        self.recovery_hint = recovery_hint
        super().__init__(message)


class ConfigurationError(CLIError):
    """Error related to configuration issues."""

    exit_code = 1
    label = "Configuration Error"


class InputError(CLIError):
    """Error related to command-line input."""

    exit_code = 3
    label = "Input Error"


# (exception type, label, exit code, hint)
_DOMAIN_ERRORS = (
    (InvalidBillingRule, "Invalid Billing Rule", 2,
     "Use --rounding per_minute or per_second"),
    (InvalidDateRange, "Invalid Date Range", 3,
     "Dates must be ISO formatted (YYYY-MM-DD) and start before they end"),
    (InvalidTimeValue, "Invalid Time", 3, "Times must be given as HH:MM"),
    (UsageDataError, "Usage Data Error", 4, "Check the CSV file for the reported row"),
    (FileNotFoundError, "File Not Found", 5, "Check the file path"),
)


def _echo(label: str, message: str, hint: Optional[str]) -> None:
    click.echo(format_error(f"{label}: {message}"), err=True)
    if hint:
        click.echo(format_warning(f"Hint: {hint}"), err=True)


def handle_cli_error(error: Exception, debug: bool = False) -> int:
    """
    Report an error to the user and pick an exit code.

    Args:
        error: The exception that occurred
        debug: Whether to show the full stack trace for unexpected errors

    Returns:
        Exit code (1-5 for known error types, 130 for cancellation,
        255 for anything unexpected)
    """
    if isinstance(error, CLIError):
        _echo(error.label, error.message, error.recovery_hint)
        return error.exit_code

    for error_type, label, exit_code, hint in _DOMAIN_ERRORS:
        if isinstance(error, error_type):
            _echo(label, str(error), hint)
            return exit_code

    # Settings are validated by pydantic when first loaded
    if isinstance(error, ValidationError):
        _echo("Configuration Error", str(error), "Check your environment and .env file")
        return 1

    if isinstance(error, click.Abort):
        click.echo(format_warning("\nOperation cancelled by user"), err=True)
        return 130

    click.echo(format_error(f"Unexpected Error: {type(error).__name__}"), err=True)
    click.echo(str(error), err=True)
    if debug:
        click.echo("\nFull stack trace:", err=True)
        click.echo(traceback.format_exc(), err=True)
    else:
        click.echo(format_warning("\nRun with --debug flag for full stack trace"), err=True)
    return 255


class with_error_handling:
    """
    Context manager adding standardized error handling to a CLI command.

    Example:
        @click.command()
        @click.pass_context
        def my_command(ctx):
            with with_error_handling(ctx.obj["debug"]):
                ...
    """

    def __init__(self, debug: bool = False):
        self.debug = debug

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        # click's own exits and usage errors keep their normal handling
        if not isinstance(exc_val, Exception) or isinstance(
            exc_val, (click.exceptions.Exit, click.ClickException)
        ):
            return False
        sys.exit(handle_cli_error(exc_val, self.debug))
