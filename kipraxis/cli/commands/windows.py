"""Call window and date range check commands."""

import click

from kipraxis.cli.error_handlers import with_error_handling
from kipraxis.cli.utils.formatters import format_error, format_success
from kipraxis.config.settings import get_config
from kipraxis.utils.formatters import format_time_window
from kipraxis.validators.window_validators import (
    WindowCheck,
    is_valid_call_window,
    validate_date_range,
)


def _report(ctx: click.Context, check: WindowCheck, label: str) -> None:
    if check.valid:
        click.echo(format_success(f"{label} ist gültig"))
        return
    click.echo(format_error(f"{check.message} [{check.reason.value}]"))
    ctx.exit(1)


@click.command(name="check-window")
@click.argument("from_time")
@click.argument("to_time")
@click.pass_context
def check_window(ctx: click.Context, from_time: str, to_time: str):
    """Check that a call window FROM_TIME-TO_TIME (HH:MM) is allowed.

    Exits with status 1 when the window is rejected.

    Example:
        kipraxis check-window 09:00 17:00
    """
    debug = (ctx.obj or {}).get("debug", False)
    with with_error_handling(debug):
        settings = get_config()
        check = is_valid_call_window(
            from_time,
            to_time,
            earliest=settings.call_window_start,
            latest=settings.call_window_end,
        )
        _report(ctx, check, format_time_window(from_time, to_time))


@click.command(name="validate-range")
@click.argument("from_date")
@click.argument("to_date")
@click.option("--now", default=None, help="Reference date (default: now)")
@click.pass_context
def validate_range(ctx: click.Context, from_date: str, to_date: str, now):
    """Check a custom reporting range FROM_DATE to TO_DATE (YYYY-MM-DD).

    Exits with status 1 when the range is rejected.
    """
    debug = (ctx.obj or {}).get("debug", False)
    with with_error_handling(debug):
        settings = get_config()
        check = validate_date_range(
            from_date,
            to_date,
            now=now,
            max_days=settings.max_range_days,
            timezone=settings.timezone,
        )
        _report(ctx, check, f"Zeitraum {from_date} – {to_date}")
