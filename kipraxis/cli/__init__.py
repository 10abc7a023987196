"""kipraxis CLI.

Command-line access to the usage core: billable minutes, cycle projections,
call summaries and window checks.
"""

import click

from kipraxis import __version__
from kipraxis.cli.commands.billing import billable_minutes
from kipraxis.cli.commands.usage import project_usage, summarize_calls
from kipraxis.cli.commands.windows import check_window, validate_range
from kipraxis.config.logging_config import LoggingConfig, configure_logging
from kipraxis.utils.logging_utils import LogContext, generate_correlation_id


@click.group(help="kipraxis CLI - Usage and billing figures for the practice dashboard")
@click.version_option(version=__version__)
@click.option("--debug", is_flag=True, help="Show stack traces and debug logs")
@click.option(
    "--log-format",
    type=click.Choice(["standard", "json"]),
    default=None,
    help="Log output format (default: LOG_FORMAT or standard)",
)
@click.pass_context
def cli(ctx: click.Context, debug: bool, log_format):
    """kipraxis CLI main entry point."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug

    config = LoggingConfig.from_env(default_level="WARNING")
    if debug:
        config.log_level = "DEBUG"
    if log_format:
        config.log_format = log_format
    configure_logging(config)

    ctx.with_resource(LogContext(correlation_id=generate_correlation_id()))


cli.add_command(billable_minutes)
cli.add_command(project_usage)
cli.add_command(summarize_calls)
cli.add_command(check_window)
cli.add_command(validate_range)


def main():
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
