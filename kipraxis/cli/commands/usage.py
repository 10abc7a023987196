"""Usage projection and call summary commands."""

from pathlib import Path
from typing import Optional

import click

from kipraxis.aggregators.usage_aggregator import UsageAggregator
from kipraxis.calculators.projection import project_cycle_usage
from kipraxis.calculators.time_utils import to_date
from kipraxis.calculators.usage_stats import generate_cycle_dates
from kipraxis.cli.commands.billing import billing_options, resolve_billing_rules
from kipraxis.cli.error_handlers import with_error_handling
from kipraxis.cli.utils.formatters import (
    format_info,
    format_success,
    format_table,
    format_warning,
)
from kipraxis.config.settings import get_config
from kipraxis.readers.usage_reader import UsageReader
from kipraxis.utils.formatters import (
    format_duration,
    format_number_de,
    format_percentage,
)
from kipraxis.utils.logging_utils import LogContext
from kipraxis.validators.usage_validator import UsageValidator
from kipraxis.validators.validation_report import ValidationSeverity
from kipraxis.writers.csv_exporter import export_daily_usage_csv

_CONFIDENCE_DE = {"high": "hoch", "medium": "mittel", "low": "niedrig"}


@click.command(name="project-usage")
@click.argument("usage_csv", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--cycle",
    type=click.Choice(["current", "last"]),
    default="current",
    help="Calendar-month cycle to project (ignored with --start/--end)",
)
@click.option("--start", "cycle_start", default=None, help="Cycle start (YYYY-MM-DD)")
@click.option("--end", "cycle_end", default=None, help="Cycle end (YYYY-MM-DD)")
@click.option("--now", default=None, help="Reference date (default: today)")
@click.pass_context
def project_usage(
    ctx: click.Context,
    usage_csv: Path,
    cycle: str,
    cycle_start: Optional[str],
    cycle_end: Optional[str],
    now: Optional[str],
):
    """Project end-of-cycle minutes from a daily usage CSV.

    Example:
        kipraxis project-usage usage.csv --start 2025-08-01 --end 2025-08-31
    """
    debug = (ctx.obj or {}).get("debug", False)
    with with_error_handling(debug):
        if bool(cycle_start) != bool(cycle_end):
            raise click.UsageError("--start and --end must be given together")
        if not cycle_start:
            today = to_date(now, "now") if now else None
            window = generate_cycle_dates(cycle, today)
            cycle_start, cycle_end = window.start.isoformat(), window.end.isoformat()

        daily = UsageReader().read_daily_usage(usage_csv)

        with LogContext(cycle_start=cycle_start, cycle_end=cycle_end):
            report = UsageValidator().validate_series(daily, cycle_start, cycle_end, now)
            projection = project_cycle_usage(daily, cycle_start, cycle_end, now)

        for issue in report.filter(ValidationSeverity.WARNING):
            click.echo(format_warning(str(issue)))

        click.echo(format_info(f"Cycle {cycle_start} – {cycle_end}, {len(daily)} day(s) read"))
        click.echo(
            format_success(
                f"Projected minutes: {format_number_de(projection.minutes_total)} "
                f"({projection.method.value}, Konfidenz {_CONFIDENCE_DE[projection.confidence.value]})"
            )
        )


@click.command(name="summarize-calls")
@click.argument("calls_csv", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--export",
    "export_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the daily usage table to this CSV file",
)
@billing_options
@click.pass_context
def summarize_calls(
    ctx: click.Context,
    calls_csv: Path,
    export_path: Optional[Path],
    rounding: Optional[str],
    min_charge: Optional[int],
    plan_minutes: Optional[int],
):
    """Summarize a call records CSV into usage totals.

    Example:
        kipraxis summarize-calls calls.csv --export usage.csv
    """
    debug = (ctx.obj or {}).get("debug", False)
    with with_error_handling(debug):
        settings = get_config()
        rules = resolve_billing_rules(rounding, min_charge, plan_minutes)
        aggregator = UsageAggregator(
            rules,
            business_hours=(settings.business_hours_start, settings.business_hours_end),
            timezone=settings.timezone,
        )

        calls = UsageReader().read_calls(calls_csv)
        totals = aggregator.summarize(calls)

        if totals.calls_total == 0:
            click.echo(format_info("Keine Daten im Zeitraum"))
            return

        rows = [
            ["Anrufe", format_number_de(totals.calls_total)],
            ["Minuten eingehend", format_number_de(totals.minutes_inbound)],
            ["Minuten ausgehend", format_number_de(totals.minutes_outbound)],
            ["Minuten gesamt", format_number_de(totals.minutes_total)],
            ["Ø Dauer", format_duration(totals.avg_duration_sec)],
            ["Außerhalb Öffnungszeiten", format_percentage(totals.after_hours_pct)],
        ]
        rows.extend(
            [f"Kategorie {category}", format_number_de(minutes)]
            for category, minutes in totals.minutes_by_category.items()
        )
        if totals.overage_minutes is not None:
            rows.append(["Mehrminuten", format_number_de(totals.overage_minutes)])

        click.echo(format_table(["Kennzahl", "Wert"], rows))

        if export_path is not None:
            written = export_daily_usage_csv(aggregator.build_daily_usage(calls), export_path)
            click.echo(format_success(f"Daily usage exported to {written}"))
