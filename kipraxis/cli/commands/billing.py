"""Billable minutes command."""

from typing import Optional, Tuple

import click

from kipraxis.calculators.billing_calculator import (
    calculate_billable_minutes,
    calculate_overage_minutes,
    parse_billing_rules,
)
from kipraxis.cli.error_handlers import with_error_handling
from kipraxis.cli.utils.formatters import format_info, format_success, format_warning
from kipraxis.config.settings import get_config
from kipraxis.models.usage import BillingRules, RoundingMode
from kipraxis.utils.formatters import format_number_de


def resolve_billing_rules(
    rounding: Optional[str],
    min_charge: Optional[int],
    plan_minutes: Optional[int],
) -> BillingRules:
    """Combine command-line overrides with the configured billing rules."""
    configured = get_config().billing_rules()
    return parse_billing_rules(
        {
            "rounding": rounding or configured.rounding.value,
            "min_charge_sec": (
                min_charge if min_charge is not None else configured.min_charge_sec
            ),
            "plan_included_minutes": (
                plan_minutes
                if plan_minutes is not None
                else configured.plan_included_minutes
            ),
        }
    )


def billing_options(func):
    """Attach the shared --rounding/--min-charge/--plan-minutes options."""
    func = click.option(
        "--plan-minutes",
        type=click.IntRange(min=0),
        default=None,
        help="Minutes included in the plan (default from config)",
    )(func)
    func = click.option(
        "--min-charge",
        type=click.IntRange(min=0),
        default=None,
        help="Minimum billed seconds per call in per_second mode",
    )(func)
    func = click.option(
        "--rounding",
        type=click.Choice([m.value for m in RoundingMode]),
        default=None,
        help="Rounding policy (default from config)",
    )(func)
    return func


@click.command(name="billable-minutes")
@click.argument("durations", nargs=-1, type=click.IntRange(min=0))
@billing_options
@click.pass_context
def billable_minutes(
    ctx: click.Context,
    durations: Tuple[int, ...],
    rounding: Optional[str],
    min_charge: Optional[int],
    plan_minutes: Optional[int],
):
    """Calculate billable minutes for raw call DURATIONS (seconds).

    Example:
        kipraxis billable-minutes 10 61 300 --rounding per_minute
    """
    debug = (ctx.obj or {}).get("debug", False)
    with with_error_handling(debug):
        rules = resolve_billing_rules(rounding, min_charge, plan_minutes)
        click.echo(format_info(f"Rounding: {rules.rounding.value}, {len(durations)} call(s)"))

        minutes = calculate_billable_minutes(durations, rules)
        click.echo(format_success(f"Billable minutes: {format_number_de(minutes)}"))

        overage = calculate_overage_minutes(minutes, rules)
        if overage:
            click.echo(format_warning(f"Overage: {format_number_de(overage)} min above plan"))
