"""German display formatting for usage figures and calendar entries.

The billing core only returns plain integers; these helpers turn them into
the strings shown in the dashboard (German locale only).
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Literal, Optional, Union

from kipraxis.calculators.calendar_calculator import get_holiday_duration
from kipraxis.calculators.time_utils import DateLike, to_date

THIN_SPACE = "\u2009"
EN_DASH = "\u2013"


def format_number_de(num: Union[int, float, Decimal], group_separator: str = THIN_SPACE) -> str:
    """Format a number with German separators.

    Thousands are grouped with a thin space (pass ``group_separator="."``
    for the classic period grouping), decimals use a comma and are limited
    to three places.

    Example:
        >>> format_number_de(1234567, group_separator=".")
        '1.234.567'
        >>> format_number_de(1234.5, group_separator=".")
        '1.234,5'
    """
    value = Decimal(str(num)).quantize(Decimal("0.001"), rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    integer_part, _, fraction = f"{abs(value):f}".partition(".")
    fraction = fraction.rstrip("0")

    grouped = f"{int(integer_part):,}".replace(",", group_separator)
    if fraction:
        return f"{sign}{grouped},{fraction}"
    return f"{sign}{grouped}"


def format_duration(seconds: int) -> str:
    """Format seconds as ``M:SS`` (minutes are not wrapped into hours).

    Example:
        >>> format_duration(269)
        '4:29'
    """
    minutes, remaining = divmod(int(seconds), 60)
    return f"{minutes}:{remaining:02d}"


def format_duration_text(seconds: int, locale: Literal["de", "en"] = "de") -> str:
    """Format seconds as readable text such as ``"1 Std. 5 Min."``.

    Seconds are only shown for durations under an hour.

    Example:
        >>> format_duration_text(95)
        '1 Min. 35 Sek.'
        >>> format_duration_text(3900, locale="en")
        '1h 5m'
    """
    hours, rest = divmod(int(seconds), 3600)
    minutes, remaining = divmod(rest, 60)
    units = ("Std.", "Min.", "Sek.") if locale == "de" else ("h", "m", "s")
    space = " " if locale == "de" else ""

    parts = []
    if hours > 0:
        parts.append(f"{hours}{space}{units[0]}")
    if minutes > 0:
        parts.append(f"{minutes}{space}{units[1]}")
    if remaining > 0 and hours == 0:
        parts.append(f"{remaining}{space}{units[2]}")

    return " ".join(parts) or f"0{space}{units[2]}"


def format_percentage(value: Union[int, float], decimals: int = 1) -> str:
    """Format a percentage value for KPI cards, e.g. ``12.5%``."""
    quantum = Decimal(1).scaleb(-decimals)
    return f"{Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)}%"


def format_time_window(from_: str, to: str) -> str:
    """Format a call window as ``08:00–12:00``."""
    return f"{from_}{EN_DASH}{to}"


def format_holiday_date_range(start: DateLike, end: Optional[DateLike] = None) -> str:
    """Format a holiday for the holiday list.

    Single-day holidays show just ``dd.MM``; spans show both days and the
    number of days.

    Example:
        >>> format_holiday_date_range("2025-12-24", "2025-12-26")
        '24.12 – 26.12 (3 Tage)'
    """
    start_day = to_date(start, "start")
    if end is None or to_date(end, "end") == start_day:
        return start_day.strftime("%d.%m")

    end_day = to_date(end, "end")
    duration = get_holiday_duration(start_day, end_day)
    label = "Tag" if duration == 1 else "Tage"
    return (
        f"{start_day.strftime('%d.%m')} {EN_DASH} {end_day.strftime('%d.%m')} "
        f"({duration} {label})"
    )
