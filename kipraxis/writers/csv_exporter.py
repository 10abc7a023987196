"""CSV export of the usage table.

Writes one row per day plus the figures shown in the dashboard's usage
table. Numbers stay plain (no locale formatting) so the file can be
re-imported with UsageReader.
"""

import logging
from pathlib import Path
from typing import Sequence, Union

import pandas as pd

from kipraxis.models.usage import BillingCycle, DailyUsage

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = [
    "date",
    "calls_total",
    "minutes_inbound",
    "minutes_outbound",
    "minutes_total",
]


def daily_usage_frame(rows: Sequence[DailyUsage]) -> pd.DataFrame:
    """Build a DataFrame of daily usage, oldest day first."""
    df = pd.DataFrame(
        [row.model_dump() for row in rows],
        columns=EXPORT_COLUMNS,
    )
    if not df.empty:
        df = df.sort_values("date", kind="stable").reset_index(drop=True)
        df["date"] = df["date"].map(lambda d: d.isoformat())
    return df


def export_filename(cycle: BillingCycle) -> str:
    """Default export file name, e.g. ``usage-data-aug-2025.csv``."""
    return f"usage-data-{cycle.name.replace(' ', '-').lower()}.csv"


def export_daily_usage_csv(
    rows: Sequence[DailyUsage], path: Union[str, Path]
) -> Path:
    """Write daily usage rows to a CSV file.

    Args:
        rows: Daily usage rows (any order)
        path: Target file; parent directories are created

    Returns:
        Path of the written file
    """
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)

    df = daily_usage_frame(rows)
    df.to_csv(target, index=False)

    logger.info(f"Exported {len(df)} usage rows to {target}")
    return target
