"""Data-quality checks for daily usage series.

The projector silently ignores days outside the cycle window and counts
every entry as one day. This validator reports those situations so the
caller can tell a thin projection from bad input.
"""

import datetime as dt
import logging
from collections import Counter
from typing import Optional, Sequence

from kipraxis.calculators.time_utils import DateLike, to_date
from kipraxis.errors import InvalidDateRange
from kipraxis.models.usage import DailyUsage
from kipraxis.validators.validation_report import ValidationReport

logger = logging.getLogger(__name__)


class UsageValidator:
    """Validates a daily usage series against a billing cycle.

    Example:
        >>> validator = UsageValidator()
        >>> report = validator.validate_series(days, "2025-08-01", "2025-08-31")
        >>> print(report.summary())
    """

    def validate_series(
        self,
        daily: Sequence[DailyUsage],
        cycle_start: DateLike,
        cycle_end: DateLike,
        now: Optional[DateLike] = None,
    ) -> ValidationReport:
        """Validate a daily usage series.

        Reports:
        - ERROR: the same date appears more than once (it would be counted
          as several days)
        - WARNING: entries dated after ``now``
        - INFO: entries outside the cycle, and elapsed cycle days with no entry

        Raises:
            InvalidDateRange: If a date cannot be parsed or start is after end
        """
        start = to_date(cycle_start, "cycle_start")
        end = to_date(cycle_end, "cycle_end")
        if start > end:
            raise InvalidDateRange(
                f"Cycle start ({start}) is after cycle end ({end})", start=start, end=end
            )
        today = to_date(now, "now") if now is not None else dt.date.today()

        report = ValidationReport()

        counts = Counter(day.date for day in daily)
        for day, count in sorted(counts.items()):
            if count > 1:
                report.add_error(
                    "date",
                    f"Date appears {count} times",
                    day.isoformat(),
                )

        for idx, day in enumerate(daily, start=1):
            context = {"row": idx}
            if day.date > today:
                report.add_warning(
                    "date", "Usage recorded for a future date", day.date.isoformat(), context
                )
            elif not start <= day.date <= end:
                report.add_info(
                    "date", "Entry is outside the billing cycle", day.date.isoformat(), context
                )

        last_elapsed = min(today, end)
        missing = [
            start + dt.timedelta(days=offset)
            for offset in range((last_elapsed - start).days + 1)
            if start + dt.timedelta(days=offset) not in counts
        ]
        if missing:
            report.add_info(
                "date",
                f"{len(missing)} elapsed day(s) without usage data",
                [d.isoformat() for d in missing],
            )

        logger.debug(f"Usage series validation: {report.summary()}")
        return report
