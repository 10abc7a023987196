"""CSV reader for daily usage and call records.

This module reads the usage exports of the practice dashboard (or a
metering pipeline) and converts them into validated models.

Daily usage columns:
- date (or dateISO): YYYY-MM-DD
- minutes_total (or minutesTotal): billable minutes
- optional minutes_inbound, minutes_outbound, calls_total (or camelCase /
  ``calls``)

Call record columns:
- id, started_at, duration_sec, direction, optional category, status,
  caller_name (camelCase variants accepted)
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Type, TypeVar, Union

import pandas as pd
from pydantic import ValidationError

from kipraxis.errors import UsageDataError
from kipraxis.models.base import BaseDataModel
from kipraxis.models.call import CallRecord
from kipraxis.models.usage import DailyUsage
from kipraxis.utils.logging_utils import log_function_call

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseDataModel)

DAILY_USAGE_COLUMNS = {
    "dateISO": "date",
    "minutesTotal": "minutes_total",
    "minutesInbound": "minutes_inbound",
    "minutesOutbound": "minutes_outbound",
    "callsTotal": "calls_total",
    "calls": "calls_total",
}

CALL_COLUMNS = {
    "startedAt": "started_at",
    "durationSec": "duration_sec",
    "callerName": "caller_name",
}


class UsageReader:
    """Reader for usage CSV files.

    Rows are validated one by one; the first invalid row aborts the read
    with a UsageDataError naming the row, so a partially read file is never
    fed into billing figures.

    Example:
        >>> reader = UsageReader()
        >>> days = reader.read_daily_usage("usage-aug-2025.csv")
        >>> days[0].minutes_total
        42
    """

    def __init__(self, delimiter: str = ","):
        self.delimiter = delimiter

    @log_function_call(include_args=True)
    def read_daily_usage(self, path: Union[str, Path]) -> List[DailyUsage]:
        """Read a daily usage CSV file.

        Raises:
            FileNotFoundError: If the file does not exist
            UsageDataError: If a row fails validation
        """
        df = self._read_csv(path, DAILY_USAGE_COLUMNS)
        return self._parse_rows(df, DailyUsage)

    @log_function_call(include_args=True)
    def read_calls(self, path: Union[str, Path]) -> List[CallRecord]:
        """Read a call records CSV file.

        Raises:
            FileNotFoundError: If the file does not exist
            UsageDataError: If a row fails validation
        """
        df = self._read_csv(path, CALL_COLUMNS)
        return self._parse_rows(df, CallRecord)

    def _read_csv(self, path: Union[str, Path], renames: Dict[str, str]) -> pd.DataFrame:
        df = pd.read_csv(
            path,
            sep=self.delimiter,
            dtype=str,
            keep_default_na=False,
            skipinitialspace=True,
        )
        df.columns = [str(c).strip() for c in df.columns]
        df = df.rename(columns=renames)
        logger.info(f"Read {len(df)} rows from {path}")
        return df

    def _parse_rows(self, df: pd.DataFrame, model: Type[ModelT]) -> List[ModelT]:
        records: List[ModelT] = []
        for row_number, (_, row) in enumerate(df.iterrows(), start=1):
            records.append(self._parse_row(row.to_dict(), model, row_number))

        logger.info(f"Parsed {len(records)} {model.__name__} records")
        return records

    @staticmethod
    def _parse_row(row: Dict[str, Any], model: Type[ModelT], row_number: int) -> ModelT:
        # Empty cells fall back to model defaults, unknown columns are ignored
        data = {
            key: value.strip()
            for key, value in row.items()
            if key in model.model_fields and isinstance(value, str) and value.strip()
        }
        try:
            return model.model_validate(data)
        except ValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(loc) for loc in first["loc"]) or "row"
            raise UsageDataError(f"{field}: {first['msg']}", row_number=row_number) from e
