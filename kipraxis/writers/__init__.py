"""Writers for exporting usage data."""

from kipraxis.writers.csv_exporter import (
    daily_usage_frame,
    export_daily_usage_csv,
    export_filename,
)

__all__ = ["daily_usage_frame", "export_daily_usage_csv", "export_filename"]
