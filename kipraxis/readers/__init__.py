"""Readers for usage data files."""

from kipraxis.readers.usage_reader import UsageReader

__all__ = ["UsageReader"]
