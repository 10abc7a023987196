"""Aggregators for rolling call records up into usage figures."""

from kipraxis.aggregators.usage_aggregator import UsageAggregator

__all__ = ["UsageAggregator"]
