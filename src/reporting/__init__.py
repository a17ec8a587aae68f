"""Reporting — сводная статистика за период (today / week / month)."""

from .aggregator import StatsAggregator, aggregate
from .periods import WEEK_DAYS, DateWindow, resolve_period

__all__ = [
    "StatsAggregator",
    "aggregate",
    "DateWindow",
    "WEEK_DAYS",
    "resolve_period",
]
