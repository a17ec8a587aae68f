"""
Domain models and value objects.

Contains the bakery ledger entities: production, flour, expenses,
electric bread sales, differences and period statistics.
"""

from src.core.domain.difference import DifferenceRecord
from src.core.domain.electric_bread import ElectricBreadSale
from src.core.domain.expense import FLOUR_EXPENSE_TYPE, Expense
from src.core.domain.flour import FlourPurchase
from src.core.domain.production import (
    DailyProduction,
    ProductionRecord,
    RecordId,
    Shift,
    group_by_date,
    records_from_rows,
)
from src.core.domain.stats import FetchFailure, Period, PeriodStats

__all__ = [
    # Production
    "DailyProduction",
    "ProductionRecord",
    "RecordId",
    "Shift",
    "group_by_date",
    "records_from_rows",
    # Flour
    "FlourPurchase",
    # Expenses
    "Expense",
    "FLOUR_EXPENSE_TYPE",
    # Electric bread
    "ElectricBreadSale",
    # Differences
    "DifferenceRecord",
    # Stats
    "FetchFailure",
    "Period",
    "PeriodStats",
]
