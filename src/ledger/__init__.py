"""Ledger — операции учёта пекарни над внешним хранилищем."""

from .results import QueryResult
from .service import BakeryLedger

__all__ = [
    "BakeryLedger",
    "QueryResult",
]
