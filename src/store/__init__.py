"""Store — граница с внешним табличным хранилищем.

- TableStore: абстрактный контракт
- SupabaseTableStore: адаптер над внедрённым PostgREST-клиентом
- InMemoryTableStore: локальная реализация для тестов
"""

from .base import (
    Filter,
    FilterOp,
    Order,
    RecordNotFound,
    Row,
    StoreError,
    TableStore,
)
from .memory import InMemoryTableStore
from .supabase import SupabaseTableStore

__all__ = [
    "Filter",
    "FilterOp",
    "Order",
    "RecordNotFound",
    "Row",
    "StoreError",
    "TableStore",
    "InMemoryTableStore",
    "SupabaseTableStore",
]
