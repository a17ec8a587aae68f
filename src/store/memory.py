"""In-memory Table Store — локальная реализация TableStore.

Используется в тестах и при локальном запуске без внешнего хранилища.
Повторяет семантику хранилища: автоинкремент id, created_at, фильтры
eq/gte/lte/lt и многоколоночная сортировка.

Поддерживает внедрение отказов (fail_next / fail_always) для проверки
деградации при ошибках хранилища.
"""

import copy
import datetime as dt
import logging
import threading
from typing import Any, Callable, Optional, Sequence

from src.store.base import (
    Filter,
    FilterOp,
    Order,
    RecordId,
    RecordNotFound,
    Row,
    StoreError,
    TableStore,
)

logger = logging.getLogger(__name__)


_OPS: dict[FilterOp, Callable[[Any, Any], bool]] = {
    FilterOp.EQ: lambda a, b: a == b,
    FilterOp.GTE: lambda a, b: a >= b,
    FilterOp.LTE: lambda a, b: a <= b,
    FilterOp.LT: lambda a, b: a < b,
}


def _comparable(value: Any) -> Any:
    """Даты сравниваются как ISO-строки, как в хранилище."""
    if isinstance(value, (dt.date, dt.datetime)):
        return value.isoformat()
    return value


def _matches(row: Row, flt: Filter) -> bool:
    value = row.get(flt.column)
    if value is None:
        return False
    try:
        return _OPS[flt.op](_comparable(value), _comparable(flt.value))
    except TypeError:
        return False


class InMemoryTableStore(TableStore):
    """Потокобезопасное хранилище таблиц в памяти."""

    def __init__(
        self,
        seed: Optional[dict[str, list[Row]]] = None,
        clock: Optional[Callable[[], dt.datetime]] = None,
    ):
        """
        Args:
            seed: начальные строки по таблицам (id назначается, если отсутствует)
            clock: источник времени для created_at (default: UTC now)
        """
        self._lock = threading.Lock()
        self._tables: dict[str, list[Row]] = {}
        self._next_id = 1
        self._clock = clock or (lambda: dt.datetime.now(dt.timezone.utc))

        # (table, operation) → ошибка; operation None означает любую операцию
        self._failures: dict[tuple[str, Optional[str]], tuple[str, bool]] = {}

        for table, rows in (seed or {}).items():
            for row in rows:
                self._append(table, dict(row))

    # -------------------------------------------------------------------------
    # Внедрение отказов
    # -------------------------------------------------------------------------

    def fail_next(self, table: str, operation: Optional[str] = None, message: str = "injected failure") -> None:
        """Следующая операция над таблицей завершится StoreError."""
        with self._lock:
            self._failures[(table, operation)] = (message, False)

    def fail_always(self, table: str, operation: Optional[str] = None, message: str = "injected failure") -> None:
        """Все операции над таблицей завершаются StoreError до clear_failures()."""
        with self._lock:
            self._failures[(table, operation)] = (message, True)

    def clear_failures(self) -> None:
        with self._lock:
            self._failures.clear()

    def _check_failure(self, table: str, operation: str) -> None:
        for key in ((table, operation), (table, None)):
            entry = self._failures.get(key)
            if entry is None:
                continue
            message, sticky = entry
            if not sticky:
                del self._failures[key]
            raise StoreError(table, operation, message)

    # -------------------------------------------------------------------------
    # TableStore
    # -------------------------------------------------------------------------

    def _append(self, table: str, row: Row) -> Row:
        if "id" not in row:
            row["id"] = self._next_id
        # Следующий id больше любого целого id в хранилище
        if isinstance(row["id"], int) and row["id"] >= self._next_id:
            self._next_id = row["id"] + 1
        row.setdefault("created_at", self._clock().isoformat())
        self._tables.setdefault(table, []).append(row)
        return row

    def _find(self, table: str, operation: str, record_id: RecordId) -> Row:
        for row in self._tables.get(table, []):
            if row.get("id") == record_id:
                return row
        raise RecordNotFound(table, operation, record_id)

    def insert(self, table: str, rows: Sequence[Row]) -> list[Row]:
        with self._lock:
            self._check_failure(table, "insert")
            stored = [self._append(table, dict(row)) for row in rows]
            logger.debug("insert %s: %d rows", table, len(stored))
            return copy.deepcopy(stored)

    def select(
        self,
        table: str,
        filters: Sequence[Filter] = (),
        order: Sequence[Order] = (),
    ) -> list[Row]:
        with self._lock:
            self._check_failure(table, "select")
            rows = [
                row for row in self._tables.get(table, [])
                if all(_matches(row, flt) for flt in filters)
            ]

            # Стабильная сортировка: применяем ключи с последнего
            for ordering in reversed(order):
                rows.sort(
                    key=lambda r: (r.get(ordering.column) is None, _comparable(r.get(ordering.column))),
                    reverse=not ordering.ascending,
                )
            return copy.deepcopy(rows)

    def update(self, table: str, record_id: RecordId, fields: Row) -> Row:
        with self._lock:
            self._check_failure(table, "update")
            row = self._find(table, "update", record_id)
            row.update({k: v for k, v in fields.items() if k != "id"})
            return copy.deepcopy(row)

    def delete(self, table: str, record_id: RecordId) -> None:
        with self._lock:
            self._check_failure(table, "delete")
            row = self._find(table, "delete", record_id)
            self._tables[table].remove(row)

    def rows(self, table: str) -> list[Row]:
        """Все строки таблицы (копия), без проверки отказов."""
        with self._lock:
            return copy.deepcopy(self._tables.get(table, []))
