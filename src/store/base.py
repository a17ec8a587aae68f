"""Table Store — граница с внешним реляционным хранилищем.

Хранилище — внешний сервис (backend-as-a-service). Этот модуль описывает
только контракт, через который с ним работает учёт:
- insert(table, rows) → сохранённые строки
- select(table, filters, order) → строки
- update(table, id, fields) → обновлённая строка
- delete(table, id)

Любая ошибка хранилища поднимается как StoreError. Что делать с ошибкой
(пробросить при записи или деградировать при чтении), решает вызывающий код.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Sequence, Union


Row = dict[str, Any]
RecordId = Union[int, str]


class FilterOp(str, Enum):
    """Оператор фильтра (проталкивается в хранилище)."""

    EQ = "eq"
    GTE = "gte"
    LTE = "lte"
    LT = "lt"


@dataclass(frozen=True)
class Filter:
    """Фильтр по колонке."""

    column: str
    op: FilterOp
    value: Any

    @classmethod
    def eq(cls, column: str, value: Any) -> "Filter":
        return cls(column, FilterOp.EQ, value)

    @classmethod
    def gte(cls, column: str, value: Any) -> "Filter":
        return cls(column, FilterOp.GTE, value)

    @classmethod
    def lte(cls, column: str, value: Any) -> "Filter":
        return cls(column, FilterOp.LTE, value)

    @classmethod
    def lt(cls, column: str, value: Any) -> "Filter":
        return cls(column, FilterOp.LT, value)


@dataclass(frozen=True)
class Order:
    """Сортировка по колонке."""

    column: str
    ascending: bool = True


class StoreError(Exception):
    """Ошибка внешнего хранилища (сеть, запрос, ограничения).

    Attributes:
        table: таблица, на которой произошла ошибка
        operation: insert / select / update / delete
        cause: исходное исключение клиента, если есть
    """

    def __init__(
        self,
        table: str,
        operation: str,
        message: str,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(f"{operation} on '{table}' failed: {message}")
        self.table = table
        self.operation = operation
        self.message = message
        self.cause = cause


class RecordNotFound(StoreError):
    """Строка с указанным id не найдена."""

    def __init__(self, table: str, operation: str, record_id: RecordId):
        super().__init__(table, operation, f"no row with id={record_id!r}")
        self.record_id = record_id


class TableStore(ABC):
    """Абстрактное табличное хранилище с проталкиванием фильтров и сортировки."""

    @abstractmethod
    def insert(self, table: str, rows: Sequence[Row]) -> list[Row]:
        """Вставка строк. Возвращает сохранённые строки (с id)."""

    @abstractmethod
    def select(
        self,
        table: str,
        filters: Sequence[Filter] = (),
        order: Sequence[Order] = (),
    ) -> list[Row]:
        """Выборка строк по фильтрам с сортировкой."""

    @abstractmethod
    def update(self, table: str, record_id: RecordId, fields: Row) -> Row:
        """Обновление строки по id. Возвращает обновлённую строку."""

    @abstractmethod
    def delete(self, table: str, record_id: RecordId) -> None:
        """Удаление строки по id. Нет строки → RecordNotFound."""
