"""BakeryLedger — операции записи, изменения, удаления и чтения учёта.

Производные поля (прибыль, стоимость, суммы) всегда пересчитываются
при создании и изменении записи, ввод пользователя для них игнорируется.

Обработка ошибок:
- запись/изменение/удаление: StoreError логируется и пробрасывается
  (частичная запись одной записи недопустима)
- чтение: ошибка логируется, возвращается пустой QueryResult с error
"""

import datetime as dt
import logging
from typing import Any, Callable, Optional, Sequence, TypeVar

from pydantic import ValidationError

from src.core.config import LedgerConfig, ProductionSchema
from src.core.contracts import validate_rows
from src.core.dates import DateLike, as_date, utc_today
from src.core.domain import (
    DailyProduction,
    DifferenceRecord,
    ElectricBreadSale,
    Expense,
    FlourPurchase,
    ProductionRecord,
    Shift,
    group_by_date,
    records_from_rows,
)
from src.core.pricing import coerce_count, dough_profit
from src.ledger.results import QueryResult
from src.store import Filter, Order, Row, StoreError, TableStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

_BY_DATE_DESC = (Order("date", ascending=False),)


class BakeryLedger:
    """Учёт пекарни поверх внедрённого TableStore."""

    def __init__(
        self,
        store: TableStore,
        config: Optional[LedgerConfig] = None,
        today: Callable[[], dt.date] = utc_today,
    ):
        """
        Args:
            store: табличное хранилище
            config: конфигурация (схема производства, имена таблиц)
            today: источник текущей даты
        """
        self.store = store
        self.config = config or LedgerConfig()
        self._today = today

    # =========================================================================
    # Общие операции
    # =========================================================================

    def _insert(self, contract: str, table: str, rows: list[Row]) -> list[Row]:
        validate_rows(contract, rows)
        try:
            return self.store.insert(table, rows)
        except StoreError:
            logger.exception("Failed to add rows to %s", table)
            raise

    def _update(self, table: str, record_id: Any, fields: Row) -> Row:
        try:
            return self.store.update(table, record_id, fields)
        except StoreError:
            logger.exception("Failed to update %s id=%s", table, record_id)
            raise

    def _delete(self, table: str, record_id: Any) -> None:
        try:
            self.store.delete(table, record_id)
        except StoreError:
            logger.exception("Failed to delete %s id=%s", table, record_id)
            raise

    def _read(
        self,
        table: str,
        convert: Callable[[list[Row]], Sequence[T]],
        filters: Sequence[Filter] = (),
        order: Sequence[Order] = (),
    ) -> QueryResult[T]:
        try:
            rows = self.store.select(table, filters, order)
        except StoreError as exc:
            logger.error("Failed to read %s: %s", table, exc)
            return QueryResult(table=table, error=str(exc))

        try:
            records = convert(rows)
        except (ValidationError, KeyError, ValueError) as exc:
            logger.error("Malformed rows in %s: %s", table, exc)
            return QueryResult(table=table, error=f"malformed row: {exc}")

        return QueryResult(table=table, records=tuple(records))

    # =========================================================================
    # Производство теста
    # =========================================================================

    @property
    def _flat(self) -> bool:
        return self.config.production_schema == ProductionSchema.FLAT_ROWS

    def _to_daily(self, rows: list[Row]) -> list[DailyProduction]:
        schema = self.config.production_schema
        return group_by_date(records_from_rows(rows, schema))

    def add_dough(
        self,
        date: DateLike,
        morning_count: Any = 0,
        evening_count: Any = 0,
    ) -> list[ProductionRecord]:
        """
        Запись производства за день: одна запись на смену с количеством > 0.

        Raises:
            ValueError: если ни одна смена не имеет количества > 0
            StoreError: если хранилище отклонило запись
        """
        day = as_date(date)
        records = [
            ProductionRecord.create(day, shift, count)
            for shift, count in ((Shift.MORNING, morning_count), (Shift.EVENING, evening_count))
            if coerce_count(count) > 0
        ]
        if not records:
            raise ValueError("At least one shift must have a count greater than 0")

        table = self.config.production_table
        if self._flat:
            daily = group_by_date(records)[0]
            row = daily.model_dump(
                include={"morning_count", "evening_count", "morning_profit", "evening_profit", "total_profit"}
            )
            row["date"] = day.isoformat()
            stored = self._insert("dough", table, [row])
        else:
            stored = self._insert("daily_bakes", table, [r.to_row() for r in records])

        logger.info("Added dough for %s: %d shift record(s)", day, len(records))
        return records_from_rows(stored, self.config.production_schema)

    def list_dough(self) -> QueryResult[DailyProduction]:
        order = [Order("date")]
        if not self._flat:
            order.append(Order("shift"))
        return self._read(self.config.production_table, self._to_daily, order=order)

    def today_dough(self) -> QueryResult[DailyProduction]:
        return self.dough_by_date(self._today(), order=(Order("created_at"),))

    def dough_by_date(
        self, date: DateLike, order: Sequence[Order] = ()
    ) -> QueryResult[DailyProduction]:
        return self._read(
            self.config.production_table,
            self._to_daily,
            filters=(Filter.eq("date", as_date(date).isoformat()),),
            order=order,
        )

    def dough_before_today(self) -> QueryResult[DailyProduction]:
        """Все дни до сегодняшнего, от новых к старым."""
        return self._read(
            self.config.production_table,
            self._to_daily,
            filters=(Filter.lt("date", self._today().isoformat()),),
            order=_BY_DATE_DESC,
        )

    def dough_by_range(self, start: DateLike, end: DateLike) -> QueryResult[DailyProduction]:
        """Дни в интервале [start, end], от новых к старым."""
        return self._read(
            self.config.production_table,
            self._to_daily,
            filters=(
                Filter.gte("date", as_date(start).isoformat()),
                Filter.lte("date", as_date(end).isoformat()),
            ),
            order=_BY_DATE_DESC,
        )

    def update_dough(
        self,
        record_id: Any,
        date: DateLike,
        morning_count: Any = 0,
        evening_count: Any = 0,
    ) -> DailyProduction:
        """
        Изменение записи производства.

        В схеме по сменам строка хранит одну смену: используется
        morning_count, а если он равен 0 — evening_count. В плоской схеме
        пересчитываются обе смены.

        Raises:
            ValueError: если ни одна смена не имеет количества > 0
            StoreError: если хранилище отклонило изменение
        """
        morning = coerce_count(morning_count)
        evening = coerce_count(evening_count)
        if morning == 0 and evening == 0:
            raise ValueError("At least one shift must have a count greater than 0")

        day = as_date(date).isoformat()
        table = self.config.production_table

        if self._flat:
            fields = {
                "date": day,
                "morning_count": morning,
                "evening_count": evening,
                "morning_profit": dough_profit(morning),
                "evening_profit": dough_profit(evening),
                "total_profit": dough_profit(morning) + dough_profit(evening),
            }
            return DailyProduction.from_flat_row(self._update(table, record_id, fields))

        count = morning or evening
        fields = {"date": day, "dough_count": count, "total_profit": dough_profit(count)}
        row = self._update(table, record_id, fields)
        return group_by_date([ProductionRecord.from_row(row)])[0]

    def delete_dough(self, record_id: Any) -> None:
        self._delete(self.config.production_table, record_id)

    # =========================================================================
    # Мука
    # =========================================================================

    def _flour_rows(self, rows: list[Row]) -> list[FlourPurchase]:
        return [FlourPurchase.from_row(row) for row in rows]

    def add_flour(self, date: DateLike, bag_price: Any, bag_count: Any) -> FlourPurchase:
        purchase = FlourPurchase.create(as_date(date), bag_price, bag_count)
        stored = self._insert("flour", self.config.tables.flour, [purchase.to_row()])
        return FlourPurchase.from_row(stored[0])

    def list_flour(self) -> QueryResult[FlourPurchase]:
        return self._read(self.config.tables.flour, self._flour_rows, order=_BY_DATE_DESC)

    def flour_by_date(self, date: DateLike) -> QueryResult[FlourPurchase]:
        return self._read(
            self.config.tables.flour,
            self._flour_rows,
            filters=(Filter.eq("date", as_date(date).isoformat()),),
        )

    def update_flour(
        self, record_id: Any, date: DateLike, bag_price: Any, bag_count: Any
    ) -> FlourPurchase:
        purchase = FlourPurchase.create(as_date(date), bag_price, bag_count)
        row = self._update(self.config.tables.flour, record_id, purchase.to_row())
        return FlourPurchase.from_row(row)

    def delete_flour(self, record_id: Any) -> None:
        self._delete(self.config.tables.flour, record_id)

    # =========================================================================
    # Расходы
    # =========================================================================

    def _expense_rows(self, rows: list[Row]) -> list[Expense]:
        return [Expense.from_row(row) for row in rows]

    def add_expense(
        self,
        date: DateLike,
        expense_name: str,
        amount: Any,
        type: Optional[str] = None,
    ) -> Expense:
        expense = Expense.create(as_date(date), expense_name, amount, type=type)
        stored = self._insert("expenses", self.config.tables.expenses, [expense.to_row()])
        return Expense.from_row(stored[0])

    def list_expenses(self) -> QueryResult[Expense]:
        return self._read(self.config.tables.expenses, self._expense_rows, order=_BY_DATE_DESC)

    def expenses_by_date(self, date: DateLike) -> QueryResult[Expense]:
        return self._read(
            self.config.tables.expenses,
            self._expense_rows,
            filters=(Filter.eq("date", as_date(date).isoformat()),),
        )

    def update_expense(
        self,
        record_id: Any,
        date: DateLike,
        expense_name: str,
        amount: Any,
        type: Optional[str] = None,
    ) -> Expense:
        expense = Expense.create(as_date(date), expense_name, amount, type=type)
        row = self._update(self.config.tables.expenses, record_id, expense.to_row())
        return Expense.from_row(row)

    def delete_expense(self, record_id: Any) -> None:
        self._delete(self.config.tables.expenses, record_id)

    # =========================================================================
    # Электрический хлеб
    # =========================================================================

    def _electric_rows(self, rows: list[Row]) -> list[ElectricBreadSale]:
        return [ElectricBreadSale.from_row(row) for row in rows]

    def add_electric_bread(
        self, date: DateLike, jerq_count: Any, circle_count: Any
    ) -> ElectricBreadSale:
        sale = ElectricBreadSale.create(as_date(date), jerq_count, circle_count)
        stored = self._insert("electric_bread", self.config.tables.electric_bread, [sale.to_row()])
        return ElectricBreadSale.from_row(stored[0])

    def list_electric_bread(self) -> QueryResult[ElectricBreadSale]:
        return self._read(
            self.config.tables.electric_bread, self._electric_rows, order=_BY_DATE_DESC
        )

    def electric_bread_by_date(self, date: DateLike) -> QueryResult[ElectricBreadSale]:
        return self._read(
            self.config.tables.electric_bread,
            self._electric_rows,
            filters=(Filter.eq("date", as_date(date).isoformat()),),
        )

    def update_electric_bread(
        self, record_id: Any, date: DateLike, jerq_count: Any, circle_count: Any
    ) -> ElectricBreadSale:
        sale = ElectricBreadSale.create(as_date(date), jerq_count, circle_count)
        row = self._update(self.config.tables.electric_bread, record_id, sale.to_row())
        return ElectricBreadSale.from_row(row)

    def delete_electric_bread(self, record_id: Any) -> None:
        self._delete(self.config.tables.electric_bread, record_id)

    # =========================================================================
    # Разницы
    # =========================================================================

    def _difference_rows(self, rows: list[Row]) -> list[DifferenceRecord]:
        return [DifferenceRecord.from_row(row) for row in rows]

    def add_difference(self, date: DateLike, type: str, count: Any) -> DifferenceRecord:
        record = DifferenceRecord.create(as_date(date), type, count)
        stored = self._insert("differences", self.config.tables.differences, [record.to_row()])
        return DifferenceRecord.from_row(stored[0])

    def list_differences(self) -> QueryResult[DifferenceRecord]:
        return self._read(
            self.config.tables.differences, self._difference_rows, order=_BY_DATE_DESC
        )

    def differences_by_date(self, date: DateLike) -> QueryResult[DifferenceRecord]:
        return self._read(
            self.config.tables.differences,
            self._difference_rows,
            filters=(Filter.eq("date", as_date(date).isoformat()),),
        )

    def update_difference(
        self, record_id: Any, date: DateLike, type: str, count: Any
    ) -> DifferenceRecord:
        record = DifferenceRecord.create(as_date(date), type, count)
        row = self._update(self.config.tables.differences, record_id, record.to_row())
        return DifferenceRecord.from_row(row)

    def delete_difference(self, record_id: Any) -> None:
        self._delete(self.config.tables.differences, record_id)
