"""Stats Aggregator — сводная статистика за период.

Алгоритм compute_stats:
1. Период → окно дат (resolve_period)
2. Параллельная выборка строк производства, расходов, разниц и (в режиме
   FLOUR_TABLE) закупок муки. Каждая выборка выполняется в отдельном потоке
   (asyncio.to_thread) и несёт собственный статус: ошибка одной выборки не
   отменяет остальные.
3. Агрегация (aggregate):
   dough_count  = Σ dough_count
   gross_profit = Σ total_profit
   flour_cost   = Σ flour.total_cost            (FLOUR_TABLE)
                | Σ expenses[type == "flour"]   (EXPENSE_RECLASSIFICATION)
   expenses     = Σ остальных расходов
   differences  = Σ amount
   net_profit   = gross_profit - flour_cost - expenses - differences
4. Неудачная выборка даёт нулевой вклад и попадает в PeriodStats.failures.

Результат не сохраняется и не кэшируется.
"""

import asyncio
import datetime as dt
import logging
from typing import Any, Callable, Iterable, Optional, Sequence, TypeVar, Union

from pydantic import ValidationError

from src.core.config import FlourCostMode, LedgerConfig
from src.core.dates import utc_today
from src.core.domain import (
    DifferenceRecord,
    Expense,
    FetchFailure,
    FlourPurchase,
    Period,
    PeriodStats,
    ProductionRecord,
    records_from_rows,
)
from src.reporting.periods import resolve_period
from src.store import Filter, Row, StoreError, TableStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


# =============================================================================
# PURE AGGREGATION
# =============================================================================


def aggregate(
    production: Iterable[ProductionRecord],
    expenses: Iterable[Expense],
    differences: Iterable[DifferenceRecord],
    flour: Iterable[FlourPurchase] = (),
    mode: FlourCostMode = FlourCostMode.FLOUR_TABLE,
    failures: Sequence[FetchFailure] = (),
) -> PeriodStats:
    """
    Агрегация строк в PeriodStats.

    Args:
        production: записи производства по сменам
        expenses: расходы
        differences: разницы по остаткам
        flour: закупки муки (учитываются только в режиме FLOUR_TABLE)
        mode: источник стоимости муки
        failures: неудачные подзапросы (переносятся в результат)

    Returns:
        PeriodStats
    """
    production = list(production)
    expenses = list(expenses)

    dough_count = sum(record.dough_count for record in production)
    gross_profit = sum(record.total_profit for record in production)

    if mode == FlourCostMode.EXPENSE_RECLASSIFICATION:
        flour_cost = sum(e.amount for e in expenses if e.is_flour)
        other_expenses = sum(e.amount for e in expenses if not e.is_flour)
    else:
        flour_cost = sum(purchase.total_cost for purchase in flour)
        other_expenses = sum(e.amount for e in expenses)

    total_differences = sum(d.amount for d in differences)
    net_profit = gross_profit - flour_cost - other_expenses - total_differences

    return PeriodStats(
        dough_count=dough_count,
        gross_profit=gross_profit,
        flour_cost=flour_cost,
        expenses=other_expenses,
        differences=total_differences,
        net_profit=net_profit,
        failures=tuple(failures),
    )


# =============================================================================
# AGGREGATOR
# =============================================================================


class StatsAggregator:
    """Расчёт статистики за период поверх внедрённого TableStore."""

    def __init__(
        self,
        store: TableStore,
        config: Optional[LedgerConfig] = None,
        today: Callable[[], dt.date] = utc_today,
    ):
        self.store = store
        self.config = config or LedgerConfig()
        self._today = today

    async def _fetch(
        self,
        table: str,
        filters: Sequence[Filter],
        convert: Callable[[list[Row]], list[T]],
    ) -> tuple[list[T], Optional[FetchFailure]]:
        """Одна выборка: ошибка хранилища превращается в FetchFailure."""
        try:
            rows = await asyncio.to_thread(self.store.select, table, filters)
        except StoreError as exc:
            logger.warning("Stats fetch from %s failed, contributing zero: %s", table, exc)
            return [], FetchFailure(table=table, error=str(exc))

        try:
            return convert(rows), None
        except (ValidationError, KeyError, ValueError) as exc:
            logger.warning("Stats fetch from %s returned malformed rows: %s", table, exc)
            return [], FetchFailure(table=table, error=f"malformed row: {exc}")

    async def compute_stats(
        self,
        period: Union[Period, str] = Period.TODAY,
        today: Optional[dt.date] = None,
    ) -> PeriodStats:
        """
        Статистика за период.

        Args:
            period: 'today' | 'week' | 'month'
            today: текущая дата (default: источник даты агрегатора)

        Returns:
            PeriodStats; partial == True если часть выборок не удалась
        """
        window = resolve_period(period, today or self._today())
        filters = window.filters()
        tables = self.config.tables
        mode = self.config.flour_cost_mode
        schema = self.config.production_schema

        fetches: list[Any] = [
            self._fetch(
                self.config.production_table,
                filters,
                lambda rows: records_from_rows(rows, schema),
            ),
            self._fetch(tables.expenses, filters, lambda rows: [Expense.from_row(r) for r in rows]),
            self._fetch(
                tables.differences, filters, lambda rows: [DifferenceRecord.from_row(r) for r in rows]
            ),
        ]
        if mode == FlourCostMode.FLOUR_TABLE:
            fetches.append(
                self._fetch(tables.flour, filters, lambda rows: [FlourPurchase.from_row(r) for r in rows])
            )

        results = await asyncio.gather(*fetches)

        production, _ = results[0]
        expenses, _ = results[1]
        differences, _ = results[2]
        flour = results[3][0] if len(results) > 3 else []
        failures = [failure for _, failure in results if failure is not None]

        stats = aggregate(
            production=production,
            expenses=expenses,
            differences=differences,
            flour=flour,
            mode=mode,
            failures=failures,
        )

        if stats.partial:
            logger.warning(
                "Stats for %s are partial, failed tables: %s",
                Period(period).value,
                ", ".join(stats.failed_tables),
            )
        return stats

    def compute_stats_sync(
        self,
        period: Union[Period, str] = Period.TODAY,
        today: Optional[dt.date] = None,
    ) -> PeriodStats:
        """Синхронная обёртка compute_stats для кода без event loop."""
        return asyncio.run(self.compute_stats(period, today))
