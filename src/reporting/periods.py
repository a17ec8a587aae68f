"""Periods — окно дат для статистики.

- today: равенство дате (один день)
- week: date >= today - 7 дней, верхняя граница открыта
- month: date >= today - 1 календарный месяц, верхняя граница открыта

Вычитание месяца прижимается к концу месяца (31 марта → 28/29 февраля).
"""

import datetime as dt
from dataclasses import dataclass
from typing import Final, Union

from dateutil.relativedelta import relativedelta

from src.core.domain import Period
from src.store import Filter

WEEK_DAYS: Final[int] = 7


@dataclass(frozen=True)
class DateWindow:
    """Окно дат: либо точный день, либо нижняя граница включительно."""

    start: dt.date
    exact: bool

    def filters(self, column: str = "date") -> tuple[Filter, ...]:
        """Фильтры для проталкивания в хранилище."""
        if self.exact:
            return (Filter.eq(column, self.start.isoformat()),)
        return (Filter.gte(column, self.start.isoformat()),)

    def contains(self, day: dt.date) -> bool:
        if self.exact:
            return day == self.start
        return day >= self.start


def resolve_period(period: Union[Period, str], today: dt.date) -> DateWindow:
    """
    Период → окно дат.

    Args:
        period: Period или его строковое значение ('today', 'week', 'month')
        today: текущая дата

    Raises:
        ValueError: если период неизвестен
    """
    period = Period(period)

    if period == Period.WEEK:
        return DateWindow(start=today - dt.timedelta(days=WEEK_DAYS), exact=False)
    if period == Period.MONTH:
        return DateWindow(start=today - relativedelta(months=1), exact=False)
    return DateWindow(start=today, exact=True)
