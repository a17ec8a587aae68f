"""
Dates — Текущая дата и приведение дат

Учёт ведётся по календарной дате UTC (так же, как даты пишутся в хранилище).
"""

import datetime as dt
from typing import Union

DateLike = Union[dt.date, str]


def utc_today() -> dt.date:
    """Текущая дата по UTC."""
    return dt.datetime.now(dt.timezone.utc).date()


def as_date(value: DateLike) -> dt.date:
    """
    Приведение к datetime.date.

    Args:
        value: date, datetime или ISO-строка 'YYYY-MM-DD'

    Raises:
        ValueError: если строка не является ISO-датой
        TypeError: если тип не поддерживается
    """
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if isinstance(value, str):
        return dt.date.fromisoformat(value.strip()[:10])
    raise TypeError(f"Unsupported date value: {value!r}")
