"""
Production — Модель производства теста и адаптер исторических схем

Две исторические схемы хранения:
- shift rows (daily_bakes): одна строка на (дата, смена)
- flat rows (dough): одна строка на дату с полями morning_*/evening_*

Обе схемы приводятся к одной сущности ProductionRecord на границе хранилища.
Бизнес-логика работает только с ProductionRecord.
DailyProduction — плоское представление по дате, только для показа списков.
"""

import datetime as dt
from enum import Enum
from typing import Any, Iterable, Mapping, Optional, Union

from pydantic import BaseModel, Field

from src.core.config import ProductionSchema
from src.core.pricing import coerce_amount, coerce_count, dough_profit


RecordId = Union[int, str]


# =============================================================================
# ENUMS
# =============================================================================


class Shift(str, Enum):
    """Смена выпечки"""

    MORNING = "morning"
    EVENING = "evening"


# =============================================================================
# PRODUCTION RECORD
# =============================================================================


class ProductionRecord(BaseModel):
    """
    Производство теста за одну смену.

    Инвариант: total_profit = dough_count * 10 / 8 (в тысячах) для записей,
    созданных через create(). Записи из хранилища сохраняют сохранённую прибыль.
    """

    id: Optional[RecordId] = Field(None, description="Идентификатор строки в хранилище")
    date: dt.date = Field(..., description="Дата выпечки")
    shift: Shift = Field(..., description="Смена")
    dough_count: int = Field(..., ge=0, description="Количество единиц теста")
    total_profit: float = Field(..., description="Прибыль в тысячах")
    created_at: Optional[str] = Field(None, description="Время создания строки")

    model_config = {"frozen": True}

    @classmethod
    def create(cls, date: dt.date, shift: Shift, count: Any) -> "ProductionRecord":
        """Новая запись с рассчитанной прибылью."""
        dough_count = coerce_count(count)
        return cls(
            date=date,
            shift=shift,
            dough_count=dough_count,
            total_profit=dough_profit(dough_count),
        )

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "ProductionRecord":
        """Строка daily_bakes → ProductionRecord."""
        return cls(
            id=row.get("id"),
            date=row["date"],
            shift=row["shift"],
            dough_count=coerce_count(row.get("dough_count")),
            total_profit=coerce_amount(row.get("total_profit")),
            created_at=row.get("created_at"),
        )

    def to_row(self) -> dict[str, Any]:
        """Полезная нагрузка для вставки в daily_bakes."""
        return {
            "date": self.date.isoformat(),
            "shift": self.shift.value,
            "dough_count": self.dough_count,
            "total_profit": self.total_profit,
        }


# =============================================================================
# DAILY PRODUCTION (FLAT VIEW)
# =============================================================================


class DailyProduction(BaseModel):
    """
    Производство за день в плоском виде (утро + вечер).

    Соответствует строке таблицы dough.
    """

    id: Optional[RecordId] = None
    date: dt.date
    morning_count: int = Field(0, ge=0)
    evening_count: int = Field(0, ge=0)
    morning_profit: float = 0.0
    evening_profit: float = 0.0
    total_profit: float = 0.0
    created_at: Optional[str] = None

    model_config = {"frozen": True}

    @property
    def dough_count(self) -> int:
        return self.morning_count + self.evening_count

    @classmethod
    def from_flat_row(cls, row: Mapping[str, Any]) -> "DailyProduction":
        """
        Строка dough → DailyProduction.

        Если прибыль смены не сохранена, она рассчитывается из количества.
        """
        morning_count = coerce_count(row.get("morning_count"))
        evening_count = coerce_count(row.get("evening_count"))

        morning_profit = (
            coerce_amount(row["morning_profit"])
            if row.get("morning_profit") is not None
            else dough_profit(morning_count)
        )
        evening_profit = (
            coerce_amount(row["evening_profit"])
            if row.get("evening_profit") is not None
            else dough_profit(evening_count)
        )

        return cls(
            id=row.get("id"),
            date=row["date"],
            morning_count=morning_count,
            evening_count=evening_count,
            morning_profit=morning_profit,
            evening_profit=evening_profit,
            total_profit=morning_profit + evening_profit,
            created_at=row.get("created_at"),
        )

    def to_records(self) -> list[ProductionRecord]:
        """
        Разворот в записи по сменам.

        Смены с нулевым количеством пропускаются, как и при записи в daily_bakes.
        """
        records = []
        for shift, count, profit in (
            (Shift.MORNING, self.morning_count, self.morning_profit),
            (Shift.EVENING, self.evening_count, self.evening_profit),
        ):
            if count > 0:
                records.append(
                    ProductionRecord(
                        id=self.id,
                        date=self.date,
                        shift=shift,
                        dough_count=count,
                        total_profit=profit,
                        created_at=self.created_at,
                    )
                )
        return records


# =============================================================================
# ADAPTERS
# =============================================================================


def records_from_rows(
    rows: Iterable[Mapping[str, Any]], schema: ProductionSchema
) -> list[ProductionRecord]:
    """
    Адаптер границы хранилища: строки любой схемы → ProductionRecord.

    Args:
        rows: строки из daily_bakes (SHIFT_ROWS) или dough (FLAT_ROWS)
        schema: схема, в которой хранятся строки

    Returns:
        Список записей по сменам
    """
    if schema == ProductionSchema.FLAT_ROWS:
        records: list[ProductionRecord] = []
        for row in rows:
            records.extend(DailyProduction.from_flat_row(row).to_records())
        return records

    return [ProductionRecord.from_row(row) for row in rows]


def group_by_date(records: Iterable[ProductionRecord]) -> list[DailyProduction]:
    """
    Группировка записей по сменам в плоские записи по дате.

    Порядок дат сохраняется по первому появлению. id и created_at берутся
    из первой записи даты. Повторные записи одной смены суммируются.
    """
    grouped: dict[dt.date, dict[str, Any]] = {}

    for record in records:
        day = grouped.setdefault(
            record.date,
            {
                "id": record.id,
                "date": record.date,
                "morning_count": 0,
                "evening_count": 0,
                "morning_profit": 0.0,
                "evening_profit": 0.0,
                "total_profit": 0.0,
                "created_at": record.created_at,
            },
        )
        prefix = "morning" if record.shift == Shift.MORNING else "evening"
        day[f"{prefix}_count"] += record.dough_count
        day[f"{prefix}_profit"] += record.total_profit
        day["total_profit"] += record.total_profit

    return [DailyProduction(**day) for day in grouped.values()]
