"""
ElectricBreadSale — Модель продаж электрического хлеба

Два продукта:
- jerq: линейная цена, jerq_total = jerq_count * 250
- circle: цена по комплектам, circle_total = tiered_price(circle_count)

Инвариант: total_profit = jerq_total + circle_total
"""

import datetime as dt
from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field, model_validator

from src.core.domain.production import RecordId
from src.core.pricing import coerce_amount, coerce_count, jerq_total, tiered_price


class ElectricBreadSale(BaseModel):
    """Продажи электрического хлеба за день."""

    id: Optional[RecordId] = None
    date: dt.date = Field(..., description="Дата продаж")
    jerq_count: int = Field(0, ge=0)
    jerq_total: float = Field(0.0, ge=0)
    circle_count: int = Field(0, ge=0)
    circle_total: float = Field(0.0, ge=0)
    total_profit: float = Field(0.0, ge=0)
    created_at: Optional[str] = None

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_total(self) -> "ElectricBreadSale":
        """Проверка, что итог равен сумме по продуктам"""
        expected = self.jerq_total + self.circle_total
        if abs(self.total_profit - expected) > 1e-6:
            raise ValueError(
                f"total_profit {self.total_profit} must equal jerq_total + circle_total = {expected}"
            )
        return self

    @classmethod
    def create(cls, date: dt.date, jerq_count: Any, circle_count: Any) -> "ElectricBreadSale":
        """Новая запись с рассчитанными суммами."""
        jerq = coerce_count(jerq_count)
        circle = coerce_count(circle_count)
        jerq_sum = jerq_total(jerq)
        circle_sum = tiered_price(circle)
        return cls(
            date=date,
            jerq_count=jerq,
            jerq_total=jerq_sum,
            circle_count=circle,
            circle_total=circle_sum,
            total_profit=jerq_sum + circle_sum,
        )

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "ElectricBreadSale":
        """
        Строка electric_bread → ElectricBreadSale.

        total_profit пересчитывается из сохранённых сумм по продуктам.
        """
        jerq_sum = max(coerce_amount(row.get("jerq_total")), 0.0)
        circle_sum = max(coerce_amount(row.get("circle_total")), 0.0)
        return cls(
            id=row.get("id"),
            date=row["date"],
            jerq_count=coerce_count(row.get("jerq_count")),
            jerq_total=jerq_sum,
            circle_count=coerce_count(row.get("circle_count")),
            circle_total=circle_sum,
            total_profit=jerq_sum + circle_sum,
            created_at=row.get("created_at"),
        )

    def to_row(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "jerq_count": self.jerq_count,
            "jerq_total": self.jerq_total,
            "circle_count": self.circle_count,
            "circle_total": self.circle_total,
            "total_profit": self.total_profit,
        }
