"""
FlourPurchase — Модель закупки муки

Инвариант: total_cost = bag_price * bag_count
"""

import datetime as dt
from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field

from src.core.domain.production import RecordId
from src.core.pricing import coerce_amount, coerce_count, flour_total_cost


class FlourPurchase(BaseModel):
    """Закупка муки за день."""

    id: Optional[RecordId] = None
    date: dt.date = Field(..., description="Дата закупки")
    bag_price: float = Field(..., ge=0, description="Цена одного мешка")
    bag_count: int = Field(..., ge=0, description="Количество мешков")
    total_cost: float = Field(..., ge=0, description="Итоговая стоимость")
    created_at: Optional[str] = None

    model_config = {"frozen": True}

    @classmethod
    def create(cls, date: dt.date, bag_price: Any, bag_count: Any) -> "FlourPurchase":
        """Новая закупка с рассчитанной стоимостью."""
        price = max(coerce_amount(bag_price), 0.0)
        count = coerce_count(bag_count)
        return cls(
            date=date,
            bag_price=price,
            bag_count=count,
            total_cost=flour_total_cost(price, count),
        )

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "FlourPurchase":
        return cls(
            id=row.get("id"),
            date=row["date"],
            bag_price=max(coerce_amount(row.get("bag_price")), 0.0),
            bag_count=coerce_count(row.get("bag_count")),
            total_cost=max(coerce_amount(row.get("total_cost")), 0.0),
            created_at=row.get("created_at"),
        )

    def to_row(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "bag_price": self.bag_price,
            "bag_count": self.bag_count,
            "total_cost": self.total_cost,
        }
