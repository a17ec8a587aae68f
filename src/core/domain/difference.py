"""
DifferenceRecord — Модель разницы по остаткам (недостача/излишек)

Инвариант: amount = count / 8 (в тысячах, как и прибыль теста)
"""

import datetime as dt
from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field

from src.core.domain.production import RecordId
from src.core.pricing import coerce_amount, coerce_count, difference_amount


class DifferenceRecord(BaseModel):
    """Разница по остаткам за день."""

    id: Optional[RecordId] = None
    date: dt.date = Field(..., description="Дата события")
    type: str = Field("", description="Тип разницы")
    count: int = Field(..., ge=0, description="Количество единиц")
    amount: float = Field(..., ge=0, description="Сумма в тысячах")
    created_at: Optional[str] = None

    model_config = {"frozen": True}

    @classmethod
    def create(cls, date: dt.date, type: str, count: Any) -> "DifferenceRecord":
        units = coerce_count(count)
        return cls(date=date, type=type or "", count=units, amount=difference_amount(units))

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "DifferenceRecord":
        """
        Строка differences → DifferenceRecord.

        Старые строки хранят сумму в total_value вместо amount.
        """
        raw_amount = row.get("amount")
        if raw_amount is None:
            raw_amount = row.get("total_value")

        return cls(
            id=row.get("id"),
            date=row["date"],
            type=row.get("type") or "",
            count=coerce_count(row.get("count")),
            amount=max(coerce_amount(raw_amount), 0.0),
            created_at=row.get("created_at"),
        )

    def to_row(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "type": self.type,
            "count": self.count,
            "amount": self.amount,
        }
