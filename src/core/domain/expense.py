"""
Expense — Модель прочего расхода

Расход может нести метку type. Метка "flour" переносит расход в стоимость
муки при режиме EXPENSE_RECLASSIFICATION.
"""

import datetime as dt
from typing import Any, Final, Mapping, Optional

from pydantic import BaseModel, Field

from src.core.domain.production import RecordId
from src.core.pricing import coerce_amount


# Метка расхода на муку
FLOUR_EXPENSE_TYPE: Final[str] = "flour"


class Expense(BaseModel):
    """Расход за день."""

    id: Optional[RecordId] = None
    date: dt.date = Field(..., description="Дата расхода")
    expense_name: str = Field("", description="Название/категория расхода")
    amount: float = Field(..., description="Сумма расхода")
    type: Optional[str] = Field(None, description="Метка расхода (например, 'flour')")
    created_at: Optional[str] = None

    model_config = {"frozen": True}

    @property
    def is_flour(self) -> bool:
        return self.type == FLOUR_EXPENSE_TYPE

    @classmethod
    def create(
        cls,
        date: dt.date,
        expense_name: str,
        amount: Any,
        type: Optional[str] = None,
    ) -> "Expense":
        return cls(
            date=date,
            expense_name=expense_name or "",
            amount=coerce_amount(amount),
            type=type,
        )

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Expense":
        return cls(
            id=row.get("id"),
            date=row["date"],
            expense_name=row.get("expense_name") or "",
            amount=coerce_amount(row.get("amount")),
            type=row.get("type"),
            created_at=row.get("created_at"),
        )

    def to_row(self) -> dict[str, Any]:
        row: dict[str, Any] = {
            "date": self.date.isoformat(),
            "expense_name": self.expense_name,
            "amount": self.amount,
        }
        # type пишется только если задан: старая схема expenses его не знает
        if self.type is not None:
            row["type"] = self.type
        return row
