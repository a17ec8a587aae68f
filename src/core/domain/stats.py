"""
PeriodStats — Сводная статистика за период

Производная модель, никогда не сохраняется: всегда пересчитывается из текущих
строк хранилища. Согласованность ограничена моментом чтения (без транзакции
между таблицами).

Неудачные подзапросы не прерывают расчёт: их вклад равен нулю, а сами
ошибки перечислены в failures (partial == True).
"""

from enum import Enum

from pydantic import BaseModel, Field


# =============================================================================
# ENUMS
# =============================================================================


class Period(str, Enum):
    """Период статистики"""

    TODAY = "today"
    WEEK = "week"
    MONTH = "month"


# =============================================================================
# MODELS
# =============================================================================


class FetchFailure(BaseModel):
    """Неудачный подзапрос при сборе статистики."""

    table: str = Field(..., min_length=1, description="Таблица подзапроса")
    error: str = Field(..., description="Текст ошибки хранилища")

    model_config = {"frozen": True}


class PeriodStats(BaseModel):
    """
    Статистика за период.

    net_profit = gross_profit - flour_cost - expenses - differences
    """

    dough_count: int = Field(0, ge=0, description="Суммарное количество теста")
    gross_profit: float = Field(0.0, description="Валовая прибыль (в тысячах)")
    flour_cost: float = Field(0.0, description="Стоимость муки")
    expenses: float = Field(0.0, description="Прочие расходы")
    differences: float = Field(0.0, description="Сумма разниц по остаткам")
    net_profit: float = Field(0.0, description="Чистая прибыль")

    failures: tuple[FetchFailure, ...] = Field(
        default=(), description="Подзапросы, завершившиеся ошибкой"
    )

    model_config = {"frozen": True}

    @property
    def partial(self) -> bool:
        """True если хотя бы один подзапрос не удался"""
        return len(self.failures) > 0

    @property
    def failed_tables(self) -> list[str]:
        return [failure.table for failure in self.failures]
