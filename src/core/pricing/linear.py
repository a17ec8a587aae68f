"""
Linear Pricing — Поштучные ставки для остальных продуктов

Все функции применяют политику приведения ввода из units:
нечисловое → 0, количества округляются вниз и не бывают отрицательными.
"""

from typing import Any

from src.core.pricing.units import (
    DIFFERENCE_DIVISOR,
    DOUGH_PROFIT_PER_UNIT,
    JERQ_UNIT_PRICE,
    coerce_amount,
    coerce_count,
)


def linear_price(count: Any, rate: float) -> float:
    """
    Линейная цена: count * rate.

    Args:
        count: Количество (приводится к неотрицательному целому)
        rate: Ставка за единицу

    Returns:
        count * rate
    """
    return coerce_count(count) * rate


def jerq_total(count: Any) -> int:
    """Выручка по "jerq": count * 250."""
    return coerce_count(count) * JERQ_UNIT_PRICE


def dough_profit(count: Any) -> float:
    """
    Прибыль с теста в тысячах: count * 10 / 8.

    Examples:
        >>> dough_profit(80)
        100.0
    """
    return linear_price(count, DOUGH_PROFIT_PER_UNIT)


def difference_amount(count: Any) -> float:
    """Сумма разницы в тысячах: count / 8."""
    return coerce_count(count) / DIFFERENCE_DIVISOR


def flour_total_cost(bag_price: Any, bag_count: Any) -> float:
    """Стоимость закупки муки: цена мешка * количество мешков."""
    return coerce_amount(bag_price) * coerce_count(bag_count)
