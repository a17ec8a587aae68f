"""
Units — Денежные константы и политика приведения числового ввода

Единственное место, где задаются ставки и масштаб хранения сумм:
- прибыль теста (dough) хранится в тысячах: count * 10 / 8
- разница (difference) хранится в той же шкале: count / 8
- цены электрического хлеба хранятся как есть (250 за штуку)

ПОЛИТИКА ПРИВЕДЕНИЯ ВВОДА:
Нечисловые, пустые, NaN/Inf значения приводятся к 0, а не вызывают ошибку.
Количества округляются вниз до целого и не бывают отрицательными.
Это явное правило, а не тихая порча данных: каждое приведение покрыто тестами.
"""

import math
from typing import Any, Final


# =============================================================================
# СТАВКИ
# =============================================================================

# Прибыль с одной единицы теста (в тысячах): 10 / 8
DOUGH_PROFIT_PER_UNIT: Final[float] = 10 / 8

# Цена одного "jerq" (линейная)
JERQ_UNIT_PRICE: Final[int] = 250

# Цена одного "circle" вне комплекта (остаток < 3)
CIRCLE_UNIT_PRICE: Final[int] = 250

# Делитель разницы (недостача/излишек): amount = count / 8
DIFFERENCE_DIVISOR: Final[int] = 8

# Масштаб хранения сумм: сохранённые значения умножаются на 1000 при показе
STORAGE_SCALE: Final[int] = 1000


# =============================================================================
# ПРИВЕДЕНИЕ ВВОДА
# =============================================================================


def coerce_amount(value: Any) -> float:
    """
    Приведение денежного ввода к float.

    Args:
        value: Любое значение (число, строка, None)

    Returns:
        float значение, либо 0.0 если ввод нечисловой или NaN/Inf

    Examples:
        >>> coerce_amount("12.5")
        12.5
        >>> coerce_amount("abc")
        0.0
        >>> coerce_amount(None)
        0.0
    """
    if value is None or isinstance(value, bool):
        return 0.0

    try:
        result = float(value.strip() if isinstance(value, str) else value)
    except (TypeError, ValueError):
        return 0.0

    if not math.isfinite(result):
        return 0.0
    return result


def coerce_count(value: Any) -> int:
    """
    Приведение количества к неотрицательному целому.

    Дробные значения округляются вниз, отрицательные и нечисловые дают 0.

    Examples:
        >>> coerce_count("7")
        7
        >>> coerce_count(3.9)
        3
        >>> coerce_count(-2)
        0
        >>> coerce_count("")
        0
    """
    amount = coerce_amount(value)
    if amount <= 0:
        return 0
    return math.floor(amount)


def to_display_amount(stored: float) -> float:
    """Перевод сохранённой суммы (в тысячах) в полную сумму."""
    return coerce_amount(stored) * STORAGE_SCALE
