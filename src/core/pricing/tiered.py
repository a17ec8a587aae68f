"""
Tiered Pricing — Цена "circle" хлеба по комплектам

Жадный подбор комплектов: сначала самый большой комплект, который помещается
в оставшееся количество. Остаток меньше минимального комплекта (3 шт.)
считается поштучно.

Таблица комплектов (размер → цена):
    6 → 1000
    4 → 750
    3 → 500
    1 → 250 (поштучно)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. tiered_price(0) == 0, отрицательный и нечисловой ввод дают 0
2. Функция чистая и детерминированная (без I/O)
3. Монотонность: tiered_price(n) <= tiered_price(n + 1) для n >= 0
4. Время расчёта не зависит от количества
"""

from typing import Any, Final

from src.core.pricing.units import CIRCLE_UNIT_PRICE, coerce_count


# =============================================================================
# ТАБЛИЦА КОМПЛЕКТОВ
# =============================================================================

# (размер комплекта, цена), упорядочено по убыванию размера
CIRCLE_BUNDLES: Final[tuple[tuple[int, int], ...]] = (
    (6, 1000),
    (4, 750),
    (3, 500),
)

# Минимальный комплект: всё, что меньше, считается поштучно
MIN_BUNDLE_SIZE: Final[int] = min(size for size, _ in CIRCLE_BUNDLES)


def _pick_bundles(count: int) -> list[tuple[int, int, int]]:
    """Жадный подбор: (размер, число комплектов, сумма) для каждого размера."""
    parts: list[tuple[int, int, int]] = []

    # Самый большой комплект берётся одним делением
    largest, largest_price = CIRCLE_BUNDLES[0]
    full, remaining = divmod(count, largest)
    if full:
        parts.append((largest, full, full * largest_price))

    # Остаток меньше самого большого комплекта: не более двух шагов
    for size, price in CIRCLE_BUNDLES[1:]:
        if remaining < MIN_BUNDLE_SIZE:
            break
        if size <= remaining:
            parts.append((size, 1, price))
            remaining -= size

    if remaining > 0:
        parts.append((1, remaining, remaining * CIRCLE_UNIT_PRICE))
    return parts


def tiered_price(count: Any) -> int:
    """
    Итоговая цена для count штук "circle" хлеба.

    Args:
        count: Количество (приводится через coerce_count: дробное → вниз,
            отрицательное/нечисловое → 0)

    Returns:
        Итоговая цена (целое число)

    Examples:
        >>> tiered_price(6)
        1000
        >>> tiered_price(7)
        1250
        >>> tiered_price(9)
        1500
        >>> tiered_price(5)
        1000
    """
    return sum(subtotal for _, _, subtotal in _pick_bundles(coerce_count(count)))


def bundle_breakdown(count: Any) -> list[tuple[int, int, int]]:
    """
    Разбивка количества на комплекты в порядке подбора.

    Returns:
        Список (размер, число комплектов, сумма); поштучный остаток идёт
        как (1, остаток, остаток * 250)
    """
    return _pick_bundles(coerce_count(count))
