"""
Pricing — чистые функции расчёта производных сумм перед записью.

Без I/O и без состояния: все функции детерминированы.
"""

# Units & coercion policy
from src.core.pricing.units import (
    CIRCLE_UNIT_PRICE,
    DIFFERENCE_DIVISOR,
    DOUGH_PROFIT_PER_UNIT,
    JERQ_UNIT_PRICE,
    STORAGE_SCALE,
    coerce_amount,
    coerce_count,
    to_display_amount,
)

# Tiered (circle)
from src.core.pricing.tiered import (
    CIRCLE_BUNDLES,
    MIN_BUNDLE_SIZE,
    bundle_breakdown,
    tiered_price,
)

# Linear (jerq, dough, differences, flour)
from src.core.pricing.linear import (
    difference_amount,
    dough_profit,
    flour_total_cost,
    jerq_total,
    linear_price,
)

__all__ = [
    # Units: Constants
    "CIRCLE_UNIT_PRICE",
    "DIFFERENCE_DIVISOR",
    "DOUGH_PROFIT_PER_UNIT",
    "JERQ_UNIT_PRICE",
    "STORAGE_SCALE",
    # Units: Coercion
    "coerce_amount",
    "coerce_count",
    "to_display_amount",
    # Tiered: Constants
    "CIRCLE_BUNDLES",
    "MIN_BUNDLE_SIZE",
    # Tiered: Functions
    "bundle_breakdown",
    "tiered_price",
    # Linear: Functions
    "difference_amount",
    "dough_profit",
    "flour_total_cost",
    "jerq_total",
    "linear_price",
]
