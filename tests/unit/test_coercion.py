"""
Тесты политики приведения числового ввода

Нечисловой, пустой и NaN/Inf ввод приводится к 0, количества округляются
вниз и не бывают отрицательными. Тесты фиксируют это поведение.
"""

import math

import pytest

from src.core.pricing import (
    DOUGH_PROFIT_PER_UNIT,
    STORAGE_SCALE,
    coerce_amount,
    coerce_count,
    to_display_amount,
)


class TestCoerceAmount:
    """Тесты coerce_amount."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (12.5, 12.5),
            (3, 3.0),
            ("12.5", 12.5),
            (" 7 ", 7.0),
            ("-4", -4.0),
        ],
    )
    def test_numeric_values(self, value, expected):
        assert coerce_amount(value) == expected

    @pytest.mark.parametrize("value", [None, "", "abc", "12abc", [], {}, object(), True])
    def test_non_numeric_is_zero(self, value):
        assert coerce_amount(value) == 0.0

    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf, "nan", "inf"])
    def test_non_finite_is_zero(self, value):
        assert coerce_amount(value) == 0.0


class TestCoerceCount:
    """Тесты coerce_count."""

    def test_integer_passthrough(self):
        assert coerce_count(7) == 7
        assert coerce_count("7") == 7

    def test_fraction_floored(self):
        assert coerce_count(3.9) == 3
        assert coerce_count("3.2") == 3

    def test_negative_is_zero(self):
        assert coerce_count(-2) == 0
        assert coerce_count("-0.5") == 0

    def test_invalid_is_zero(self):
        assert coerce_count(None) == 0
        assert coerce_count("") == 0
        assert coerce_count("many") == 0

    def test_result_is_int(self):
        assert isinstance(coerce_count(4.0), int)


class TestStorageScale:
    """Суммы хранятся в тысячах."""

    def test_display_amount(self):
        assert STORAGE_SCALE == 1000
        assert to_display_amount(100) == 100_000
        assert to_display_amount(None) == 0

    def test_dough_rate(self):
        assert DOUGH_PROFIT_PER_UNIT == pytest.approx(1.25)
