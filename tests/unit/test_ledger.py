"""
Тесты для BakeryLedger — операции учёта над хранилищем

Проверяет:
1. Запись производства по сменам и в плоской схеме
2. Пересчёт производных полей при создании и изменении
3. Проброс ошибок хранилища при записи
4. Деградацию чтения: пустой результат с error
5. Выборки по дате, интервалу и "до сегодня"
"""

import datetime as dt
import logging

import pytest

from src.core.config import LedgerConfig, ProductionSchema
from src.core.domain import Shift
from src.ledger import BakeryLedger, QueryResult
from src.store import InMemoryTableStore, RecordNotFound, StoreError


TODAY = dt.date(2026, 10, 18)


@pytest.fixture
def store():
    return InMemoryTableStore()


@pytest.fixture
def ledger(store):
    return BakeryLedger(store, today=lambda: TODAY)


@pytest.fixture
def flat_ledger(store):
    config = LedgerConfig(production_schema=ProductionSchema.FLAT_ROWS)
    return BakeryLedger(store, config=config, today=lambda: TODAY)


# =============================================================================
# DOUGH: SHIFT ROWS
# =============================================================================


class TestDoughShiftRows:
    """Производство в схеме daily_bakes"""

    def test_add_dough_writes_one_row_per_shift(self, ledger, store):
        records = ledger.add_dough(TODAY, morning_count=40, evening_count="24")

        assert [r.shift for r in records] == [Shift.MORNING, Shift.EVENING]
        rows = store.rows("daily_bakes")
        assert [(r["shift"], r["dough_count"], r["total_profit"]) for r in rows] == [
            ("morning", 40, 50.0),
            ("evening", 24, 30.0),
        ]

    def test_add_dough_skips_zero_shift(self, ledger, store):
        records = ledger.add_dough("2026-10-18", morning_count=0, evening_count=8)

        assert len(records) == 1
        assert records[0].shift == Shift.EVENING
        assert records[0].id is not None

    def test_add_dough_requires_positive_shift(self, ledger, store):
        with pytest.raises(ValueError, match="At least one shift"):
            ledger.add_dough(TODAY, morning_count=0, evening_count="abc")
        assert store.rows("daily_bakes") == []

    def test_add_dough_store_failure_propagates(self, ledger, store, caplog):
        store.fail_next("daily_bakes", "insert", "network down")

        with caplog.at_level(logging.ERROR):
            with pytest.raises(StoreError):
                ledger.add_dough(TODAY, morning_count=8)
        assert "Failed to add rows to daily_bakes" in caplog.text

    def test_list_dough_groups_by_date(self, ledger):
        ledger.add_dough("2026-10-17", morning_count=40, evening_count=24)
        ledger.add_dough(TODAY, morning_count=16)

        result = ledger.list_dough()

        assert result.ok
        assert [d.date for d in result] == [dt.date(2026, 10, 17), TODAY]
        assert result.records[0].total_profit == pytest.approx(80.0)
        assert result.records[1].evening_count == 0

    def test_today_dough(self, ledger):
        ledger.add_dough("2026-10-17", morning_count=40)
        ledger.add_dough(TODAY, morning_count=8, evening_count=8)

        (today,) = ledger.today_dough()
        assert today.dough_count == 16

    def test_dough_before_today_descending(self, ledger):
        ledger.add_dough("2026-10-15", morning_count=8)
        ledger.add_dough("2026-10-17", morning_count=8)
        ledger.add_dough(TODAY, morning_count=8)

        dates = [d.date.isoformat() for d in ledger.dough_before_today()]
        assert dates == ["2026-10-17", "2026-10-15"]

    def test_dough_by_range_inclusive(self, ledger):
        for day in ("2026-10-14", "2026-10-15", "2026-10-16", "2026-10-17"):
            ledger.add_dough(day, morning_count=8)

        dates = [d.date.isoformat() for d in ledger.dough_by_range("2026-10-15", "2026-10-16")]
        assert dates == ["2026-10-16", "2026-10-15"]

    def test_update_dough_recomputes_profit(self, ledger):
        (record,) = ledger.add_dough(TODAY, morning_count=8)

        updated = ledger.update_dough(record.id, TODAY, morning_count=80)

        assert updated.morning_count == 80
        assert updated.total_profit == pytest.approx(100.0)

    def test_update_dough_uses_evening_when_morning_empty(self, ledger, store):
        (record,) = ledger.add_dough(TODAY, evening_count=8)

        ledger.update_dough(record.id, TODAY, morning_count=0, evening_count=16)

        assert store.rows("daily_bakes")[0]["dough_count"] == 16

    def test_update_dough_rejects_empty_counts(self, ledger, store):
        (record,) = ledger.add_dough(TODAY, morning_count=8)

        with pytest.raises(ValueError, match="At least one shift"):
            ledger.update_dough(record.id, TODAY, morning_count=0, evening_count="abc")

        assert store.rows("daily_bakes")[0]["dough_count"] == 8

    def test_update_missing_dough(self, ledger):
        with pytest.raises(RecordNotFound):
            ledger.update_dough(404, TODAY, morning_count=1)

    def test_delete_dough(self, ledger, store):
        (record,) = ledger.add_dough(TODAY, morning_count=8)
        ledger.delete_dough(record.id)
        assert store.rows("daily_bakes") == []


# =============================================================================
# DOUGH: FLAT ROWS
# =============================================================================


class TestDoughFlatRows:
    """Производство в плоской схеме dough"""

    def test_add_dough_writes_single_row(self, flat_ledger, store):
        records = flat_ledger.add_dough(TODAY, morning_count=40, evening_count=24)

        (row,) = store.rows("dough")
        assert row["morning_count"] == 40
        assert row["evening_profit"] == pytest.approx(30.0)
        assert row["total_profit"] == pytest.approx(80.0)
        assert len(records) == 2

    def test_list_dough(self, flat_ledger):
        flat_ledger.add_dough(TODAY, morning_count=8)

        (day,) = flat_ledger.list_dough()
        assert day.morning_count == 8
        assert day.evening_count == 0

    def test_update_recomputes_both_shifts(self, flat_ledger):
        flat_ledger.add_dough(TODAY, morning_count=8)
        day = flat_ledger.list_dough().records[0]

        updated = flat_ledger.update_dough(day.id, TODAY, morning_count=16, evening_count=8)

        assert updated.morning_profit == pytest.approx(20.0)
        assert updated.evening_profit == pytest.approx(10.0)
        assert updated.total_profit == pytest.approx(30.0)

    def test_update_rejects_empty_counts(self, flat_ledger, store):
        flat_ledger.add_dough(TODAY, morning_count=8)
        day = flat_ledger.list_dough().records[0]

        with pytest.raises(ValueError, match="At least one shift"):
            flat_ledger.update_dough(day.id, TODAY, morning_count=0, evening_count=0)

        assert store.rows("dough")[0]["morning_count"] == 8
        (visible,) = flat_ledger.dough_by_date(TODAY)
        assert visible.id == day.id


# =============================================================================
# READ DEGRADATION
# =============================================================================


class TestReadDegradation:
    """Ошибки чтения возвращают пустой результат с error"""

    def test_failed_read_is_flagged(self, ledger, store, caplog):
        ledger.add_expense(TODAY, "Gas", 5)
        store.fail_next("expenses", "select", "timeout")

        with caplog.at_level(logging.ERROR):
            result = ledger.list_expenses()

        assert isinstance(result, QueryResult)
        assert result.ok is False
        assert len(result) == 0
        assert "timeout" in result.error
        assert "Failed to read expenses" in caplog.text

    def test_empty_read_is_ok(self, ledger):
        result = ledger.list_flour()
        assert result.ok is True
        assert len(result) == 0

    def test_malformed_rows_flagged(self):
        store = InMemoryTableStore(seed={"differences": [{"type": "shrink", "count": 1}]})
        result = BakeryLedger(store).list_differences()

        assert result.ok is False
        assert "malformed row" in result.error


# =============================================================================
# FLOUR / EXPENSES / ELECTRIC BREAD / DIFFERENCES
# =============================================================================


class TestFlourOperations:
    """Операции с закупками муки"""

    def test_add_and_list(self, ledger):
        purchase = ledger.add_flour(TODAY, "35", 4)

        assert purchase.id is not None
        assert purchase.total_cost == pytest.approx(140.0)
        assert [p.id for p in ledger.list_flour()] == [purchase.id]

    def test_by_date(self, ledger):
        ledger.add_flour("2026-10-17", 35, 1)
        ledger.add_flour(TODAY, 35, 2)

        (purchase,) = ledger.flour_by_date(TODAY)
        assert purchase.bag_count == 2

    def test_update_recomputes_total(self, ledger):
        purchase = ledger.add_flour(TODAY, 35, 1)
        updated = ledger.update_flour(purchase.id, TODAY, 40, 3)
        assert updated.total_cost == pytest.approx(120.0)

    def test_delete(self, ledger, store):
        purchase = ledger.add_flour(TODAY, 35, 1)
        ledger.delete_flour(purchase.id)
        assert store.rows("flour") == []

    def test_delete_failure_propagates(self, ledger, store):
        purchase = ledger.add_flour(TODAY, 35, 1)
        store.fail_next("flour", "delete")
        with pytest.raises(StoreError):
            ledger.delete_flour(purchase.id)


class TestExpenseOperations:
    """Операции с расходами"""

    def test_add_with_type(self, ledger, store):
        expense = ledger.add_expense(TODAY, "Flour", "30", type="flour")

        assert expense.is_flour
        assert store.rows("expenses")[0]["type"] == "flour"

    def test_list_descending(self, ledger):
        ledger.add_expense("2026-10-16", "Gas", 5)
        ledger.add_expense(TODAY, "Salt", 1)

        assert [e.expense_name for e in ledger.list_expenses()] == ["Salt", "Gas"]

    def test_by_date(self, ledger):
        ledger.add_expense("2026-10-16", "Gas", 5)
        assert len(ledger.expenses_by_date(TODAY)) == 0
        assert len(ledger.expenses_by_date("2026-10-16")) == 1

    def test_update(self, ledger):
        expense = ledger.add_expense(TODAY, "Gas", 5)
        updated = ledger.update_expense(expense.id, TODAY, "Gas refill", "bad")

        assert updated.expense_name == "Gas refill"
        assert updated.amount == 0.0

    def test_delete(self, ledger):
        expense = ledger.add_expense(TODAY, "Gas", 5)
        ledger.delete_expense(expense.id)
        assert len(ledger.list_expenses()) == 0


class TestElectricBreadOperations:
    """Операции с продажами электрического хлеба"""

    def test_add_computes_totals(self, ledger, store):
        sale = ledger.add_electric_bread(TODAY, jerq_count=2, circle_count=9)

        assert sale.jerq_total == 500
        assert sale.circle_total == 1500
        assert store.rows("electric_bread")[0]["total_profit"] == 2000

    def test_update_recomputes(self, ledger):
        sale = ledger.add_electric_bread(TODAY, 1, 1)
        updated = ledger.update_electric_bread(sale.id, TODAY, 0, 6)
        assert updated.total_profit == 1000

    def test_list_and_by_date(self, ledger):
        ledger.add_electric_bread("2026-10-17", 1, 0)
        ledger.add_electric_bread(TODAY, 0, 3)

        assert [s.date for s in ledger.list_electric_bread()] == [TODAY, dt.date(2026, 10, 17)]
        (sale,) = ledger.electric_bread_by_date(TODAY)
        assert sale.circle_total == 500

    def test_delete(self, ledger):
        sale = ledger.add_electric_bread(TODAY, 1, 0)
        ledger.delete_electric_bread(sale.id)
        assert len(ledger.list_electric_bread()) == 0


class TestDifferenceOperations:
    """Операции с разницами"""

    def test_add_computes_amount(self, ledger):
        record = ledger.add_difference(TODAY, "shrink", 12)
        assert record.amount == pytest.approx(1.5)

    def test_update_and_by_date(self, ledger):
        record = ledger.add_difference(TODAY, "shrink", 8)
        ledger.update_difference(record.id, TODAY, "gain", 16)

        (updated,) = ledger.differences_by_date(TODAY)
        assert updated.type == "gain"
        assert updated.amount == pytest.approx(2.0)

    def test_delete(self, ledger):
        record = ledger.add_difference(TODAY, "shrink", 8)
        ledger.delete_difference(record.id)
        assert len(ledger.list_differences()) == 0
