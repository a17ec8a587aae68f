"""
Тесты для конфигурации учёта

Проверяет дефолты, выбор таблицы производства и сборку из окружения.
"""

import pytest

from src.core.config import (
    AuthConfig,
    FlourCostMode,
    LedgerConfig,
    ProductionSchema,
    TableNames,
)


class TestLedgerConfig:
    """Тесты LedgerConfig"""

    def test_defaults(self):
        config = LedgerConfig()

        assert config.production_schema == ProductionSchema.SHIFT_ROWS
        assert config.flour_cost_mode == FlourCostMode.FLOUR_TABLE
        assert config.tables == TableNames()
        assert config.auth.ready_timeout_sec == 2.0

    def test_production_table_follows_schema(self):
        assert LedgerConfig().production_table == "daily_bakes"
        flat = LedgerConfig(production_schema=ProductionSchema.FLAT_ROWS)
        assert flat.production_table == "dough"

    def test_frozen(self):
        config = LedgerConfig()
        with pytest.raises(AttributeError):
            config.flour_cost_mode = FlourCostMode.EXPENSE_RECLASSIFICATION


class TestFromEnv:
    """Тесты LedgerConfig.from_env"""

    def test_empty_environment_gives_defaults(self):
        assert LedgerConfig.from_env({}) == LedgerConfig()

    def test_unrelated_variables_are_ignored(self):
        env = {"BAKERY_STORE_URL": "https://example.invalid", "BAKERY_STORE_KEY": "anon"}
        assert LedgerConfig.from_env(env) == LedgerConfig()

    def test_overrides(self):
        config = LedgerConfig.from_env(
            {
                "BAKERY_PRODUCTION_SCHEMA": "flat_rows",
                "BAKERY_FLOUR_COST_MODE": "expense_reclassification",
                "BAKERY_AUTH_READY_TIMEOUT_SEC": "0.5",
            }
        )

        assert config.production_schema == ProductionSchema.FLAT_ROWS
        assert config.flour_cost_mode == FlourCostMode.EXPENSE_RECLASSIFICATION
        assert config.auth == AuthConfig(ready_timeout_sec=0.5)

    def test_reads_os_environ(self, monkeypatch):
        monkeypatch.setenv("BAKERY_FLOUR_COST_MODE", "expense_reclassification")
        assert LedgerConfig.from_env().flour_cost_mode == FlourCostMode.EXPENSE_RECLASSIFICATION

    @pytest.mark.parametrize(
        "env",
        [
            {"BAKERY_PRODUCTION_SCHEMA": "weekly"},
            {"BAKERY_FLOUR_COST_MODE": "both"},
            {"BAKERY_AUTH_READY_TIMEOUT_SEC": "soon"},
            {"BAKERY_AUTH_READY_TIMEOUT_SEC": "0"},
        ],
    )
    def test_invalid_values(self, env):
        with pytest.raises(ValueError):
            LedgerConfig.from_env(env)
