"""
Config — Конфигурация учёта пекарни

Frozen dataclass конфигурации с дефолтами. Значения можно переопределить
через переменные окружения BAKERY_* (LedgerConfig.from_env).

Переменные окружения:
- BAKERY_PRODUCTION_SCHEMA: "shift_rows" | "flat_rows"
- BAKERY_FLOUR_COST_MODE: "flour_table" | "expense_reclassification"
- BAKERY_AUTH_READY_TIMEOUT_SEC: float
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional


# =============================================================================
# ENUMS
# =============================================================================


class ProductionSchema(str, Enum):
    """
    Историческая схема таблицы производства теста.

    SHIFT_ROWS: таблица daily_bakes, одна строка на (дата, смена)
    FLAT_ROWS: таблица dough, одна строка на дату с полями утро/вечер
    """

    SHIFT_ROWS = "shift_rows"
    FLAT_ROWS = "flat_rows"


class FlourCostMode(str, Enum):
    """
    Источник стоимости муки в статистике.

    FLOUR_TABLE: сумма total_cost из таблицы flour
    EXPENSE_RECLASSIFICATION: сумма расходов с type == "flour"

    Режимы взаимоисключающие: расходы с type == "flour" вычитаются из прочих
    расходов только в режиме EXPENSE_RECLASSIFICATION.
    """

    FLOUR_TABLE = "flour_table"
    EXPENSE_RECLASSIFICATION = "expense_reclassification"


# =============================================================================
# TABLE NAMES
# =============================================================================


@dataclass(frozen=True)
class TableNames:
    """Имена таблиц во внешнем хранилище."""

    daily_bakes: str = "daily_bakes"
    dough: str = "dough"
    flour: str = "flour"
    expenses: str = "expenses"
    electric_bread: str = "electric_bread"
    differences: str = "differences"


# =============================================================================
# CONFIGS
# =============================================================================


@dataclass(frozen=True)
class AuthConfig:
    """
    Конфигурация проверки доступа.

    - ready_timeout_sec: сколько ждать готовности сервиса идентификации
    - public_pages: страницы, не требующие входа
    - login_page: куда перенаправлять неавторизованного пользователя
    """

    ready_timeout_sec: float = 2.0
    public_pages: frozenset[str] = frozenset({"login.html", "404.html", ""})
    login_page: str = "login.html"


@dataclass(frozen=True)
class LedgerConfig:
    """Конфигурация учёта и отчётности."""

    production_schema: ProductionSchema = ProductionSchema.SHIFT_ROWS
    flour_cost_mode: FlourCostMode = FlourCostMode.FLOUR_TABLE
    tables: TableNames = field(default_factory=TableNames)
    auth: AuthConfig = field(default_factory=AuthConfig)

    @property
    def production_table(self) -> str:
        """Имя таблицы производства для выбранной схемы."""
        if self.production_schema == ProductionSchema.FLAT_ROWS:
            return self.tables.dough
        return self.tables.daily_bakes

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "LedgerConfig":
        """
        Сборка конфигурации из переменных окружения.

        Args:
            environ: источник переменных (default: os.environ)

        Returns:
            LedgerConfig с переопределёнными значениями

        Raises:
            ValueError: если значение перечисления или таймаута невалидно
        """
        env = os.environ if environ is None else environ

        schema = ProductionSchema(
            env.get("BAKERY_PRODUCTION_SCHEMA", ProductionSchema.SHIFT_ROWS.value)
        )
        mode = FlourCostMode(
            env.get("BAKERY_FLOUR_COST_MODE", FlourCostMode.FLOUR_TABLE.value)
        )

        timeout_raw = env.get("BAKERY_AUTH_READY_TIMEOUT_SEC")
        auth = AuthConfig()
        if timeout_raw is not None:
            timeout = float(timeout_raw)
            if timeout <= 0:
                raise ValueError(f"BAKERY_AUTH_READY_TIMEOUT_SEC must be positive, got {timeout}")
            auth = AuthConfig(ready_timeout_sec=timeout)

        return cls(
            production_schema=schema,
            flour_cost_mode=mode,
            auth=auth,
        )
