"""
JSON Schema Row Contract Validators

Модуль для валидации строк таблиц хранилища согласно JSON Schema контрактам.
Использует библиотеку jsonschema для проверки соответствия данных схемам.

Схемы (src/core/contracts/schema/):
- daily_bakes.json (производство по сменам)
- dough.json (производство в плоской схеме)
- flour.json
- expenses.json
- electric_bread.json
- differences.json
"""

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator, ValidationError


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы лежат в каталоге schema/ рядом с этим модулем.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    @property
    def schema_dir(self) -> Path:
        return self._schema_dir

    def available(self) -> list[str]:
        """Имена всех доступных схем (без расширения)."""
        return sorted(path.stem for path in self._schema_dir.glob("*.json"))

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'daily_bakes')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема не проходит meta-validation
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Валидируем саму схему (meta-validation)
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class RowContractValidator:
    """
    Валидатор строки таблицы.

    Инкапсулирует логику валидации данных против JSON Schema.
    """

    def __init__(self, schema_name: str, loader: SchemaLoader | None = None):
        """
        Args:
            schema_name: Имя схемы для валидации (совпадает с именем таблицы)
            loader: Загрузчик схем (default: глобальный)
        """
        self.schema_name = schema_name
        self.schema = (loader or _SCHEMA_LOADER).load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        """Итератор по всем ошибкам валидации."""
        return self.validator.iter_errors(data)


_VALIDATORS: Dict[str, RowContractValidator] = {}


def get_row_validator(schema_name: str) -> RowContractValidator:
    """Кэшированный валидатор для схемы."""
    validator = _VALIDATORS.get(schema_name)
    if validator is None:
        validator = RowContractValidator(schema_name)
        _VALIDATORS[schema_name] = validator
    return validator


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_row(schema_name: str, data: Dict[str, Any]) -> None:
    """
    Валидация строки таблицы.

    Args:
        schema_name: Имя схемы (например, 'flour')
        data: Строка для валидации

    Raises:
        ValidationError: Если строка не соответствует схеме
        FileNotFoundError: Если схема неизвестна
    """
    get_row_validator(schema_name).validate(data)


def validate_rows(schema_name: str, rows: list[Dict[str, Any]]) -> None:
    """Валидация пакета строк; первая ошибка прерывает проверку."""
    validator = get_row_validator(schema_name)
    for row in rows:
        validator.validate(row)


__all__ = [
    "SchemaLoader",
    "RowContractValidator",
    "ValidationError",
    "get_row_validator",
    "validate_row",
    "validate_rows",
]
