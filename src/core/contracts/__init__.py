"""
Contract Validation Module

Модуль для валидации строк таблиц хранилища по JSON Schema контрактам.
"""

from .validators import (
    RowContractValidator,
    SchemaLoader,
    get_row_validator,
    validate_row,
    validate_rows,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "RowContractValidator",
    # Functions
    "get_row_validator",
    "validate_row",
    "validate_rows",
]
