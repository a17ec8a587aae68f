"""QueryResult — результат чтения с признаком неудачи.

Чтение никогда не бросает исключение хранилища: при ошибке возвращается
пустой результат с заполненным error. Так вызывающий код отличает
"записей нет" от "чтение не удалось".
"""

from dataclasses import dataclass
from typing import Generic, Iterator, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class QueryResult(Generic[T]):
    """Результат чтения таблицы."""

    table: str
    records: tuple[T, ...] = ()
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def __iter__(self) -> Iterator[T]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)
