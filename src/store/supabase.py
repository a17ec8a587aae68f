"""Supabase Table Store — адаптер TableStore поверх PostgREST-клиента.

Клиент внедряется снаружи (например, supabase.create_client(url, key)),
модуль не импортирует SDK поставщика. Ожидаемый интерфейс клиента:

    client.table(name).select("*").eq(col, v).gte(col, v).order(col, desc=...).execute().data
    client.table(name).insert(rows).execute().data
    client.table(name).update(fields).eq("id", id).execute().data
    client.table(name).delete().eq("id", id).execute().data

Любое исключение клиента переводится в StoreError с исходной причиной.
update и delete без затронутых строк поднимают RecordNotFound, как и
InMemoryTableStore.
"""

import datetime as dt
import logging
from typing import Any, Sequence

from src.store.base import (
    Filter,
    Order,
    RecordId,
    RecordNotFound,
    Row,
    StoreError,
    TableStore,
)

logger = logging.getLogger(__name__)


def _wire_value(value: Any) -> Any:
    if isinstance(value, (dt.date, dt.datetime)):
        return value.isoformat()
    return value


class SupabaseTableStore(TableStore):
    """TableStore поверх внедрённого PostgREST-клиента."""

    def __init__(self, client: Any):
        if client is None:
            raise ValueError("client must not be None")
        self._client = client

    def _execute(self, table: str, operation: str, query: Any) -> list[Row]:
        try:
            response = query.execute()
        except Exception as exc:
            logger.error("Store %s on '%s' failed: %s", operation, table, exc)
            raise StoreError(table, operation, str(exc), cause=exc) from exc

        error = getattr(response, "error", None)
        if error:
            logger.error("Store %s on '%s' returned error: %s", operation, table, error)
            raise StoreError(table, operation, str(error))

        return list(getattr(response, "data", None) or [])

    def insert(self, table: str, rows: Sequence[Row]) -> list[Row]:
        payload = [{k: _wire_value(v) for k, v in row.items()} for row in rows]
        query = self._client.table(table).insert(payload)
        return self._execute(table, "insert", query)

    def select(
        self,
        table: str,
        filters: Sequence[Filter] = (),
        order: Sequence[Order] = (),
    ) -> list[Row]:
        query = self._client.table(table).select("*")
        for flt in filters:
            query = getattr(query, flt.op.value)(flt.column, _wire_value(flt.value))
        for ordering in order:
            query = query.order(ordering.column, desc=not ordering.ascending)
        return self._execute(table, "select", query)

    def update(self, table: str, record_id: RecordId, fields: Row) -> Row:
        payload = {k: _wire_value(v) for k, v in fields.items()}
        query = self._client.table(table).update(payload).eq("id", record_id)
        rows = self._execute(table, "update", query)
        if not rows:
            raise RecordNotFound(table, "update", record_id)
        return rows[0]

    def delete(self, table: str, record_id: RecordId) -> None:
        query = self._client.table(table).delete().eq("id", record_id)
        if not self._execute(table, "delete", query):
            raise RecordNotFound(table, "delete", record_id)
