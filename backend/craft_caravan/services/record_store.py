import asyncio
import logging
from collections.abc import Mapping, Sequence
from typing import Any, Protocol

from postgrest.exceptions import APIError
from supabase import Client

from craft_caravan.errors import RecordStoreError

logger = logging.getLogger(__name__)

Ordering = Sequence[tuple[str, bool]]


class RecordStore(Protocol):
    """Remote table access used by the gate (insert) and the catalog (query)."""

    async def insert(self, table: str, record: Mapping[str, Any]) -> dict: ...

    async def query(
        self,
        table: str,
        filters: Mapping[str, Any] | None = None,
        ordering: Ordering | None = None,
        limit: int | None = None,
    ) -> list[dict]: ...


class SupabaseRecordStore:
    """RecordStore backed by a supabase-py client.

    The client is synchronous, so every builder chain runs in a worker thread.
    """

    def __init__(self, supabase: Client):
        self.supabase = supabase

    async def insert(self, table: str, record: Mapping[str, Any]) -> dict:
        rows = await self._run(self._insert, table, dict(record))
        if not rows:
            raise RecordStoreError(f"Insert into {table} returned no rows")
        return rows[0]

    async def query(
        self,
        table: str,
        filters: Mapping[str, Any] | None = None,
        ordering: Ordering | None = None,
        limit: int | None = None,
    ) -> list[dict]:
        rows = await self._run(self._select, table, filters or {}, ordering or (), limit)
        return rows or []

    # ------------------------------------------------------------------
    # Builder chains (run in a thread)
    # ------------------------------------------------------------------

    def _insert(self, table: str, record: dict) -> list[dict]:
        result = self.supabase.table(table).insert(record).execute()
        return result.data

    def _select(
        self,
        table: str,
        filters: Mapping[str, Any],
        ordering: Ordering,
        limit: int | None,
    ) -> list[dict]:
        query = self.supabase.table(table).select("*")
        for column, value in filters.items():
            query = query.eq(column, value)
        for column, descending in ordering:
            query = query.order(column, desc=descending)
        if limit:
            query = query.limit(limit)
        return query.execute().data

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    async def _run(func, *args):
        try:
            return await asyncio.to_thread(func, *args)
        except APIError as e:
            raise RecordStoreError(
                e.message or str(e),
                code=e.code,
                details=e.details,
            ) from e
        except Exception as e:
            logger.exception("Unexpected record store failure")
            raise RecordStoreError(str(e)) from e
