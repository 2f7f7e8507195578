import os
from datetime import datetime, timedelta, timezone

# Settings are read when the app module is imported
os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")

import pytest
from fastapi.testclient import TestClient

from craft_caravan.dependencies import get_rate_limiter, get_record_store
from craft_caravan.errors import UNIQUE_VIOLATION, RecordStoreError
from craft_caravan.main import app
from craft_caravan.services.rate_limiter import RateLimiter
from craft_caravan.services.submission_gate import SubmissionGate

START = datetime(2024, 6, 5, 12, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Manually advanced clock for the rate limiter."""

    def __init__(self, start: datetime = START):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += timedelta(milliseconds=ms)


class FakeRecordStore:
    """In-memory RecordStore that echoes inserts back.

    ``unique`` maps a table to the column that must be unique; a second insert
    with the same value fails like Postgres does (code 23505).
    """

    def __init__(self, tables: dict[str, list[dict]] | None = None, unique=None):
        self.tables: dict[str, list[dict]] = {k: list(v) for k, v in (tables or {}).items()}
        self.unique: dict[str, str] = unique or {}
        self.inserts: list[tuple[str, dict]] = []
        self.queries: list[tuple] = []
        self.fail_with: RecordStoreError | None = None

    async def insert(self, table, record):
        if self.fail_with:
            raise self.fail_with
        column = self.unique.get(table)
        rows = self.tables.setdefault(table, [])
        if column and any(row.get(column) == record.get(column) for row in rows):
            raise RecordStoreError(
                f'duplicate key value violates unique constraint "{table}_{column}_key"',
                code=UNIQUE_VIOLATION,
            )
        row = dict(record)
        rows.append(row)
        self.inserts.append((table, row))
        return row

    async def query(self, table, filters=None, ordering=None, limit=None):
        self.queries.append((table, dict(filters or {}), list(ordering or []), limit))
        if self.fail_with:
            raise self.fail_with
        rows = [
            row
            for row in self.tables.get(table, [])
            if all(row.get(k) == v for k, v in (filters or {}).items())
        ]
        for column, descending in reversed(list(ordering or [])):
            rows.sort(key=lambda row: row[column], reverse=descending)
        if limit:
            rows = rows[:limit]
        return rows


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def limiter(clock) -> RateLimiter:
    return RateLimiter(clock=clock)


@pytest.fixture
def store() -> FakeRecordStore:
    return FakeRecordStore(unique={"newsletter": "email"})


@pytest.fixture
def gate(store, limiter) -> SubmissionGate:
    return SubmissionGate(store, limiter)


@pytest.fixture
def client(store, limiter):
    """FastAPI test client wired to the fake store and a fresh limiter."""
    app.dependency_overrides[get_record_store] = lambda: store
    app.dependency_overrides[get_rate_limiter] = lambda: limiter
    yield TestClient(app)
    app.dependency_overrides.clear()
