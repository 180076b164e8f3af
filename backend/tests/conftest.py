"""Pytest configuration and fixtures for Zmeurel tests.

The API and service tests run against an in-memory record store that
follows the same contract as the SQL store, including the per-tenant
unique display ID.  Tests that need PostgreSQL are marked ``integration``
and only run when ZMEUREL_TEST_DATABASE_URL is set.
"""

import uuid
from datetime import datetime
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from zmeurel.config import settings
from zmeurel.entities import get_entity_config
from zmeurel.main import app
from zmeurel.middleware.exceptions import (
    DisplayIdConflictError,
    RecordNotFoundError,
    StoreUnavailableError,
)
from zmeurel.services.record_store import RecordStore, get_record_store
from zmeurel.tenancy import clear_tenant_context

TENANT_A = "farm-a"
TENANT_B = "farm-b"


# ── In-memory record store ───────────────────────────────────────

class InMemoryRecordStore(RecordStore):
    """RecordStore over plain lists, one per entity type.

    Knobs for failure scenarios:
      - ``unavailable``: every call raises StoreUnavailableError
      - ``steal_display_ids``: display IDs a "concurrent" writer inserts
        right before our next insert of that ID, forcing a conflict
    """

    def __init__(self):
        self.rows: dict[str, list[dict]] = {}
        self.unavailable = False
        self.steal_display_ids: list[str] = []
        self.insert_attempts = 0

    def _table(self, entity) -> list[dict]:
        self._check()
        return self.rows.setdefault(get_entity_config(entity).table, [])

    def _check(self):
        if self.unavailable:
            raise StoreUnavailableError("Record store query failed: connection refused")

    def _find(self, entity, tenant_id, record_id) -> dict:
        for row in self._table(entity):
            if row["tenant_id"] == tenant_id and row["id"] == record_id:
                return row
        raise RecordNotFoundError(get_entity_config(entity).label, record_id)

    def seed(self, entity, tenant_id: str, display_id, **fields) -> dict:
        """Insert a row as-is, bypassing ID generation and uniqueness."""
        row = {
            "id": str(uuid.uuid4()),
            "tenant_id": tenant_id,
            "display_id": display_id,
            "created_at": datetime.utcnow(),
            **fields,
        }
        self._table(entity).append(row)
        return dict(row)

    async def list(self, entity, tenant_id, filters=None, order_by=None, descending=False):
        config = get_entity_config(entity)
        rows = [
            dict(r) for r in self._table(entity)
            if r["tenant_id"] == tenant_id and all(f.matches(r) for f in filters or [])
        ]
        column = order_by or config.order_by
        # Nulls last ascending, first descending (PostgreSQL default)
        rows.sort(
            key=lambda r: (r.get(column) is None, r.get(column) if r.get(column) is not None else 0),
            reverse=descending,
        )
        return rows

    async def list_display_ids(self, entity, tenant_id):
        return [r["display_id"] for r in self._table(entity) if r["tenant_id"] == tenant_id]

    async def get_by_id(self, entity, tenant_id, record_id):
        return dict(self._find(entity, tenant_id, record_id))

    async def insert(self, entity, fields):
        table = self._table(entity)
        self.insert_attempts += 1
        display_id = fields["display_id"]
        if display_id in self.steal_display_ids:
            self.steal_display_ids.remove(display_id)
            self.seed(entity, fields["tenant_id"], display_id)

        for row in table:
            if row["tenant_id"] == fields["tenant_id"] and row["display_id"] == display_id:
                raise DisplayIdConflictError(get_entity_config(entity).label, display_id)

        return self.seed(entity, fields["tenant_id"], display_id, **{
            k: v for k, v in fields.items() if k not in ("tenant_id", "display_id")
        })

    async def update(self, entity, tenant_id, record_id, fields):
        row = self._find(entity, tenant_id, record_id)
        row.update(fields)
        return dict(row)

    async def delete(self, entity, tenant_id, record_id):
        row = self._find(entity, tenant_id, record_id)
        self._table(entity).remove(row)


# ── Fixtures ─────────────────────────────────────────────────────

@pytest.fixture(autouse=True)
def no_redis(monkeypatch):
    """Report caching off unless a test turns it back on."""
    monkeypatch.setattr(settings, "cache_enabled", False)


@pytest.fixture(autouse=True)
def reset_tenant_context():
    yield
    clear_tenant_context()


@pytest.fixture
def store() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest_asyncio.fixture
async def client(store) -> AsyncGenerator[AsyncClient, None]:
    """API client for tenant A with the record store dependency overridden."""

    async def override_get_record_store():
        return store

    app.dependency_overrides[get_record_store] = override_get_record_store

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers={settings.tenant_header: TENANT_A},
    ) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def other_tenant_headers() -> dict:
    return {settings.tenant_header: TENANT_B}


# ── Test Markers ─────────────────────────────────────────────────

def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "api: HTTP API tests")
    config.addinivalue_line("markers", "integration: Tests that need PostgreSQL")
    config.addinivalue_line("markers", "cache: Report cache tests")
