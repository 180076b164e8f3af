"""Tests for dropping cached reports only after a request's writes commit."""

import pytest

from zmeurel import database
from zmeurel.database import AFTER_COMMIT, get_db
from zmeurel.services import reports
from zmeurel.services.record_store import SqlRecordStore

TENANT_A = "farm-a"


class _RecordingSession:
    """Stand-in for an AsyncSession that logs commit/rollback calls."""

    def __init__(self, events: list, fail_commit: bool = False):
        self.events = events
        self.fail_commit = fail_commit
        self.info = {}

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False

    async def commit(self):
        if self.fail_commit:
            raise RuntimeError("could not serialize access")
        self.events.append("commit")

    async def rollback(self):
        self.events.append("rollback")


@pytest.fixture
def events(monkeypatch) -> list:
    events = []

    async def record_invalidation(tenant_id):
        events.append(f"invalidate:{tenant_id}")

    monkeypatch.setattr(reports, "invalidate_reports", record_invalidation)
    return events


def _install_session(monkeypatch, events, **kwargs) -> _RecordingSession:
    session = _RecordingSession(events, **kwargs)
    monkeypatch.setattr(database, "async_session", lambda: session)
    return session


@pytest.mark.unit
@pytest.mark.asyncio
class TestInvalidationAfterCommit:

    async def test_invalidation_runs_after_commit(self, monkeypatch, events):
        _install_session(monkeypatch, events)
        request = get_db()
        session = await request.__anext__()

        await reports.schedule_report_invalidation(SqlRecordStore(session), TENANT_A)
        assert events == []

        with pytest.raises(StopAsyncIteration):
            await request.__anext__()
        assert events == ["commit", f"invalidate:{TENANT_A}"]

    async def test_failed_request_does_not_invalidate(self, monkeypatch, events):
        session = _install_session(monkeypatch, events)
        request = get_db()
        await request.__anext__()
        await reports.schedule_report_invalidation(SqlRecordStore(session), TENANT_A)

        with pytest.raises(ValueError):
            await request.athrow(ValueError("bad input"))
        assert events == ["rollback"]
        assert AFTER_COMMIT not in session.info

    async def test_failed_commit_does_not_invalidate(self, monkeypatch, events):
        session = _install_session(monkeypatch, events, fail_commit=True)
        request = get_db()
        await request.__anext__()
        await reports.schedule_report_invalidation(SqlRecordStore(session), TENANT_A)

        with pytest.raises(RuntimeError):
            await request.__anext__()
        assert events == ["rollback"]

    async def test_store_without_transaction_invalidates_at_once(self, store, events):
        await reports.schedule_report_invalidation(store, TENANT_A)
        assert events == [f"invalidate:{TENANT_A}"]


@pytest.mark.api
@pytest.mark.asyncio
class TestMutationsInvalidateReports:

    async def test_create_update_delete(self, client, events):
        response = await client.post("/api/parcels/", json={
            "name": "North", "area_m2": 1000, "planting_year": 2020,
        })
        parcel_id = response.json()["id"]
        await client.patch(f"/api/parcels/{parcel_id}", json={"name": "North-East"})
        await client.delete(f"/api/parcels/{parcel_id}")

        assert events == [f"invalidate:{TENANT_A}"] * 3

    async def test_reads_do_not_invalidate(self, client, events):
        await client.get("/api/parcels/")
        await client.get("/api/reports/summary")
        assert events == []

    async def test_picker_status_toggle(self, client, events):
        response = await client.post("/api/pickers/", json={"full_name": "Ion", "rate_per_kg": 2})
        await client.patch(f"/api/pickers/{response.json()['id']}/status", json={"is_active": False})
        assert events == [f"invalidate:{TENANT_A}"] * 2
