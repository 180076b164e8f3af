"""Tests for generic record CRUD, including display-ID collision retries."""

import logging
from datetime import date

import pytest

from zmeurel.config import settings
from zmeurel.entities import EntityType
from zmeurel.middleware.exceptions import (
    BusinessLogicError,
    DisplayIdConflictError,
    RecordNotFoundError,
    StoreUnavailableError,
)
from zmeurel.services.crud import (
    create_record,
    delete_record,
    get_record,
    list_by_month,
    list_by_period,
    list_records,
    month_range,
    update_record,
)

TENANT_A = "farm-a"
TENANT_B = "farm-b"

PARCEL = {"name": "North slope", "area_m2": 2500.0, "planting_year": 2021, "status": "active"}


def _harvest(day: date, crates: int = 10) -> dict:
    return {"harvest_date": day, "crate_count": crates, "tare_kg": 0}


@pytest.mark.unit
@pytest.mark.asyncio
class TestCreateRecord:

    async def test_assigns_display_id_and_tenant(self, store):
        record = await create_record(store, TENANT_A, EntityType.PARCEL, PARCEL)
        assert record["display_id"] == "P001"
        assert record["tenant_id"] == TENANT_A
        assert record["id"]

    async def test_sequential_creates(self, store):
        ids = [
            (await create_record(store, TENANT_A, EntityType.PARCEL, PARCEL))["display_id"]
            for _ in range(3)
        ]
        assert ids == ["P001", "P002", "P003"]

    async def test_caller_cannot_choose_immutable_fields(self, store):
        record = await create_record(store, TENANT_A, EntityType.PARCEL, {
            **PARCEL, "display_id": "P999", "tenant_id": TENANT_B, "id": "fixed",
        })
        assert record["display_id"] == "P001"
        assert record["tenant_id"] == TENANT_A
        assert record["id"] != "fixed"

    async def test_continues_after_gap(self, store):
        store.seed(EntityType.PARCEL, TENANT_A, "P001")
        store.seed(EntityType.PARCEL, TENANT_A, "P003")
        record = await create_record(store, TENANT_A, EntityType.PARCEL, PARCEL)
        assert record["display_id"] == "P004"

    async def test_retries_when_display_id_taken_concurrently(self, store, caplog):
        store.steal_display_ids = ["P001"]

        with caplog.at_level(logging.WARNING, logger="zmeurel.services.crud"):
            record = await create_record(store, TENANT_A, EntityType.PARCEL, PARCEL)

        assert record["display_id"] == "P002"
        assert store.insert_attempts == 2
        assert "taken concurrently" in caplog.text

    async def test_gives_up_after_max_attempts(self, store, monkeypatch):
        monkeypatch.setattr(settings, "display_id_max_attempts", 3)
        store.steal_display_ids = ["P001", "P002", "P003"]

        with pytest.raises(DisplayIdConflictError) as exc_info:
            await create_record(store, TENANT_A, EntityType.PARCEL, PARCEL)

        assert exc_info.value.retryable
        assert exc_info.value.display_id == "P003"
        assert store.insert_attempts == 3

    async def test_store_failure_is_not_masked(self, store):
        store.unavailable = True
        with pytest.raises(StoreUnavailableError):
            await create_record(store, TENANT_A, EntityType.PARCEL, PARCEL)
        assert store.insert_attempts == 0


@pytest.mark.unit
@pytest.mark.asyncio
class TestReadUpdateDelete:

    async def test_get_is_tenant_scoped(self, store):
        record = await create_record(store, TENANT_A, EntityType.PARCEL, PARCEL)

        assert (await get_record(store, TENANT_A, EntityType.PARCEL, record["id"]))["name"] == "North slope"
        with pytest.raises(RecordNotFoundError):
            await get_record(store, TENANT_B, EntityType.PARCEL, record["id"])

    async def test_update_ignores_immutable_fields(self, store):
        record = await create_record(store, TENANT_A, EntityType.PARCEL, PARCEL)

        updated = await update_record(store, TENANT_A, EntityType.PARCEL, record["id"], {
            "name": "South slope", "display_id": "P999", "tenant_id": TENANT_B,
        })

        assert updated["name"] == "South slope"
        assert updated["display_id"] == "P001"
        assert updated["tenant_id"] == TENANT_A

    async def test_empty_update_returns_current_record(self, store):
        record = await create_record(store, TENANT_A, EntityType.PARCEL, PARCEL)
        assert (await update_record(store, TENANT_A, EntityType.PARCEL, record["id"], {}))["id"] == record["id"]

    async def test_update_unknown_id(self, store):
        with pytest.raises(RecordNotFoundError):
            await update_record(store, TENANT_A, EntityType.PARCEL, "missing", {"name": "x"})

    async def test_delete_unknown_id(self, store):
        with pytest.raises(RecordNotFoundError):
            await delete_record(store, TENANT_A, EntityType.PARCEL, "missing")

    async def test_delete_leaves_gap(self, store):
        first = await create_record(store, TENANT_A, EntityType.PARCEL, PARCEL)
        await create_record(store, TENANT_A, EntityType.PARCEL, PARCEL)
        await delete_record(store, TENANT_A, EntityType.PARCEL, first["id"])

        third = await create_record(store, TENANT_A, EntityType.PARCEL, PARCEL)
        assert third["display_id"] == "P003"

    async def test_list_default_order_is_newest_first_for_dated_records(self, store):
        await create_record(store, TENANT_A, EntityType.HARVEST, _harvest(date(2026, 6, 1)))
        await create_record(store, TENANT_A, EntityType.HARVEST, _harvest(date(2026, 6, 3)))
        await create_record(store, TENANT_A, EntityType.HARVEST, _harvest(date(2026, 6, 2)))

        harvests = await list_records(store, TENANT_A, EntityType.HARVEST)
        assert [h["display_id"] for h in harvests] == ["R002", "R003", "R001"]

    async def test_list_is_tenant_scoped(self, store):
        await create_record(store, TENANT_A, EntityType.PARCEL, PARCEL)
        assert await list_records(store, TENANT_B, EntityType.PARCEL) == []


@pytest.mark.unit
@pytest.mark.asyncio
class TestDateWindows:

    async def test_month_range(self):
        assert month_range(2028, 2) == (date(2028, 2, 1), date(2028, 2, 29))
        assert month_range(2026, 12) == (date(2026, 12, 1), date(2026, 12, 31))

    async def test_month_range_invalid(self):
        with pytest.raises(BusinessLogicError):
            month_range(2026, 13)

    async def test_list_by_month_is_inclusive(self, store):
        for day in (date(2026, 5, 31), date(2026, 6, 1), date(2026, 6, 30), date(2026, 7, 1)):
            await create_record(store, TENANT_A, EntityType.HARVEST, _harvest(day))

        june = await list_by_month(store, TENANT_A, EntityType.HARVEST, 2026, 6)
        assert sorted(h["harvest_date"] for h in june) == [date(2026, 6, 1), date(2026, 6, 30)]

    async def test_list_by_period_rejects_reversed_range(self, store):
        with pytest.raises(BusinessLogicError):
            await list_by_period(store, TENANT_A, EntityType.EXPENSE, date(2026, 2, 1), date(2026, 1, 1))

    async def test_list_by_period_needs_a_date_column(self, store):
        with pytest.raises(BusinessLogicError) as exc_info:
            await list_by_period(store, TENANT_A, EntityType.PARCEL, date(2026, 1, 1), date(2026, 2, 1))
        assert exc_info.value.error_code == "NO_DATE_COLUMN"
