"""SqlRecordStore against a real PostgreSQL database.

Set ZMEUREL_TEST_DATABASE_URL (postgresql+asyncpg://...) to run; the
tables are created and dropped around each test.
"""

import os
from datetime import date

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from zmeurel.database import TenantBase
from zmeurel.entities import EntityType
from zmeurel.middleware.exceptions import DisplayIdConflictError, RecordNotFoundError
from zmeurel.services.crud import create_record, list_by_month
from zmeurel.services.record_store import Filter, SqlRecordStore

TEST_DATABASE_URL = os.getenv("ZMEUREL_TEST_DATABASE_URL")

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(not TEST_DATABASE_URL, reason="ZMEUREL_TEST_DATABASE_URL not set"),
]


@pytest_asyncio.fixture
async def sql_store():
    engine = create_async_engine(TEST_DATABASE_URL, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(TenantBase.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield SqlRecordStore(session)
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(TenantBase.metadata.drop_all)
    await engine.dispose()


def _parcel(display_id: str, tenant_id: str = "farm-a") -> dict:
    return {
        "tenant_id": tenant_id,
        "display_id": display_id,
        "name": f"Parcel {display_id}",
        "area_m2": 100.0,
        "planting_year": 2020,
    }


@pytest.mark.asyncio
class TestSqlRecordStore:

    async def test_insert_assigns_id_and_created_at(self, sql_store):
        record = await sql_store.insert(EntityType.PARCEL, _parcel("P001"))
        assert len(record["id"]) == 36
        assert record["created_at"] is not None

    async def test_duplicate_display_id_conflicts_without_breaking_session(self, sql_store):
        await sql_store.insert(EntityType.PARCEL, _parcel("P001"))

        with pytest.raises(DisplayIdConflictError):
            await sql_store.insert(EntityType.PARCEL, _parcel("P001"))

        # Savepoint rolled back; the session is still usable
        await sql_store.insert(EntityType.PARCEL, _parcel("P002"))
        assert sorted(await sql_store.list_display_ids(EntityType.PARCEL, "farm-a")) == ["P001", "P002"]

    async def test_same_display_id_in_other_tenant(self, sql_store):
        await sql_store.insert(EntityType.PARCEL, _parcel("P001", "farm-a"))
        await sql_store.insert(EntityType.PARCEL, _parcel("P001", "farm-b"))
        assert await sql_store.list_display_ids(EntityType.PARCEL, "farm-b") == ["P001"]

    async def test_update_and_delete_are_tenant_scoped(self, sql_store):
        record = await sql_store.insert(EntityType.PARCEL, _parcel("P001"))

        with pytest.raises(RecordNotFoundError):
            await sql_store.update(EntityType.PARCEL, "farm-b", record["id"], {"name": "x"})
        with pytest.raises(RecordNotFoundError):
            await sql_store.delete(EntityType.PARCEL, "farm-b", record["id"])

        updated = await sql_store.update(EntityType.PARCEL, "farm-a", record["id"], {"name": "Renamed"})
        assert updated["name"] == "Renamed"

        await sql_store.delete(EntityType.PARCEL, "farm-a", record["id"])
        assert await sql_store.list(EntityType.PARCEL, "farm-a") == []

    async def test_filters_and_ordering(self, sql_store):
        for n, price in ((1, 14.0), (2, None), (3, 12.0)):
            await sql_store.insert(EntityType.CLIENT, {
                "tenant_id": "farm-a",
                "display_id": f"CL00{n}",
                "name": f"Client {4 - n}",
                "negotiated_price_per_kg": price,
            })

        clients = await sql_store.list(
            EntityType.CLIENT, "farm-a",
            filters=[Filter("negotiated_price_per_kg", "not_null")],
            order_by="name",
        )
        assert [c["display_id"] for c in clients] == ["CL003", "CL001"]

    async def test_create_record_and_month_listing(self, sql_store):
        for day in (date(2026, 6, 30), date(2026, 7, 1), date(2026, 7, 15)):
            await create_record(sql_store, "farm-a", EntityType.HARVEST, {
                "harvest_date": day, "crate_count": 4, "tare_kg": 0,
            })

        july = await list_by_month(sql_store, "farm-a", EntityType.HARVEST, 2026, 7)
        assert [h["display_id"] for h in july] == ["R003", "R002"]
