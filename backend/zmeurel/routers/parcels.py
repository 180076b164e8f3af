"""Parcel router.

Endpoints (besides the standard record routes):
    GET /api/parcels/totals     Parcel count and total area
"""

from fastapi import APIRouter, Depends

from zmeurel.entities import EntityType
from zmeurel.routers.records import add_record_routes
from zmeurel.schemas.parcel import ParcelCreate, ParcelOut, ParcelTotalsOut, ParcelUpdate
from zmeurel.services.record_store import RecordStore, get_record_store
from zmeurel.services.reports import parcel_totals
from zmeurel.tenancy import get_current_tenant_id

router = APIRouter()


@router.get("/totals", response_model=ParcelTotalsOut)
async def get_parcel_totals(
    store: RecordStore = Depends(get_record_store),
    tenant_id: str = Depends(get_current_tenant_id),
):
    return await parcel_totals(store, tenant_id)


add_record_routes(router, EntityType.PARCEL, ParcelCreate, ParcelUpdate, ParcelOut)
