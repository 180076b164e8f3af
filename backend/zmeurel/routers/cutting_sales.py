"""Cutting (planting material) sale router.

Endpoints (besides the standard record routes):
    GET /api/cutting-sales/total     Total value of all cutting sales
"""

from fastapi import APIRouter, Depends

from zmeurel.entities import EntityType
from zmeurel.routers.records import add_record_routes
from zmeurel.schemas.cutting_sale import CuttingSaleCreate, CuttingSaleOut, CuttingSaleUpdate
from zmeurel.services.record_store import RecordStore, get_record_store
from zmeurel.services.reports import cutting_sales_total
from zmeurel.services.valuation import cutting_sale_value
from zmeurel.tenancy import get_current_tenant_id

router = APIRouter()


async def serialize_cutting_sales(
    store: RecordStore, tenant_id: str, sales: list[dict]
) -> list[CuttingSaleOut]:
    return [
        CuttingSaleOut(**s, total_value=cutting_sale_value(s["quantity"], s["unit_price"]))
        for s in sales
    ]


@router.get("/total")
async def get_cutting_sales_total(
    store: RecordStore = Depends(get_record_store),
    tenant_id: str = Depends(get_current_tenant_id),
):
    return {"total": await cutting_sales_total(store, tenant_id)}


add_record_routes(
    router, EntityType.CUTTING_SALE, CuttingSaleCreate, CuttingSaleUpdate, CuttingSaleOut,
    serialize=serialize_cutting_sales,
)
