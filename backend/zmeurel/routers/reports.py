"""Report router.

Endpoints:
    GET /api/reports/summary    Farm totals for the dashboard (cached per tenant)
"""

from fastapi import APIRouter, Depends

from zmeurel.services.record_store import RecordStore, get_record_store
from zmeurel.services.reports import farm_summary
from zmeurel.tenancy import get_current_tenant_id

router = APIRouter()


@router.get("/summary")
async def get_farm_summary(
    store: RecordStore = Depends(get_record_store),
    tenant_id: str = Depends(get_current_tenant_id),
):
    return await farm_summary(store, tenant_id=tenant_id)
