"""Investment (capital expenditure) router.

Endpoints (besides the standard record routes):
    GET /api/investments/by-period     Investments dated within [start, end]
    GET /api/investments/totals        Amount per category
"""

from datetime import date

from fastapi import APIRouter, Depends

from zmeurel.entities import EntityType
from zmeurel.models.investment import InvestmentCategory
from zmeurel.routers.records import add_record_routes
from zmeurel.schemas.investment import InvestmentCreate, InvestmentOut, InvestmentUpdate
from zmeurel.services.crud import list_by_period
from zmeurel.services.record_store import Filter, RecordStore, get_record_store
from zmeurel.services.reports import category_totals
from zmeurel.tenancy import get_current_tenant_id

router = APIRouter()


@router.get("/by-period", response_model=list[InvestmentOut])
async def list_investments_by_period(
    start: date,
    end: date,
    category: InvestmentCategory | None = None,
    store: RecordStore = Depends(get_record_store),
    tenant_id: str = Depends(get_current_tenant_id),
):
    extra = [Filter("category", "eq", category.value)] if category else None
    investments = await list_by_period(
        store, tenant_id, EntityType.INVESTMENT, start, end, extra_filters=extra
    )
    return [InvestmentOut.model_validate(i) for i in investments]


@router.get("/totals", response_model=dict[str, float])
async def get_investment_totals(
    category: InvestmentCategory | None = None,
    store: RecordStore = Depends(get_record_store),
    tenant_id: str = Depends(get_current_tenant_id),
):
    return await category_totals(
        store, tenant_id, EntityType.INVESTMENT, category.value if category else None
    )


add_record_routes(router, EntityType.INVESTMENT, InvestmentCreate, InvestmentUpdate, InvestmentOut)
