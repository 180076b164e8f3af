"""Expense (operational cost) router.

Endpoints (besides the standard record routes):
    GET /api/expenses/by-period     Expenses dated within [start, end]
    GET /api/expenses/totals        Amount per category
"""

from datetime import date

from fastapi import APIRouter, Depends

from zmeurel.entities import EntityType
from zmeurel.models.expense import ExpenseCategory
from zmeurel.routers.records import add_record_routes
from zmeurel.schemas.expense import ExpenseCreate, ExpenseOut, ExpenseUpdate
from zmeurel.services.crud import list_by_period
from zmeurel.services.record_store import Filter, RecordStore, get_record_store
from zmeurel.services.reports import category_totals
from zmeurel.tenancy import get_current_tenant_id

router = APIRouter()


@router.get("/by-period", response_model=list[ExpenseOut])
async def list_expenses_by_period(
    start: date,
    end: date,
    category: ExpenseCategory | None = None,
    store: RecordStore = Depends(get_record_store),
    tenant_id: str = Depends(get_current_tenant_id),
):
    extra = [Filter("category", "eq", category.value)] if category else None
    expenses = await list_by_period(
        store, tenant_id, EntityType.EXPENSE, start, end, extra_filters=extra
    )
    return [ExpenseOut.model_validate(e) for e in expenses]


@router.get("/totals", response_model=dict[str, float])
async def get_expense_totals(
    category: ExpenseCategory | None = None,
    store: RecordStore = Depends(get_record_store),
    tenant_id: str = Depends(get_current_tenant_id),
):
    return await category_totals(
        store, tenant_id, EntityType.EXPENSE, category.value if category else None
    )


add_record_routes(router, EntityType.EXPENSE, ExpenseCreate, ExpenseUpdate, ExpenseOut)
