"""Picker router.

Endpoints (besides the standard record routes):
    GET   /api/pickers/active         Active pickers, by name
    PATCH /api/pickers/{id}/status    Activate / deactivate a picker
"""

from fastapi import APIRouter, Depends

from zmeurel.entities import EntityType
from zmeurel.routers.records import add_record_routes
from zmeurel.schemas.picker import PickerCreate, PickerOut, PickerStatusUpdate, PickerUpdate
from zmeurel.services.crud import list_records, update_record
from zmeurel.services.record_store import Filter, RecordStore, get_record_store
from zmeurel.services.reports import schedule_report_invalidation
from zmeurel.tenancy import get_current_tenant_id

router = APIRouter()


@router.get("/active", response_model=list[PickerOut])
async def list_active_pickers(
    store: RecordStore = Depends(get_record_store),
    tenant_id: str = Depends(get_current_tenant_id),
):
    """Pickers available for a new harvest entry."""
    pickers = await list_records(
        store, tenant_id, EntityType.PICKER,
        filters=[Filter("is_active", "eq", True)],
        order_by="full_name",
    )
    return [PickerOut.model_validate(p) for p in pickers]


@router.patch("/{picker_id}/status", response_model=PickerOut)
async def set_picker_status(
    picker_id: str,
    body: PickerStatusUpdate,
    store: RecordStore = Depends(get_record_store),
    tenant_id: str = Depends(get_current_tenant_id),
):
    picker = await update_record(
        store, tenant_id, EntityType.PICKER, picker_id, {"is_active": body.is_active}
    )
    await schedule_report_invalidation(store, tenant_id)
    return PickerOut.model_validate(picker)


add_record_routes(router, EntityType.PICKER, PickerCreate, PickerUpdate, PickerOut)
