"""Client router.

Endpoints (besides the standard record routes):
    GET /api/clients/with-negotiated-price    Clients with a negotiated price, by name
"""

from fastapi import APIRouter, Depends

from zmeurel.entities import EntityType
from zmeurel.routers.records import add_record_routes
from zmeurel.schemas.client import ClientCreate, ClientOut, ClientUpdate
from zmeurel.services.crud import list_records
from zmeurel.services.record_store import Filter, RecordStore, get_record_store
from zmeurel.tenancy import get_current_tenant_id

router = APIRouter()


@router.get("/with-negotiated-price", response_model=list[ClientOut])
async def list_clients_with_negotiated_price(
    store: RecordStore = Depends(get_record_store),
    tenant_id: str = Depends(get_current_tenant_id),
):
    clients = await list_records(
        store, tenant_id, EntityType.CLIENT,
        filters=[Filter("negotiated_price_per_kg", "not_null")],
        order_by="name",
    )
    return [ClientOut.model_validate(c) for c in clients]


add_record_routes(router, EntityType.CLIENT, ClientCreate, ClientUpdate, ClientOut)
