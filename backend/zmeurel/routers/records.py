"""Shared CRUD routes for farm record routers.

Every entity router declares its own extra endpoints first and then calls
``add_record_routes`` so that fixed paths such as ``/next-id`` or
``/active`` are matched before ``/{record_id}``.

Routes added:
    GET    /                 List the tenant's records (entity default order)
    GET    /next-id          Preview the next display ID
    GET    /by-month         Records dated within one calendar month (dated entities)
    GET    /{record_id}      Get one record
    POST   /                 Create record (display ID assigned server-side)
    PATCH  /{record_id}      Partial update
    DELETE /{record_id}      Hard delete
"""

from typing import Awaitable, Callable

from fastapi import APIRouter, Depends, Query, Response
from pydantic import BaseModel

from zmeurel.entities import EntityType, get_entity_config
from zmeurel.schemas.common import NextDisplayIdOut
from zmeurel.services.crud import (
    create_record,
    delete_record,
    get_record,
    list_by_month,
    list_records,
    update_record,
)
from zmeurel.services.record_store import RecordStore, get_record_store
from zmeurel.services.reports import schedule_report_invalidation
from zmeurel.tenancy import get_current_tenant_id
from zmeurel.utils.numbering import generate_next_display_id

# (store, tenant_id, records, **serialize_params) -> response models
Serializer = Callable[..., Awaitable[list]]
# (store, tenant_id, fields) -> fields to insert
CreateHook = Callable[[RecordStore, str, dict], Awaitable[dict]]


def plain_serializer(out_schema: type[BaseModel]) -> Serializer:
    async def serialize(store: RecordStore, tenant_id: str, records: list[dict]) -> list:
        return [out_schema.model_validate(r) for r in records]
    return serialize


def no_serialize_params() -> dict:
    return {}


def add_record_routes(
    router: APIRouter,
    entity: EntityType,
    create_schema: type[BaseModel],
    update_schema: type[BaseModel],
    out_schema: type[BaseModel],
    serialize: Serializer | None = None,
    before_create: CreateHook | None = None,
    include_list: bool = True,
    serialize_params: Callable[..., dict] = no_serialize_params,
) -> APIRouter:
    """Attach the standard record routes for ``entity`` to ``router``.

    Pass ``include_list=False`` when the router declares its own ``GET /``.
    ``serialize_params`` is a dependency whose result is passed to
    ``serialize`` as keyword arguments on every route that returns records.
    """
    config = get_entity_config(entity)
    serialize = serialize or plain_serializer(out_schema)
    label = config.label

    if include_list:
        @router.get("/", response_model=list[out_schema], summary=f"List {config.table}")
        async def list_all(
            store: RecordStore = Depends(get_record_store),
            tenant_id: str = Depends(get_current_tenant_id),
            params: dict = Depends(serialize_params),
        ):
            records = await list_records(store, tenant_id, entity)
            return await serialize(store, tenant_id, records, **params)

    @router.get("/next-id", response_model=NextDisplayIdOut, summary=f"Next {label} display ID")
    async def next_id(
        store: RecordStore = Depends(get_record_store),
        tenant_id: str = Depends(get_current_tenant_id),
    ):
        """Preview only; the ID is generated again when the record is created."""
        display_id = await generate_next_display_id(store, tenant_id, entity)
        return NextDisplayIdOut(entity=entity.value, display_id=display_id)

    if config.date_column is not None:
        @router.get("/by-month", response_model=list[out_schema], summary=f"{label} records by month")
        async def by_month(
            year: int = Query(..., ge=1900, le=2100),
            month: int = Query(..., ge=1, le=12),
            store: RecordStore = Depends(get_record_store),
            tenant_id: str = Depends(get_current_tenant_id),
            params: dict = Depends(serialize_params),
        ):
            records = await list_by_month(store, tenant_id, entity, year, month)
            return await serialize(store, tenant_id, records, **params)

    @router.get("/{record_id}", response_model=out_schema, summary=f"Get {label}")
    async def get_one(
        record_id: str,
        store: RecordStore = Depends(get_record_store),
        tenant_id: str = Depends(get_current_tenant_id),
        params: dict = Depends(serialize_params),
    ):
        record = await get_record(store, tenant_id, entity, record_id)
        return (await serialize(store, tenant_id, [record], **params))[0]

    @router.post("/", response_model=out_schema, status_code=201, summary=f"Create {label}")
    async def create(
        body: create_schema,
        store: RecordStore = Depends(get_record_store),
        tenant_id: str = Depends(get_current_tenant_id),
        params: dict = Depends(serialize_params),
    ):
        fields = body.model_dump()
        if before_create is not None:
            fields = await before_create(store, tenant_id, fields)
        record = await create_record(store, tenant_id, entity, fields)
        await schedule_report_invalidation(store, tenant_id)
        return (await serialize(store, tenant_id, [record], **params))[0]

    @router.patch("/{record_id}", response_model=out_schema, summary=f"Update {label}")
    async def update(
        record_id: str,
        body: update_schema,
        store: RecordStore = Depends(get_record_store),
        tenant_id: str = Depends(get_current_tenant_id),
        params: dict = Depends(serialize_params),
    ):
        updates = body.model_dump(exclude_unset=True)
        record = await update_record(store, tenant_id, entity, record_id, updates)
        await schedule_report_invalidation(store, tenant_id)
        return (await serialize(store, tenant_id, [record], **params))[0]

    @router.delete("/{record_id}", status_code=204, summary=f"Delete {label}")
    async def delete(
        record_id: str,
        store: RecordStore = Depends(get_record_store),
        tenant_id: str = Depends(get_current_tenant_id),
    ):
        await delete_record(store, tenant_id, entity, record_id)
        await schedule_report_invalidation(store, tenant_id)
        return Response(status_code=204)

    return router
