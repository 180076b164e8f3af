"""Fruit sale router.

A sale created without ``price_per_kg`` takes the client's negotiated
price; with neither, the request is rejected.
"""

from fastapi import APIRouter

from zmeurel.entities import EntityType
from zmeurel.middleware.exceptions import BusinessLogicError
from zmeurel.routers.records import add_record_routes
from zmeurel.schemas.fruit_sale import FruitSaleCreate, FruitSaleOut, FruitSaleUpdate
from zmeurel.services.crud import get_record
from zmeurel.services.record_store import RecordStore
from zmeurel.services.valuation import fruit_sale_value, suggested_price

router = APIRouter()


async def resolve_price(store: RecordStore, tenant_id: str, fields: dict) -> dict:
    if fields.get("price_per_kg") is not None:
        return fields

    client = None
    if fields.get("client_id"):
        client = await get_record(store, tenant_id, EntityType.CLIENT, fields["client_id"])
    price = suggested_price(client)
    if price is None:
        raise BusinessLogicError(
            "price_per_kg is required when the client has no negotiated price",
            error_code="PRICE_REQUIRED",
        )
    return {**fields, "price_per_kg": price}


async def serialize_fruit_sales(
    store: RecordStore, tenant_id: str, sales: list[dict]
) -> list[FruitSaleOut]:
    return [
        FruitSaleOut(**s, total_value=fruit_sale_value(s["quantity_kg"], s["price_per_kg"]))
        for s in sales
    ]


add_record_routes(
    router, EntityType.FRUIT_SALE, FruitSaleCreate, FruitSaleUpdate, FruitSaleOut,
    serialize=serialize_fruit_sales,
    before_create=resolve_price,
)
