"""Harvest router.

Harvest responses carry gross/net weight and the picker's piece-rate
labour cost, computed on read from the crate count, tare and the picker's
current rate.
"""

from fastapi import APIRouter

from zmeurel.entities import EntityType
from zmeurel.routers.records import add_record_routes
from zmeurel.schemas.harvest import HarvestCreate, HarvestOut, HarvestUpdate
from zmeurel.services.crud import list_records
from zmeurel.services.record_store import RecordStore
from zmeurel.services.valuation import harvest_weights

router = APIRouter()


async def serialize_harvests(
    store: RecordStore, tenant_id: str, harvests: list[dict]
) -> list[HarvestOut]:
    rates = {}
    if any(h.get("picker_id") for h in harvests):
        pickers = await list_records(store, tenant_id, EntityType.PICKER)
        rates = {p["id"]: p.get("rate_per_kg") for p in pickers}

    out = []
    for h in harvests:
        weights = harvest_weights(h["crate_count"], h.get("tare_kg"), rates.get(h.get("picker_id")))
        out.append(HarvestOut(
            **h,
            gross_kg=weights.gross_kg,
            net_kg=weights.net_kg,
            labour_cost=weights.labour_cost,
        ))
    return out


add_record_routes(
    router, EntityType.HARVEST, HarvestCreate, HarvestUpdate, HarvestOut,
    serialize=serialize_harvests,
)
