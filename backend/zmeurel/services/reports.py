"""Per-tenant totals for the dashboard.

Each aggregate reads the tenant's rows through the record store and is
cached under the "reports" prefix.  Mutating routes call
``schedule_report_invalidation``, which drops the tenant's cached figures
once the change is committed, so a concurrent read cannot cache the
pre-commit state again.
"""

from __future__ import annotations

from collections import defaultdict
from functools import partial

from zmeurel.entities import EntityType
from zmeurel.services.crud import list_records
from zmeurel.services.record_store import Filter, RecordStore
from zmeurel.services.valuation import (
    cutting_sale_value,
    fruit_sale_value,
    harvest_weights,
)
from zmeurel.utils.cache import cached, invalidate_cache


async def invalidate_reports(tenant_id: str) -> None:
    await invalidate_cache("reports:*", tenant_id=tenant_id)


async def schedule_report_invalidation(store: RecordStore, tenant_id: str) -> None:
    await store.after_commit(partial(invalidate_reports, tenant_id))


async def parcel_totals(store: RecordStore, tenant_id: str) -> dict:
    parcels = await list_records(store, tenant_id, EntityType.PARCEL)
    return {
        "count": len(parcels),
        "total_area_m2": round(sum(p.get("area_m2") or 0 for p in parcels), 2),
    }


async def category_totals(
    store: RecordStore,
    tenant_id: str,
    entity: EntityType,
    category: str | None = None,
) -> dict[str, float]:
    """Sum of ``amount`` per category for investments or expenses."""
    filters = [Filter("category", "eq", category)] if category else None
    rows = await list_records(store, tenant_id, entity, filters=filters)
    totals: dict[str, float] = defaultdict(float)
    for row in rows:
        totals[row["category"]] += row.get("amount") or 0
    return {k: round(v, 2) for k, v in sorted(totals.items())}


async def cutting_sales_total(store: RecordStore, tenant_id: str) -> float:
    sales = await list_records(store, tenant_id, EntityType.CUTTING_SALE)
    return round(sum(cutting_sale_value(s["quantity"], s["unit_price"]) for s in sales), 2)


async def harvest_totals(store: RecordStore, tenant_id: str) -> dict:
    """Harvested kilograms and piece-rate labour cost.

    Harvests whose picker no longer exists are still counted by weight,
    with no labour cost.
    """
    harvests = await list_records(store, tenant_id, EntityType.HARVEST)
    pickers = await list_records(store, tenant_id, EntityType.PICKER)
    rates = {p["id"]: p.get("rate_per_kg") or 0 for p in pickers}

    gross = net = labour = 0.0
    for h in harvests:
        weights = harvest_weights(
            h["crate_count"], h.get("tare_kg"), rates.get(h.get("picker_id"))
        )
        gross += weights.gross_kg
        net += weights.net_kg
        labour += weights.labour_cost

    return {
        "count": len(harvests),
        "gross_kg": round(gross, 3),
        "net_kg": round(net, 3),
        "labour_cost": round(labour, 2),
    }


async def fruit_sales_by_payment_status(store: RecordStore, tenant_id: str) -> dict:
    sales = await list_records(store, tenant_id, EntityType.FRUIT_SALE)
    totals: dict[str, dict] = {}
    for s in sales:
        bucket = totals.setdefault(s["payment_status"], {"quantity_kg": 0.0, "value": 0.0})
        bucket["quantity_kg"] = round(bucket["quantity_kg"] + s["quantity_kg"], 3)
        bucket["value"] = round(
            bucket["value"] + fruit_sale_value(s["quantity_kg"], s["price_per_kg"]), 2
        )
    return totals


@cached(prefix="reports")
async def farm_summary(store: RecordStore, *, tenant_id: str) -> dict:
    """Everything the dashboard header shows, in one cached document."""
    investments = await category_totals(store, tenant_id, EntityType.INVESTMENT)
    expenses = await category_totals(store, tenant_id, EntityType.EXPENSE)
    return {
        "tenant_id": tenant_id,
        "parcels": await parcel_totals(store, tenant_id),
        "harvests": await harvest_totals(store, tenant_id),
        "fruit_sales": await fruit_sales_by_payment_status(store, tenant_id),
        "cutting_sales_total": await cutting_sales_total(store, tenant_id),
        "investments": {
            "by_category": investments,
            "total": round(sum(investments.values()), 2),
        },
        "expenses": {
            "by_category": expenses,
            "total": round(sum(expenses.values()), 2),
        },
    }
