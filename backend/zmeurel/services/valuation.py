"""Derived quantities shown alongside harvests and sales.

Nothing here is stored; values are recomputed from the record fields on
every read so edits to crates, tare or prices never leave stale totals.
"""

from __future__ import annotations

from dataclasses import dataclass

# One punnet crate of raspberries weighs 0.5 kg gross
KG_PER_CRATE = 0.5


@dataclass(frozen=True)
class HarvestWeights:
    gross_kg: float
    net_kg: float
    labour_cost: float


def harvest_weights(
    crate_count: int,
    tare_kg: float | None = 0,
    rate_per_kg: float | None = None,
) -> HarvestWeights:
    """Gross/net weight of a harvest and the picker's piece-rate pay.

    ``rate_per_kg`` of 0 or None (fixed-salary picker, or no picker) gives
    no labour cost.
    """
    gross = round(crate_count * KG_PER_CRATE, 3)
    net = round(gross - (tare_kg or 0), 3)
    labour = round(net * rate_per_kg, 2) if rate_per_kg else 0.0
    return HarvestWeights(gross_kg=gross, net_kg=net, labour_cost=labour)


def fruit_sale_value(quantity_kg: float, price_per_kg: float) -> float:
    return round(quantity_kg * price_per_kg, 2)


def cutting_sale_value(quantity: int, unit_price: float) -> float:
    return round(quantity * unit_price, 2)


def suggested_price(client: dict | None, standard_price: float | None = None) -> float | None:
    """Price to pre-fill on a new fruit sale: the client's negotiated price if any."""
    if client and client.get("negotiated_price_per_kg") is not None:
        return client["negotiated_price_per_kg"]
    return standard_price
