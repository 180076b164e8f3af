"""Pydantic schemas for Harvest CRUD operations."""

from datetime import date

from pydantic import BaseModel, Field

from zmeurel.schemas.common import RecordOut, RecordUpdate


class HarvestCreate(BaseModel):
    harvest_date: date
    picker_id: str | None = None
    parcel_id: str | None = None
    crate_count: int = Field(..., ge=1)
    tare_kg: float = Field(0, ge=0)
    notes: str | None = None


class HarvestUpdate(RecordUpdate):
    not_nullable = ("harvest_date", "crate_count", "tare_kg")

    harvest_date: date | None = None
    picker_id: str | None = None
    parcel_id: str | None = None
    crate_count: int | None = Field(None, ge=1)
    tare_kg: float | None = Field(None, ge=0)
    notes: str | None = None


class HarvestOut(RecordOut):
    harvest_date: date
    picker_id: str | None
    parcel_id: str | None
    crate_count: int
    tare_kg: float
    notes: str | None

    # Derived, see services/valuation.py
    gross_kg: float
    net_kg: float
    labour_cost: float
