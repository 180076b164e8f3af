"""Pydantic schemas for CuttingSale CRUD operations."""

from datetime import date

from pydantic import BaseModel, Field

from zmeurel.schemas.common import RecordOut, RecordUpdate


class CuttingSaleCreate(BaseModel):
    sale_date: date
    client_id: str | None = None
    source_parcel_id: str | None = None
    variety: str = Field(..., min_length=1, max_length=100)
    quantity: int = Field(..., ge=1)
    unit_price: float = Field(..., ge=0)
    notes: str | None = None


class CuttingSaleUpdate(RecordUpdate):
    not_nullable = ("sale_date", "variety", "quantity", "unit_price")

    sale_date: date | None = None
    client_id: str | None = None
    source_parcel_id: str | None = None
    variety: str | None = Field(None, min_length=1, max_length=100)
    quantity: int | None = Field(None, ge=1)
    unit_price: float | None = Field(None, ge=0)
    notes: str | None = None


class CuttingSaleOut(RecordOut):
    sale_date: date
    client_id: str | None
    source_parcel_id: str | None
    variety: str
    quantity: int
    unit_price: float
    notes: str | None
    total_value: float
