"""Pydantic schemas for FruitSale CRUD operations."""

from datetime import date

from pydantic import BaseModel, Field

from zmeurel.models.fruit_sale import PaymentStatus
from zmeurel.schemas.common import RecordOut, RecordUpdate


class FruitSaleCreate(BaseModel):
    sale_date: date
    client_id: str | None = None
    quantity_kg: float = Field(..., gt=0)
    # Omit to use the client's negotiated price
    price_per_kg: float | None = Field(None, ge=0)
    payment_status: PaymentStatus = PaymentStatus.PAID
    crate_notes: str | None = None

    model_config = {"use_enum_values": True, "validate_default": True}


class FruitSaleUpdate(RecordUpdate):
    not_nullable = ("sale_date", "quantity_kg", "price_per_kg", "payment_status")

    sale_date: date | None = None
    client_id: str | None = None
    quantity_kg: float | None = Field(None, gt=0)
    price_per_kg: float | None = Field(None, ge=0)
    payment_status: PaymentStatus | None = None
    crate_notes: str | None = None

    model_config = {"use_enum_values": True}


class FruitSaleOut(RecordOut):
    sale_date: date
    client_id: str | None
    quantity_kg: float
    price_per_kg: float
    payment_status: str
    crate_notes: str | None
    total_value: float
