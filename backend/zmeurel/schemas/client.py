"""Pydantic schemas for Client CRUD operations."""

from pydantic import BaseModel, Field

from zmeurel.schemas.common import RecordOut, RecordUpdate


class ClientCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    phone: str | None = Field(None, max_length=50)
    email: str | None = Field(None, max_length=255)
    address: str | None = None
    negotiated_price_per_kg: float | None = Field(None, ge=0)
    notes: str | None = None


class ClientUpdate(RecordUpdate):
    not_nullable = ("name",)

    name: str | None = Field(None, min_length=1, max_length=255)
    phone: str | None = Field(None, max_length=50)
    email: str | None = Field(None, max_length=255)
    address: str | None = None
    negotiated_price_per_kg: float | None = Field(None, ge=0)
    notes: str | None = None


class ClientOut(RecordOut):
    name: str
    phone: str | None
    email: str | None
    address: str | None
    negotiated_price_per_kg: float | None
    notes: str | None
