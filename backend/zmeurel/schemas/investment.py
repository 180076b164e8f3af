"""Pydantic schemas for Investment CRUD operations."""

from datetime import date

from pydantic import BaseModel, Field

from zmeurel.models.investment import InvestmentCategory
from zmeurel.schemas.common import RecordOut, RecordUpdate


class InvestmentCreate(BaseModel):
    investment_date: date
    parcel_id: str | None = None
    category: InvestmentCategory
    supplier: str | None = Field(None, max_length=255)
    description: str | None = None
    amount: float = Field(..., gt=0)

    model_config = {"use_enum_values": True}


class InvestmentUpdate(RecordUpdate):
    not_nullable = ("investment_date", "category", "amount")

    investment_date: date | None = None
    parcel_id: str | None = None
    category: InvestmentCategory | None = None
    supplier: str | None = Field(None, max_length=255)
    description: str | None = None
    amount: float | None = Field(None, gt=0)

    model_config = {"use_enum_values": True}


class InvestmentOut(RecordOut):
    investment_date: date
    parcel_id: str | None
    category: str
    supplier: str | None
    description: str | None
    amount: float
