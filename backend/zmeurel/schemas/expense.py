"""Pydantic schemas for Expense CRUD operations."""

from datetime import date

from pydantic import BaseModel, Field

from zmeurel.models.expense import ExpenseCategory
from zmeurel.schemas.common import RecordOut, RecordUpdate


class ExpenseCreate(BaseModel):
    expense_date: date
    category: ExpenseCategory
    description: str | None = None
    amount: float = Field(..., gt=0)
    supplier: str | None = Field(None, max_length=255)
    document_url: str | None = Field(None, max_length=500)

    model_config = {"use_enum_values": True}


class ExpenseUpdate(RecordUpdate):
    not_nullable = ("expense_date", "category", "amount")

    expense_date: date | None = None
    category: ExpenseCategory | None = None
    description: str | None = None
    amount: float | None = Field(None, gt=0)
    supplier: str | None = Field(None, max_length=255)
    document_url: str | None = Field(None, max_length=500)

    model_config = {"use_enum_values": True}


class ExpenseOut(RecordOut):
    expense_date: date
    category: str
    description: str | None
    amount: float
    supplier: str | None
    document_url: str | None
