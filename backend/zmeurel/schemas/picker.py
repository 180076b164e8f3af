"""Pydantic schemas for Picker CRUD operations."""

from datetime import date

from pydantic import BaseModel, Field

from zmeurel.models.picker import EmploymentType
from zmeurel.schemas.common import RecordOut, RecordUpdate


class PickerCreate(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=255)
    phone: str | None = Field(None, max_length=50)
    employment_type: EmploymentType = EmploymentType.SEASONAL
    # 0 = fixed salary
    rate_per_kg: float = Field(0, ge=0)
    hire_date: date | None = None
    is_active: bool = True

    model_config = {"use_enum_values": True, "validate_default": True}


class PickerUpdate(RecordUpdate):
    not_nullable = ("full_name", "employment_type", "rate_per_kg", "is_active")

    full_name: str | None = Field(None, min_length=1, max_length=255)
    phone: str | None = Field(None, max_length=50)
    employment_type: EmploymentType | None = None
    rate_per_kg: float | None = Field(None, ge=0)
    hire_date: date | None = None
    is_active: bool | None = None

    model_config = {"use_enum_values": True}


class PickerStatusUpdate(BaseModel):
    is_active: bool


class PickerOut(RecordOut):
    full_name: str
    phone: str | None
    employment_type: str
    rate_per_kg: float
    hire_date: date | None
    is_active: bool
