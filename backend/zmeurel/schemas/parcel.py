"""Pydantic schemas for Parcel CRUD operations."""

from datetime import datetime

from pydantic import BaseModel, Field

from zmeurel.models.parcel import ParcelStatus
from zmeurel.schemas.common import RecordOut, RecordUpdate


class ParcelCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    area_m2: float = Field(..., gt=0)
    variety: str | None = Field(None, max_length=100)
    planting_year: int = Field(..., ge=1900, le=2100)
    plant_count: int | None = Field(None, ge=0)
    status: ParcelStatus = ParcelStatus.ACTIVE
    gps_lat: float | None = Field(None, ge=-90, le=90)
    gps_lng: float | None = Field(None, ge=-180, le=180)
    notes: str | None = None

    model_config = {"use_enum_values": True, "validate_default": True}


class ParcelUpdate(RecordUpdate):
    not_nullable = ("name", "area_m2", "planting_year", "status")

    name: str | None = Field(None, min_length=1, max_length=255)
    area_m2: float | None = Field(None, gt=0)
    variety: str | None = None
    planting_year: int | None = Field(None, ge=1900, le=2100)
    plant_count: int | None = Field(None, ge=0)
    status: ParcelStatus | None = None
    gps_lat: float | None = Field(None, ge=-90, le=90)
    gps_lng: float | None = Field(None, ge=-180, le=180)
    notes: str | None = None

    model_config = {"use_enum_values": True}


class ParcelOut(RecordOut):
    name: str
    area_m2: float
    variety: str | None
    planting_year: int
    plant_count: int | None
    status: str
    gps_lat: float | None
    gps_lng: float | None
    notes: str | None
    updated_at: datetime | None = None


class ParcelTotalsOut(BaseModel):
    count: int
    total_area_m2: float
