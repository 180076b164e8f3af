"""Pydantic schemas for AgriculturalActivity CRUD operations."""

from datetime import date

from pydantic import BaseModel, Field

from zmeurel.models.activity import ActivityType
from zmeurel.schemas.common import RecordOut, RecordUpdate
from zmeurel.services.pause_status import PauseState


class ActivityCreate(BaseModel):
    application_date: date
    parcel_id: str | None = None
    activity_type: ActivityType
    product_used: str | None = Field(None, max_length=255)
    dose: str | None = Field(None, max_length=100)
    waiting_period_days: int = Field(0, ge=0)
    operator: str | None = Field(None, max_length=255)
    notes: str | None = None

    model_config = {"use_enum_values": True}


class ActivityUpdate(RecordUpdate):
    not_nullable = ("application_date", "activity_type", "waiting_period_days")

    application_date: date | None = None
    parcel_id: str | None = None
    activity_type: ActivityType | None = None
    product_used: str | None = Field(None, max_length=255)
    dose: str | None = Field(None, max_length=100)
    waiting_period_days: int | None = Field(None, ge=0)
    operator: str | None = Field(None, max_length=255)
    notes: str | None = None

    model_config = {"use_enum_values": True}


class ActivityOut(RecordOut):
    application_date: date
    parcel_id: str | None
    activity_type: str
    product_used: str | None
    dose: str | None
    waiting_period_days: int
    operator: str | None
    notes: str | None

    # Derived from application_date + waiting_period_days and today's date
    earliest_harvest_date: date
    pause_status: PauseState


class PauseStatusOut(BaseModel):
    application_date: date
    waiting_period_days: int
    today: date
    earliest_harvest_date: date
    status: PauseState
