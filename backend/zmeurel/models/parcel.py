"""Parcel: a land plot of the farm (prefix P)."""

import enum
import uuid
from datetime import datetime

from sqlalchemy import DateTime, Float, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from zmeurel.database import TenantBase


class ParcelStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    IN_PREPARATION = "in_preparation"


class Parcel(TenantBase):
    __tablename__ = "parcels"
    __table_args__ = (
        UniqueConstraint("tenant_id", "display_id", name="uq_parcels_tenant_display_id"),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    tenant_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    display_id: Mapped[str] = mapped_column(String(20), nullable=False)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    area_m2: Mapped[float] = mapped_column(Float, nullable=False)
    variety: Mapped[str | None] = mapped_column(String(100))
    planting_year: Mapped[int] = mapped_column(Integer, nullable=False)
    plant_count: Mapped[int | None] = mapped_column(Integer)
    status: Mapped[str] = mapped_column(String(30), default=ParcelStatus.ACTIVE.value)

    # GPS centroid
    gps_lat: Mapped[float | None] = mapped_column(Float)
    gps_lng: Mapped[float | None] = mapped_column(Float)

    notes: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )
