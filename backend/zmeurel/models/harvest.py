"""Harvest: one picker's crates from one parcel on one day (prefix R).

Weights are not stored; they follow from ``crate_count`` and ``tare_kg``
(see services/valuation.py).
"""

import uuid
from datetime import date, datetime

from sqlalchemy import Date, DateTime, Float, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from zmeurel.database import TenantBase


class Harvest(TenantBase):
    __tablename__ = "harvests"
    __table_args__ = (
        UniqueConstraint("tenant_id", "display_id", name="uq_harvests_tenant_display_id"),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    tenant_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    display_id: Mapped[str] = mapped_column(String(20), nullable=False)

    harvest_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)

    # References are not enforced: deleting a picker or parcel leaves them dangling
    picker_id: Mapped[str | None] = mapped_column(String(36), index=True)
    parcel_id: Mapped[str | None] = mapped_column(String(36), index=True)

    crate_count: Mapped[int] = mapped_column(Integer, nullable=False)
    tare_kg: Mapped[float] = mapped_column(Float, default=0)

    notes: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
