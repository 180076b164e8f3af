"""AgriculturalActivity: a treatment or field operation on a parcel (prefix AA).

``waiting_period_days`` is the pre-harvest interval of the product used;
the pause status derived from it is computed on read, never stored.
"""

import enum
import uuid
from datetime import date, datetime

from sqlalchemy import Date, DateTime, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from zmeurel.database import TenantBase


class ActivityType(str, enum.Enum):
    FUNGICIDE = "fungicide_treatment"
    INSECTICIDE = "insecticide_treatment"
    HERBICIDE = "herbicide_treatment"
    ORGANIC_FERTILISATION = "organic_fertilisation"
    CHEMICAL_FERTILISATION = "chemical_fertilisation"
    FOLIAR_FERTILISATION = "foliar_fertilisation"
    IRRIGATION = "irrigation"
    PRUNING = "pruning"
    OTHER = "other"


class AgriculturalActivity(TenantBase):
    __tablename__ = "agricultural_activities"
    __table_args__ = (
        UniqueConstraint(
            "tenant_id", "display_id", name="uq_agricultural_activities_tenant_display_id"
        ),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    tenant_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    display_id: Mapped[str] = mapped_column(String(20), nullable=False)

    application_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    parcel_id: Mapped[str | None] = mapped_column(String(36), index=True)

    activity_type: Mapped[str] = mapped_column(String(50), nullable=False)
    product_used: Mapped[str | None] = mapped_column(String(255))
    dose: Mapped[str | None] = mapped_column(String(100))
    waiting_period_days: Mapped[int] = mapped_column(Integer, default=0)
    operator: Mapped[str | None] = mapped_column(String(255))

    notes: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
