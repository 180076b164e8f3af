"""Picker: a seasonal or permanent worker (prefix C).

``rate_per_kg`` is the piece rate used to value harvests; 0 means the
picker is on a fixed salary and harvests carry no labour cost.
"""

import enum
import uuid
from datetime import date, datetime

from sqlalchemy import Boolean, Date, DateTime, Float, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from zmeurel.database import TenantBase


class EmploymentType(str, enum.Enum):
    SEASONAL = "seasonal"
    PERMANENT = "permanent"
    DAY_LABOURER = "day_labourer"
    CONTRACTOR = "contractor"


class Picker(TenantBase):
    __tablename__ = "pickers"
    __table_args__ = (
        UniqueConstraint("tenant_id", "display_id", name="uq_pickers_tenant_display_id"),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    tenant_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    display_id: Mapped[str] = mapped_column(String(20), nullable=False)

    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(50))
    employment_type: Mapped[str] = mapped_column(
        String(30), default=EmploymentType.SEASONAL.value
    )
    rate_per_kg: Mapped[float] = mapped_column(Float, default=0)
    hire_date: Mapped[date | None] = mapped_column(Date)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
