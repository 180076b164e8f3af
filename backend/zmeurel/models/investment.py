"""Investment: capital expenditure, optionally tied to a parcel (prefix INV)."""

import enum
import uuid
from datetime import date, datetime

from sqlalchemy import Date, DateTime, Float, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from zmeurel.database import TenantBase


class InvestmentCategory(str, enum.Enum):
    CUTTINGS = "cuttings"
    TRELLIS = "trellis_and_wire"
    IRRIGATION_SYSTEM = "irrigation_system"
    TRANSPORT = "transport_and_logistics"
    PLANTING_LABOUR = "planting_labour"
    OTHER = "other"


class Investment(TenantBase):
    __tablename__ = "investments"
    __table_args__ = (
        UniqueConstraint("tenant_id", "display_id", name="uq_investments_tenant_display_id"),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    tenant_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    display_id: Mapped[str] = mapped_column(String(20), nullable=False)

    investment_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    parcel_id: Mapped[str | None] = mapped_column(String(36), index=True)

    category: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    supplier: Mapped[str | None] = mapped_column(String(255))
    description: Mapped[str | None] = mapped_column(Text)
    amount: Mapped[float] = mapped_column(Float, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
