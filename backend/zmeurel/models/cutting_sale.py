"""CuttingSale: plant cuttings sold to a client (prefix VB)."""

import uuid
from datetime import date, datetime

from sqlalchemy import Date, DateTime, Float, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from zmeurel.database import TenantBase


class CuttingSale(TenantBase):
    __tablename__ = "cutting_sales"
    __table_args__ = (
        UniqueConstraint("tenant_id", "display_id", name="uq_cutting_sales_tenant_display_id"),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    tenant_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    display_id: Mapped[str] = mapped_column(String(20), nullable=False)

    sale_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    client_id: Mapped[str | None] = mapped_column(String(36), index=True)
    source_parcel_id: Mapped[str | None] = mapped_column(String(36), index=True)

    variety: Mapped[str] = mapped_column(String(100), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    unit_price: Mapped[float] = mapped_column(Float, nullable=False)

    notes: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
