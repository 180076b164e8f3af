"""FruitSale: fresh fruit sold to a client (prefix V)."""

import enum
import uuid
from datetime import date, datetime

from sqlalchemy import Date, DateTime, Float, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from zmeurel.database import TenantBase


class PaymentStatus(str, enum.Enum):
    PAID = "paid"
    OVERDUE = "overdue"
    ADVANCE = "advance"


class FruitSale(TenantBase):
    __tablename__ = "fruit_sales"
    __table_args__ = (
        UniqueConstraint("tenant_id", "display_id", name="uq_fruit_sales_tenant_display_id"),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    tenant_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    display_id: Mapped[str] = mapped_column(String(20), nullable=False)

    sale_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    client_id: Mapped[str | None] = mapped_column(String(36), index=True)

    quantity_kg: Mapped[float] = mapped_column(Float, nullable=False)
    price_per_kg: Mapped[float] = mapped_column(Float, nullable=False)
    payment_status: Mapped[str] = mapped_column(
        String(20), default=PaymentStatus.PAID.value
    )
    # Returnable crates handed over with the sale
    crate_notes: Mapped[str | None] = mapped_column(Text)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
