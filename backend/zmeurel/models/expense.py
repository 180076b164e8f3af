"""Expense: operational expenditure (prefix CH)."""

import enum
import uuid
from datetime import date, datetime

from sqlalchemy import Date, DateTime, Float, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from zmeurel.database import TenantBase


class ExpenseCategory(str, enum.Enum):
    ELECTRICITY = "electricity"
    TRANSPORT_FUEL = "transport_fuel"
    PACKAGING = "packaging"
    LABELS = "labels"
    EQUIPMENT_REPAIRS = "equipment_repairs"
    TOOLS = "tools"
    FERTILISATION = "fertilisation"
    PESTICIDES = "pesticides"
    ROUTINE_MAINTENANCE = "routine_maintenance"
    PICKING = "picking"
    PLANTING_MATERIAL = "planting_material"
    SUPPORT_SYSTEM = "support_system"
    IRRIGATION_SYSTEM = "irrigation_system"
    OTHER = "other"


class Expense(TenantBase):
    __tablename__ = "expenses"
    __table_args__ = (
        UniqueConstraint("tenant_id", "display_id", name="uq_expenses_tenant_display_id"),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    tenant_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    display_id: Mapped[str] = mapped_column(String(20), nullable=False)

    expense_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    category: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    supplier: Mapped[str | None] = mapped_column(String(255))
    # Scanned receipt / invoice
    document_url: Mapped[str | None] = mapped_column(String(500))

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
