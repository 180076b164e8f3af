"""Initial farm record tables.

Revision ID: 0001
Revises: (none)
Create Date: 2026-10-16

Every table is partitioned by tenant_id and carries a display ID that is
unique within the tenant; the unique constraint is what makes concurrent
display-ID generation safe.

Run with:
    alembic upgrade head
"""

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

from alembic import op
import sqlalchemy as sa


def _record_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("tenant_id", sa.String(64), nullable=False, index=True),
        sa.Column("display_id", sa.String(20), nullable=False),
    ]


def _created_at() -> sa.Column:
    return sa.Column("created_at", sa.DateTime(), server_default=sa.func.now())


def _display_id_unique(table: str) -> sa.UniqueConstraint:
    return sa.UniqueConstraint("tenant_id", "display_id", name=f"uq_{table}_tenant_display_id")


def upgrade() -> None:
    # ── Master data ──────────────────────────────────────────

    op.create_table(
        "parcels",
        *_record_columns(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("area_m2", sa.Float(), nullable=False),
        sa.Column("variety", sa.String(100)),
        sa.Column("planting_year", sa.Integer(), nullable=False),
        sa.Column("plant_count", sa.Integer()),
        sa.Column("status", sa.String(30), server_default="active"),
        sa.Column("gps_lat", sa.Float()),
        sa.Column("gps_lng", sa.Float()),
        sa.Column("notes", sa.Text()),
        _created_at(),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now()),
        _display_id_unique("parcels"),
    )

    op.create_table(
        "pickers",
        *_record_columns(),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(50)),
        sa.Column("employment_type", sa.String(30), server_default="seasonal"),
        sa.Column("rate_per_kg", sa.Float(), server_default="0"),
        sa.Column("hire_date", sa.Date()),
        sa.Column("is_active", sa.Boolean(), server_default="true"),
        _created_at(),
        _display_id_unique("pickers"),
    )

    op.create_table(
        "clients",
        *_record_columns(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(50)),
        sa.Column("email", sa.String(255)),
        sa.Column("address", sa.Text()),
        sa.Column("negotiated_price_per_kg", sa.Float()),
        sa.Column("notes", sa.Text()),
        _created_at(),
        _display_id_unique("clients"),
    )

    # ── Production and sales ─────────────────────────────────

    op.create_table(
        "harvests",
        *_record_columns(),
        sa.Column("harvest_date", sa.Date(), nullable=False, index=True),
        sa.Column("picker_id", sa.String(36), index=True),
        sa.Column("parcel_id", sa.String(36), index=True),
        sa.Column("crate_count", sa.Integer(), nullable=False),
        sa.Column("tare_kg", sa.Float(), server_default="0"),
        sa.Column("notes", sa.Text()),
        _created_at(),
        _display_id_unique("harvests"),
    )

    op.create_table(
        "fruit_sales",
        *_record_columns(),
        sa.Column("sale_date", sa.Date(), nullable=False, index=True),
        sa.Column("client_id", sa.String(36), index=True),
        sa.Column("quantity_kg", sa.Float(), nullable=False),
        sa.Column("price_per_kg", sa.Float(), nullable=False),
        sa.Column("payment_status", sa.String(20), server_default="paid"),
        sa.Column("crate_notes", sa.Text()),
        _created_at(),
        _display_id_unique("fruit_sales"),
    )

    op.create_table(
        "cutting_sales",
        *_record_columns(),
        sa.Column("sale_date", sa.Date(), nullable=False, index=True),
        sa.Column("client_id", sa.String(36), index=True),
        sa.Column("source_parcel_id", sa.String(36), index=True),
        sa.Column("variety", sa.String(100), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("unit_price", sa.Float(), nullable=False),
        sa.Column("notes", sa.Text()),
        _created_at(),
        _display_id_unique("cutting_sales"),
    )

    op.create_table(
        "agricultural_activities",
        *_record_columns(),
        sa.Column("application_date", sa.Date(), nullable=False, index=True),
        sa.Column("parcel_id", sa.String(36), index=True),
        sa.Column("activity_type", sa.String(50), nullable=False),
        sa.Column("product_used", sa.String(255)),
        sa.Column("dose", sa.String(100)),
        sa.Column("waiting_period_days", sa.Integer(), server_default="0"),
        sa.Column("operator", sa.String(255)),
        sa.Column("notes", sa.Text()),
        _created_at(),
        _display_id_unique("agricultural_activities"),
    )

    # ── Costs ────────────────────────────────────────────────

    op.create_table(
        "investments",
        *_record_columns(),
        sa.Column("investment_date", sa.Date(), nullable=False, index=True),
        sa.Column("parcel_id", sa.String(36), index=True),
        sa.Column("category", sa.String(50), nullable=False, index=True),
        sa.Column("supplier", sa.String(255)),
        sa.Column("description", sa.Text()),
        sa.Column("amount", sa.Float(), nullable=False),
        _created_at(),
        _display_id_unique("investments"),
    )

    op.create_table(
        "expenses",
        *_record_columns(),
        sa.Column("expense_date", sa.Date(), nullable=False, index=True),
        sa.Column("category", sa.String(50), nullable=False, index=True),
        sa.Column("description", sa.Text()),
        sa.Column("amount", sa.Float(), nullable=False),
        sa.Column("supplier", sa.String(255)),
        sa.Column("document_url", sa.String(500)),
        _created_at(),
        _display_id_unique("expenses"),
    )


def downgrade() -> None:
    for table in (
        "expenses",
        "investments",
        "agricultural_activities",
        "cutting_sales",
        "fruit_sales",
        "harvests",
        "clients",
        "pickers",
        "parcels",
    ):
        op.drop_table(table)
