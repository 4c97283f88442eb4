"""event shop delivery scheduling

Revision ID: 0001_event_shop_delivery
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa

revision = "0001_event_shop_delivery"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "shop_events",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("slug", sa.String(length=120), nullable=False, unique=True),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("1")),
        sa.Column("daily_cutoff_time", sa.String(length=5), nullable=True),
        sa.Column("delivery_lead_days", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("is_shop_closed", sa.Boolean(), nullable=False, server_default=sa.text("0")),
        sa.Column("closure_message", sa.Text(), nullable=True),
        sa.Column("allow_scheduled_delivery", sa.Boolean(), nullable=False, server_default=sa.text("0")),
        sa.Column("max_orders_per_day", sa.Integer(), nullable=True),
        sa.Column("daily_limit_overrides", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("delivery_lead_days >= 0", name="ck_shop_events_lead_days_non_negative"),
    )
    op.create_table(
        "event_orders",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("event_id", sa.Integer(), sa.ForeignKey("shop_events.id"), nullable=False),
        sa.Column("customer_name", sa.String(length=255), nullable=False),
        sa.Column("contact_number", sa.String(length=16), nullable=False),
        sa.Column("delivery_date", sa.Date(), nullable=False),
        sa.Column("delivery_time_slot", sa.String(length=64), nullable=True),
        sa.Column("delivery_notes", sa.Text(), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=False, server_default="pending"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_event_orders_event_delivery_date", "event_orders", ["event_id", "delivery_date"])


def downgrade() -> None:
    op.drop_index("ix_event_orders_event_delivery_date", table_name="event_orders")
    op.drop_table("event_orders")
    op.drop_table("shop_events")
