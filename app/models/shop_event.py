"""Event shop ORM models."""

from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, CheckConstraint, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


class ShopEventRecord(Base):
    """Time-boxed event shop together with its delivery configuration."""

    __tablename__ = "shop_events"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(120), nullable=False, unique=True)
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    daily_cutoff_time: Mapped[str | None] = mapped_column(String(5), nullable=True)
    delivery_lead_days: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_shop_closed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    closure_message: Mapped[str | None] = mapped_column(Text, nullable=True)
    allow_scheduled_delivery: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    max_orders_per_day: Mapped[int | None] = mapped_column(Integer, nullable=True)
    # ISO date -> limit; 0 blocks the date
    daily_limit_overrides: Mapped[dict[str, int]] = mapped_column(JSON, nullable=False, default=dict)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    orders: Mapped[list["EventOrder"]] = relationship(back_populates="event")

    __table_args__ = (CheckConstraint("delivery_lead_days >= 0", name="ck_shop_events_lead_days_non_negative"),)
