"""Orders placed through an event shop."""

from datetime import date, datetime, timezone

from sqlalchemy import Date, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


class EventOrder(Base):
    """Customer order with its scheduled delivery."""

    __tablename__ = "event_orders"

    id: Mapped[int] = mapped_column(primary_key=True)
    event_id: Mapped[int] = mapped_column(ForeignKey("shop_events.id"), nullable=False)
    customer_name: Mapped[str] = mapped_column(String(255), nullable=False)
    contact_number: Mapped[str] = mapped_column(String(16), nullable=False)
    delivery_date: Mapped[date] = mapped_column(Date, nullable=False)
    delivery_time_slot: Mapped[str | None] = mapped_column(String(64), nullable=True)
    delivery_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="pending")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    event: Mapped["ShopEventRecord"] = relationship(back_populates="orders")

    __table_args__ = (Index("ix_event_orders_event_delivery_date", "event_id", "delivery_date"),)
