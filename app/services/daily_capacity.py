"""Per-day order capacity for event deliveries."""

from datetime import date, datetime

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.models import EventOrder, ShopEventRecord
from app.schemas.delivery import ShopEvent
from app.services.delivery_scheduling import format_delivery_date, get_delivery_date_options

BLOCKED: int = -1


class DailyCapacityReachedError(Exception):
    """Raised when no delivery capacity is left for the requested date."""

    def __init__(self, day: date, blocked: bool) -> None:
        self.day = day
        self.blocked = blocked
        super().__init__(day.isoformat())


def get_daily_limit(event: ShopEventRecord, day: date) -> int | None:
    """Return the order limit for day; None means unlimited, 0 means blocked."""
    overrides = event.daily_limit_overrides or {}
    key = day.isoformat()
    if key in overrides:
        return int(overrides[key])
    return event.max_orders_per_day


def count_orders_for_date(db: Session, event_id: int, day: date) -> int:
    """Count non-cancelled orders scheduled for delivery on day."""
    return int(
        db.scalar(
            select(func.count(EventOrder.id)).where(
                EventOrder.event_id == event_id,
                EventOrder.delivery_date == day,
                EventOrder.status != "cancelled",
            )
        )
        or 0
    )


def get_remaining_capacity(db: Session, event: ShopEventRecord, day: date) -> int | None:
    """Return None when unlimited, BLOCKED when the date is closed, else remaining slots."""
    limit = get_daily_limit(event, day)
    if limit is None:
        return None
    if limit == 0:
        return BLOCKED
    remaining = limit - count_orders_for_date(db, event.id, day)
    return max(0, remaining)


def is_bookable(remaining: int | None) -> bool:
    return remaining is None or remaining > 0


def list_bookable_dates(
    db: Session,
    event: ShopEventRecord,
    config: ShopEvent,
    days_ahead: int,
    now: datetime,
) -> list[tuple[date, int | None]]:
    """Delivery options paired with remaining capacity, without blocked or fully booked dates."""
    bookable: list[tuple[date, int | None]] = []
    for day in get_delivery_date_options(config, days_ahead, now):
        remaining = get_remaining_capacity(db, event, day)
        if is_bookable(remaining):
            bookable.append((day, remaining))
    return bookable


def ensure_capacity(db: Session, event: ShopEventRecord, day: date) -> None:
    remaining = get_remaining_capacity(db, event, day)
    if remaining == BLOCKED:
        raise DailyCapacityReachedError(day, blocked=True)
    if remaining == 0:
        raise DailyCapacityReachedError(day, blocked=False)


def capacity_message(exc: DailyCapacityReachedError) -> str:
    if exc.blocked:
        return f"Delivery is not available on {format_delivery_date(exc.day)}."
    return f"{format_delivery_date(exc.day)} is fully booked. Please choose another date."


def event_lock_statement(event_id: int):
    """SELECT ... FOR UPDATE on the event row, reloading its limits from the database."""
    return (
        select(ShopEventRecord)
        .where(ShopEventRecord.id == event_id)
        .with_for_update()
        .execution_options(populate_existing=True)
    )


def lock_event_for_booking(db: Session, event_id: int) -> ShopEventRecord:
    """Serialize bookings for one event until the current transaction ends.

    Backends without row locks (SQLite) ignore FOR UPDATE and rely on their
    own single-writer locking.
    """
    return db.scalars(event_lock_statement(event_id)).one()
