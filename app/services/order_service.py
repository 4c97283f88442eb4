"""Event order placement with delivery-date and capacity enforcement."""

import logging
from datetime import date, datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.config import settings
from app.models import EventOrder, ShopEventRecord
from app.schemas.delivery import DeliverySchedule, ShopEvent
from app.schemas.order import EventOrderCreate
from app.services.daily_capacity import DailyCapacityReachedError, ensure_capacity, lock_event_for_booking
from app.services.delivery_scheduling import calculate_delivery_schedule, is_valid_delivery_date
from app.services.event_service import ensure_event_open, to_shop_event

logger = logging.getLogger(__name__)

TIME_SLOT_ERROR: str = "Please choose one of the available delivery time slots."
DATE_REQUIRED_ERROR: str = "Please choose a delivery date."


class ShopClosedError(Exception):
    """Raised when ordering from an event shop that is closed."""


class DeliveryDateRejectedError(Exception):
    """Raised when the requested delivery date fails validation."""


class TimeSlotRejectedError(Exception):
    """Raised when the requested time slot is not offered."""


def resolve_delivery_date(
    *,
    config: ShopEvent,
    schedule: DeliverySchedule,
    requested: date | None,
    now: datetime,
) -> date:
    """Return the delivery date for an order.

    Without scheduled delivery the suggested date is assigned and any requested
    date is ignored.
    """
    if not config.allow_scheduled_delivery:
        return schedule.suggested_delivery_date.date()

    if requested is None:
        raise DeliveryDateRejectedError(DATE_REQUIRED_ERROR)

    validation = is_valid_delivery_date(
        requested,
        config,
        now,
        max_days_ahead=settings.delivery_options_days_ahead,
    )
    if not validation.valid:
        raise DeliveryDateRejectedError(validation.error)
    return requested


def resolve_time_slot(*, config: ShopEvent, schedule: DeliverySchedule, requested: str | None) -> str | None:
    """Validate the requested slot; a slot is mandatory only for scheduled delivery."""
    if requested is None:
        if config.allow_scheduled_delivery:
            raise TimeSlotRejectedError(TIME_SLOT_ERROR)
        return None
    if requested not in schedule.available_time_slots:
        raise TimeSlotRejectedError(TIME_SLOT_ERROR)
    return requested


def place_event_order(db: Session, event: ShopEventRecord, payload: EventOrderCreate, now: datetime) -> EventOrder:
    """Create a pending order after enforcing the event's delivery rules."""
    ensure_event_open(event, now)

    config = to_shop_event(event)
    schedule = calculate_delivery_schedule(config, now)
    if not schedule.can_order:
        raise ShopClosedError(schedule.reason)

    delivery_date = resolve_delivery_date(config=config, schedule=schedule, requested=payload.delivery_date, now=now)
    time_slot = resolve_time_slot(config=config, schedule=schedule, requested=payload.delivery_time_slot)

    # Count and insert under the event row lock; commit releases it.
    event = lock_event_for_booking(db, event.id)
    try:
        ensure_capacity(db, event, delivery_date)
    except DailyCapacityReachedError:
        db.rollback()
        raise

    order = EventOrder(
        event_id=event.id,
        customer_name=payload.customer_name,
        contact_number=payload.contact_number,
        delivery_date=delivery_date,
        delivery_time_slot=time_slot,
        delivery_notes=payload.delivery_notes,
        status="pending",
    )
    db.add(order)
    db.commit()
    db.refresh(order)
    logger.info(
        "[ORDER] Event %s order %s scheduled for %s (%s), past_cutoff=%s",
        event.id,
        order.id,
        delivery_date.isoformat(),
        time_slot or "no slot",
        schedule.is_past_cutoff,
    )
    return order


def list_event_orders(db: Session, event_id: int, delivery_date: date | None = None) -> list[EventOrder]:
    """Return event orders, optionally for a single delivery date."""
    query = select(EventOrder).where(EventOrder.event_id == event_id)
    if delivery_date is not None:
        query = query.where(EventOrder.delivery_date == delivery_date)
    return list(db.scalars(query.order_by(EventOrder.delivery_date.asc(), EventOrder.id.asc())).all())
