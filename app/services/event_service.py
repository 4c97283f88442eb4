"""Event shop lookups and delivery configuration management."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models import ShopEventRecord
from app.schemas.delivery import DailyLimitsUpdate, ShopEvent
from app.services.delivery_scheduling import ConfigurationError

logger = logging.getLogger(__name__)


class EventNotFoundError(Exception):
    """Raised when an event id does not exist."""


class EventNotActiveError(Exception):
    """Raised when ordering is attempted outside the event's active window."""


def get_event(db: Session, event_id: int) -> ShopEventRecord:
    event = db.get(ShopEventRecord, event_id)
    if event is None:
        raise EventNotFoundError(event_id)
    return event


def list_active_events(db: Session) -> list[ShopEventRecord]:
    """Return active events ordered by start date."""
    return list(
        db.scalars(
            select(ShopEventRecord)
            .where(ShopEventRecord.is_active.is_(True))
            .order_by(ShopEventRecord.start_date.asc(), ShopEventRecord.id.asc())
        ).all()
    )


def to_shop_event(event: ShopEventRecord) -> ShopEvent:
    """Validate a persisted row into the scheduler's configuration type."""
    try:
        return ShopEvent.model_validate(event)
    except ValidationError as exc:
        logger.warning("[CONFIG] Event %s has invalid delivery settings: %s", event.id, exc)
        raise ConfigurationError(f"Event {event.id} delivery settings are invalid") from exc


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; rows are written in UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def is_event_open(event: ShopEventRecord, now: datetime) -> bool:
    """Return True when the event is active and now falls inside its window."""
    if not event.is_active:
        return False
    return _as_utc(event.start_date) <= now <= _as_utc(event.end_date)


def ensure_event_open(event: ShopEventRecord, now: datetime) -> None:
    if not is_event_open(event, now):
        raise EventNotActiveError(event.id)


def update_delivery_settings(db: Session, event: ShopEventRecord, config: ShopEvent) -> ShopEventRecord:
    """Persist a validated delivery configuration on event."""
    event.daily_cutoff_time = config.daily_cutoff_time
    event.delivery_lead_days = config.delivery_lead_days
    event.is_shop_closed = config.is_shop_closed
    event.closure_message = config.closure_message
    event.allow_scheduled_delivery = config.allow_scheduled_delivery
    db.commit()
    db.refresh(event)
    logger.info(
        "[CONFIG] Event %s delivery settings updated: cutoff=%s lead_days=%s closed=%s",
        event.id,
        event.daily_cutoff_time,
        event.delivery_lead_days,
        event.is_shop_closed,
    )
    return event


def update_daily_limits(db: Session, event: ShopEventRecord, payload: DailyLimitsUpdate) -> ShopEventRecord:
    """Replace the per-day order capacity of event."""
    event.max_orders_per_day = payload.max_orders_per_day
    event.daily_limit_overrides = {day.isoformat(): limit for day, limit in sorted(payload.daily_limit_overrides.items())}
    db.commit()
    db.refresh(event)
    logger.info("[CONFIG] Event %s daily limits updated: default=%s overrides=%s", event.id, event.max_orders_per_day, len(event.daily_limit_overrides))
    return event
