"""Event shop delivery scheduling and ordering endpoints."""

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.core.config import settings
from app.db.session import get_db
from app.models import EventOrder, ShopEventRecord
from app.schemas.delivery import (
    DailyLimitsUpdate,
    DeliveryDateOption,
    DeliveryDateOptionsResponse,
    DeliveryDateValidateRequest,
    DeliveryDateValidation,
    DeliveryScheduleResponse,
    DeliverySettingsUpdate,
    ShopEvent,
)
from app.schemas.event import ShopEventResponse
from app.schemas.order import EventOrderCreate, EventOrderResponse
from app.services.daily_capacity import (
    DailyCapacityReachedError,
    capacity_message,
    ensure_capacity,
    list_bookable_dates,
)
from app.services.delivery_scheduling import (
    ConfigurationError,
    calculate_delivery_schedule,
    format_delivery_date,
    get_delivery_message,
    is_valid_delivery_date,
)
from app.services.event_service import (
    EventNotActiveError,
    EventNotFoundError,
    get_event,
    list_active_events,
    to_shop_event,
    update_daily_limits,
    update_delivery_settings,
)
from app.services.order_service import (
    DeliveryDateRejectedError,
    ShopClosedError,
    TimeSlotRejectedError,
    list_event_orders,
    place_event_order,
)
from app.utils.time import business_now

logger = logging.getLogger(__name__)
router: APIRouter = APIRouter()

MISCONFIGURED_DETAIL: str = "Event delivery settings are misconfigured."


def _load_event(db: Session, event_id: int) -> ShopEventRecord:
    try:
        return get_event(db, event_id)
    except EventNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Event not found") from exc


def _load_config(event: ShopEventRecord) -> ShopEvent:
    try:
        return to_shop_event(event)
    except ConfigurationError as exc:
        raise HTTPException(status_code=500, detail=MISCONFIGURED_DETAIL) from exc


@router.get("", response_model=list[ShopEventResponse])
def list_events(db: Session = Depends(get_db)) -> list[ShopEventRecord]:
    """List active events with their delivery configuration."""
    return list_active_events(db)


@router.get("/{event_id}/delivery-schedule", response_model=DeliveryScheduleResponse)
def delivery_schedule(event_id: int, db: Session = Depends(get_db)) -> DeliveryScheduleResponse:
    event = _load_event(db, event_id)
    config = _load_config(event)
    now = business_now()
    schedule = calculate_delivery_schedule(config, now)
    return DeliveryScheduleResponse(
        event_id=event.id,
        schedule=schedule,
        message=get_delivery_message(schedule),
        allow_scheduled_delivery=config.allow_scheduled_delivery,
        now=now,
    )


@router.get("/{event_id}/delivery-dates", response_model=DeliveryDateOptionsResponse)
def delivery_dates(
    event_id: int,
    days_ahead: int = Query(default=settings.delivery_options_days_ahead, ge=1, le=60),
    db: Session = Depends(get_db),
) -> DeliveryDateOptionsResponse:
    """Weekday delivery options with remaining daily capacity; blocked and fully booked dates are left out."""
    event = _load_event(db, event_id)
    config = _load_config(event)
    options = [
        DeliveryDateOption(date=day, label=format_delivery_date(day), remaining=remaining)
        for day, remaining in list_bookable_dates(db, event, config, days_ahead, business_now())
    ]
    return DeliveryDateOptionsResponse(event_id=event.id, days_ahead=days_ahead, options=options)


@router.post("/{event_id}/delivery-date/validate", response_model=DeliveryDateValidation)
def validate_delivery_date(
    event_id: int,
    payload: DeliveryDateValidateRequest,
    db: Session = Depends(get_db),
) -> DeliveryDateValidation:
    event = _load_event(db, event_id)
    config = _load_config(event)
    validation = is_valid_delivery_date(payload.delivery_date, config, business_now())
    if not validation.valid:
        return validation
    try:
        ensure_capacity(db, event, payload.delivery_date)
    except DailyCapacityReachedError as exc:
        return DeliveryDateValidation(valid=False, error=capacity_message(exc))
    return validation


@router.put("/{event_id}/delivery-settings", response_model=ShopEventResponse)
def put_delivery_settings(
    event_id: int,
    payload: DeliverySettingsUpdate,
    db: Session = Depends(get_db),
) -> ShopEventRecord:
    event = _load_event(db, event_id)
    return update_delivery_settings(db, event, payload)


@router.put("/{event_id}/daily-limits", response_model=ShopEventResponse)
def put_daily_limits(
    event_id: int,
    payload: DailyLimitsUpdate,
    db: Session = Depends(get_db),
) -> ShopEventRecord:
    event = _load_event(db, event_id)
    return update_daily_limits(db, event, payload)


@router.post("/{event_id}/orders", response_model=EventOrderResponse, status_code=status.HTTP_201_CREATED)
def create_event_order(
    event_id: int,
    payload: EventOrderCreate,
    db: Session = Depends(get_db),
) -> EventOrder:
    """Place an order; the delivery date is assigned or validated per event settings."""
    event = _load_event(db, event_id)
    try:
        return place_event_order(db, event, payload, business_now())
    except EventNotActiveError as exc:
        raise HTTPException(status_code=400, detail="Event is not currently active") from exc
    except ShopClosedError as exc:
        raise HTTPException(status_code=403, detail=str(exc)) from exc
    except (DeliveryDateRejectedError, TimeSlotRejectedError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except DailyCapacityReachedError as exc:
        raise HTTPException(status_code=409, detail=capacity_message(exc)) from exc
    except ConfigurationError as exc:
        logger.error("[ORDER] Event %s rejected order due to invalid settings: %s", event.id, exc)
        raise HTTPException(status_code=500, detail=MISCONFIGURED_DETAIL) from exc


@router.get("/{event_id}/orders", response_model=list[EventOrderResponse])
def get_event_orders(
    event_id: int,
    delivery_date: date | None = None,
    db: Session = Depends(get_db),
) -> list[EventOrder]:
    event = _load_event(db, event_id)
    return list_event_orders(db, event.id, delivery_date)
