"""Delivery scheduling for event shop orders.

Cutoff handling, lead-day projection, delivery-date validation and the date
options offered to customers. Everything here is a pure function of an event's
delivery configuration and a reference ``now``; callers re-run it whenever the
clock may have crossed the daily cutoff.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import TypeVar

from app.schemas.delivery import DeliveryDateValidation, DeliverySchedule, ShopEvent
from app.utils.time import business_now, parse_hhmm_time

DELIVERY_TIME_SLOTS: tuple[str, ...] = (
    "Morning (9 AM - 12 PM)",
    "Afternoon (12 PM - 3 PM)",
    "Late Afternoon (3 PM - 6 PM)",
    "Evening (6 PM - 9 PM)",
)
DEFAULT_CLOSED_REASON: str = "This event shop is currently closed."
DEFAULT_UNAVAILABLE_MESSAGE: str = "Orders are currently unavailable."

# Python weekday(): Mon=0 .. Sun=6
WEEKEND_DAYS: frozenset[int] = frozenset({5, 6})
WEEKDAY_NAMES: tuple[str, ...] = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
MONTH_NAMES: tuple[str, ...] = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

DateT = TypeVar("DateT", date, datetime)


class ConfigurationError(ValueError):
    """Raised when an event's delivery configuration violates its invariants."""


def parse_cutoff_time(value: str | None) -> time | None:
    """Parse a HH:MM cutoff; None or blank means no cutoff."""
    if value is None or not value.strip():
        return None
    try:
        return parse_hhmm_time(value)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid daily cutoff time {value!r}") from exc


def format_cutoff_time(value: str) -> str:
    """Render a HH:MM cutoff on the 12-hour clock, e.g. '14:00' -> '2:00 PM'."""
    cutoff = parse_cutoff_time(value)
    if cutoff is None:
        raise ConfigurationError("Cutoff time is empty")
    period = "PM" if cutoff.hour >= 12 else "AM"
    display_hour = cutoff.hour % 12 or 12
    return f"{display_hour}:{cutoff.minute:02d} {period}"


def is_weekend(value: date) -> bool:
    return value.weekday() in WEEKEND_DAYS


def add_days(value: DateT, days: int, skip_weekends: bool = False) -> DateT:
    """Advance value by days, one calendar day at a time.

    With skip_weekends, Saturdays and Sundays are stepped over without being
    counted. Time-of-day is preserved for datetimes.
    """
    result = value
    added = 0
    while added < days:
        result = result + timedelta(days=1)
        if skip_weekends and is_weekend(result):
            continue
        added += 1
    return result


def is_past_cutoff(now: datetime, cutoff_time: str | None) -> bool:
    """Return True when now is at or after today's cutoff instant."""
    cutoff = parse_cutoff_time(cutoff_time)
    if cutoff is None:
        return False
    cutoff_instant = now.replace(hour=cutoff.hour, minute=cutoff.minute, second=0, microsecond=0)
    return now >= cutoff_instant


def calculate_delivery_schedule(event: ShopEvent, now: datetime | None = None) -> DeliverySchedule:
    """Derive the delivery schedule of event at now (business clock by default)."""
    current = now or business_now()

    if event.is_shop_closed:
        return DeliverySchedule(
            can_order=False,
            reason=event.closure_message or DEFAULT_CLOSED_REASON,
            earliest_delivery_date=current,
            suggested_delivery_date=current,
            is_past_cutoff=False,
            available_time_slots=[],
        )

    if event.delivery_lead_days < 0:
        raise ConfigurationError("Delivery lead days must be >= 0")

    past_cutoff = is_past_cutoff(current, event.daily_cutoff_time)
    total_days = event.delivery_lead_days + (1 if past_cutoff else 0)

    return DeliverySchedule(
        can_order=True,
        earliest_delivery_date=add_days(current, event.delivery_lead_days),
        suggested_delivery_date=add_days(current, total_days),
        is_past_cutoff=past_cutoff,
        cutoff_time=event.daily_cutoff_time or None,
        available_time_slots=list(DELIVERY_TIME_SLOTS),
    )


def _calendar_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def is_valid_delivery_date(
    selected_date: date | datetime,
    event: ShopEvent,
    now: datetime | None = None,
    *,
    max_days_ahead: int | None = None,
) -> DeliveryDateValidation:
    """Check a customer-chosen delivery date against the event's schedule.

    Only calendar dates are compared. max_days_ahead, when given, is the length
    of the window starting at the earliest delivery date, the same window
    get_delivery_date_options offers for days_ahead.
    """
    current = now or business_now()
    schedule = calculate_delivery_schedule(event, current)
    if not schedule.can_order:
        return DeliveryDateValidation(valid=False, error=schedule.reason)

    selected = _calendar_date(selected_date)
    earliest = schedule.earliest_delivery_date.date()

    if selected < current.date():
        return DeliveryDateValidation(valid=False, error="Delivery date cannot be in the past.")

    if selected < earliest:
        return DeliveryDateValidation(
            valid=False,
            error=f"Earliest delivery date is {format_delivery_date(schedule.earliest_delivery_date)}.",
        )

    if max_days_ahead is not None:
        latest = add_days(earliest, max_days_ahead - 1)
        if selected > latest:
            return DeliveryDateValidation(
                valid=False,
                error=f"Latest delivery date is {format_delivery_date(latest)}.",
            )

    return DeliveryDateValidation(valid=True)


def get_delivery_date_options(
    event: ShopEvent,
    days_ahead: int = 7,
    now: datetime | None = None,
) -> list[date]:
    """Return weekday delivery dates within days_ahead days of the earliest date."""
    schedule = calculate_delivery_schedule(event, now)
    if not schedule.can_order:
        return []

    start = schedule.earliest_delivery_date.date()
    options: list[date] = []
    for offset in range(days_ahead):
        candidate = add_days(start, offset)
        if not is_weekend(candidate):
            options.append(candidate)
    return options


def format_delivery_date(value: date | datetime) -> str:
    """Format as 'Wednesday, December 17, 2025'."""
    return f"{WEEKDAY_NAMES[value.weekday()]}, {MONTH_NAMES[value.month - 1]} {value.day}, {value.year}"


def get_delivery_message(schedule: DeliverySchedule) -> str:
    """Customer-facing sentence describing when an order will arrive."""
    if not schedule.can_order:
        return schedule.reason or DEFAULT_UNAVAILABLE_MESSAGE

    delivery_date = format_delivery_date(schedule.suggested_delivery_date)
    if schedule.is_past_cutoff and schedule.cutoff_time:
        return f"Orders placed after {format_cutoff_time(schedule.cutoff_time)} will be delivered on {delivery_date}."

    return f"Expected delivery: {delivery_date}."
