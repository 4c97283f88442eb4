"""Delivery schedule calculation tests."""

from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from app.schemas.delivery import DeliverySchedule, ShopEvent
from app.services.delivery_scheduling import (
    DELIVERY_TIME_SLOTS,
    ConfigurationError,
    add_days,
    calculate_delivery_schedule,
    format_cutoff_time,
    format_delivery_date,
    get_delivery_date_options,
    get_delivery_message,
    is_valid_delivery_date,
)

# Wednesday
NOW = datetime(2025, 12, 17, 10, 30)


def _event(**overrides) -> ShopEvent:
    values = {
        "daily_cutoff_time": None,
        "delivery_lead_days": 0,
        "is_shop_closed": False,
        "closure_message": None,
        "allow_scheduled_delivery": True,
    }
    values.update(overrides)
    return ShopEvent(**values)


def test_closed_shop_short_circuits_schedule() -> None:
    event = _event(is_shop_closed=True, closure_message="Back next semester!", delivery_lead_days=3, daily_cutoff_time="14:00")

    schedule = calculate_delivery_schedule(event, NOW)

    assert schedule.can_order is False
    assert schedule.reason == "Back next semester!"
    assert schedule.available_time_slots == []
    assert schedule.is_past_cutoff is False
    assert schedule.earliest_delivery_date == NOW
    assert schedule.suggested_delivery_date == NOW


def test_closed_shop_uses_default_reason() -> None:
    schedule = calculate_delivery_schedule(_event(is_shop_closed=True), NOW)

    assert schedule.reason == "This event shop is currently closed."


def test_cutoff_boundary_is_inclusive() -> None:
    event = _event(daily_cutoff_time="14:00")

    at_cutoff = calculate_delivery_schedule(event, datetime(2025, 12, 17, 14, 0, 0))
    just_before = calculate_delivery_schedule(event, datetime(2025, 12, 17, 13, 59, 59))

    assert at_cutoff.is_past_cutoff is True
    assert just_before.is_past_cutoff is False


def test_cutoff_compares_business_local_clock_on_aware_datetimes() -> None:
    manila = ZoneInfo("Asia/Manila")
    event = _event(daily_cutoff_time="14:00")

    schedule = calculate_delivery_schedule(event, datetime(2025, 12, 17, 14, 5, tzinfo=manila))

    assert schedule.is_past_cutoff is True
    assert schedule.suggested_delivery_date.tzinfo == manila


def test_lead_days_without_cutoff() -> None:
    schedule = calculate_delivery_schedule(_event(delivery_lead_days=3), NOW)

    assert schedule.is_past_cutoff is False
    assert schedule.earliest_delivery_date == NOW + timedelta(days=3)
    assert schedule.suggested_delivery_date == NOW + timedelta(days=3)
    assert schedule.cutoff_time is None


def test_past_cutoff_adds_one_day_to_suggested_date_only() -> None:
    now = datetime(2025, 12, 17, 11, 0)
    schedule = calculate_delivery_schedule(_event(delivery_lead_days=2, daily_cutoff_time="10:00"), now)

    assert schedule.is_past_cutoff is True
    assert schedule.earliest_delivery_date == now + timedelta(days=2)
    assert schedule.suggested_delivery_date == now + timedelta(days=3)
    assert schedule.cutoff_time == "10:00"


def test_open_schedule_offers_fixed_time_slots() -> None:
    schedule = calculate_delivery_schedule(_event(), NOW)

    assert schedule.can_order is True
    assert schedule.available_time_slots == [
        "Morning (9 AM - 12 PM)",
        "Afternoon (12 PM - 3 PM)",
        "Late Afternoon (3 PM - 6 PM)",
        "Evening (6 PM - 9 PM)",
    ]
    assert tuple(schedule.available_time_slots) == DELIVERY_TIME_SLOTS


def test_schedule_is_idempotent() -> None:
    event = _event(delivery_lead_days=1, daily_cutoff_time="09:00")

    first = calculate_delivery_schedule(event, NOW)
    second = calculate_delivery_schedule(event, NOW)

    assert first == second
    assert first.model_dump() == second.model_dump()


def test_malformed_cutoff_fails_fast() -> None:
    event = ShopEvent.model_construct(daily_cutoff_time="25:61", delivery_lead_days=1)

    with pytest.raises(ConfigurationError):
        calculate_delivery_schedule(event, NOW)


def test_add_days_counts_every_calendar_day_by_default() -> None:
    friday = date(2025, 12, 19)

    assert add_days(friday, 1) == date(2025, 12, 20)
    assert add_days(friday, 3) == date(2025, 12, 22)
    assert add_days(friday, 0) == friday


def test_add_days_can_skip_weekends() -> None:
    friday = datetime(2025, 12, 19, 16, 45)

    assert add_days(friday, 1, skip_weekends=True) == datetime(2025, 12, 22, 16, 45)
    assert add_days(friday, 2, skip_weekends=True) == datetime(2025, 12, 23, 16, 45)


def test_validation_rejects_past_dates() -> None:
    result = is_valid_delivery_date(NOW - timedelta(days=1), _event(), NOW)

    assert result.valid is False
    assert result.error == "Delivery date cannot be in the past."


def test_validation_rejects_dates_before_earliest() -> None:
    event = _event(delivery_lead_days=5)

    too_soon = is_valid_delivery_date((NOW + timedelta(days=2)).date(), event, NOW)
    earliest = is_valid_delivery_date((NOW + timedelta(days=5)).date(), event, NOW)

    assert too_soon.valid is False
    assert too_soon.error == "Earliest delivery date is Monday, December 22, 2025."
    assert earliest.valid is True
    assert earliest.error is None


def test_validation_ignores_time_of_day() -> None:
    event = _event(delivery_lead_days=1)

    result = is_valid_delivery_date(datetime(2025, 12, 18, 0, 1), event, NOW)

    assert result.valid is True


def test_validation_reports_closure_reason() -> None:
    event = _event(is_shop_closed=True, closure_message="Sold out, thank you!")

    result = is_valid_delivery_date(date(2025, 12, 18), event, NOW)

    assert result.valid is False
    assert result.error == "Sold out, thank you!"


def test_validation_upper_bound_is_optional() -> None:
    event = _event()
    far_future = date(2026, 6, 1)

    assert is_valid_delivery_date(far_future, event, NOW).valid is True

    bounded = is_valid_delivery_date(date(2025, 12, 24), event, NOW, max_days_ahead=7)
    assert bounded.valid is False
    assert bounded.error == "Latest delivery date is Tuesday, December 23, 2025."
    assert is_valid_delivery_date(date(2025, 12, 23), event, NOW, max_days_ahead=7).valid is True


def test_validation_window_matches_date_options() -> None:
    event = _event()
    options = get_delivery_date_options(event, 7, NOW)

    for option in options:
        assert is_valid_delivery_date(option, event, NOW, max_days_ahead=7).valid is True

    first_day_past_window = date(2025, 12, 24)
    assert first_day_past_window > options[-1]
    assert is_valid_delivery_date(first_day_past_window, event, NOW, max_days_ahead=7).valid is False


def test_date_options_skip_weekends() -> None:
    options = get_delivery_date_options(_event(), 7, NOW)

    assert options == [
        date(2025, 12, 17),
        date(2025, 12, 18),
        date(2025, 12, 19),
        date(2025, 12, 22),
        date(2025, 12, 23),
    ]
    assert all(option.weekday() < 5 for option in options)


@pytest.mark.parametrize("lead_days", [0, 1, 2, 3, 4, 5, 6])
def test_date_options_never_include_weekends(lead_days: int) -> None:
    options = get_delivery_date_options(_event(delivery_lead_days=lead_days), 7, NOW)

    assert len(options) <= 7
    assert all(option.weekday() not in (5, 6) for option in options)
    assert options[0] >= (NOW + timedelta(days=lead_days)).date()


def test_date_options_start_from_earliest_not_suggested() -> None:
    now = datetime(2025, 12, 15, 18, 0)
    event = _event(delivery_lead_days=1, daily_cutoff_time="12:00")

    options = get_delivery_date_options(event, 3, now)

    assert options == [date(2025, 12, 16), date(2025, 12, 17), date(2025, 12, 18)]


def test_date_options_empty_when_closed() -> None:
    assert get_delivery_date_options(_event(is_shop_closed=True), 7, NOW) == []


def test_format_delivery_date() -> None:
    assert format_delivery_date(date(2025, 12, 17)) == "Wednesday, December 17, 2025"
    assert format_delivery_date(datetime(2026, 1, 5, 8, 0)) == "Monday, January 5, 2026"


@pytest.mark.parametrize(
    ("cutoff", "expected"),
    [("14:00", "2:00 PM"), ("09:30", "9:30 AM"), ("00:15", "12:15 AM"), ("12:00", "12:00 PM")],
)
def test_format_cutoff_time_uses_twelve_hour_clock(cutoff: str, expected: str) -> None:
    assert format_cutoff_time(cutoff) == expected


def test_delivery_message_before_cutoff() -> None:
    schedule = calculate_delivery_schedule(_event(delivery_lead_days=1, daily_cutoff_time="14:00"), NOW)

    assert get_delivery_message(schedule) == "Expected delivery: Thursday, December 18, 2025."


def test_delivery_message_after_cutoff() -> None:
    now = datetime(2025, 12, 17, 15, 0)
    schedule = calculate_delivery_schedule(_event(delivery_lead_days=1, daily_cutoff_time="14:00"), now)

    assert get_delivery_message(schedule) == (
        "Orders placed after 2:00 PM will be delivered on Friday, December 19, 2025."
    )


def test_delivery_message_when_closed() -> None:
    closed = calculate_delivery_schedule(_event(is_shop_closed=True, closure_message="Closed for finals"), NOW)
    no_reason = DeliverySchedule(
        can_order=False,
        earliest_delivery_date=NOW,
        suggested_delivery_date=NOW,
        is_past_cutoff=False,
    )

    assert get_delivery_message(closed) == "Closed for finals"
    assert get_delivery_message(no_reason) == "Orders are currently unavailable."
