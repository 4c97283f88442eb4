"""Delivery scheduling value types."""

from datetime import date as dt_date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.utils.time import parse_hhmm_time


class ShopEvent(BaseModel):
    """Delivery configuration of an event shop.

    Built from a persisted event row or an admin payload. The cutoff must be a
    zero-padded 24-hour HH:MM string and lead days must be non-negative.
    """

    daily_cutoff_time: str | None = None
    delivery_lead_days: int = Field(default=0, ge=0)
    is_shop_closed: bool = False
    closure_message: str | None = None
    allow_scheduled_delivery: bool = False

    model_config = ConfigDict(frozen=True, from_attributes=True)

    @field_validator("daily_cutoff_time", mode="before")
    @classmethod
    def _validate_cutoff(cls, value: str | None) -> str | None:
        if value is None:
            return None
        if not isinstance(value, str):
            raise ValueError("cutoff time must be a HH:MM string")
        if not value.strip():
            return None
        return parse_hhmm_time(value).strftime("%H:%M")


class DeliverySchedule(BaseModel):
    """Derived delivery dates for one point in time. Never persisted."""

    can_order: bool
    reason: str | None = None
    earliest_delivery_date: datetime
    suggested_delivery_date: datetime
    is_past_cutoff: bool
    cutoff_time: str | None = None
    available_time_slots: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class DeliveryDateValidation(BaseModel):
    """Outcome of checking a customer-chosen delivery date."""

    valid: bool
    error: str | None = None

    model_config = ConfigDict(frozen=True)


class DeliveryScheduleResponse(BaseModel):
    """Schedule enriched with the customer-facing sentence."""

    event_id: int
    schedule: DeliverySchedule
    message: str
    allow_scheduled_delivery: bool
    now: datetime


class DeliveryDateOption(BaseModel):
    """Selectable delivery date with remaining capacity (None = unlimited)."""

    date: dt_date
    label: str
    remaining: int | None = None


class DeliveryDateOptionsResponse(BaseModel):
    event_id: int
    days_ahead: int
    options: list[DeliveryDateOption]


class DeliveryDateValidateRequest(BaseModel):
    delivery_date: dt_date


class DeliverySettingsUpdate(ShopEvent):
    """Admin payload replacing an event's delivery configuration."""


class DailyLimitsUpdate(BaseModel):
    """Admin payload for per-day order capacity."""

    max_orders_per_day: int | None = Field(default=None, ge=1)
    daily_limit_overrides: dict[dt_date, int] = Field(default_factory=dict)

    @field_validator("daily_limit_overrides")
    @classmethod
    def _validate_overrides(cls, value: dict[dt_date, int]) -> dict[dt_date, int]:
        for day, limit in value.items():
            if limit < 0:
                raise ValueError(f"limit for {day.isoformat()} must be >= 0")
        return value
