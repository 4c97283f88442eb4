"""Event order API schemas."""

import re
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

NOTES_MAX_LENGTH: int = 500


def normalize_ph_mobile(value: str) -> str:
    """Strip formatting from a Philippine mobile number (09XX XXX XXXX)."""
    digits = re.sub(r"\D", "", value)
    if len(digits) != 11 or not digits.startswith("09"):
        raise ValueError("Please enter a valid Philippine mobile number (09XX XXX XXXX)")
    return digits


class EventOrderCreate(BaseModel):
    """Checkout payload for an event order."""

    customer_name: str = Field(min_length=1, max_length=255)
    contact_number: str
    delivery_date: date | None = None
    delivery_time_slot: str | None = None
    delivery_notes: str | None = Field(default=None, max_length=NOTES_MAX_LENGTH)

    @field_validator("customer_name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Please enter your name")
        return value

    @field_validator("contact_number")
    @classmethod
    def _validate_contact(cls, value: str) -> str:
        return normalize_ph_mobile(value)


class EventOrderResponse(BaseModel):
    """Serialized event order."""

    id: int
    event_id: int
    customer_name: str
    contact_number: str
    delivery_date: date
    delivery_time_slot: str | None
    delivery_notes: str | None
    status: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
