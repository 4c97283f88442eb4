"""Event shop schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class ShopEventResponse(BaseModel):
    """Serialized event with its delivery configuration."""

    id: int
    name: str
    slug: str
    start_date: datetime
    end_date: datetime
    is_active: bool
    daily_cutoff_time: str | None
    delivery_lead_days: int
    is_shop_closed: bool
    closure_message: str | None
    allow_scheduled_delivery: bool
    max_orders_per_day: int | None
    daily_limit_overrides: dict[str, int]

    model_config = ConfigDict(from_attributes=True)
