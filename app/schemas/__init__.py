"""Schema exports."""

from app.schemas.delivery import (
    DailyLimitsUpdate,
    DeliveryDateOption,
    DeliveryDateOptionsResponse,
    DeliveryDateValidateRequest,
    DeliveryDateValidation,
    DeliverySchedule,
    DeliveryScheduleResponse,
    DeliverySettingsUpdate,
    ShopEvent,
)
from app.schemas.event import ShopEventResponse
from app.schemas.order import EventOrderCreate, EventOrderResponse

__all__ = [
    "DailyLimitsUpdate",
    "DeliveryDateOption",
    "DeliveryDateOptionsResponse",
    "DeliveryDateValidateRequest",
    "DeliveryDateValidation",
    "DeliverySchedule",
    "DeliveryScheduleResponse",
    "DeliverySettingsUpdate",
    "EventOrderCreate",
    "EventOrderResponse",
    "ShopEvent",
    "ShopEventResponse",
]
