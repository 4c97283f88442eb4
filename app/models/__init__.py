"""Application models package."""

from app.models.event_order import EventOrder
from app.models.shop_event import ShopEventRecord

__all__ = ["EventOrder", "ShopEventRecord"]
