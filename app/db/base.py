"""Shared SQLAlchemy base declarative class and model imports."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for ORM models."""


# Import model modules so metadata is populated before create_all.
from app.models import event_order as _event_order  # noqa: E402,F401
from app.models import shop_event as _shop_event  # noqa: E402,F401
