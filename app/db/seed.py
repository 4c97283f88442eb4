"""Database seeding helpers."""

import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.core.config import settings
from app.models import ShopEventRecord

logger = logging.getLogger(__name__)

DEMO_EVENT_SLUG: str = "flower-fest"


def ensure_demo_event(session: Session) -> ShopEventRecord | None:
    """Create a demo event shop in development when no events exist."""
    if settings.app_env != "dev":
        return None

    if session.scalar(select(func.count(ShopEventRecord.id))):
        return None

    now = datetime.now(timezone.utc)
    event = ShopEventRecord(
        name="Flower Fest",
        slug=DEMO_EVENT_SLUG,
        start_date=now - timedelta(days=1),
        end_date=now + timedelta(days=30),
        is_active=True,
        daily_cutoff_time=settings.default_daily_cutoff_time,
        delivery_lead_days=settings.default_delivery_lead_days,
        is_shop_closed=False,
        allow_scheduled_delivery=True,
        daily_limit_overrides={},
    )
    session.add(event)
    session.commit()
    logger.info("[BOOTSTRAP] Demo event %r created", event.slug)
    return event
