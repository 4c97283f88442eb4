"""Clock and time-of-day helpers bound to the business timezone."""

from __future__ import annotations

import re
from datetime import datetime, time
from zoneinfo import ZoneInfo

from app.core.config import settings

HHMM_PATTERN = re.compile(r"^(\d{2}):(\d{2})$")


def business_zone() -> ZoneInfo:
    """Return the configured business timezone."""
    return ZoneInfo(settings.business_timezone)


def business_now() -> datetime:
    """Return the current aware datetime in the business timezone.

    Every delivery calculation runs on this clock so cutoff comparisons never
    depend on the host locale.
    """
    return datetime.now(business_zone())


def parse_hhmm_time(value: str) -> time:
    """Parse a zero-padded 24-hour HH:MM string."""
    match = HHMM_PATTERN.match(value.strip())
    if match is None:
        raise ValueError(f"time must be HH:MM, got {value!r}")
    hour, minute = int(match.group(1)), int(match.group(2))
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise ValueError(f"time out of range: {value!r}")
    return time(hour=hour, minute=minute)
