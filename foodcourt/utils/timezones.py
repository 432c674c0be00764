# foodcourt/utils/timezones.py
from datetime import datetime, date
from zoneinfo import ZoneInfo
from typing import Optional

from foodcourt.core.config import settings

UTC = ZoneInfo("UTC")


def utcnow() -> datetime:
    """Naive UTC timestamp, the form stored in DateTime columns."""
    return datetime.now(UTC).replace(tzinfo=None)


def business_tz() -> ZoneInfo:
    return ZoneInfo(settings.business_timezone)


def business_date(now: Optional[datetime] = None) -> date:
    """
    Calendar date in the food court's timezone. Naive datetimes are
    treated as UTC, matching what is stored in the DB.
    """
    now = now or utcnow()
    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    return now.astimezone(business_tz()).date()
