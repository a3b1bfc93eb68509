"""Time utilities (configured timezone)."""

import calendar
from datetime import date, datetime
from typing import Optional
from zoneinfo import ZoneInfo

from retireplan.config import settings


def local_tz(name: Optional[str] = None) -> ZoneInfo:
    return ZoneInfo(name or settings.TIMEZONE)


def local_today(tz_name: Optional[str] = None) -> date:
    """
    Current calendar date in the configured timezone.
    """
    return datetime.now(local_tz(tz_name)).date()


def subtract_months(value: date, months: int) -> date:
    """
    Step back whole months, clamping the day to the target month's length.

    2026-03-31 minus 1 month -> 2026-02-28.
    """
    total = value.year * 12 + (value.month - 1) - months
    year, month_index = divmod(total, 12)
    month = month_index + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def year_start(value: date) -> date:
    return date(value.year, 1, 1)
