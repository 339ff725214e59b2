from datetime import date, datetime, timedelta, timezone
from typing import Optional, Tuple
from zoneinfo import ZoneInfo

from app.core.config import settings


def utc_now() -> datetime:
    """Naive UTC timestamp, the format stored in the database."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def local_date(timestamp: datetime) -> date:
    """Calendar date of a stored (naive UTC) timestamp in the configured timezone."""
    return timestamp.replace(tzinfo=timezone.utc).astimezone(ZoneInfo(settings.TIMEZONE)).date()


def local_today() -> date:
    return local_date(utc_now())


def local_day_bounds(start: date, end: date) -> Tuple[datetime, datetime]:
    """Naive UTC [start, end) covering local days start..end inclusive."""
    tz = ZoneInfo(settings.TIMEZONE)
    lower = datetime(start.year, start.month, start.day, tzinfo=tz)
    upper = datetime(end.year, end.month, end.day, tzinfo=tz) + timedelta(days=1)
    return (
        lower.astimezone(timezone.utc).replace(tzinfo=None),
        upper.astimezone(timezone.utc).replace(tzinfo=None),
    )


def default_range(days: int, today: Optional[date] = None) -> Tuple[date, date]:
    """Trailing window of `days` days ending today inclusive."""
    today = today or local_today()
    return today - timedelta(days=days - 1), today
