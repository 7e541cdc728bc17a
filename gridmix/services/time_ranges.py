"""UTC-aligned forecast horizons for the energy mix queries."""
from datetime import date, datetime, time, timedelta, timezone
from typing import List, Tuple

from gridmix.config import settings


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def start_of_utc_day(now: datetime) -> datetime:
    """Midnight UTC of the calendar day containing ``now``."""
    return datetime.combine(now.astimezone(timezone.utc).date(), time(0, 0), tzinfo=timezone.utc)


def mix_horizon(
    now: datetime, days: int = settings.mix_horizon_days,
) -> Tuple[datetime, datetime]:
    """Return [from, to) starting at midnight UTC today and spanning ``days``."""
    start = start_of_utc_day(now)
    return start, start + timedelta(days=days)


def charging_horizon(
    now: datetime, days: int = settings.charging_horizon_days,
) -> Tuple[datetime, datetime]:
    """
    Return [from, to) starting at midnight UTC tomorrow and spanning ``days``.

    The partial current day is skipped so no window already in the past
    can be proposed.
    """
    start = start_of_utc_day(now) + timedelta(days=1)
    return start, start + timedelta(days=days)


def horizon_days(start: datetime, days: int) -> List[date]:
    """Calendar dates covered by a horizon beginning at ``start``."""
    first = start.astimezone(timezone.utc).date()
    return [first + timedelta(days=offset) for offset in range(days)]
