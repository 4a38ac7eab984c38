"""
Bucket planning for day/month/year range summaries.

Every boundary is built from calendar components (year, month, day, hour) in
the viewer's time zone, never by shifting an already-converted instant by a
UTC offset. Bucket ends are inclusive: the next bucket's start minus one second.
"""
import calendar
import datetime
import logging
import re
from typing import List, Optional, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from core.errors import InvalidRange
from core.models.aggregated_series import Bucket
from core.models.period import PeriodKind

logger = logging.getLogger(__name__)

HOURS_PER_DAY = 24
MONTHS_PER_YEAR = 12
DATE_FORMAT = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)


def resolve_timezone(name: Optional[str]) -> ZoneInfo:
    """Return the ZoneInfo for an IANA zone name, raising InvalidRange if unknown."""
    if not name:
        raise InvalidRange("Time zone must not be empty")
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise InvalidRange(f"Unknown time zone: {name}") from e


def parse_local_date(value: str) -> datetime.date:
    """Parse a strict YYYY-MM-DD calendar date (zero-padded month and day)."""
    if not isinstance(value, str) or not DATE_FORMAT.fullmatch(value):
        raise InvalidRange(f"Invalid date format: {value}. Use YYYY-MM-DD")
    try:
        return datetime.datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError) as e:
        raise InvalidRange(f"Invalid date format: {value}. Use YYYY-MM-DD") from e


def reference_date(year: int, month: int = 1, day: int = 1) -> datetime.date:
    """Build a reference date from components, raising InvalidRange on bad values."""
    try:
        return datetime.date(year, month, day)
    except (TypeError, ValueError, OverflowError) as e:
        raise InvalidRange(f"Invalid calendar date: {year}-{month}-{day}") from e


def _local_instant(tz: ZoneInfo, year: int, month: int, day: int, hour: int = 0) -> int:
    return int(datetime.datetime(year, month, day, hour, tzinfo=tz).timestamp())


def _next_day(day: datetime.date) -> datetime.date:
    return day + datetime.timedelta(days=1)


def _next_month(year: int, month: int) -> Tuple[int, int]:
    if month == MONTHS_PER_YEAR:
        return year + 1, 1
    return year, month + 1


def _day_starts(day: datetime.date, tz: ZoneInfo) -> List[Tuple[int, str]]:
    starts = [
        (_local_instant(tz, day.year, day.month, day.day, hour), f"{hour:02d}:00")
        for hour in range(HOURS_PER_DAY)
    ]
    following = _next_day(day)
    starts.append((_local_instant(tz, following.year, following.month, following.day), ""))
    return starts


def _month_starts(day: datetime.date, tz: ZoneInfo) -> List[Tuple[int, str]]:
    days_in_month = calendar.monthrange(day.year, day.month)[1]
    starts = [
        (_local_instant(tz, day.year, day.month, d), f"{day.year:04d}-{day.month:02d}-{d:02d}")
        for d in range(1, days_in_month + 1)
    ]
    year, month = _next_month(day.year, day.month)
    starts.append((_local_instant(tz, year, month, 1), ""))
    return starts


def _year_starts(day: datetime.date, tz: ZoneInfo) -> List[Tuple[int, str]]:
    starts = [
        (_local_instant(tz, day.year, m, 1), f"{day.year:04d}-{m:02d}")
        for m in range(1, MONTHS_PER_YEAR + 1)
    ]
    starts.append((_local_instant(tz, day.year + 1, 1, 1), ""))
    return starts


_STARTS_BY_PERIOD = {
    PeriodKind.DAY: _day_starts,
    PeriodKind.MONTH: _month_starts,
    PeriodKind.YEAR: _year_starts,
}


def plan(period: PeriodKind, day: datetime.date, tz: ZoneInfo) -> List[Bucket]:
    """
    Produce the ordered buckets for `period` around the reference date `day`.

    - DAY: 24 hourly buckets of the local calendar day, labels "HH:MM"
    - MONTH: one bucket per day of the month, labels "YYYY-MM-DD"
    - YEAR: 12 monthly buckets, labels "YYYY-MM"

    On a daylight-saving day the skipped local hour yields an empty bucket
    (end before start) and a repeated local hour yields a two-hour bucket.
    """
    if not isinstance(period, PeriodKind):
        raise InvalidRange(f"Invalid period: {period}")
    try:
        starts = _STARTS_BY_PERIOD[period](day, tz)
    except (OverflowError, ValueError) as e:
        raise InvalidRange(f"Cannot plan {period.value} buckets for {day}: {e}") from e

    buckets = [
        Bucket(start=start, end=next_start - 1, label=label)
        for (start, label), (next_start, _) in zip(starts, starts[1:])
    ]
    logger.debug(f"Planned {len(buckets)} {period.value} buckets for {day} in {tz.key}")
    return buckets


def plan_range(buckets: List[Bucket]) -> Tuple[int, int]:
    """Inclusive (start, end) covering every bucket of a plan."""
    if not buckets:
        raise InvalidRange("Bucket plan is empty")
    return buckets[0].start, buckets[-1].end
