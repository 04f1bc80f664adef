"""Time utilities (local calendar days, epoch milliseconds)."""

from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo

from shipperbook.config import settings

LOCAL_TZ = ZoneInfo(settings.TIMEZONE)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MS = timedelta(milliseconds=1)


def to_local(timestamp_ms: int, tz: tzinfo = LOCAL_TZ) -> datetime:
    """Interpret an epoch-millisecond instant as an aware datetime in ``tz``."""
    return (_EPOCH + timestamp_ms * _ONE_MS).astimezone(tz)


def to_epoch_ms(dt: datetime, naive_assumed_tz: tzinfo = LOCAL_TZ) -> int:
    """Convert a datetime to integer epoch milliseconds."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=naive_assumed_tz)
    return (dt - _EPOCH) // _ONE_MS


def now_ms() -> int:
    return to_epoch_ms(datetime.now(timezone.utc))


def today_local(tz: tzinfo = LOCAL_TZ) -> date:
    return datetime.now(tz).date()


def as_calendar_date(value: date, tz: tzinfo = LOCAL_TZ) -> date:
    """
    Reduce a date or datetime to a plain calendar date.

    Aware datetimes are first moved into ``tz``; naive ones are taken as-is.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(tz)
        return value.date()
    return value


def calendar_date_of(timestamp_ms: int, tz: tzinfo = LOCAL_TZ) -> date:
    """Local year/month/day of an epoch-millisecond timestamp."""
    return to_local(timestamp_ms, tz).date()


def is_same_calendar_day(timestamp_ms: int, target: date, tz: tzinfo = LOCAL_TZ) -> bool:
    """
    Check whether a timestamp falls on ``target`` in local time.

    Compares year/month/day components. A day is not assumed to be
    86_400_000 ms long, so days around a DST change bucket correctly.
    """
    return calendar_date_of(timestamp_ms, tz) == as_calendar_date(target, tz)


def stamp_for_date(
    target: date,
    now: Optional[datetime] = None,
    tz: tzinfo = LOCAL_TZ,
) -> int:
    """
    Timestamp for an entry made now but booked on ``target``.

    Uses the target's year/month/day with the current local time of day,
    so back-dated entries keep their entry order within the day.
    """
    if now is None:
        now = datetime.now(tz)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=tz)
    else:
        now = now.astimezone(tz)

    target = as_calendar_date(target, tz)
    local = datetime(
        target.year,
        target.month,
        target.day,
        now.hour,
        now.minute,
        now.second,
        (now.microsecond // 1000) * 1000,
        tzinfo=tz,
    )
    return to_epoch_ms(local)
