from datetime import datetime, date, time
from typing import Optional, Union

import pytz

from eunoia.config import config


def get_timezone():
    return pytz.timezone(config.timezone)


def now() -> datetime:
    return datetime.now(get_timezone())


def localize(dt: datetime) -> datetime:
    """Attach the configured timezone to naive datetimes, convert aware ones."""
    tz = get_timezone()
    if dt.tzinfo is None:
        return tz.localize(dt)
    return dt.astimezone(tz)


def parse_iso(value: Union[str, datetime, date]) -> datetime:
    if isinstance(value, datetime):
        return localize(value)
    if isinstance(value, date):
        return localize(datetime.combine(value, time.min))
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Invalid ISO datetime: {value!r}")
    return localize(datetime.fromisoformat(value.strip().replace('Z', '+00:00')))


def to_iso(dt: Optional[datetime]) -> Optional[str]:
    return dt.isoformat() if dt is not None else None


def start_of_day(dt: datetime) -> datetime:
    local = localize(dt)
    return get_timezone().localize(datetime.combine(local.date(), time.min))


def end_of_day(dt: datetime) -> datetime:
    local = localize(dt)
    return get_timezone().localize(datetime.combine(local.date(), time.max))



def is_same_day(a: datetime, b: datetime) -> bool:
    """Same calendar day in the configured timezone"""
    return localize(a).date() == localize(b).date()
