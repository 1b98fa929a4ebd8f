"""
Zone and calendar capability backed by the IANA database (`zoneinfo`) and
`python-dateutil` for ISO parsing and month/year arithmetic.
"""
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError, available_timezones

from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta

REGIONS = ['America', 'Europe', 'Asia', 'Africa', 'Australia', 'Pacific']

COMMON_TIMEZONES = [
    'America/New_York',
    'America/Los_Angeles',
    'America/Chicago',
    'America/Denver',
    'America/Toronto',
    'America/Sao_Paulo',
    'Europe/London',
    'Europe/Paris',
    'Europe/Berlin',
    'Europe/Rome',
    'Europe/Madrid',
    'Europe/Moscow',
    'Asia/Tokyo',
    'Asia/Shanghai',
    'Asia/Seoul',
    'Asia/Kolkata',
    'Asia/Dubai',
    'Asia/Singapore',
    'Africa/Cairo',
    'Africa/Johannesburg',
    'Australia/Sydney',
    'Australia/Melbourne',
    'Pacific/Auckland',
    'Pacific/Honolulu',
]

TIME_UNITS = ['years', 'months', 'weeks', 'days', 'hours', 'minutes', 'seconds']
CALENDAR_UNITS = {'years', 'months', 'weeks', 'days'}


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ZoneCalendar:
    """Everything the time service needs from a timezone library."""

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self.clock = clock or utc_now

    def is_valid_zone(self, name) -> bool:
        if not isinstance(name, str) or not name.strip():
            return False
        try:
            ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError, OSError):
            return False
        return True

    def zone(self, name: str) -> ZoneInfo:
        return ZoneInfo(name)

    def now(self, zone: str) -> datetime:
        return self.clock().astimezone(self.zone(zone))

    def parse_iso(self, text: str, zone: str) -> datetime:
        """
        Parse an ISO-8601 string. Naive values are read as wall time in `zone`;
        values carrying an offset are converted into `zone`. Raises ValueError.
        """
        parsed = isoparse(text.strip())
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=self.zone(zone))
        return parsed.astimezone(self.zone(zone))

    def shift(self, dt: datetime, amount: float, unit: str) -> datetime:
        """
        Move `dt` by `amount` units. Calendar units move the wall clock,
        hours/minutes/seconds move the absolute instant.
        """
        if unit in ('years', 'months'):
            if amount != int(amount):
                raise ValueError(f"{unit} must be a whole number")
            return dt + relativedelta(**{unit: int(amount)})
        if unit in CALENDAR_UNITS:
            return dt + timedelta(**{unit: amount})
        return (dt.astimezone(timezone.utc) + timedelta(**{unit: amount})).astimezone(dt.tzinfo)

    def available_zones(self) -> List[str]:
        return sorted(available_timezones())


def format_iso(dt: datetime) -> str:
    return dt.isoformat(timespec='milliseconds')


def format_utc_iso(dt: datetime) -> str:
    return format_iso(dt.astimezone(timezone.utc)).replace('+00:00', 'Z')


def format_offset(dt: datetime) -> str:
    """UTC offset as +HH:MM / -HH:MM."""
    total_minutes = int(dt.utcoffset().total_seconds() // 60)
    sign = '+' if total_minutes >= 0 else '-'
    hours, minutes = divmod(abs(total_minutes), 60)
    return f"{sign}{hours:02d}:{minutes:02d}"


def is_dst(dt: datetime) -> bool:
    return bool(dt.dst())
