"""Timezone and date-arithmetic operations exposed as MCP tools."""

import re
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from time_server.errors import InternalError, InvalidParameter, MethodNotFound, TimeServiceError
from time_server.logger import IServiceLogger, StdlibServiceLogger
from time_server.tool_requests import (
    AddTimeRequest,
    ConvertTimeRequest,
    CurrentTimeRequest,
    ListCommonTimezonesRequest,
    REQUEST_TYPES,
    TimeRequest,
    TimezoneInfoRequest,
    parse_request,
)
from time_server.zones import (
    COMMON_TIMEZONES,
    REGIONS,
    TIME_UNITS,
    ZoneCalendar,
    format_iso,
    format_offset,
    format_utc_iso,
    is_dst,
)

TIME_PATTERN = re.compile(r'(\d{1,2}):(\d{2})(?::(\d{2}))?')
UNIT_SECONDS = {'hours': 3600, 'minutes': 60, 'seconds': 1}


def _plain_number(value: Union[int, float]) -> Union[int, float]:
    """1.0 -> 1 so messages read naturally."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def format_hours(hours: float) -> str:
    if hours == 0:
        return "0h"
    return f"{hours:+g}h"


class TimeService:
    """
    Stateless time operations. The zone calendar and the logger are injected
    so tests can pin the clock and capture log entries.
    """

    def __init__(self, calendar: Optional[ZoneCalendar] = None, logger: Optional[IServiceLogger] = None):
        self.calendar = calendar or ZoneCalendar()
        self.logger = logger or StdlibServiceLogger()
        self._handlers: Dict[type, Callable[[Any], Any]] = {
            CurrentTimeRequest: lambda r: self.get_current_time(r.timezone),
            ConvertTimeRequest: lambda r: self.convert_time(r.time, r.from_timezone, r.to_timezone),
            TimezoneInfoRequest: lambda r: self.get_timezone_info(r.timezone),
            AddTimeRequest: lambda r: self.add_time(r.base_time, r.timezone, r.amount, r.unit),
            ListCommonTimezonesRequest: lambda r: self.list_common_timezones(r.regions),
        }
        missing = set(REQUEST_TYPES.values()) - set(self._handlers)
        if missing:
            raise TypeError(f"No handler for request types: {sorted(t.__name__ for t in missing)}")

    def call(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> Any:
        """Parse a tool call and run it."""
        self.logger.info("Received tool call", {"name": name, "args": arguments})
        try:
            request = parse_request(name, arguments)
        except TimeServiceError as e:
            self.logger.error("Rejected tool call", {"name": name, "error": e.message})
            raise
        return self.execute(request)

    def execute(self, request: TimeRequest) -> Any:
        handler = self._handlers.get(type(request))
        if handler is None:
            raise MethodNotFound(f"Unknown tool: {getattr(request, 'tool_name', type(request).__name__)}")

        try:
            return handler(request)
        except TimeServiceError as e:
            self.logger.error("Error in tool execution", {"name": request.tool_name, "error": e.message})
            raise
        except Exception as e:
            self.logger.error("Unexpected error in tool execution", {"name": request.tool_name, "error": str(e)})
            raise InternalError(f"Error executing tool {request.tool_name}: {e}") from e

    def _require_zone(self, zone: str, label: str = "timezone") -> None:
        if not self.calendar.is_valid_zone(zone):
            self.logger.error("Invalid timezone provided", {"timezone": zone})
            raise InvalidParameter(f"Invalid {label}: {zone}")

    def _moment(self, dt: datetime) -> Dict[str, Any]:
        return {
            "datetime": format_iso(dt),
            "local_time": dt.strftime('%H:%M:%S'),
            "local_date": dt.strftime('%Y-%m-%d'),
        }

    def get_current_time(self, zone: str = "UTC") -> Dict[str, Any]:
        self.logger.info("Getting current time", {"timezone": zone})
        self._require_zone(zone)

        dt = self.calendar.now(zone)
        result = {
            "timezone": zone,
            "datetime": format_iso(dt),
            "utc_datetime": format_utc_iso(dt),
            "local_time": dt.strftime('%H:%M:%S'),
            "local_date": dt.strftime('%Y-%m-%d'),
            "day_of_week": dt.strftime('%A'),
            "is_dst": is_dst(dt),
            "offset": format_offset(dt),
            "unix_timestamp": dt.timestamp(),
        }
        self.logger.debug("Got current time", result)
        return result

    def convert_time(self, time: str, from_timezone: str, to_timezone: str) -> Dict[str, Any]:
        """
        Read `time` as today's wall clock in `from_timezone` and express it in
        `to_timezone`. `time_difference` is the target offset minus the source
        offset, so a positive value means the target clock is ahead.
        """
        self._require_zone(from_timezone, "source timezone")
        self._require_zone(to_timezone, "target timezone")

        match = TIME_PATTERN.fullmatch(time)
        if not match:
            raise InvalidParameter(f"Invalid time format: {time}. Use HH:mm or HH:mm:ss")
        hour, minute, second = (int(part) for part in match.groups(default='0'))
        if hour > 23 or minute > 59 or second > 59:
            raise InvalidParameter(f"Invalid time format: {time}. Use HH:mm or HH:mm:ss")

        source_dt = self.calendar.now(from_timezone).replace(
            hour=hour, minute=minute, second=second, microsecond=0
        )
        target_dt = source_dt.astimezone(self.calendar.zone(to_timezone))
        hours = (target_dt.utcoffset() - source_dt.utcoffset()).total_seconds() / 3600

        def side(zone: str, dt: datetime) -> Dict[str, Any]:
            return {
                "timezone": zone,
                **self._moment(dt),
                "offset": format_offset(dt),
                "is_dst": is_dst(dt),
            }

        return {
            "source": side(from_timezone, source_dt),
            "target": side(to_timezone, target_dt),
            "time_difference": format_hours(hours),
            "time_difference_hours": hours,
        }

    def get_timezone_info(self, zone: str) -> Dict[str, Any]:
        self.logger.info("Getting timezone information", {"timezone": zone})
        self._require_zone(zone)

        dt = self.calendar.now(zone)
        result = {
            "timezone": zone,
            "name": dt.tzinfo.key,
            "abbreviation": dt.tzname(),
            "offset": format_offset(dt),
            "offset_seconds": int(dt.utcoffset().total_seconds()),
            "is_dst": is_dst(dt),
            "dst_offset": int(dt.dst().total_seconds()) if dt.dst() else 0,
        }
        self.logger.debug("Got timezone information", result)
        return result

    def add_time(self, base_time: str, zone: str, amount: Union[int, float], unit: str) -> Dict[str, Any]:
        self._require_zone(zone)

        if base_time.strip().lower() == 'now':
            original = self.calendar.now(zone)
        else:
            try:
                original = self.calendar.parse_iso(base_time, zone)
            except (ValueError, OverflowError):
                raise InvalidParameter(f"Invalid datetime: {base_time}")

        if unit not in TIME_UNITS:
            raise InvalidParameter(f"Invalid unit: {unit}. Valid units: {', '.join(TIME_UNITS)}")

        try:
            result = self.calendar.shift(original, amount, unit)
        except (ValueError, OverflowError) as e:
            raise InvalidParameter(f"Cannot add {amount} {unit}: {e}")

        return {
            "original": self._moment(original),
            "result": self._moment(result),
            "operation": f"{'Added' if amount > 0 else 'Subtracted'} {_plain_number(abs(amount))} {unit}",
            "difference": {unit: _plain_number(self._difference(original, result, unit))},
        }

    def _difference(self, original: datetime, result: datetime, unit: str) -> float:
        if unit in UNIT_SECONDS:
            # Same-tzinfo subtraction is wall-clock, so compare in UTC.
            elapsed = result.astimezone(timezone.utc) - original.astimezone(timezone.utc)
            return elapsed.total_seconds() / UNIT_SECONDS[unit]
        start, end = original.replace(tzinfo=None), result.replace(tzinfo=None)
        if unit in ('days', 'weeks'):
            days = (end - start).total_seconds() / 86400
            return days / 7 if unit == 'weeks' else days
        # Calendar months moved; month-end clamping does not count as a shortfall.
        months = (end.year - start.year) * 12 + (end.month - start.month)
        return months / 12 if unit == 'years' else months

    def list_common_timezones(self, regions: Optional[Iterable[str]] = None) -> List[Dict[str, Any]]:
        active_regions = list(regions or []) or list(REGIONS)
        unknown = [region for region in active_regions if region not in REGIONS]
        if unknown:
            raise InvalidParameter(f"Invalid regions: {', '.join(unknown)}. Valid regions: {', '.join(REGIONS)}")

        zones = [tz for tz in COMMON_TIMEZONES
                 if any(tz.startswith(f"{region}/") for region in active_regions)]
        self.logger.info("Filtered timezones", {"regions": active_regions, "filteredCount": len(zones)})
        return [self.get_current_time(tz) for tz in zones]
