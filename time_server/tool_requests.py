"""
One request type per tool. `parse_request` turns the name and argument bag
delivered by the transport into one of these, applying defaults and type
checks; the service then dispatches on the request type.
"""
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Optional, Tuple, Type, Union

from time_server.errors import InvalidParameter, MethodNotFound

_REQUIRED = object()


def _string_arg(arguments: Dict[str, Any], key: str, default: Any = _REQUIRED) -> str:
    value = arguments.get(key)
    if value is None:
        if default is _REQUIRED:
            raise InvalidParameter(f"Missing required parameter: {key}")
        return default
    if not isinstance(value, str):
        raise InvalidParameter(f"Parameter '{key}' must be a string, got {type(value).__name__}")
    return value


def _number_arg(arguments: Dict[str, Any], key: str) -> Union[int, float]:
    value = arguments.get(key)
    if value is None:
        raise InvalidParameter(f"Missing required parameter: {key}")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidParameter(f"Parameter '{key}' must be a number, got {type(value).__name__}")
    return value


def _string_list_arg(arguments: Dict[str, Any], key: str) -> Tuple[str, ...]:
    value = arguments.get(key)
    if value is None:
        return ()
    if not isinstance(value, (list, tuple)) or not all(isinstance(item, str) for item in value):
        raise InvalidParameter(f"Parameter '{key}' must be a list of strings")
    return tuple(value)


@dataclass(frozen=True)
class CurrentTimeRequest:
    tool_name: ClassVar[str] = 'get_current_time'
    timezone: str = 'UTC'

    @classmethod
    def from_arguments(cls, arguments: Dict[str, Any]) -> 'CurrentTimeRequest':
        return cls(timezone=_string_arg(arguments, 'timezone', 'UTC'))


@dataclass(frozen=True)
class ConvertTimeRequest:
    tool_name: ClassVar[str] = 'convert_time'
    time: str
    from_timezone: str
    to_timezone: str

    @classmethod
    def from_arguments(cls, arguments: Dict[str, Any]) -> 'ConvertTimeRequest':
        return cls(
            time=_string_arg(arguments, 'time'),
            from_timezone=_string_arg(arguments, 'from_timezone'),
            to_timezone=_string_arg(arguments, 'to_timezone'),
        )


@dataclass(frozen=True)
class TimezoneInfoRequest:
    tool_name: ClassVar[str] = 'get_timezone_info'
    timezone: str

    @classmethod
    def from_arguments(cls, arguments: Dict[str, Any]) -> 'TimezoneInfoRequest':
        return cls(timezone=_string_arg(arguments, 'timezone'))


@dataclass(frozen=True)
class AddTimeRequest:
    tool_name: ClassVar[str] = 'add_time'
    amount: Union[int, float]
    unit: str
    base_time: str = 'now'
    timezone: str = 'UTC'

    @classmethod
    def from_arguments(cls, arguments: Dict[str, Any]) -> 'AddTimeRequest':
        return cls(
            amount=_number_arg(arguments, 'amount'),
            unit=_string_arg(arguments, 'unit'),
            base_time=_string_arg(arguments, 'base_time', 'now'),
            timezone=_string_arg(arguments, 'timezone', 'UTC'),
        )


@dataclass(frozen=True)
class ListCommonTimezonesRequest:
    tool_name: ClassVar[str] = 'list_common_timezones'
    regions: Tuple[str, ...] = ()

    @classmethod
    def from_arguments(cls, arguments: Dict[str, Any]) -> 'ListCommonTimezonesRequest':
        return cls(regions=_string_list_arg(arguments, 'regions'))


TimeRequest = Union[
    CurrentTimeRequest,
    ConvertTimeRequest,
    TimezoneInfoRequest,
    AddTimeRequest,
    ListCommonTimezonesRequest,
]

REQUEST_TYPES: Dict[str, Type] = {
    request_type.tool_name: request_type
    for request_type in (
        CurrentTimeRequest,
        ConvertTimeRequest,
        TimezoneInfoRequest,
        AddTimeRequest,
        ListCommonTimezonesRequest,
    )
}


def parse_request(name: str, arguments: Optional[Dict[str, Any]]) -> TimeRequest:
    request_type = REQUEST_TYPES.get(name)
    if request_type is None:
        raise MethodNotFound(f"Unknown tool: {name}")
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, dict):
        raise InvalidParameter(f"Arguments for {name} must be an object")
    return request_type.from_arguments(arguments)
