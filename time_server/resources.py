"""Static resources: the current UTC time and the full zone catalog."""

import json
from typing import Any, Dict, List

from time_server.errors import InvalidParameter
from time_server.service import TimeService

JSON_MIME_TYPE = "application/json"

RESOURCES = [
    {
        "uri": "time://current",
        "name": "Current Time",
        "description": "Current time in UTC",
        "mimeType": JSON_MIME_TYPE,
    },
    {
        "uri": "time://zones",
        "name": "Available Timezones",
        "description": "List of available IANA timezones",
        "mimeType": JSON_MIME_TYPE,
    },
]


def read_resource(service: TimeService, uri: str) -> str:
    """Return the JSON text of a resource."""
    uri = uri.rstrip("/")
    if uri == "time://current":
        return json.dumps(service.get_current_time("UTC"), indent=2)
    if uri == "time://zones":
        zones = service.calendar.available_zones()
        return json.dumps({"count": len(zones), "timezones": zones}, indent=2)
    raise InvalidParameter(f"Unknown resource: {uri}")


def list_resources() -> List[Dict[str, Any]]:
    return RESOURCES
