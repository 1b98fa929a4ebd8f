"""Prompt templates that compose several current-time lookups into readable text."""

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from time_server.errors import InvalidParameter, MethodNotFound
from time_server.service import TimeService

PROMPTS = [
    {
        "name": "time_zone_comparison",
        "description": "Generate a comparison of times across multiple timezones",
        "arguments": [
            {"name": "timezones", "description": "Comma-separated list of IANA timezone names", "required": True},
            {"name": "reference_time",
             "description": "Reference time in HH:mm format, read in the first timezone (optional, defaults to current time)",
             "required": False},
        ],
    },
    {
        "name": "meeting_scheduler",
        "description": "Help schedule a meeting across multiple timezones",
        "arguments": [
            {"name": "participants",
             "description": "JSON object with participant names as keys and their timezones as values",
             "required": True},
            {"name": "preferred_time_range",
             "description": 'Preferred time range in format "HH:mm-HH:mm" (optional)',
             "required": False},
        ],
    },
]


@dataclass
class PromptText:
    description: str
    text: str


def time_zone_comparison(service: TimeService, timezones: str, reference_time: Optional[str] = None) -> PromptText:
    zones = [tz.strip() for tz in (timezones or "").split(",") if tz.strip()]
    if not zones:
        raise InvalidParameter("At least one timezone is required")

    sections = []
    for zone in zones:
        data = service.get_current_time(zone)
        lines = [
            f"**{data['timezone']}**",
            f"- Current time: {data['local_time']}",
            f"- Date: {data['local_date']}",
            f"- Day: {data['day_of_week']}",
            f"- UTC offset: {data['offset']}",
            f"- DST: {'Yes' if data['is_dst'] else 'No'}",
        ]
        if reference_time:
            converted = service.convert_time(reference_time, zones[0], zone)["target"]
            lines.append(f"- {reference_time} in {zones[0]}: {converted['local_time']} ({converted['local_date']})")
        sections.append("\n".join(lines))

    text = (
        "Here's a comparison of times across the specified timezones:\n\n"
        + "\n\n".join(sections)
        + "\n\nThis information can help you coordinate activities across different time zones."
    )
    return PromptText(description=f"Time zone comparison for: {timezones}", text=text)


def meeting_scheduler(service: TimeService, participants: str, preferred_time_range: Optional[str] = None) -> PromptText:
    try:
        participant_zones = json.loads(participants or "")
    except (TypeError, ValueError):
        raise InvalidParameter("Invalid JSON format for participants")
    if not isinstance(participant_zones, dict) or not participant_zones:
        raise InvalidParameter("participants must be a JSON object mapping names to timezones")

    sections = []
    for name, zone in participant_zones.items():
        if not isinstance(zone, str):
            raise InvalidParameter(f"Timezone for participant '{name}' must be a string")
        data = service.get_current_time(zone)
        sections.append("\n".join([
            f"**{name}** ({zone})",
            f"- Current time: {data['local_time']}",
            f"- Date: {data['local_date']}",
            f"- UTC offset: {data['offset']}",
        ]))

    parts = ["Meeting scheduling information for participants:", "\n\n".join(sections)]
    if preferred_time_range:
        parts.append(f"Preferred time range: {preferred_time_range}")
    parts.append(
        "Please suggest optimal meeting times that work for all participants, "
        "considering their time zones and any specified preferences."
    )
    return PromptText(
        description=f"Meeting scheduler for {len(participant_zones)} participants",
        text="\n\n".join(parts),
    )


def get_prompt(service: TimeService, name: str, arguments: Optional[Dict[str, Any]]) -> PromptText:
    arguments = arguments or {}
    if name == "time_zone_comparison":
        if not arguments.get("timezones"):
            raise InvalidParameter("Missing required argument: timezones")
        return time_zone_comparison(service, arguments["timezones"], arguments.get("reference_time"))
    if name == "meeting_scheduler":
        if not arguments.get("participants"):
            raise InvalidParameter("Missing required argument: participants")
        return meeting_scheduler(service, arguments["participants"], arguments.get("preferred_time_range"))
    raise MethodNotFound(f"Unknown prompt: {name}")


def list_prompts() -> List[Dict[str, Any]]:
    return PROMPTS
