"""Tests for prompt templates and resources."""

import json

import pytest

from time_server.errors import InvalidParameter, MethodNotFound
from time_server.prompts import get_prompt, list_prompts
from time_server.resources import list_resources, read_resource


class TestTimeZoneComparison:
    def test_sections_per_zone(self, time_service):
        prompt = get_prompt(time_service, "time_zone_comparison", {"timezones": "UTC, Asia/Tokyo"})

        assert prompt.description == "Time zone comparison for: UTC, Asia/Tokyo"
        assert prompt.text.startswith("Here's a comparison of times across the specified timezones:")
        assert "**UTC**\n- Current time: 12:00:00" in prompt.text
        assert "**Asia/Tokyo**\n- Current time: 21:00:00" in prompt.text
        assert "- Day: Monday" in prompt.text
        assert "- UTC offset: +09:00" in prompt.text
        assert "- DST: No" in prompt.text

    def test_reference_time_is_converted(self, time_service):
        prompt = get_prompt(time_service, "time_zone_comparison",
                            {"timezones": "UTC,Asia/Tokyo", "reference_time": "09:00"})

        assert "- 09:00 in UTC: 09:00:00 (2024-01-15)" in prompt.text
        assert "- 09:00 in UTC: 18:00:00 (2024-01-15)" in prompt.text

    def test_missing_timezones(self, time_service):
        with pytest.raises(InvalidParameter, match="timezones"):
            get_prompt(time_service, "time_zone_comparison", {})

    def test_invalid_zone(self, time_service):
        with pytest.raises(InvalidParameter):
            get_prompt(time_service, "time_zone_comparison", {"timezones": "UTC,Fake/Zone"})


class TestMeetingScheduler:
    def test_participants(self, time_service):
        participants = json.dumps({"Alice": "America/New_York", "Kenji": "Asia/Tokyo"})

        prompt = get_prompt(time_service, "meeting_scheduler",
                            {"participants": participants, "preferred_time_range": "09:00-17:00"})

        assert prompt.description == "Meeting scheduler for 2 participants"
        assert "**Alice** (America/New_York)\n- Current time: 07:00:00" in prompt.text
        assert "**Kenji** (Asia/Tokyo)" in prompt.text
        assert "Preferred time range: 09:00-17:00" in prompt.text

    def test_bad_json(self, time_service):
        with pytest.raises(InvalidParameter, match="Invalid JSON format for participants"):
            get_prompt(time_service, "meeting_scheduler", {"participants": "{not json"})

    def test_participants_must_be_object(self, time_service):
        with pytest.raises(InvalidParameter):
            get_prompt(time_service, "meeting_scheduler", {"participants": "[1, 2]"})


def test_unknown_prompt(time_service):
    with pytest.raises(MethodNotFound, match="Unknown prompt: standup"):
        get_prompt(time_service, "standup", {})


def test_prompt_catalog():
    assert [p["name"] for p in list_prompts()] == ["time_zone_comparison", "meeting_scheduler"]


class TestResources:
    def test_catalog(self):
        assert [r["uri"] for r in list_resources()] == ["time://current", "time://zones"]

    def test_current(self, time_service):
        data = json.loads(read_resource(time_service, "time://current"))

        assert data["timezone"] == "UTC"
        assert data["local_time"] == "12:00:00"

    def test_zones(self, time_service):
        data = json.loads(read_resource(time_service, "time://zones/"))

        assert data["count"] == len(data["timezones"])
        assert "Asia/Tokyo" in data["timezones"]
        assert data["timezones"] == sorted(data["timezones"])

    def test_unknown(self, time_service):
        with pytest.raises(InvalidParameter, match="Unknown resource: time://moon"):
            read_resource(time_service, "time://moon")
