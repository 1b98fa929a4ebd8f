"""Tests for the tool catalog and the stdio handlers."""

import asyncio
import json
import logging

import pytest
from mcp.shared.exceptions import McpError
from mcp import types
from mcp.types import INTERNAL_ERROR, INVALID_PARAMS, METHOD_NOT_FOUND

from time_server import server_stdio
from time_server.errors import InvalidParameter, MethodNotFound
from time_server.executor import TimeToolExecutor, build_input_schema
from time_server.logger import StdlibServiceLogger, setup_file_logging


@pytest.fixture
def executor(time_service):
    return TimeToolExecutor(time_service)


class TestCatalog:
    def test_tools_loaded(self, executor):
        names = [tool["name"] for tool in executor.get_tools()]

        assert names == ["get_current_time", "convert_time", "get_timezone_info",
                         "add_time", "list_common_timezones"]

    def test_schema_for_add_time(self, executor):
        tool = next(t for t in executor.get_tools() if t["name"] == "add_time")

        schema = build_input_schema(tool)

        assert schema["required"] == ["amount", "unit"]
        assert schema["properties"]["amount"]["type"] == "number"
        assert schema["properties"]["base_time"]["default"] == "now"
        assert "seconds" in schema["properties"]["unit"]["enum"]

    def test_schema_without_required(self, executor):
        tool = next(t for t in executor.get_tools() if t["name"] == "list_common_timezones")

        schema = build_input_schema(tool)

        assert "required" not in schema
        assert schema["properties"]["regions"]["items"]["type"] == "string"


class TestCallTool:
    def test_runs_through_service(self, executor):
        result = executor.call_tool("get_current_time", {"timezone": "Asia/Tokyo"})

        assert result["local_time"] == "21:00:00"

    def test_missing_params_listed(self, executor):
        with pytest.raises(InvalidParameter, match="Missing required parameters: time, to_timezone"):
            executor.call_tool("convert_time", {"from_timezone": "UTC"})

    def test_unknown_tool(self, executor):
        with pytest.raises(MethodNotFound):
            executor.call_tool("nope", {})


class TestStdioHandlers:
    def test_list_tools(self):
        tools = asyncio.run(server_stdio.handle_list_tools())

        assert len(tools) == 5
        assert tools[0].inputSchema["type"] == "object"

    def test_call_tool_returns_json_text(self):
        [content] = asyncio.run(server_stdio.handle_call_tool("get_timezone_info", {"timezone": "UTC"}))

        assert content.type == "text"
        assert json.loads(content.text)["offset"] == "+00:00"

    def test_prompts(self):
        prompts = asyncio.run(server_stdio.handle_list_prompts())
        result = asyncio.run(server_stdio.handle_get_prompt("time_zone_comparison", {"timezones": "UTC"}))

        assert [p.name for p in prompts] == ["time_zone_comparison", "meeting_scheduler"]
        assert "**UTC**" in result.messages[0].content.text

    def test_resources(self):
        resources = asyncio.run(server_stdio.handle_list_resources())
        [contents] = asyncio.run(server_stdio.handle_read_resource("time://current"))

        assert len(resources) == 2
        assert contents.mime_type == "application/json"
        assert json.loads(contents.content)["timezone"] == "UTC"

    def test_unknown_resource(self):
        with pytest.raises(McpError) as excinfo:
            asyncio.run(server_stdio.handle_read_resource("time://moon"))

        assert excinfo.value.error.code == INVALID_PARAMS
        assert excinfo.value.error.data == {"kind": "invalid_params"}

    def test_unknown_prompt(self):
        with pytest.raises(McpError) as excinfo:
            asyncio.run(server_stdio.handle_get_prompt("standup", {}))

        assert excinfo.value.error.code == METHOD_NOT_FOUND

    def test_prompt_crash_becomes_internal_error(self, monkeypatch):
        def explode(*args):
            raise RuntimeError("template missing")

        monkeypatch.setattr(server_stdio, "get_prompt", explode)

        with pytest.raises(McpError) as excinfo:
            asyncio.run(server_stdio.handle_get_prompt("time_zone_comparison", {"timezones": "UTC"}))

        assert excinfo.value.error.code == INTERNAL_ERROR
        assert "template missing" in excinfo.value.error.message

    def test_resource_crash_becomes_internal_error(self, monkeypatch):
        def explode(*args):
            raise RuntimeError("zone database unavailable")

        monkeypatch.setattr(server_stdio, "read_resource", explode)

        with pytest.raises(McpError) as excinfo:
            asyncio.run(server_stdio.handle_read_resource("time://zones"))

        assert excinfo.value.error.code == INTERNAL_ERROR
        assert excinfo.value.error.data == {"kind": "internal_error"}


def call_registered_tool(name, arguments):
    """Run a tool call the way the MCP session dispatches it."""
    handler = server_stdio.server.request_handlers[types.CallToolRequest]
    request = types.CallToolRequest(params=types.CallToolRequestParams(name=name, arguments=arguments))
    return asyncio.run(handler(request)).root


class TestToolCallResults:
    def test_success(self):
        result = call_registered_tool("get_timezone_info", {"timezone": "UTC"})

        assert result.isError is False
        assert json.loads(result.content[0].text)["offset"] == "+00:00"

    def test_unknown_tool_carries_kind(self):
        result = call_registered_tool("get_weather", {})

        assert result.isError is True
        error = json.loads(result.content[0].text)["error"]
        assert error == {"code": METHOD_NOT_FOUND, "kind": "method_not_found",
                         "message": "Unknown tool: get_weather"}
        assert result.structuredContent == {"error": error}

    def test_bad_zone_carries_kind(self):
        result = call_registered_tool("get_current_time", {"timezone": "Not/AZone"})

        assert result.isError is True
        error = json.loads(result.content[0].text)["error"]
        assert error["code"] == INVALID_PARAMS
        assert error["kind"] == "invalid_params"
        assert error["message"] == "Invalid timezone: Not/AZone"

    def test_missing_argument_carries_kind(self):
        result = call_registered_tool("get_timezone_info", {})

        error = json.loads(result.content[0].text)["error"]
        assert error["kind"] == "invalid_params"
        assert "timezone" in error["message"]

    def test_unexpected_failure_carries_kind(self, monkeypatch):
        def explode(tool_name, params):
            raise RuntimeError("boom")

        monkeypatch.setattr(server_stdio.executor, "call_tool", explode)

        result = call_registered_tool("get_current_time", {})

        error = json.loads(result.content[0].text)["error"]
        assert result.isError is True
        assert error["code"] == INTERNAL_ERROR
        assert error["kind"] == "internal_error"
        assert error["message"] == "Error executing tool get_current_time: boom"


class TestLogging:
    def test_data_is_appended_as_json(self, caplog):
        with caplog.at_level(logging.INFO, logger="time_server"):
            StdlibServiceLogger().info("Getting time", {"timezone": "UTC"})

        assert "Getting time\nData: {" in caplog.text
        assert '"timezone": "UTC"' in caplog.text

    def test_unknown_level_falls_back_to_info(self, caplog):
        with caplog.at_level(logging.INFO, logger="time_server"):
            StdlibServiceLogger().log("chatty", "hello")

        assert caplog.records[-1].levelno == logging.INFO

    def test_file_logging(self, tmp_path):
        log_file = setup_file_logging(tmp_path / "logs", "DEBUG")
        logger = logging.getLogger("time_server")
        try:
            StdlibServiceLogger().error("Something failed")
            for handler in logger.handlers:
                handler.flush()

            assert log_file == tmp_path / "logs" / "logs.txt"
            assert "[ERROR] Something failed" in log_file.read_text(encoding="utf-8")
        finally:
            for handler in list(logger.handlers):
                if isinstance(handler, logging.FileHandler):
                    logger.removeHandler(handler)
                    handler.close()
