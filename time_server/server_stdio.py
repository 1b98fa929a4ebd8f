#!/usr/bin/env python3
"""
Time MCP Server with stdio transport
"""
import os
import sys
import json
import asyncio
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from mcp import types
from mcp.server import Server, NotificationOptions
from mcp.server.models import InitializationOptions
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.types import Tool, TextContent
from pydantic import AnyUrl

from dotenv import load_dotenv

from time_server import __version__
from time_server.errors import InternalError, TimeServiceError
from time_server.executor import TimeToolExecutor, build_input_schema
from time_server.logger import StdlibServiceLogger, setup_file_logging
from time_server.prompts import get_prompt, list_prompts
from time_server.resources import JSON_MIME_TYPE, list_resources, read_resource
from time_server.service import TimeService

load_dotenv()

SERVER_NAME = "time-mcp-server"

service_logger = StdlibServiceLogger()
service = TimeService(logger=service_logger)
executor = TimeToolExecutor(service)
server = Server(SERVER_NAME)


@server.list_tools()
async def handle_list_tools() -> List[Tool]:
    """List available tools from the executor."""
    return [
        Tool(
            name=tool_config["name"],
            description=tool_config["description"],
            inputSchema=build_input_schema(tool_config),
        )
        for tool_config in executor.get_tools()
    ]


def tool_error_result(error: TimeServiceError) -> types.CallToolResult:
    """Tool failures are results with isError set; the payload keeps the code and kind."""
    payload = error.to_payload()
    return types.CallToolResult(
        content=[TextContent(type='text', text=json.dumps(payload, indent=2))],
        structuredContent=payload,
        isError=True,
    )


# Arguments are checked by the executor so that failures carry a typed kind.
@server.call_tool(validate_input=False)
async def handle_call_tool(name: str, arguments: Optional[Dict[str, Any]]) -> Union[List[TextContent], types.CallToolResult]:
    """Execute a tool using the executor."""
    try:
        result = executor.call_tool(tool_name=name, params=arguments)
    except TimeServiceError as e:
        return tool_error_result(e)
    except Exception as e:
        service_logger.error("Error executing tool", {"name": name, "error": str(e)})
        return tool_error_result(InternalError(f"Error executing tool {name}: {e}"))

    return [TextContent(type='text', text=json.dumps(result, indent=2))]


@server.list_prompts()
async def handle_list_prompts() -> List[types.Prompt]:
    return [
        types.Prompt(
            name=prompt["name"],
            description=prompt["description"],
            arguments=[types.PromptArgument(**argument) for argument in prompt["arguments"]],
        )
        for prompt in list_prompts()
    ]


@server.get_prompt()
async def handle_get_prompt(name: str, arguments: Optional[Dict[str, str]]) -> types.GetPromptResult:
    try:
        prompt = get_prompt(service, name, arguments)
    except TimeServiceError as e:
        raise e.to_mcp_error() from e
    except Exception as e:
        service_logger.error("Error rendering prompt", {"name": name, "error": str(e)})
        raise InternalError(f"Error rendering prompt {name}: {e}").to_mcp_error() from e

    return types.GetPromptResult(
        description=prompt.description,
        messages=[
            types.PromptMessage(role="user", content=TextContent(type="text", text=prompt.text)),
        ],
    )


@server.list_resources()
async def handle_list_resources() -> List[types.Resource]:
    return [types.Resource(**resource) for resource in list_resources()]


@server.read_resource()
async def handle_read_resource(uri: AnyUrl) -> Iterable[ReadResourceContents]:
    try:
        text = read_resource(service, str(uri))
    except TimeServiceError as e:
        raise e.to_mcp_error() from e
    except Exception as e:
        service_logger.error("Error reading resource", {"uri": str(uri), "error": str(e)})
        raise InternalError(f"Error reading resource {uri}: {e}").to_mcp_error() from e
    return [ReadResourceContents(content=text, mime_type=JSON_MIME_TYPE)]


async def main():
    """Start the MCP server using the stdio transport."""
    from mcp.server.stdio import stdio_server

    capabilities = server.get_capabilities(
        notification_options=NotificationOptions(),
        experimental_capabilities={}
    )

    init_options = InitializationOptions(
        server_name=SERVER_NAME,
        server_version=__version__,
        capabilities=capabilities,
    )

    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, init_options)


def run():
    # stdout is the MCP channel, so console logging goes to stderr.
    level = os.environ.get("TIME_SERVER_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(stream=sys.stderr, level=level)
    log_file = setup_file_logging(Path(os.environ.get("TIME_SERVER_LOG_DIR", "logs")), level)

    service_logger.info("Time MCP Server starting up...", {"log_file": str(log_file)})
    asyncio.run(main())


if __name__ == "__main__":
    run()
