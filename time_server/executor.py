"""Tool catalog and execution for the time server."""

from typing import Dict, Any, List, Optional
from pathlib import Path
import yaml
import logging

from time_server.errors import InvalidParameter, MethodNotFound
from time_server.service import TimeService

logger = logging.getLogger(__name__)

TOOLS_FILE = Path(__file__).parent / "tools.yaml"

# Keys copied from a tools.yaml input definition into its JSON schema property.
SCHEMA_KEYS = ("type", "description", "default", "enum", "items")


def build_input_schema(tool: Dict[str, Any]) -> Dict[str, Any]:
    """Build the JSON schema for a tool from its declared inputs."""
    properties = {}
    required = []
    for input_def in tool.get("inputs", []):
        properties[input_def["name"]] = {k: input_def[k] for k in SCHEMA_KEYS if k in input_def}
        properties[input_def["name"]].setdefault("type", "string")
        if input_def.get("required", False):
            required.append(input_def["name"])

    schema = {"type": "object", "properties": properties}
    if required:
        schema["required"] = required
    return schema


def validate_tool_params(tool: Dict[str, Any], params: Dict[str, Any]):
    """Check that every required input is present."""
    required_inputs = [p['name'] for p in tool.get('inputs', []) if p.get('required', False)]
    missing_params = [name for name in required_inputs if params.get(name) is None]
    if missing_params:
        raise InvalidParameter(f"Missing required parameters: {', '.join(missing_params)}")


class TimeToolExecutor:
    """
    Loads the tool catalog and runs calls through the time service.
    """
    def __init__(self, service: TimeService, tools_file: Path = TOOLS_FILE):
        self.service = service
        self.tools_file = tools_file
        self.tools = self._load_tools()

    def _load_tools(self) -> List[Dict[str, Any]]:
        with open(self.tools_file, "r", encoding="utf-8") as f:
            catalog = yaml.safe_load(f) or {}

        tools = []
        for tool in catalog.get("tools", []):
            tool.setdefault("inputs", [])
            tools.append(tool)
        logger.debug(f"Loaded {len(tools)} tools from {self.tools_file.name}")
        return tools

    def get_tools(self) -> List[Dict[str, Any]]:
        """Return the list of declared tools."""
        return self.tools

    def call_tool(self, tool_name: str, params: Optional[Dict[str, Any]]) -> Any:
        """Find a tool by name, validate parameters, and execute it."""
        tool = next((t for t in self.tools if t['name'] == tool_name), None)
        if not tool:
            raise MethodNotFound(f"Unknown tool: {tool_name}")

        params = params or {}
        if not isinstance(params, dict):
            raise InvalidParameter(f"Arguments for {tool_name} must be an object")
        validate_tool_params(tool, params)
        return self.service.call(tool_name, params)
