"""Typed failures reported by the time server."""

from typing import Any, Dict

from mcp.shared.exceptions import McpError
from mcp.types import ErrorData, INTERNAL_ERROR, INVALID_PARAMS, METHOD_NOT_FOUND


class TimeServiceError(Exception):
    """
    Base class. `code` is the JSON-RPC error code and `kind` the stable name
    a client can branch on; both travel with every failure.
    """
    code = INTERNAL_ERROR
    kind = "internal_error"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def to_payload(self) -> Dict[str, Any]:
        return {"error": {"code": self.code, "kind": self.kind, "message": self.message}}

    def to_mcp_error(self) -> McpError:
        return McpError(ErrorData(code=self.code, message=self.message, data={"kind": self.kind}))


class InvalidParameter(TimeServiceError):
    """Bad zone name, malformed time, unsupported unit or unparseable argument."""
    code = INVALID_PARAMS
    kind = "invalid_params"


class MethodNotFound(TimeServiceError):
    """Unknown tool or prompt name."""
    code = METHOD_NOT_FOUND
    kind = "method_not_found"


class InternalError(TimeServiceError):
    """Unexpected failure while computing a result."""
    code = INTERNAL_ERROR
    kind = "internal_error"
