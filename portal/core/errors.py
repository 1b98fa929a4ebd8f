"""
Error types raised while discovering and serving MCP servers.
"""


class PortalError(Exception):
    """Base class for portal errors."""


class NotFound(PortalError):
    """Raised when a server id or one of its files does not exist."""


class DegradedRead(PortalError):
    """
    Raised when a single file or directory could not be read or parsed.
    The discoverer logs these and keeps going with the remaining entries.
    """

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")
