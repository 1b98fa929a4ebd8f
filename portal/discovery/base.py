from abc import ABC, abstractmethod
from typing import List
from portal.core.models import ServerRecord


class IServerDiscoverer(ABC):
    @abstractmethod
    def list_all(self) -> List[ServerRecord]:
        """Discover all MCP servers."""
        pass

    @abstractmethod
    def get_by_id(self, server_id: str) -> ServerRecord:
        """Return one server or raise NotFound."""
        pass

    @abstractmethod
    def get_readme(self, server_id: str) -> str:
        """Return a server's full README or raise NotFound."""
        pass
