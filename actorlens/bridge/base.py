"""
Base class for tabletop query clients.

A query client sends a named query to the virtual-tabletop host and returns
the decoded JSON result. The character tools only depend on this interface,
so the transport (MCP stdio bridge, WebSocket, in-memory fake) is swappable.
"""

from abc import ABC, abstractmethod
from typing import Any


class QueryClient(ABC):
    """
    Abstract base class for query clients.

    Subclasses that hold connections or subprocesses override
    ``initialize()`` and ``shutdown()``; both default to no-ops.
    """

    async def initialize(self) -> None:
        """
        Open the connection to the host.

        Raises:
            ConnectionError: If the host cannot be reached
        """

    async def shutdown(self) -> None:
        """Close the connection and release resources."""

    @abstractmethod
    async def query(self, operation_name: str, params: dict[str, Any]) -> Any:
        """
        Run a named query on the host.

        Args:
            operation_name: Query name, e.g. "getCharacterInfo" or "listActors"
            params: Query parameters

        Returns:
            Decoded JSON result (a record mapping, a list of records, ...)

        Raises:
            RuntimeError: If the host rejects the query or the call fails
        """

    async def __aenter__(self):
        """Context manager entry - initialize the client."""
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - shutdown the client."""
        await self.shutdown()
        return False
