"""
Base class for tool adapters.

A tool adapter groups a set of named tools behind one interface: it lists
their schemas for a host dispatcher (an MCP server, an LLM tool-use loop)
and executes calls by name.
"""

from abc import ABC, abstractmethod
from typing import Any


class ToolAdapter(ABC):
    """
    Abstract base class for tool adapters.

    Adapters own whatever their tools need to run (connections, clients)
    and are used as async context managers.
    """

    @abstractmethod
    async def initialize(self) -> None:
        """
        Prepare the adapter for calls.

        Raises:
            ConnectionError: If a backing service cannot be reached
        """

    @abstractmethod
    async def shutdown(self) -> None:
        """Release connections and other resources."""

    @abstractmethod
    async def call(self, tool_name: str, arguments: dict[str, Any]) -> dict[str, Any]:
        """
        Call a tool with the given arguments.

        Args:
            tool_name: Name of the tool to invoke
            arguments: Tool-specific arguments

        Returns:
            Tool execution result as a JSON-ready dictionary

        Raises:
            ValueError: If tool_name is unknown or arguments are invalid
            LookupError: If the requested data could not be retrieved
        """

    @abstractmethod
    async def list_tools(self) -> list[dict[str, Any]]:
        """
        List the tools this adapter provides.

        Returns:
            Tool schemas with name, description and input schema.

        Example:
            [
                {
                    "name": "get-character",
                    "description": "Retrieve detailed information about a character",
                    "input_schema": {
                        "type": "object",
                        "properties": {
                            "identifier": {
                                "type": "string",
                                "description": "Character name or ID to look up"
                            }
                        },
                        "required": ["identifier"]
                    }
                }
            ]
        """

    async def __aenter__(self):
        """Context manager entry - initialize the adapter."""
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - shutdown the adapter."""
        await self.shutdown()
        return False
