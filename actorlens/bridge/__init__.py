"""
Tabletop bridge clients.

Query clients send named queries (getCharacterInfo, listActors, ...) to
the virtual-tabletop host and return its JSON answers.
"""

from actorlens.bridge.base import QueryClient
from actorlens.bridge.mcp_client import MCPBridgeClient

__all__ = ["MCPBridgeClient", "QueryClient"]
