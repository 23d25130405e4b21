"""
MCP-based query client for the virtual-tabletop bridge.

Spawns the bridge server as a subprocess and sends each query as an MCP
tool call named ``<namespace>.<operation>``. The bridge answers with a
JSON document in the text content of the result.
"""

import json
import logging
from contextlib import AsyncExitStack
from pathlib import Path
from typing import Any

from mcp import ClientSession
from mcp.client.stdio import StdioServerParameters, stdio_client

from actorlens.bridge.base import QueryClient
from actorlens.config.settings import BridgeSettings

logger = logging.getLogger(__name__)


class MCPBridgeClient(QueryClient):
    """
    Query client talking to the bridge over MCP stdio.

    Example:
        >>> async with MCPBridgeClient(server_path="bridge/dist/index.js") as client:
        ...     actors = await client.query("listActors", {"type": "npc"})
    """

    def __init__(
        self,
        server_path: str | None = None,
        command: str = "node",
        args: list[str] | None = None,
        namespace: str = "foundry-mcp-bridge",
    ):
        """Initialize the bridge client.

        Args:
            server_path: Path to the bridge server entry point
            command: Executable used to launch it
            args: Extra arguments appended after server_path
            namespace: Prefix of the bridge's query names
        """
        self._server_path = server_path
        self._command = command
        self._args = list(args or [])
        self._namespace = namespace

        self._initialized = False
        self._session = None
        self._exit_stack: AsyncExitStack | None = None

    @classmethod
    def from_settings(cls, settings: BridgeSettings) -> "MCPBridgeClient":
        return cls(
            server_path=settings.server_path,
            command=settings.command,
            args=settings.args,
            namespace=settings.namespace,
        )

    def qualified_name(self, operation_name: str) -> str:
        """Full bridge query name, e.g. 'foundry-mcp-bridge.listActors'."""
        if not self._namespace:
            return operation_name
        return f"{self._namespace}.{operation_name}"

    async def initialize(self) -> None:
        """Start the bridge subprocess and perform the MCP handshake."""
        if self._initialized:
            return

        if self._server_path is None:
            raise ValueError(
                "Bridge server path not specified. "
                "Provide server_path or set BRIDGE_SERVER_PATH in the environment."
            )

        server_path = Path(self._server_path)
        if not server_path.exists():
            raise FileNotFoundError(f"Bridge server not found at: {server_path}")

        server_params = StdioServerParameters(
            command=self._command,
            args=[str(server_path), *self._args],
        )

        # A failed handshake must not leave the subprocess running
        stack = AsyncExitStack()
        try:
            read_stream, write_stream = await stack.enter_async_context(
                stdio_client(server_params)
            )
            self._session = await stack.enter_async_context(
                ClientSession(read_stream, write_stream)
            )
            await self._session.initialize()
        except BaseException:
            self._session = None
            await stack.aclose()
            raise

        self._exit_stack = stack

        self._initialized = True
        logger.debug(f"Bridge client connected: {self._command} {server_path}")

    async def shutdown(self) -> None:
        """Close the MCP session and terminate the bridge subprocess."""
        if not self._initialized:
            return

        if self._exit_stack is not None:
            await self._exit_stack.aclose()
            self._exit_stack = None
        self._session = None

        self._initialized = False
        logger.debug("Bridge client shut down")

    async def query(self, operation_name: str, params: dict[str, Any]) -> Any:
        """Run a bridge query and decode its JSON answer."""
        if not self._initialized:
            raise RuntimeError("Bridge client not initialized")

        name = self.qualified_name(operation_name)
        result = await self._session.call_tool(name, params)

        # MCP returns content as a list of content blocks
        text = "".join(
            content.text for content in result.content if hasattr(content, "text")
        )

        if result.isError:
            raise RuntimeError(text or f"Bridge query {name} failed")

        if not text.strip():
            return None

        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise RuntimeError(f"Bridge query {name} returned invalid JSON: {e}") from e
