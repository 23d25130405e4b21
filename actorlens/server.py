"""
MCP server exposing the character tools over stdio.

The server is a thin shell: every tool delegates to ``CharacterTools.call``,
which validates arguments and raises on failure. FastMCP reports raised
errors to the client as tool errors.
"""

import logging
from typing import Annotated, Any

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from actorlens.tools.characters import (
    GET_CHARACTER,
    LIST_CHARACTERS,
    TOOL_DEFINITIONS,
    CharacterTools,
)

logger = logging.getLogger(__name__)

_DESCRIPTIONS = {tool["name"]: tool["description"] for tool in TOOL_DEFINITIONS}


def create_server(tools: CharacterTools, name: str = "actorlens") -> FastMCP:
    """
    Build a FastMCP server with get-character and list-characters registered.

    Args:
        tools: Initialized character tools the server delegates to
        name: Server name announced during the MCP handshake
    """
    server = FastMCP(name)

    @server.tool(name=GET_CHARACTER, description=_DESCRIPTIONS[GET_CHARACTER])
    async def get_character(
        identifier: Annotated[str, Field(description="Character name or ID to look up")],
    ) -> dict[str, Any]:
        return await tools.call(GET_CHARACTER, {"identifier": identifier})

    @server.tool(name=LIST_CHARACTERS, description=_DESCRIPTIONS[LIST_CHARACTERS])
    async def list_characters(
        type: Annotated[
            str | None,
            Field(description='Optional filter by character type (e.g., "character", "npc")'),
        ] = None,
    ) -> dict[str, Any]:
        arguments = {"type": type} if type is not None else {}
        return await tools.call(LIST_CHARACTERS, arguments)

    logger.debug(f"Registered tools: {GET_CHARACTER}, {LIST_CHARACTERS}")
    return server


async def serve(tools: CharacterTools, name: str = "actorlens") -> None:
    """Run the MCP server on stdio until the client disconnects."""
    async with tools:
        server = create_server(tools, name=name)
        logger.info(f"MCP server '{name}' listening on stdio")
        await server.run_stdio_async()
