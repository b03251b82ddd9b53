"""MCP server exposing the restgate tools."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import CallToolResult, Tool

from restgate import __version__

if TYPE_CHECKING:
    from restgate.tools.dispatcher import ToolDispatcher

logger = logging.getLogger(__name__)

SERVER_NAME = "restgate"


def create_server(dispatcher: ToolDispatcher) -> Server:
    """Build an MCP server whose tool calls go through *dispatcher*."""
    server: Server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()  # type: ignore[no-untyped-call, untyped-decorator]
    async def list_tools() -> list[Tool]:
        """List available MCP tools."""
        return [definition.to_mcp() for definition in dispatcher.definitions()]

    # Arguments are validated by the dispatcher so failures keep its error envelope.
    @server.call_tool(validate_input=False)  # type: ignore[untyped-decorator]
    async def call_tool(name: str, arguments: dict[str, Any] | None) -> CallToolResult:
        """Handle tool calls."""
        result = await dispatcher.dispatch(name, arguments or {})
        return result.to_mcp()

    return server


async def run_server(dispatcher: ToolDispatcher) -> None:
    """Start the MCP server on stdio."""
    server = create_server(dispatcher)
    logger.info("MCP server listening on stdio")
    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )
