"""MCP server over stdin/stdout, built on the low-level server of the MCP SDK."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from bankless_mcp import gateway
from bankless_mcp import mcp as dispatcher
from bankless_mcp.bankless_api import BanklessApiClient, default_client

logger = logging.getLogger(__name__)


def build_server(client: Optional[BanklessApiClient] = None) -> Server:
    """
    Create an MCP server exposing every registered tool.

    The SDK owns the protocol: framing, initialization, notifications and
    request ids. A ``ToolCallError`` raised by the dispatcher reaches the
    caller as a tool result with ``isError`` set and the error text as content.
    """
    server: Server = Server(gateway.MCP_SERVER_NAME, version=gateway.MCP_SERVER_VERSION)

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        return [
            types.Tool(name=tool["name"], description=tool["description"], inputSchema=tool["inputSchema"])
            for tool in dispatcher.list_tools()
        ]

    # Arguments are checked by the pydantic models, not the SDK's JSON Schema pass.
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: Optional[Dict[str, Any]]) -> List[types.TextContent]:
        text = await gateway.invoke_tool(name, arguments, client=client)
        return [types.TextContent(type="text", text=text)]

    return server


async def serve_stdio(*, client: Optional[BanklessApiClient] = None) -> None:
    """Serve MCP requests on stdin/stdout until the client disconnects."""
    server = build_server(client)
    logger.info("Bankless Onchain MCP Server running on stdio")
    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())
    finally:
        if client is None:
            await default_client.aclose()
