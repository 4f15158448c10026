#!/usr/bin/env python3
"""
Anki MCP Server

Serves the AnkiConnect tools over the MCP stdio transport. The server is
built from an explicit tool registry and connector, so nothing here is
module-level state.
"""

import asyncio
import logging
import sys
from typing import Any, Dict, List, Mapping

from mcp.server import NotificationOptions, Server
from mcp.server.models import InitializationOptions
import mcp.types as types

from .anki_connector import AnkiConnectError, AnkiConnector
from .config import Settings
from .tools import DEFAULT_TOOLS, AnkiTool, call_tool, list_tools

logger = logging.getLogger(__name__)

SERVER_NAME = "anki-mcp"
SERVER_VERSION = "0.1.0"


def create_server(
    connector: AnkiConnector,
    registry: Mapping[str, AnkiTool] = DEFAULT_TOOLS,
) -> Server:
    """Create an MCP server exposing ``registry`` through ``connector``."""
    server = Server(SERVER_NAME, version=SERVER_VERSION)

    @server.list_tools()
    async def handle_list_tools() -> list[types.Tool]:
        return list_tools(registry)

    @server.call_tool(validate_input=False)
    async def handle_call_tool(
        name: str, arguments: Dict[str, Any] | None
    ) -> List[types.TextContent]:
        try:
            return call_tool(name, arguments or {}, connector, registry)
        except AnkiConnectError as e:
            logger.warning("Tool %s failed: %s", name, e)
            raise

    return server


def initialization_options(server: Server) -> InitializationOptions:
    return InitializationOptions(
        server_name=SERVER_NAME,
        server_version=SERVER_VERSION,
        capabilities=server.get_capabilities(
            notification_options=NotificationOptions(),
            experimental_capabilities={},
        ),
    )


async def serve(settings: Settings) -> None:
    from mcp.server.stdio import stdio_server

    connector = AnkiConnector(
        url=settings.anki_url, api_key=settings.api_key, timeout=settings.timeout
    )
    server = create_server(connector)
    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, initialization_options(server))
    finally:
        connector.close()


def main() -> None:
    """Run the Anki MCP server on stdio."""
    try:
        settings = Settings.from_env()
        # stdout carries the MCP stream
        logging.basicConfig(
            stream=sys.stderr,
            level=settings.log_level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        print(
            f"Starting Anki MCP server (AnkiConnect at {settings.anki_url})...",
            file=sys.stderr,
        )
        asyncio.run(serve(settings))
    except KeyboardInterrupt:
        print("\nServer interrupted by user", file=sys.stderr)
    except Exception as e:
        print(f"Failed to run Anki MCP server: {e}", file=sys.stderr)
        print(f"Error type: {type(e).__name__}", file=sys.stderr)
        import traceback

        traceback.print_exc(file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
