"""MCP stdio server exposing the tool registry."""

from __future__ import annotations

from typing import Any

import mcp.types as types
from loguru import logger
from mcp.server import Server
from mcp.server.stdio import stdio_server

from wolsearch import __version__
from wolsearch.config.schema import Config
from wolsearch.tools.registry import ToolRegistry
from wolsearch.tools.wol import EngineSession, WolSearchService, WolSearchTool

SERVER_NAME = "wolsearch"


def build_registry(service: WolSearchService) -> ToolRegistry:
    """Registry with every tool this server exposes."""
    registry = ToolRegistry()
    registry.register(WolSearchTool(service))
    return registry


def tool_definitions(registry: ToolRegistry) -> list[types.Tool]:
    definitions = []
    for definition in registry.get_definitions():
        function = definition["function"]
        definitions.append(
            types.Tool(
                name=function["name"],
                description=function["description"],
                inputSchema=function["parameters"],
            )
        )
    return definitions


async def call_tool(
    registry: ToolRegistry,
    name: str,
    arguments: dict[str, Any] | None,
) -> list[types.TextContent]:
    logger.info("Tool call: {}({})", name, arguments)
    result = await registry.execute(name, arguments or {})
    return [types.TextContent(type="text", text=result)]


def build_server(registry: ToolRegistry) -> Server:
    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def _list_tools() -> list[types.Tool]:
        return tool_definitions(registry)

    @server.call_tool()
    async def _call_tool(name: str, arguments: dict[str, Any] | None) -> list[types.TextContent]:
        return await call_tool(registry, name, arguments)

    return server


async def run_stdio(config: Config) -> None:
    """Start the engine, then serve tool calls over stdin/stdout until EOF.

    EngineInitError from startup propagates: the server never accepts
    requests without a browser.
    """
    session = EngineSession(config.wol)
    service = WolSearchService(session, config.wol)
    async with service:
        server = build_server(build_registry(service))
        logger.info("MCP server {} {} listening on stdio", SERVER_NAME, __version__)
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())
