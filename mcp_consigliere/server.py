"""MCP server exposing Consigliere agents as tools."""

import asyncio
import logging
from typing import Any

from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from consigliere import __version__
from consigliere.backends import create_backend
from consigliere.dispatcher import Dispatcher
from consigliere.schemas import (
    BackendConfig,
    ConsultAgentInput,
    DesignArchitectureInput,
    PlanProjectInput,
    ReviewCodeInput,
    ToolInvocation,
    ToolName,
)

logger = logging.getLogger(__name__)

SERVER_NAME = "consigliere"

# Tool name -> (description, input model)
TOOL_DEFINITIONS = {
    ToolName.PLAN_PROJECT: (
        "Get project planning and task breakdown from the planning agent",
        PlanProjectInput,
    ),
    ToolName.REVIEW_CODE: (
        "Get comprehensive code review from the review agent",
        ReviewCodeInput,
    ),
    ToolName.DESIGN_ARCHITECTURE: (
        "Get architectural guidance from the architecture agent",
        DesignArchitectureInput,
    ),
    ToolName.CONSULT_AGENT: (
        "Directly consult any agent with a custom prompt",
        ConsultAgentInput,
    ),
}


def list_tool_schemas() -> list[types.Tool]:
    """Advertised tools with their JSON input schemas."""
    return [
        types.Tool(
            name=tool.value,
            description=description,
            inputSchema=model.model_json_schema(),
        )
        for tool, (description, model) in TOOL_DEFINITIONS.items()
    ]


def _invocation(name: str, arguments: dict[str, Any] | None) -> ToolInvocation:
    """Build an invocation, keeping only string arguments."""
    return ToolInvocation(
        tool_name=name,
        arguments={k: v for k, v in (arguments or {}).items() if isinstance(v, str)},
    )


def build_server(dispatcher: Dispatcher) -> Server:
    """Create the MCP server.

    Every call, including unknown tools and missing arguments, goes to the
    dispatcher so failures come back as ``Error: ...`` text, never as
    protocol errors.
    """
    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def handle_list_tools() -> list[types.Tool]:
        return list_tool_schemas()

    # Schema validation off: the dispatcher reports missing arguments itself.
    @server.call_tool(validate_input=False)
    async def handle_call_tool(name: str, arguments: dict[str, Any] | None) -> list[types.TextContent]:
        text = await dispatcher.call_tool(_invocation(name, arguments))
        return [types.TextContent(type="text", text=text)]

    return server


def create_server(config: BackendConfig) -> Server:
    """Wire backend, dispatcher and server for the given configuration."""
    dispatcher = Dispatcher(create_backend(config))
    return build_server(dispatcher)


async def _serve(server: Server) -> None:
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


def run_stdio(config: BackendConfig) -> None:
    """Serve the MCP protocol on stdin/stdout until the client disconnects."""
    server = create_server(config)
    logger.info("Consigliere MCP server running on stdio")
    asyncio.run(_serve(server))
