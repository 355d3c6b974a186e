"""Main MCP server implementation for schema transformation.

``tools/call`` is bound directly in the SDK's request handler table instead
of through ``Server.call_tool()``. The decorator validates arguments against
the advertised ``inputSchema`` and flattens every exception into a plain
error string, which would hide the dispatcher's error kinds. Failures are
returned as ``CallToolResult(isError=True)`` carrying
``{"errorKind", "message"}`` as structured content.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

from mcp import Tool, types
from mcp.server import NotificationOptions, Server
from mcp.server.models import InitializationOptions

from .config.settings import get_setting
from .core.dispatcher import Dispatcher
from .models.messages import CallRequest
from .registry.operation_registry import OperationRegistry
from .registry.operations import register_all_operations

logger = logging.getLogger(__name__)


class SchemaTransformerMCPServer:
    """MCP server exposing the registered operations as tools."""

    def __init__(self, registry: Optional[OperationRegistry] = None):
        """
        Build the registry and bind it to an MCP server instance.

        Args:
            registry: Pre-populated registry (default: a fresh registry with
                all built-in operations registered)
        """
        if registry is None:
            registry = OperationRegistry()
            register_all_operations(registry)

        # Registration phase ends here
        self.dispatcher = Dispatcher(registry)

        self.server_name = get_setting('server_name')
        self.server_version = get_setting('server_version')
        self.server = Server(self.server_name)

        self._register_handlers()

    def _register_handlers(self):
        """Register all MCP handlers."""

        @self.server.list_tools()
        async def handle_list_tools() -> list[Tool]:
            """List all available tools."""
            return await self.list_tools()

        async def handle_call_tool(request: types.CallToolRequest) -> types.ServerResult:
            """Route tool calls through the dispatcher."""
            return types.ServerResult(
                await self.call_tool(request.params.name, request.params.arguments)
            )

        self.server.request_handlers[types.CallToolRequest] = handle_call_tool

    async def list_tools(self) -> list[Tool]:
        return [Tool(**entry) for entry in self.dispatcher.handle_list()]

    async def call_tool(
        self,
        name: str,
        arguments: Optional[Dict[str, Any]]
    ) -> types.CallToolResult:
        """
        Dispatch a tool call.

        Returns:
            CallToolResult with the content blocks on success, or with
            ``isError`` set and ``{"errorKind", "message"}`` as structured
            content on failure
        """
        result = await self.dispatcher.handle_call(
            CallRequest(operation_name=name, arguments=arguments)
        )

        if result.error is not None:
            logger.warning(f"Tool {name} failed ({result.error.kind.value}): {result.error.message}")
            return types.CallToolResult(
                content=[types.TextContent(type="text", text=result.error.message)],
                structuredContent=result.to_dict(),
                isError=True,
            )

        return types.CallToolResult(
            content=[types.TextContent(type="text", text=block.text) for block in result.content],
            isError=False,
        )

    async def run(self):
        """Run the MCP server over stdio."""
        from mcp.server.stdio import stdio_server

        logger.info(f"Starting {self.server_name} {self.server_version} on stdio")

        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                InitializationOptions(
                    server_name=self.server_name,
                    server_version=self.server_version,
                    capabilities=self.server.get_capabilities(
                        notification_options=NotificationOptions(),
                        experimental_capabilities={}
                    )
                )
            )


def main():
    """Main entry point for the MCP server."""
    logging.basicConfig(level=get_setting('log_level'))
    server = SchemaTransformerMCPServer()
    asyncio.run(server.run())


if __name__ == "__main__":
    main()
