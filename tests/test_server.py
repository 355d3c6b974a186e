"""Tests for the MCP server binding.

Calls go through ``server.server.request_handlers``, the table the SDK's
session dispatches JSON-RPC requests from.
"""

import pytest
from mcp import types
from mcp.server import NotificationOptions

from schema_transformer.config.settings import get_all_settings, get_setting, set_setting
from schema_transformer.models.shape import ShapeSpec
from schema_transformer.registry import OperationDescriptor, OperationRegistry
from schema_transformer.server import SchemaTransformerMCPServer


ARGUMENTS = {
    "schema": {"fields": [{"name": "Date", "type": "string"}]},
    "table_name": "raw_tx",
    "output_table_name": "final_tx",
}


async def call_over_mcp(server: SchemaTransformerMCPServer, name: str, arguments) -> types.CallToolResult:
    handler = server.server.request_handlers[types.CallToolRequest]
    request = types.CallToolRequest(
        method="tools/call",
        params=types.CallToolRequestParams(name=name, arguments=arguments),
    )
    response = await handler(request)
    return response.root


async def list_over_mcp(server: SchemaTransformerMCPServer) -> types.ListToolsResult:
    handler = server.server.request_handlers[types.ListToolsRequest]
    response = await handler(types.ListToolsRequest(method="tools/list"))
    return response.root


def broken_server() -> SchemaTransformerMCPServer:
    def broken(params):
        raise RuntimeError("boom")

    registry = OperationRegistry()
    registry.register(OperationDescriptor(
        name="broken",
        description="Always fails",
        input_shape=ShapeSpec.object_of(properties={}),
        handler=broken,
    ))
    return SchemaTransformerMCPServer(registry)


class TestSchemaTransformerMCPServer:

    @pytest.fixture
    def server(self):
        return SchemaTransformerMCPServer()

    def test_registry_frozen_after_startup(self, server):
        assert server.dispatcher.registry.is_frozen
        assert server.server_name == get_setting('server_name')

    def test_tools_capability_advertised(self, server):
        capabilities = server.server.get_capabilities(
            notification_options=NotificationOptions(),
            experimental_capabilities={},
        )

        assert capabilities.tools is not None

    @pytest.mark.asyncio
    async def test_list_tools_request(self, server):
        result = await list_over_mcp(server)

        assert [tool.name for tool in result.tools] == ["generate_sql"]
        tool = result.tools[0]
        assert tool.description == "Generates a SQL transformation query based on the provided schema."
        assert tool.inputSchema["required"] == ["schema", "table_name", "output_table_name"]

    @pytest.mark.asyncio
    async def test_call_tool_request_returns_text_content(self, server):
        result = await call_over_mcp(server, "generate_sql", ARGUMENTS)

        assert result.isError is False
        assert len(result.content) == 1
        assert result.content[0].type == "text"
        assert "CREATE OR REPLACE TABLE `final_tx`" in result.content[0].text

    @pytest.mark.asyncio
    async def test_unknown_tool_reports_method_not_found(self, server):
        result = await call_over_mcp(server, "unknown_tool", {})

        assert result.isError is True
        assert result.structuredContent == {
            "errorKind": "MethodNotFound",
            "message": "Unknown tool: unknown_tool",
        }
        assert result.content[0].text == "Unknown tool: unknown_tool"

    @pytest.mark.asyncio
    async def test_missing_field_reports_invalid_params_with_path(self, server):
        """Arguments reach the dispatcher's validator, not a generic schema check."""
        result = await call_over_mcp(server, "generate_sql", {"table_name": "raw_tx"})

        assert result.isError is True
        assert result.structuredContent["errorKind"] == "InvalidParams"
        assert "Missing required field 'schema'" in result.structuredContent["message"]

    @pytest.mark.asyncio
    async def test_nested_violation_reports_path(self, server):
        arguments = dict(ARGUMENTS, schema={"fields": [{"name": "Date", "type": 3}]})

        result = await call_over_mcp(server, "generate_sql", arguments)

        assert result.structuredContent["errorKind"] == "InvalidParams"
        assert "schema.fields[0].type" in result.structuredContent["message"]

    @pytest.mark.asyncio
    async def test_missing_arguments_reports_invalid_params(self, server):
        result = await call_over_mcp(server, "generate_sql", None)

        assert result.structuredContent["errorKind"] == "InvalidParams"

    @pytest.mark.asyncio
    async def test_handler_crash_reports_internal_error(self):
        server = broken_server()

        result = await call_over_mcp(server, "broken", {})

        assert result.isError is True
        assert result.structuredContent["errorKind"] == "InternalError"
        assert "boom" not in result.structuredContent["message"]

    @pytest.mark.asyncio
    async def test_failed_call_does_not_affect_next_call(self, server):
        await call_over_mcp(server, "unknown_tool", {})
        result = await call_over_mcp(server, "generate_sql", ARGUMENTS)

        assert result.isError is False

    @pytest.mark.asyncio
    async def test_call_tool_method_matches_request_handler(self, server):
        direct = await server.call_tool("generate_sql", ARGUMENTS)
        wired = await call_over_mcp(server, "generate_sql", ARGUMENTS)

        assert direct == wired


class TestSettings:

    def test_defaults(self):
        settings = get_all_settings()

        assert set(settings) == {'server_name', 'server_version', 'log_level'}

    def test_unknown_setting_lists_available(self):
        with pytest.raises(KeyError) as exc_info:
            get_setting('database_url')

        assert "Available settings" in str(exc_info.value)

    def test_set_setting_overrides(self):
        original = get_setting('server_version')
        try:
            set_setting('server_version', '9.9.9')
            assert get_setting('server_version') == '9.9.9'
        finally:
            set_setting('server_version', original)

    def test_set_unknown_setting_rejected(self):
        with pytest.raises(KeyError):
            set_setting('nope', 'x')
