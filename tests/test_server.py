"""Tests for the MCP server tools."""

import pytest
from fastmcp import Client

from relicta_hex_plugin.config import Settings
from relicta_hex_plugin.server import create_server
from relicta_hex_plugin.services.executor import RecordingExecutor


@pytest.fixture
def executor():
    """Create a recording executor so no test runs mix."""
    return RecordingExecutor(output=b"Published v1.0.0")


@pytest.fixture
def server(executor):
    """Create a server that never runs mix."""
    return create_server(Settings(command_timeout=None, log_level="INFO"), executor=executor)


async def _call(server, tool, arguments):
    async with Client(server) as client:
        result = await client.call_tool(tool, arguments)
        return result.structured_content


class TestServerTools:
    def test_server_name(self, server):
        """Test the server is registered under the plugin name."""
        assert server.name == "hex"

    @pytest.mark.asyncio
    async def test_get_info(self, server):
        """Test metadata is exposed through the get_info tool."""
        info = await _call(server, "get_info", {})
        assert info["name"] == "hex"
        assert info["hooks"] == ["post-publish"]
        assert "api_key" in info["config_schema"]["properties"]

    @pytest.mark.asyncio
    async def test_execute_dry_run(self, server, executor):
        """Test a dry run through the execute tool."""
        response = await _call(server, "execute", {
            "hook": "post-publish",
            "config": {"organization": "my-org", "replace": True},
            "dry_run": True,
            "context": {"version": "v1.0.0"},
        })

        assert response["success"] is True
        assert response["outputs"]["command"] == "mix hex.publish --organization my-org --replace --yes"
        assert response["outputs"]["version"] == "1.0.0"
        assert executor.calls == []

    @pytest.mark.asyncio
    async def test_execute_publish(self, server, executor):
        """Test a real publish goes through the configured executor."""
        response = await _call(server, "execute", {
            "hook": "post-publish",
            "config": {"api_key": "test-key"},
            "context": {"version": "1.0.0"},
        })

        assert response["success"] is True
        assert response["message"] == "Published package v1.0.0 to Hex.pm"
        assert response["outputs"]["output"] == "Published v1.0.0"
        assert len(executor.calls) == 1

    @pytest.mark.asyncio
    async def test_execute_unknown_hook_passes_through(self, server, executor):
        """Test hook names outside the known set are acknowledged, not rejected."""
        response = await _call(server, "execute", {"hook": "pre-deploy", "config": {}})

        assert response["success"] is True
        assert response["message"] == "Hook pre-deploy not handled"
        assert executor.calls == []

    @pytest.mark.asyncio
    async def test_execute_malformed_context(self, server):
        """Test a context that does not match the schema is reported as INVALID_REQUEST."""
        response = await _call(server, "execute", {
            "hook": "post-publish",
            "context": {"version": ["not", "a", "string"]},
        })
        assert response["error"] == "INVALID_REQUEST"

    @pytest.mark.asyncio
    async def test_validate(self, server):
        """Test validation errors are attributed to their config key."""
        response = await _call(server, "validate", {"config": {"work_dir": "/etc"}})
        assert response["valid"] is False
        assert response["errors"][0]["field"] == "work_dir"
