"""FastMCP server setup for the Hex publish plugin."""

from fastmcp import FastMCP

from .config import Settings
from .plugin import HexPlugin
from .services.executor import CommandExecutor, SubprocessExecutor
from .tools import plugin_tools


def create_server(
    settings: Settings | None = None,
    executor: CommandExecutor | None = None,
) -> FastMCP:
    """
    Create and configure the MCP server.

    Args:
        settings: Optional settings to use. If not provided, settings are loaded from environment.
        executor: Optional command executor. Defaults to running `mix` as a subprocess.

    Returns:
        Configured FastMCP server instance
    """
    if settings is None:
        settings = Settings()

    if executor is None:
        executor = SubprocessExecutor(timeout=settings.command_timeout)

    mcp = FastMCP(
        name="hex",
        instructions="""
Hex.pm publish plugin for release automation.

Publishes Elixir packages to Hex.pm by running `mix hex.publish` on the
post-publish hook.

Workflow:
1. Use 'get_info' to read the plugin metadata and configuration schema
2. Use 'validate' to check a configuration before a release
3. Use 'execute' with hook 'post-publish' (optionally dry_run) to publish

The API key comes from the 'api_key' option or the HEX_API_KEY environment variable.
"""
    )

    plugin_tools.register_tools(mcp, HexPlugin(executor=executor))

    return mcp
