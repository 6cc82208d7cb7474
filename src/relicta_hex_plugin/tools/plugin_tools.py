"""Plugin host protocol tools: get_info, execute and validate."""

import logging

from fastmcp import FastMCP
from pydantic import ValidationError

from ..models.schemas import ExecuteRequest
from ..plugin import HexPlugin

logger = logging.getLogger(__name__)


def register_tools(mcp: FastMCP, plugin: HexPlugin) -> None:
    """Register the plugin protocol tools with the MCP server."""

    @mcp.tool()
    async def get_info() -> dict:
        """
        Describe this plugin to the release host.

        Returns:
            Dictionary with name, version, description, author, hooks and config_schema
        """
        return plugin.get_info().model_dump(mode="json")

    @mcp.tool()
    async def execute(
        hook: str,
        config: dict | None = None,
        dry_run: bool = False,
        context: dict | None = None,
    ) -> dict:
        """
        Run the plugin for a release lifecycle hook.

        On post-publish the package is published to Hex.pm with `mix hex.publish`.
        Other hooks are acknowledged and ignored.

        Args:
            hook: Lifecycle hook that fired (e.g. 'post-publish')
            config: Plugin configuration (api_key, organization, replace, yes, work_dir)
            dry_run: Report the command that would run without running it
            context: Release context; 'version' is required for publishing

        Returns:
            Dictionary with success, message, error and outputs
        """
        try:
            request = ExecuteRequest(
                hook=hook,
                config=config,
                dry_run=dry_run,
                context=context or {},
            )
        except ValidationError as e:
            logger.warning("Rejected execute request for hook %r", hook)
            return {
                "error": "INVALID_REQUEST",
                "message": str(e),
            }

        response = await plugin.execute(request)
        return response.model_dump(mode="json")

    @mcp.tool()
    async def validate(config: dict | None = None) -> dict:
        """
        Validate a plugin configuration without running anything.

        Args:
            config: Plugin configuration to check

        Returns:
            Dictionary with valid and a list of {field, message} errors
        """
        response = await plugin.validate(config)
        return response.model_dump(mode="json")
