"""Hex.pm publish plugin: hook dispatch and the publish flow."""

import logging
from typing import Any, Mapping

from .config import ConfigParser, HexConfig
from .models.schemas import (
    ExecuteRequest,
    ExecuteResponse,
    Hook,
    PluginInfo,
    ReleaseContext,
    ValidateResponse,
    ValidationIssue,
)
from .services.command import build_invocation
from .services.executor import CommandExecutionError, CommandExecutor, SubprocessExecutor
from .services.validation import (
    InvalidOrganizationError,
    InvalidPathError,
    validate_organization,
    validate_work_dir,
)

logger = logging.getLogger(__name__)

CONFIG_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "api_key": {"type": "string", "description": "Hex.pm API key (or use HEX_API_KEY env)"},
        "organization": {"type": "string", "description": "Hex.pm organization for private packages"},
        "replace": {"type": "boolean", "description": "Replace existing package version", "default": False},
        "yes": {"type": "boolean", "description": "Skip confirmation prompt", "default": True},
        "work_dir": {"type": "string", "description": "Working directory for mix command", "default": "."},
    },
}

MISSING_API_KEY_ERROR = "HEX_API_KEY is required: set api_key in config or HEX_API_KEY environment variable"


class HexPlugin:
    """
    Publishes packages to Hex.pm by running `mix hex.publish`.

    Only the post-publish hook does anything; every other hook is acknowledged
    and ignored.
    """

    def __init__(
        self,
        executor: CommandExecutor | None = None,
        environ: Mapping[str, str] | None = None,
    ):
        self.executor = executor if executor is not None else SubprocessExecutor()
        self.environ = environ

    def get_info(self) -> PluginInfo:
        """Return plugin metadata."""
        return PluginInfo(
            name="hex",
            version="2.0.0",
            description="Publish packages to Hex.pm (Elixir)",
            author="Relicta Team",
            hooks=[Hook.POST_PUBLISH],
            config_schema=CONFIG_SCHEMA,
        )

    async def execute(self, request: ExecuteRequest) -> ExecuteResponse:
        """Run the plugin for the hook in `request`."""
        config = HexConfig.resolve(request.config, self.environ)

        if request.hook == Hook.POST_PUBLISH.value:
            return await self.publish(config, request.context, request.dry_run)

        return ExecuteResponse(success=True, message=f"Hook {request.hook} not handled")

    async def publish(self, config: HexConfig, context: ReleaseContext, dry_run: bool) -> ExecuteResponse:
        """
        Publish the package with `mix hex.publish`.

        Every failure is reported through the response; nothing is raised.
        """
        try:
            validate_work_dir(config.work_dir)
        except InvalidPathError as e:
            logger.warning("Rejected work_dir %r: %s", config.work_dir, e)
            return ExecuteResponse(success=False, error=f"invalid work_dir: {e}")

        try:
            validate_organization(config.organization)
        except InvalidOrganizationError as e:
            logger.warning("Rejected organization %r: %s", config.organization, e)
            return ExecuteResponse(success=False, error=f"invalid organization: {e}")

        if dry_run:
            plan = build_invocation(config, context.version)
            logger.info("Dry run: would run %s", plan.command_line)
            return ExecuteResponse(
                success=True,
                message="Would publish package to Hex.pm",
                outputs={
                    "command": plan.command_line,
                    "version": plan.version,
                    "organization": config.organization,
                    "replace": config.replace,
                },
            )

        if not config.has_api_key:
            logger.warning("No Hex.pm API key configured")
            return ExecuteResponse(success=False, error=MISSING_API_KEY_ERROR)

        plan = build_invocation(config, context.version, include_credential=True)
        logger.info("Publishing version %s to Hex.pm", plan.version)
        logger.debug("Running %s in %s", plan.command_line, plan.work_dir)

        # A cancelled task has no caller left to read a response, so
        # CancelledError propagates; the executor has already killed mix.
        try:
            output = await self.executor.run(plan.command, list(plan.args), plan.env, plan.work_dir)
        except CommandExecutionError as e:
            failed_output = e.output.decode(errors="replace")
            logger.error("mix hex.publish failed: %s", e)
            return ExecuteResponse(
                success=False,
                error=f"mix hex.publish failed: {e}\nOutput: {failed_output}",
            )

        logger.info("Published version %s to Hex.pm", plan.version)
        return ExecuteResponse(
            success=True,
            message=f"Published package v{plan.version} to Hex.pm",
            outputs={
                "version": plan.version,
                "organization": config.organization,
                "output": output.decode(errors="replace"),
            },
        )

    async def validate(self, config: Mapping[str, Any] | None) -> ValidateResponse:
        """Validate a raw plugin configuration, attributing errors to config keys."""
        parser = ConfigParser(config, self.environ)
        errors = []

        try:
            validate_work_dir(parser.get_string("work_dir", default="."))
        except InvalidPathError as e:
            errors.append(ValidationIssue(field="work_dir", message=str(e)))

        try:
            validate_organization(parser.get_string("organization", "HEX_ORGANIZATION"))
        except InvalidOrganizationError as e:
            errors.append(ValidationIssue(field="organization", message=str(e)))

        return ValidateResponse(valid=not errors, errors=errors)
