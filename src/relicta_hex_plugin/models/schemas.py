"""Pydantic models for the plugin host protocol."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Hook(str, Enum):
    """Release lifecycle hooks a host can fire."""
    PRE_INIT = "pre-init"
    POST_INIT = "post-init"
    PRE_PLAN = "pre-plan"
    POST_PLAN = "post-plan"
    PRE_VERSION = "pre-version"
    POST_VERSION = "post-version"
    PRE_NOTES = "pre-notes"
    POST_NOTES = "post-notes"
    PRE_APPROVE = "pre-approve"
    POST_APPROVE = "post-approve"
    PRE_PUBLISH = "pre-publish"
    POST_PUBLISH = "post-publish"
    ON_SUCCESS = "on-success"
    ON_ERROR = "on-error"

    def __str__(self) -> str:
        return self.value


class ReleaseContext(BaseModel):
    """Release information supplied by the host."""
    version: str = ""
    previous_version: str = ""
    tag_name: str = ""
    branch: str = ""
    commit_sha: str = ""
    changelog: str = ""
    release_notes: str = ""
    repository_url: str = ""


class ExecuteRequest(BaseModel):
    """A hook invocation from the host."""
    hook: str
    config: dict[str, Any] | None = None
    dry_run: bool = False
    context: ReleaseContext = Field(default_factory=ReleaseContext)


class ExecuteResponse(BaseModel):
    """Result of a hook invocation."""
    success: bool
    message: str = ""
    error: str | None = None
    outputs: dict[str, Any] = Field(default_factory=dict)


class ValidationIssue(BaseModel):
    """A configuration problem attributed to one config key."""
    field: str
    message: str


class ValidateResponse(BaseModel):
    """Result of validating a plugin configuration."""
    valid: bool
    errors: list[ValidationIssue] = Field(default_factory=list)


class PluginInfo(BaseModel):
    """Plugin metadata advertised to the host."""
    name: str
    version: str
    description: str
    author: str
    hooks: list[Hook]
    config_schema: dict[str, Any]


class InvocationPlan(BaseModel):
    """Fully resolved external command: what runs, where, and with which env overrides."""

    model_config = ConfigDict(frozen=True)

    command: str
    args: tuple[str, ...]
    env: dict[str, str] = Field(default_factory=dict, repr=False)
    version: str
    work_dir: str = "."

    @property
    def command_line(self) -> str:
        """Human-readable command, e.g. 'mix hex.publish --yes'."""
        return " ".join((self.command, *self.args))
