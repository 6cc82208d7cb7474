"""Services for the Hex publish plugin."""

from .command import build_invocation, normalize_version
from .executor import CommandExecutionError, CommandExecutor, RecordingExecutor, SubprocessExecutor
from .validation import (
    InvalidOrganizationError,
    InvalidPathError,
    validate_organization,
    validate_work_dir,
)

__all__ = [
    "build_invocation",
    "normalize_version",
    "CommandExecutionError",
    "CommandExecutor",
    "RecordingExecutor",
    "SubprocessExecutor",
    "InvalidOrganizationError",
    "InvalidPathError",
    "validate_organization",
    "validate_work_dir",
]
