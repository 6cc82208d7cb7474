"""Safety checks for values that end up on the `mix` command line."""

import os
import posixpath
import re

MAX_ORGANIZATION_LENGTH = 128

_ORGANIZATION_PATTERN = re.compile(r"[A-Za-z0-9_-]+")
_SEPARATORS = re.compile(r"[/\\]" if os.sep == "\\" else r"/")


class InvalidPathError(ValueError):
    """Raised when work_dir is absolute or escapes the project root."""
    pass


class InvalidOrganizationError(ValueError):
    """Raised when an organization name is unsafe to pass to mix."""
    pass


class OrganizationNameTooLongError(InvalidOrganizationError):
    """Raised when an organization name exceeds MAX_ORGANIZATION_LENGTH."""
    pass


class OrganizationInvalidCharactersError(InvalidOrganizationError):
    """Raised when an organization name contains characters outside [A-Za-z0-9_-]."""
    pass


def _is_absolute(path: str) -> bool:
    return posixpath.isabs(path) or os.path.isabs(path)


def validate_work_dir(path: str) -> None:
    """
    Validate a working directory path without touching the filesystem.

    Empty means "use the default" and is accepted. The path must be relative
    and must not contain a '..' component, neither as written nor after
    lexical cleaning, so 'a/../b' is rejected as well.

    Raises:
        InvalidPathError if the path is absolute or contains '..'
    """
    if not path:
        return

    cleaned = posixpath.normpath(path.replace(os.sep, "/"))

    if _is_absolute(path):
        raise InvalidPathError("absolute paths are not allowed")

    segments = _SEPARATORS.split(path) + cleaned.split("/")
    if ".." in segments:
        raise InvalidPathError("path traversal detected: cannot use '..' to escape working directory")


def validate_organization(name: str) -> None:
    """
    Validate a Hex.pm organization name.

    Empty means "no organization" and is accepted.

    Raises:
        OrganizationNameTooLongError if longer than 128 characters
        OrganizationInvalidCharactersError if anything but letters, digits, '-' or '_' appears
    """
    if not name:
        return

    if len(name) > MAX_ORGANIZATION_LENGTH:
        raise OrganizationNameTooLongError(
            f"organization name too long (max {MAX_ORGANIZATION_LENGTH} characters)"
        )

    if not _ORGANIZATION_PATTERN.fullmatch(name):
        raise OrganizationInvalidCharactersError(
            "organization name contains invalid characters: "
            "only alphanumeric, hyphens, and underscores are allowed"
        )
