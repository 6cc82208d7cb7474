"""Tests for work_dir and organization validation."""

import pytest

from relicta_hex_plugin.services.validation import (
    InvalidOrganizationError,
    InvalidPathError,
    OrganizationInvalidCharactersError,
    OrganizationNameTooLongError,
    validate_organization,
    validate_work_dir,
)


class TestValidateWorkDir:
    @pytest.mark.parametrize(
        "path",
        ["", ".", "packages/lib", "./lib", "lib/", "a/./b", "..hidden", "dir..name/sub"],
    )
    def test_relative_paths_allowed(self, path):
        """Test relative paths without '..' components pass."""
        validate_work_dir(path)

    @pytest.mark.parametrize("path", ["/etc", "/", "//server/share", "/home/user/project"])
    def test_absolute_paths_rejected(self, path):
        """Test absolute paths are rejected."""
        with pytest.raises(InvalidPathError, match="absolute paths are not allowed"):
            validate_work_dir(path)

    @pytest.mark.parametrize("path", ["..", "../", "../../etc", "lib/../..", "a/b/../../../c"])
    def test_traversal_rejected(self, path):
        """Test paths escaping the working directory are rejected."""
        with pytest.raises(InvalidPathError, match="path traversal detected"):
            validate_work_dir(path)

    def test_inner_traversal_rejected(self):
        """Test '..' is rejected even when it would cancel out lexically."""
        with pytest.raises(InvalidPathError):
            validate_work_dir("a/../b")

    def test_is_value_error(self):
        """Test path errors can be handled as ValueError."""
        with pytest.raises(ValueError):
            validate_work_dir("../secret")


class TestValidateOrganization:
    @pytest.mark.parametrize("name", ["", "my-org", "My_Org_2", "a", "ORG", "0-_-0", "x" * 128])
    def test_valid_names(self, name):
        """Test names over [A-Za-z0-9_-] up to 128 characters pass."""
        validate_organization(name)

    def test_too_long(self):
        """Test names over 128 characters are rejected."""
        with pytest.raises(OrganizationNameTooLongError, match="max 128 characters"):
            validate_organization("x" * 129)

    @pytest.mark.parametrize(
        "name",
        ["my org", "my org; rm -rf /", "org$(whoami)", "org/name", "org.name", "--replace", "café", "org\n"],
    )
    def test_invalid_characters(self, name):
        """Test any character outside the safe set is rejected."""
        with pytest.raises(OrganizationInvalidCharactersError, match="invalid characters"):
            validate_organization(name)

    def test_errors_share_base_class(self):
        """Test both organization errors derive from InvalidOrganizationError."""
        assert issubclass(OrganizationNameTooLongError, InvalidOrganizationError)
        assert issubclass(OrganizationInvalidCharactersError, InvalidOrganizationError)
