"""Configuration management for the Hex publish plugin."""

import os
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, SecretStr


def _timeout_from_env() -> float | None:
    raw = os.environ.get("HEX_PLUGIN_TIMEOUT", "600")
    return float(raw) if raw else None


class Settings(BaseModel):
    """Server settings loaded from environment variables."""

    # Seconds to wait for `mix hex.publish`; None waits forever
    command_timeout: float | None = Field(default_factory=_timeout_from_env)
    log_level: str = Field(default_factory=lambda: os.environ.get("HEX_PLUGIN_LOG_LEVEL", "INFO").upper())


class ConfigParser:
    """
    Typed accessors over the raw, loosely-typed plugin configuration.

    Hosts hand over whatever the user wrote in their release config, so values
    may be missing, of the wrong type, or booleans spelled as strings.
    """

    def __init__(self, raw: Mapping[str, Any] | None, environ: Mapping[str, str] | None = None):
        self.raw = raw or {}
        self.environ = os.environ if environ is None else environ

    def get_string(self, key: str, env_var: str | None = None, default: str = "") -> str:
        """Get a string value: config first, then the environment variable, then the default."""
        value = self.raw.get(key)
        if isinstance(value, str) and value:
            return value

        if env_var:
            env_value = self.environ.get(env_var, "")
            if env_value:
                return env_value

        return default

    def get_bool(self, key: str, default: bool = False) -> bool:
        """Get a boolean value, accepting the strings "true" and "false"."""
        value = self.raw.get(key)
        if isinstance(value, bool):
            return value
        if value == "true":
            return True
        if value == "false":
            return False
        return default


class HexConfig(BaseModel):
    """Resolved Hex plugin configuration for a single invocation."""

    model_config = ConfigDict(frozen=True)

    api_key: SecretStr = SecretStr("")
    organization: str = ""
    replace: bool = False
    yes: bool = True
    work_dir: str = "."

    @classmethod
    def resolve(
        cls,
        raw: Mapping[str, Any] | None,
        environ: Mapping[str, str] | None = None,
    ) -> "HexConfig":
        """
        Merge raw config values with environment fallbacks and defaults.

        No safety checks happen here; see services.validation for those.

        Args:
            raw: Untyped configuration mapping from the host (may be None)
            environ: Environment to read fallbacks from (defaults to os.environ)
        """
        parser = ConfigParser(raw, environ)
        return cls(
            api_key=SecretStr(parser.get_string("api_key", "HEX_API_KEY")),
            organization=parser.get_string("organization", "HEX_ORGANIZATION"),
            replace=parser.get_bool("replace", False),
            yes=parser.get_bool("yes", True),
            work_dir=parser.get_string("work_dir", default="."),
        )

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key.get_secret_value())
