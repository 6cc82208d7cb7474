"""Translate a resolved HexConfig into a `mix hex.publish` invocation."""

from ..config import HexConfig
from ..models.schemas import InvocationPlan

MIX_COMMAND = "mix"
PUBLISH_TASK = "hex.publish"
API_KEY_ENV = "HEX_API_KEY"


def normalize_version(version: str) -> str:
    """Strip a single leading 'v' from a release version ('v1.2.0' -> '1.2.0')."""
    return version[1:] if version.startswith("v") else version


def _build_args(config: HexConfig) -> list[str]:
    # Flag order is fixed so dry-run previews are reproducible
    args = [PUBLISH_TASK]

    if config.organization:
        args.extend(["--organization", config.organization])

    if config.replace:
        args.append("--replace")

    if config.yes:
        args.append("--yes")

    return args


def build_invocation(
    config: HexConfig,
    version: str,
    *,
    include_credential: bool = False,
) -> InvocationPlan:
    """
    Build the invocation plan for publishing `version`.

    Args:
        config: Resolved (and already validated) plugin configuration
        version: Release version, optionally prefixed with 'v'
        include_credential: Add HEX_API_KEY to the env overrides; only needed
            when the command is actually going to run

    Returns:
        InvocationPlan with the mix command, ordered args and env overrides
    """
    env = {}
    if include_credential:
        env[API_KEY_ENV] = config.api_key.get_secret_value()

    return InvocationPlan(
        command=MIX_COMMAND,
        args=tuple(_build_args(config)),
        env=env,
        version=normalize_version(version),
        work_dir=config.work_dir,
    )
