"""Models and schemas for the Hex publish plugin."""

from .schemas import (
    ExecuteRequest,
    ExecuteResponse,
    Hook,
    InvocationPlan,
    PluginInfo,
    ReleaseContext,
    ValidateResponse,
    ValidationIssue,
)

__all__ = [
    "ExecuteRequest",
    "ExecuteResponse",
    "Hook",
    "InvocationPlan",
    "PluginInfo",
    "ReleaseContext",
    "ValidateResponse",
    "ValidationIssue",
]
