# Tools module - Pages tool registry and dispatch
# Each tool: name, JSON schema, permission, async handler returning a ToolResult
# The schema is the only gate between a caller and script construction

from typing import Optional

from infra.config import AutomationSettings
from scripting import ScriptExecutor, SubprocessScriptExecutor

from .registry import (
    ToolRegistry,
    Tool,
    ToolSchema,
    ToolParameter,
    ToolResult,
    ParameterType,
    PermissionLevel,
)
from .pages import PagesTools, build_pages_tools, NO_DOCUMENT_SENTINEL
from .executor import ToolExecutor


def create_pages_registry(
    executor: Optional[ScriptExecutor] = None,
    settings: Optional[AutomationSettings] = None
) -> ToolRegistry:
    """Create a registry holding every Pages tool."""
    settings = settings or AutomationSettings()
    registry = ToolRegistry()
    for tool in build_pages_tools(
        executor or SubprocessScriptExecutor(),
        application=settings.application,
        interpreter=settings.interpreter,
    ):
        registry.register(tool)
    return registry


__all__ = [
    "ToolRegistry",
    "Tool",
    "ToolSchema",
    "ToolParameter",
    "ToolResult",
    "ParameterType",
    "PermissionLevel",
    "PagesTools",
    "build_pages_tools",
    "create_pages_registry",
    "NO_DOCUMENT_SENTINEL",
    "ToolExecutor",
]
