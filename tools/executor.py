"""
Tool Executor
-------------
Single entry point for calling a registered tool by name.

Flow:
- look up the tool (unknown name -> failure)
- validate arguments against its schema (invalid -> failure, handler not called)
- await the handler inside a logging call context
- convert anything that escapes the handler into a failure
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional
import logging

from core.errors import ErrorCategory, classify_exception, log_level_for
from infra.logging import CallContext

from .registry import ToolRegistry, ToolResult


class ToolExecutor:
    """Validates and dispatches tool calls against a registry."""

    def __init__(self, registry: ToolRegistry):
        self.registry = registry
        self._logger = logging.getLogger("pages.tools.executor")

    async def execute(
        self,
        tool_name: str,
        args: Optional[Dict[str, Any]] = None,
        call_id: Optional[str] = None
    ) -> ToolResult:
        """
        Execute a tool call.

        Never raises: every outcome is returned as a ToolResult.
        """
        args = {} if args is None else args

        with CallContext(call_id):
            tool = self.registry.get(tool_name)
            if tool is None:
                self._logger.log(
                    log_level_for(ErrorCategory.UNKNOWN_TOOL),
                    f"Unknown tool: {tool_name}"
                )
                return ToolResult.fail(f"Unknown tool: {tool_name}")

            valid, error = tool.validate_args(args)
            if not valid:
                self._logger.log(
                    log_level_for(ErrorCategory.VALIDATION_ERROR),
                    f"Validation failed for {tool_name}: {error}"
                )
                return ToolResult.fail(error)

            start_time = datetime.now(timezone.utc)
            try:
                result = await tool.handler(args)
            except Exception as e:
                category = classify_exception(e)
                self._logger.log(
                    log_level_for(category),
                    f"Handler for {tool_name} raised: {e}",
                    exc_info=category == ErrorCategory.SYSTEM_ERROR
                )
                result = ToolResult.fail(str(e))

            execution_time = (datetime.now(timezone.utc) - start_time).total_seconds() * 1000
            self._logger.info(
                f"Executed {tool_name}: {'success' if result.success else 'error'}",
                extra={
                    "tool_name": tool_name,
                    "success": result.success,
                    "execution_time_ms": execution_time,
                }
            )
            return result
