"""
Error Handling Module
---------------------
Typed errors for the Pages tool layer.

Every failure ends up as a ToolResult. These types only exist so the
layers below a handler can say *why* something failed before the
handler turns it into an error message.
"""

from enum import Enum, auto
from typing import Optional
import logging


class ErrorCategory(Enum):
    """Categories of errors for logging and reporting."""
    VALIDATION_ERROR = auto()   # Parameters rejected before any script runs
    EXECUTION_ERROR = auto()    # osascript failed, or Pages reported an error
    UNKNOWN_TOOL = auto()       # No tool registered under that name
    SYSTEM_ERROR = auto()       # Bug in this package


class PagesToolError(Exception):
    """Base class for errors raised inside the tool layer."""
    category: ErrorCategory = ErrorCategory.SYSTEM_ERROR


class ParameterError(PagesToolError):
    """
    Parameters have the right shape for the schema but make no sense.

    Raised before a script is built, so nothing has been spawned.
    """
    category = ErrorCategory.VALIDATION_ERROR

    def __init__(self, message: str, field: str = ""):
        super().__init__(message)
        self.field = field


class ScriptExecutionError(PagesToolError):
    """The automation interpreter exited non-zero or could not be started."""
    category = ErrorCategory.EXECUTION_ERROR

    def __init__(
        self,
        message: str,
        returncode: Optional[int] = None,
        stderr: str = ""
    ):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr

    def __repr__(self) -> str:
        return f"ScriptExecutionError(returncode={self.returncode}, message={self})"


_LEVELS = {
    ErrorCategory.VALIDATION_ERROR: logging.WARNING,
    ErrorCategory.EXECUTION_ERROR: logging.ERROR,
    ErrorCategory.UNKNOWN_TOOL: logging.WARNING,
    ErrorCategory.SYSTEM_ERROR: logging.CRITICAL,
}


def classify_exception(exc: BaseException) -> ErrorCategory:
    """Map an exception to its error category."""
    if isinstance(exc, PagesToolError):
        return exc.category
    return ErrorCategory.SYSTEM_ERROR


def log_level_for(category: ErrorCategory) -> int:
    """Logging level used when reporting an error of this category."""
    return _LEVELS.get(category, logging.ERROR)
