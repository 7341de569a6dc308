# Core module - error taxonomy shared by every layer

from .errors import (
    ErrorCategory,
    PagesToolError,
    ParameterError,
    ScriptExecutionError,
    classify_exception,
    log_level_for,
)

__all__ = [
    "ErrorCategory",
    "PagesToolError",
    "ParameterError",
    "ScriptExecutionError",
    "classify_exception",
    "log_level_for",
]
