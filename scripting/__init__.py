# Scripting module - AppleScript composition and execution
# The executor here is the only code in the package that spawns processes

from .sanitize import sanitize, quote
from .builder import (
    ScriptBuilder,
    string_literal,
    boolean_literal,
    number_literal,
    property_record,
    with_properties,
)
from .executor import (
    ScriptExecutor,
    ScriptInvocation,
    SubprocessScriptExecutor,
    run_applescript,
    DEFAULT_INTERPRETER,
)

__all__ = [
    "sanitize",
    "quote",
    "ScriptBuilder",
    "string_literal",
    "boolean_literal",
    "number_literal",
    "property_record",
    "with_properties",
    "ScriptExecutor",
    "ScriptInvocation",
    "SubprocessScriptExecutor",
    "run_applescript",
    "DEFAULT_INTERPRETER",
]
