"""
Script Builder
--------------
Composes AppleScript for a scriptable application from a fixed set of
statement templates.

Every value that reaches the script goes through one of the literal
renderers below, so the full set of interpolation points is the set of
functions in this module.
"""

from typing import Iterable, List, Tuple, Union
import math

from .sanitize import quote


Number = Union[int, float]


def string_literal(value: str) -> str:
    """Render a sanitized, quoted string."""
    return quote(value)


def boolean_literal(value: bool) -> str:
    """Render an AppleScript boolean."""
    return "true" if value else "false"


def number_literal(value: Number) -> str:
    """Render an integer or real without a trailing '.0' for whole values."""
    if isinstance(value, bool):
        raise TypeError("Booleans are not numbers here")
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError(f"Not a finite number: {value}")
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value)


def property_record(pairs: Iterable[Tuple[str, str]]) -> str:
    """
    Render an AppleScript record from (key, rendered value) pairs.

    Values must already be rendered by one of the literal functions.
    Returns an empty string when there are no pairs, so callers can skip
    the clause entirely.
    """
    body = ", ".join(f"{key}:{value}" for key, value in pairs)
    return f"{{{body}}}" if body else ""


class ScriptBuilder:
    """
    Builds a `tell application` block line by line.

    Usage:
        script = (
            ScriptBuilder("Pages")
            .ensure_document()
            .tell_document('set body text to "Hello"')
            .build()
        )
    """

    INDENT = "  "

    def __init__(self, application: str = "Pages"):
        self._application = application
        self._lines: List[str] = []

    def statement(self, text: str) -> "ScriptBuilder":
        """Add a raw statement inside the application block."""
        self._lines.append(f"{self.INDENT}{text}")
        return self

    def ensure_document(self) -> "ScriptBuilder":
        """Create a document when none is open."""
        return self.statement("if not (exists document 1) then make new document")

    def require_document(self, message: str = "No document open") -> "ScriptBuilder":
        """Raise an AppleScript error when no document is open."""
        return self.statement(
            f"if not (exists document 1) then error {string_literal(message)}"
        )

    def return_if_no_document(self, text: str) -> "ScriptBuilder":
        """Return text early when no document is open."""
        return self.statement(
            f"if not (exists document 1) then return {string_literal(text)}"
        )

    def tell(self, target: str, *statements: str) -> "ScriptBuilder":
        """Wrap statements in a nested tell block addressed to target."""
        self.statement(f"tell {target}")
        for text in statements:
            self.statement(f"{self.INDENT}{text}")
        return self.statement("end tell")

    def tell_document(self, *statements: str, index: int = 1) -> "ScriptBuilder":
        """Wrap statements in a tell block for document N (1 = frontmost)."""
        return self.tell(f"document {int(index)}", *statements)

    def build(self) -> str:
        lines = [f"tell application {string_literal(self._application)}"]
        lines.extend(self._lines)
        lines.append("end tell")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"ScriptBuilder(application={self._application!r}, lines={len(self._lines)})"


def with_properties(record: str) -> str:
    """Render a ' with properties {...}' suffix, or nothing for an empty record."""
    return f" with properties {record}" if record else ""
