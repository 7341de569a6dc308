"""
AppleScript String Sanitizer
----------------------------
Makes arbitrary text safe to embed in a double-quoted AppleScript
string literal.
"""

# Backslash must be handled first so the escapes added below are not
# escaped a second time.
_ESCAPES = (
    ("\\", "\\\\"),
    ('"', '\\"'),
    ("\r", "\\r"),
    ("\n", "\\n"),
)


def sanitize(text: str) -> str:
    """Escape text for use inside an AppleScript string literal."""
    for raw, escaped in _ESCAPES:
        text = text.replace(raw, escaped)
    return text


def quote(text: str) -> str:
    """Sanitize text and wrap it in double quotes."""
    return f'"{sanitize(text)}"'
