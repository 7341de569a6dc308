"""
Sanitizer Tests
---------------
Escaping rules for AppleScript string literals.
"""

import re

import pytest

from scripting.sanitize import quote, sanitize


def _unescaped_quotes(text: str) -> list:
    """Double quotes not preceded by an odd run of backslashes."""
    return [
        m for m in re.finditer(r'"', text)
        if (len(text[:m.start()]) - len(text[:m.start()].rstrip("\\"))) % 2 == 0
    ]


def _unescape(text: str) -> str:
    """Decode an AppleScript string literal body."""
    mapping = {"n": "\n", "r": "\r", '"': '"', "\\": "\\"}
    return re.sub(r"\\(.)", lambda m: mapping[m.group(1)], text)


class TestSanitize:

    def test_plain_text_unchanged(self):
        assert sanitize("Hello world") == "Hello world"

    def test_empty_string(self):
        assert sanitize("") == ""

    def test_quotes_and_newline(self):
        """The documented example: escaped quotes and a literal backslash-n."""
        assert sanitize('He said "hi"\nBye') == 'He said \\"hi\\"\\nBye'

    def test_carriage_return(self):
        assert sanitize("a\r\nb") == "a\\r\\nb"

    def test_backslash_escaped(self):
        assert sanitize("C:\\temp") == "C:\\\\temp"

    def test_trailing_backslash_cannot_close_literal(self):
        literal = quote('oops\\')
        assert literal == '"oops\\\\"'
        # Only the opening and closing delimiters remain unescaped
        assert [m.start() for m in _unescaped_quotes(literal)] == [0, len(literal) - 1]

    @pytest.mark.parametrize("text", [
        '"',
        '\\"',
        'end tell" & do shell script "rm -rf ~',
        "line1\nline2\n",
        'mixed \\ "quotes" \r\n and \\n literal',
    ])
    def test_no_unescaped_quote_or_raw_newline(self, text):
        out = sanitize(text)
        assert "\n" not in out
        assert "\r" not in out
        assert not _unescaped_quotes(out)

    @pytest.mark.parametrize("text", [
        'He said "hi"\nBye',
        '\\"already escaped\\"',
        "tabs\tstay",
    ])
    def test_decodes_back_to_input(self, text):
        assert _unescape(sanitize(text)) == text

    def test_sanitizing_twice_decodes_to_once(self):
        """A second pass escapes the first pass literally, it does not corrupt it."""
        once = sanitize('say "hi"\n')
        twice = sanitize(once)
        assert _unescape(twice) == once
        assert not _unescaped_quotes(twice)


class TestQuote:

    def test_wraps_in_quotes(self):
        assert quote("Blank") == '"Blank"'

    def test_sanitizes_content(self):
        assert quote('a"b') == '"a\\"b"'
