"""Tabstop syntax definitions and escaping helpers."""

import re
from typing import Optional, Pattern

# ${N} or ${N:default} - the opening part of a placeholder
PLACEHOLDER_OPEN_PATTERN: Pattern = re.compile(r"\$\{([0-9]+)(:|\})")

# Trailing final-stop marker appended by the exit point policy
FINAL_TABSTOP_PATTERN: Pattern = re.compile(r"\$\{0\}$")

FINAL_TABSTOP = "${0}"


def escape_literal(text: str, braces: bool = False) -> str:
    """
    Escape characters that would otherwise be read as tabstop syntax.

    Args:
        text: Plain text
        braces: Also escape `{` and `}`, for text inside a placeholder's
            default text where a bare brace would end the placeholder

    Returns:
        Text with every `$` and `\\` (and braces if asked) prefixed by a
        backslash
    """
    if braces:
        return re.sub(r"([$\\{}])", r"\\\1", text)
    return re.sub(r"([$\\])", r"\\\1", text)


def render_placeholder(index: int, default: Optional[str] = None) -> str:
    """Render a placeholder token for the given final index."""
    if default:
        return f"${{{index}:{default}}}"
    return f"${{{index}}}"


def find_closing_brace(text: str, start: int) -> int:
    """
    Find the brace closing the one opened just before `start`.

    Nested braces are counted and backslash-escaped characters are skipped.

    Args:
        text: Text to search
        start: Position right after the opening brace

    Returns:
        Index of the closing brace, or -1 if it is never closed
    """
    depth = 1
    pos = start
    while pos < len(text):
        ch = text[pos]
        if ch == "\\":
            pos += 2
            continue
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return pos
        pos += 1
    return -1
