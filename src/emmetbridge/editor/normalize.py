"""Line-based text normalization applied before insertion."""

import re
from typing import Pattern

LINE_BREAK_PATTERN: Pattern = re.compile(r"\r\n|\r|\n")
LEADING_SPACE_PATTERN: Pattern = re.compile(r"^\s+")


def split_lines(text: str) -> list[str]:
    """Split text on any line break style."""
    return LINE_BREAK_PATTERN.split(text)


def get_line_indent(line: str) -> str:
    """Return the leading whitespace of a line."""
    match = re.match(r"[ \t]*", line)
    return match.group(0) if match else ""


class TextNormalizer:
    """
    Normalize newlines, indentation and trailing whitespace.

    The engine emits `\\n` newlines and one tab per nesting level; hosts may
    want other newline styles and spaces instead of tabs.
    """

    def __init__(
        self,
        newline: str = "\n",
        indentation: str = "\t",
        trim_trailing_whitespace: bool = False,
    ):
        self.newline = newline
        self.indentation = indentation
        self.trim_trailing_whitespace = trim_trailing_whitespace

    def normalize_line(self, line: str, trim: bool = True) -> str:
        """Normalize a single line (no line breaks)."""
        if self.indentation != "\t":
            line = LEADING_SPACE_PATTERN.sub(
                lambda m: m.group(0).replace("\t", self.indentation), line
            )
        if trim and self.trim_trailing_whitespace:
            line = line.rstrip()
        return line

    def normalize(self, text: str) -> str:
        """Normalize every line of `text` and join with the host newline."""
        return self.newline.join(self.normalize_line(line) for line in split_lines(text))
