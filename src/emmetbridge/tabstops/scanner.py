"""Scanner for extracting tabstop placeholders from expanded templates."""

import logging
from typing import Optional

from .models import Placeholder, Segment
from .syntax import PLACEHOLDER_OPEN_PATTERN, find_closing_brace

logger = logging.getLogger(__name__)


class PlaceholderScanner:
    """Split templates into literal text and placeholder tokens."""

    def tokenize(self, text: str, offset: int = 0) -> list[Segment]:
        """
        Tokenize a template into literal text and placeholders.

        Escaped characters (`\\$`, `\\\\`, ...) become plain literal text.
        Anything that looks like a placeholder but is not well formed is
        kept as literal text.

        Args:
            text: The template to scan
            offset: Position of `text` inside the outermost template, used
                so nested placeholders report absolute offsets

        Returns:
            Segments in textual order; literals are plain strings
        """
        segments: list[Segment] = []
        literal: list[str] = []
        pos = 0

        while pos < len(text):
            ch = text[pos]

            if ch == "\\" and pos + 1 < len(text):
                literal.append(text[pos + 1])
                pos += 2
                continue

            if ch == "$":
                placeholder = self._read_placeholder(text, pos, offset)
                if placeholder:
                    if literal:
                        segments.append("".join(literal))
                        literal = []
                    segments.append(placeholder)
                    pos = placeholder.end - offset
                    continue

            literal.append(ch)
            pos += 1

        if literal:
            segments.append("".join(literal))

        return segments

    def extract_placeholders(self, text: str) -> list[Placeholder]:
        """
        Extract all placeholders, nested ones included.

        Args:
            text: The template to scan

        Returns:
            Placeholders in order of first appearance (outer before nested)
        """
        placeholders = []
        for segment in self.tokenize(text):
            if isinstance(segment, Placeholder):
                placeholders.append(segment)
                placeholders.extend(segment.nested())
        return placeholders

    def _read_placeholder(self, text: str, pos: int, offset: int) -> Optional[Placeholder]:
        """Read a `${N}` or `${N:default}` token starting at `pos`."""
        match = PLACEHOLDER_OPEN_PATTERN.match(text, pos)
        if not match:
            return None

        group = int(match.group(1))

        if match.group(2) == "}":
            return Placeholder(
                group=group,
                token=match.group(0),
                start=offset + pos,
                end=offset + match.end(),
            )

        close = find_closing_brace(text, match.end())
        if close == -1:
            logger.debug(f"Unterminated placeholder at offset {offset + pos}, keeping as text")
            return None

        default = text[match.end():close]
        return Placeholder(
            group=group,
            token=text[pos:close + 1],
            text=default,
            children=self.tokenize(default, offset + match.end()),
            start=offset + pos,
            end=offset + close + 1,
        )
