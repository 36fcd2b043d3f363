"""Insertion planning: turn renumbered text into a document edit."""

import logging
from typing import TYPE_CHECKING, Optional

from ..tabstops.models import ExitPoint
from .models import InsertionPlan
from .normalize import LINE_BREAK_PATTERN, TextNormalizer, split_lines

if TYPE_CHECKING:
    from .base import EditorProxy

logger = logging.getLogger(__name__)


def reindent(text: str, indent: str) -> str:
    """
    Indent every non-blank line after the first with `indent`.

    The relative indentation of the text is kept, so nested lines stay
    nested under the first one. Text coming from a plan is already
    indented and is inserted with `skip_indent_normalization`, which is how
    the host avoids indenting it twice.
    """
    if not indent:
        return text
    lines = split_lines(text)
    breaks = [m.group(0) for m in LINE_BREAK_PATTERN.finditer(text)]
    parts = [lines[0]]
    for line_break, line in zip(breaks, lines[1:]):
        parts.append(line_break)
        parts.append(indent + line if line.strip() else line)
    return "".join(parts)


class InsertionPlanner:
    """Compute the replacement text and final caret span for an insertion."""

    def __init__(self, normalizer: Optional[TextNormalizer] = None):
        self.normalizer = normalizer or TextNormalizer()

    def plan(
        self,
        text: str,
        start: int,
        end: int,
        exit_point: Optional[ExitPoint] = None,
        indent: str = "",
        preserve_indent: bool = True,
        already_indented: bool = False,
    ) -> InsertionPlan:
        """
        Plan the insertion of `text` over `[start, end)`.

        Args:
            text: Renumbered text to insert
            start: Start of the replaced span in the document
            end: End of the replaced span in the document
            exit_point: Exit point in `text` coordinates, if any
            indent: Indentation of the document line containing `start`
            preserve_indent: Indent lines after the first with `indent`
            already_indented: `text` already carries the document
                indentation (e.g. the text of an earlier plan)

        Returns:
            InsertionPlan describing the edit and the caret afterwards
        """
        if start < 0 or start > end:
            raise ValueError(f"Invalid replace span [{start}, {end})")

        lines = [self.normalizer.normalize_line(line) for line in split_lines(text)]
        pad = indent if preserve_indent and not already_indented else ""
        pads = [""] + [pad if line.strip() else "" for line in lines[1:]]
        out_lines = [p + line for p, line in zip(pads, lines)]
        new_text = self.normalizer.newline.join(out_lines)

        if exit_point is not None:
            caret_start = start + self._map_offset(text, exit_point.start, out_lines, pads)
            caret_end = start + self._map_offset(text, exit_point.end, out_lines, pads)
        else:
            caret_start = caret_end = start + len(new_text)

        logger.debug(
            f"Planned insertion of {len(new_text)} chars over [{start}, {end}), "
            f"caret at [{caret_start}, {caret_end})"
        )

        return InsertionPlan(
            text=new_text,
            replace_start=start,
            replace_end=end,
            caret_start=caret_start,
            caret_end=caret_end,
        )

    def _map_offset(self, text: str, offset: int, out_lines: list[str], pads: list[str]) -> int:
        """Map an offset in the source text to the planned text."""
        offset = max(0, min(offset, len(text)))
        line_start = 0
        mapped = 0
        line_index = 0

        for match in LINE_BREAK_PATTERN.finditer(text):
            if offset <= match.start():
                break
            line_start = match.end()
            mapped += len(out_lines[line_index]) + len(self.normalizer.newline)
            line_index += 1

        source_line = split_lines(text)[line_index]
        prefix = self.normalizer.normalize_line(source_line[:offset - line_start], trim=False)
        column = min(len(pads[line_index]) + len(prefix), len(out_lines[line_index]))
        return mapped + column


def apply_plan(editor: "EditorProxy", plan: InsertionPlan) -> None:
    """Apply a plan through the host's replace primitive and place the caret."""
    editor.replace_range(plan.replace_start, plan.replace_end, plan.text, True)
    editor.set_selection_range(plan.caret_start, plan.caret_end)
