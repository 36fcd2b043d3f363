"""Tabstop renumbering for expanded abbreviations.

The expansion engine emits every unlinked caret position as `${0}`. Hosts
treat placeholders sharing an index as mirrored, so before insertion each
zero-group placeholder gets its own fresh index while author-numbered groups
are shifted past them and stay linked.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from .models import ExitPoint, Placeholder, RenumberedPlaceholder, RenumberResult, Segment
from .scanner import PlaceholderScanner
from .syntax import FINAL_TABSTOP, FINAL_TABSTOP_PATTERN, escape_literal, render_placeholder

logger = logging.getLogger(__name__)

DEFAULT_LINKED_BASE = 1000


@dataclass
class _RenumberState:
    """Counters shared by a template and every nested default text."""

    zero_counter: int = 0
    placeholders: list[RenumberedPlaceholder] = field(default_factory=list)
    last_zero: Optional[RenumberedPlaceholder] = None


class TabstopRenumberer:
    """Assign collision-free final indices to placeholders and pick the exit point."""

    def __init__(
        self,
        linked_base: int = DEFAULT_LINKED_BASE,
        insert_final_tabstop: bool = False,
        anchor_exit_as_zero: bool = False,
        scanner: Optional[PlaceholderScanner] = None,
    ):
        """
        Initialize the renumberer.

        Args:
            linked_base: Offset added to every non-zero group; must exceed
                any group number an author would write
            insert_final_tabstop: Always append a `${0}` final stop
            anchor_exit_as_zero: Rewrite the chosen exit placeholder as `${0}`
                so the host's native final stop lands there
            scanner: Scanner used to tokenize templates
        """
        if linked_base < 1:
            raise ValueError(f"linked_base must be positive, got {linked_base}")
        self.linked_base = linked_base
        self.insert_final_tabstop = insert_final_tabstop
        self.anchor_exit_as_zero = anchor_exit_as_zero
        self.scanner = scanner or PlaceholderScanner()

    def renumber(self, text: str) -> RenumberResult:
        """
        Renumber every placeholder in an expanded template.

        Args:
            text: Template produced by the expansion engine

        Returns:
            RenumberResult with the rendered text, final placeholders and
            the exit point (if any)
        """
        state = _RenumberState()
        rendered = self._render(self.scanner.tokenize(text), state, offset=0, depth=0)
        exit_point = None

        if self.insert_final_tabstop and not _ends_with_final_tabstop(rendered):
            start = len(rendered)
            rendered += FINAL_TABSTOP
            exit_point = ExitPoint(start=start, end=len(rendered), index=0, synthetic=True)
        elif state.last_zero is not None:
            if self.anchor_exit_as_zero:
                rendered = self._anchor_as_zero(rendered, state.last_zero, state.placeholders)
            exit_point = ExitPoint(
                start=state.last_zero.start,
                end=state.last_zero.end,
                index=state.last_zero.index,
            )

        logger.debug(
            f"Renumbered {len(state.placeholders)} placeholders "
            f"({state.zero_counter} unlinked), exit point: {exit_point}"
        )

        return RenumberResult(
            original=text,
            text=rendered,
            placeholders=state.placeholders,
            exit_point=exit_point,
        )

    def _render(self, segments: list[Segment], state: _RenumberState, offset: int, depth: int) -> str:
        """Render segments starting at output position `offset`."""
        parts = []
        pos = offset
        for segment in segments:
            if isinstance(segment, Placeholder):
                piece = self._render_placeholder(segment, state, pos, depth)
            else:
                piece = escape_literal(segment, braces=depth > 0)
            parts.append(piece)
            pos += len(piece)
        return "".join(parts)

    def _render_placeholder(
        self, placeholder: Placeholder, state: _RenumberState, pos: int, depth: int
    ) -> str:
        if placeholder.is_exit_point:
            state.zero_counter += 1
            index = state.zero_counter
        else:
            if placeholder.group >= self.linked_base:
                logger.warning(
                    f"Placeholder group {placeholder.group} is not below the linked base "
                    f"{self.linked_base}; it may collide with other indices"
                )
            index = placeholder.group + self.linked_base

        record = RenumberedPlaceholder(
            original_group=placeholder.group,
            index=index,
            start=pos,
            end=pos,
            depth=depth,
        )
        # Pre-order: an outer placeholder is listed before its nested ones
        state.placeholders.append(record)
        if placeholder.is_exit_point:
            state.last_zero = record

        default = None
        if placeholder.children:
            prefix_length = len(f"${{{index}:")
            default = self._render(placeholder.children, state, pos + prefix_length, depth + 1)

        rendered = render_placeholder(index, default)
        record.end = pos + len(rendered)
        record.default = default or None
        return rendered

    def _anchor_as_zero(
        self,
        text: str,
        target: RenumberedPlaceholder,
        placeholders: list[RenumberedPlaceholder],
    ) -> str:
        """Rewrite `target` as a `${0}` placeholder and shift the spans after it."""
        replacement = render_placeholder(0, target.default)
        old_end = target.end
        delta = len(replacement) - (old_end - target.start)
        text = text[:target.start] + replacement + text[old_end:]

        for placeholder in placeholders:
            if placeholder is target:
                continue
            if target.start < placeholder.start and placeholder.end < old_end:
                # Inside the target's default text: only the index prefix moved
                placeholder.start += delta
                placeholder.end += delta
                continue
            if placeholder.start >= old_end:
                placeholder.start += delta
            if placeholder.end >= old_end:
                placeholder.end += delta
                if placeholder.start < target.start:
                    # Encloses the target: its default text changed too
                    prefix_length = len(f"${{{placeholder.index}:")
                    placeholder.default = text[placeholder.start + prefix_length:placeholder.end - 1]

        target.index = 0
        target.end = target.start + len(replacement)
        return text


def _ends_with_final_tabstop(text: str) -> bool:
    """Check for an unescaped trailing `${0}`."""
    match = FINAL_TABSTOP_PATTERN.search(text)
    if not match:
        return False
    backslashes = len(text[:match.start()]) - len(text[:match.start()].rstrip("\\"))
    return backslashes % 2 == 0


def renumber_tabstops(
    text: str,
    linked_base: int = DEFAULT_LINKED_BASE,
    insert_final_tabstop: bool = False,
) -> RenumberResult:
    """Renumber `text` with a one-off renumberer."""
    renumberer = TabstopRenumberer(
        linked_base=linked_base,
        insert_final_tabstop=insert_final_tabstop,
    )
    return renumberer.renumber(text)
