"""Data models for tabstop scanning and renumbering."""

from typing import Optional, Union
from pydantic import BaseModel, Field


class Placeholder(BaseModel):
    """A placeholder token found in a template string."""

    group: int  # Author-assigned group, shared by linked placeholders
    token: str  # Original source text (e.g. "${1:name}")
    text: Optional[str] = None  # Raw default text, without the leading colon
    children: list["Segment"] = Field(default_factory=list)  # Default text, tokenized
    start: int = 0  # Offset in the scanned template where the token starts
    end: int = 0  # Offset right after the closing brace

    @property
    def is_exit_point(self) -> bool:
        """Group 0 marks an unlinked final cursor position."""
        return self.group == 0

    def nested(self) -> list["Placeholder"]:
        """Placeholders inside the default text, in first-appearance order."""
        found = []
        for segment in self.children:
            if isinstance(segment, Placeholder):
                found.append(segment)
                found.extend(segment.nested())
        return found


# A scanned template is a mix of literal text and placeholders
Segment = Union[str, Placeholder]

Placeholder.model_rebuild()


class RenumberedPlaceholder(BaseModel):
    """A placeholder after final index assignment."""

    original_group: int
    index: int  # Final index; unique for zero groups, shared for linked groups
    start: int  # Span in the rendered output
    end: int
    depth: int = 0  # 0 for top-level, 1+ for placeholders in default text
    default: Optional[str] = None  # Rendered default text

    @property
    def is_exit_point(self) -> bool:
        return self.original_group == 0


class ExitPoint(BaseModel):
    """Where the caret lands once every linked placeholder is dismissed."""

    start: int
    end: int
    index: int
    synthetic: bool = False  # True when appended by the final tabstop policy


class RenumberResult(BaseModel):
    """Result of renumbering an expanded template."""

    original: str
    text: str
    placeholders: list[RenumberedPlaceholder] = Field(default_factory=list)
    exit_point: Optional[ExitPoint] = None

    def linked_groups(self) -> dict[int, list[RenumberedPlaceholder]]:
        """Group placeholders by final index."""
        groups: dict[int, list[RenumberedPlaceholder]] = {}
        for placeholder in self.placeholders:
            groups.setdefault(placeholder.index, []).append(placeholder)
        return groups
