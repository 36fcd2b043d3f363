"""Data models shared by editor hosts and actions."""

from dataclasses import dataclass
from typing import Optional
from pydantic import BaseModel, Field, model_validator


@dataclass(frozen=True)
class TextRange:
    """Half-open `[start, end)` span of a document."""

    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start

    def is_empty(self) -> bool:
        return self.start == self.end

    def contains(self, pos: int) -> bool:
        return self.start <= pos < self.end

    def substring(self, text: str) -> str:
        return text[self.start:self.end]


class InsertionPlan(BaseModel):
    """Everything a host needs to apply an insertion."""

    text: str  # Normalized text to insert
    replace_start: int  # Span of the document being replaced
    replace_end: int
    caret_start: int  # Selection to set once the text is in place
    caret_end: int

    @model_validator(mode="after")
    def _check_spans(self) -> "InsertionPlan":
        if self.replace_start > self.replace_end:
            raise ValueError("replace_start must not be after replace_end")
        if self.caret_start > self.caret_end:
            raise ValueError("caret_start must not be after caret_end")
        return self

    @property
    def caret_range(self) -> TextRange:
        return TextRange(self.caret_start, self.caret_end)


class OutputInfo(BaseModel):
    """Syntax, profile and content captured from the editor."""

    syntax: str
    profile: str
    content: str = ""


class ContextNode(BaseModel):
    """The tag enclosing the caret, passed to the engine as context."""

    name: str
    attributes: list[dict[str, Optional[str]]] = Field(default_factory=list)


def narrow_to_non_space(text: str, span: TextRange) -> TextRange:
    """
    Shrink a span so it neither starts nor ends with whitespace.

    Args:
        text: Document content
        span: Span to narrow

    Returns:
        Narrowed span; an all-whitespace span collapses to its start
    """
    start, end = span.start, span.end
    while start < end and text[start].isspace():
        start += 1
    while end > start and text[end - 1].isspace():
        end -= 1
    return TextRange(start, end)
