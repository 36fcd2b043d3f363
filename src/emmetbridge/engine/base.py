"""Interface to the abbreviation expansion engine."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional
from dataclasses import dataclass

from ..editor.models import ContextNode, TextRange

if TYPE_CHECKING:
    from ..editor.base import EditorProxy


class ExpansionError(Exception):
    """Raised when the engine cannot expand an abbreviation."""


@dataclass
class Snippet:
    """A named snippet known to the engine."""

    name: str
    value: str
    syntax: str
    normalized_name: Optional[str] = None  # Lookup key used in completions

    @property
    def key(self) -> str:
        return self.normalized_name or self.name


@dataclass
class TagMatch:
    """An HTML tag around a position: opening part and optional closing part."""

    open: TextRange
    close: Optional[TextRange] = None

    @property
    def outer(self) -> TextRange:
        """Span from the start of the opening tag to the end of the closing one."""
        end = self.close.end if self.close else self.open.end
        return TextRange(self.open.start, end)


class ExpansionEngine(ABC):
    """Abstract base class for abbreviation expansion engines."""

    @abstractmethod
    def expand_abbreviation(
        self,
        abbreviation: str,
        syntax: str,
        profile: str,
        context: Optional[ContextNode] = None,
    ) -> str:
        """Expand an abbreviation into a template with `${N}` placeholders."""
        pass

    @abstractmethod
    def wrap_with_abbreviation(
        self,
        abbreviation: str,
        content: str,
        syntax: str,
        profile: str,
        context: Optional[ContextNode] = None,
    ) -> str:
        """Expand an abbreviation around already escaped content."""
        pass

    @abstractmethod
    def find_abbreviation(self, editor: "EditorProxy") -> str:
        """Extract the abbreviation left of the caret; empty if none."""
        pass

    @abstractmethod
    def find_tag(self, content: str, pos: int) -> Optional[TagMatch]:
        """Find the tag whose opening or closing part contains `pos`."""
        pass

    @abstractmethod
    def find_tag_pair(self, content: str, pos: int) -> Optional[TagMatch]:
        """Find the innermost tag pair enclosing `pos`."""
        pass

    @abstractmethod
    def find_snippet(self, syntax: str, name: str) -> Optional[Snippet]:
        pass

    @abstractmethod
    def get_all_snippets(self, syntax: str) -> dict[str, Snippet]:
        pass

    @abstractmethod
    def has_syntax(self, syntax: str) -> bool:
        pass

    @abstractmethod
    def transform_css_snippet(self, value: str, syntax: str) -> str:
        """Turn a raw CSS snippet value into `property: value;` form."""
        pass

    @abstractmethod
    def expand_css_snippet(self, name: str, syntax: str) -> str:
        """Expand a CSS snippet name into its insertable text."""
        pass
