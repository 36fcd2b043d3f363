"""Editor capability interface implemented by each host."""

from abc import ABC, abstractmethod
from typing import Optional

from .models import TextRange


class EditorProxy(ABC):
    """Abstract base class for editor hosts.

    Actions receive an instance explicitly; nothing here reaches for a
    global "active view".
    """

    @abstractmethod
    def get_selection_range(self) -> TextRange:
        """Get the first selection of the document."""
        pass

    @abstractmethod
    def set_selection_range(self, start: int, end: Optional[int] = None) -> None:
        """Select `[start, end)`; a missing end places a caret at `start`."""
        pass

    @abstractmethod
    def get_current_line_range(self) -> TextRange:
        """Get the span of the line holding the selection, without its line break."""
        pass

    @abstractmethod
    def get_caret_position(self) -> int:
        pass

    @abstractmethod
    def set_caret_position(self, pos: int) -> None:
        pass

    @abstractmethod
    def get_current_line_text(self) -> str:
        pass

    @abstractmethod
    def replace_range(
        self, start: int, end: int, text: str, skip_indent_normalization: bool = False
    ) -> None:
        """
        Replace `[start, end)` with `text`.

        Unless `skip_indent_normalization` is set, the host indents lines
        after the first to match the line at `start`.
        """
        pass

    @abstractmethod
    def get_document_text(self) -> str:
        pass

    @abstractmethod
    def get_detected_syntax(self) -> str:
        """Syntax id at the caret (e.g. "html", "css")."""
        pass

    @abstractmethod
    def get_output_profile(self) -> str:
        """Output profile at the caret (e.g. "html", "xhtml", "line")."""
        pass

    @abstractmethod
    def get_selected_text(self) -> str:
        pass

    @abstractmethod
    def get_file_path(self) -> Optional[str]:
        pass

    @abstractmethod
    def get_scope_name(self, pos: Optional[int] = None) -> str:
        """Space-separated syntax scope at `pos` (defaults to the caret)."""
        pass

    def prompt(self, title: str) -> Optional[str]:
        """Ask the user for a value; hosts without a prompt return None."""
        return None
