"""In-memory editor host backed by a string buffer."""

import logging
from typing import Callable, Optional, Union

from ..config import Settings, settings as default_settings
from ..detection.rules import DEFAULT_SYNTAXES, KnownSyntaxes, detect_profile, detect_syntax
from .base import EditorProxy
from .models import TextRange
from .normalize import get_line_indent
from .planner import reindent

logger = logging.getLogger(__name__)

ScopeSource = Union[str, Callable[[int], str]]


class BufferEditor(EditorProxy):
    """Editor host holding the document in memory.

    Used by the command line and by hosts that edit plain strings; the
    scope is either a fixed string or a callable returning the scope at a
    position. Pass the engine's `has_syntax` as `known_syntaxes` so
    detection only reports syntaxes the engine can expand.
    """

    def __init__(
        self,
        text: str = "",
        selection: Optional[tuple[int, int]] = None,
        scope: ScopeSource = "text.html.basic",
        file_path: Optional[str] = None,
        settings: Optional[Settings] = None,
        known_syntaxes: KnownSyntaxes = DEFAULT_SYNTAXES,
    ):
        self.text = text
        self.scope = scope
        self.file_path = file_path
        self.settings = settings or default_settings
        self.known_syntaxes = known_syntaxes if callable(known_syntaxes) else frozenset(known_syntaxes)
        start, end = selection if selection else (len(text), len(text))
        self._selection = self._clamp(start, end)

    def get_selection_range(self) -> TextRange:
        return self._selection

    def set_selection_range(self, start: int, end: Optional[int] = None) -> None:
        self._selection = self._clamp(start, start if end is None else end)

    def get_current_line_range(self) -> TextRange:
        pos = self._selection.start
        start = self.text.rfind("\n", 0, pos) + 1
        end = self.text.find("\n", pos)
        if end == -1:
            end = len(self.text)
        if end > start and self.text[end - 1] == "\r":
            end -= 1
        return TextRange(start, end)

    def get_caret_position(self) -> int:
        return self._selection.start

    def set_caret_position(self, pos: int) -> None:
        self.set_selection_range(pos, pos)

    def get_current_line_text(self) -> str:
        return self.get_current_line_range().substring(self.text)

    def replace_range(
        self, start: int, end: int, text: str, skip_indent_normalization: bool = False
    ) -> None:
        if not 0 <= start <= end <= len(self.text):
            raise ValueError(f"Invalid replace span [{start}, {end}) for {len(self.text)} chars")

        if not skip_indent_normalization:
            line_start = self.text.rfind("\n", 0, start) + 1
            text = reindent(text, get_line_indent(self.text[line_start:]))

        self.text = self.text[:start] + text + self.text[end:]
        self.set_caret_position(start + len(text))
        logger.debug(f"Replaced [{start}, {end}) with {len(text)} chars")

    def get_document_text(self) -> str:
        return self.text

    def get_detected_syntax(self) -> str:
        return detect_syntax(
            self.get_scope_name(),
            known_syntaxes=self.known_syntaxes,
            default=self.settings.default_syntax,
        )

    def get_output_profile(self) -> str:
        return detect_profile(
            self.get_scope_name(),
            self.get_detected_syntax(),
            content=self.text,
            autodetect_xhtml=self.settings.autodetect_xhtml,
            profile_overrides=self.settings.profile_overrides,
        )

    def get_selected_text(self) -> str:
        return self._selection.substring(self.text)

    def get_file_path(self) -> Optional[str]:
        return self.file_path

    def get_scope_name(self, pos: Optional[int] = None) -> str:
        if pos is None:
            pos = self.get_caret_position()
        if callable(self.scope):
            return self.scope(pos)
        return self.scope

    def _clamp(self, start: int, end: int) -> TextRange:
        length = len(self.text)
        start = max(0, min(start, length))
        end = max(start, min(end, length))
        return TextRange(start, end)
