"""Editor actions driving the expansion engine through an editor proxy.

Every action degrades to a no-op when the engine fails: expansions return
an empty string, lookups return None or an empty list, and the document is
left untouched.
"""

import logging
import re
from typing import Optional, Pattern

from pydantic import BaseModel

from .config import Settings, settings as default_settings
from .editor.base import EditorProxy
from .editor.models import ContextNode, InsertionPlan, OutputInfo, TextRange, narrow_to_non_space
from .editor.normalize import TextNormalizer, get_line_indent
from .editor.planner import InsertionPlanner, apply_plan
from .engine.base import ExpansionEngine
from .engine.cache import CompletionCache
from .tabstops.models import RenumberResult
from .tabstops.renumber import TabstopRenumberer
from .tabstops.syntax import escape_literal

logger = logging.getLogger(__name__)

TAG_NAME_PATTERN: Pattern = re.compile(r"^<([\w\-:]+)", re.IGNORECASE)

ATTRIBUTE_PATTERN: Pattern = re.compile(
    r"""([\w\-:@.]+)(?:\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s>/]+)))?"""
)

# Trailing ": ${0};" left by CSS snippets with no value
CSS_LABEL_PATTERN: Pattern = re.compile(r":\s*\$\{0\}\s*;?$")

CONTEXT_SYNTAXES = frozenset({"html", "xml", "xsl"})


class CssCompletion(BaseModel):
    """A CSS snippet offered as an autocompletion entry."""

    key: str  # Snippet name the user types
    label: str  # Snippet text without its trailing empty value
    value: str  # Expanded snippet inserted on completion


class AbbreviationActions:
    """Expand, wrap and inspect markup through an editor and an engine."""

    def __init__(
        self,
        editor: EditorProxy,
        engine: ExpansionEngine,
        settings: Optional[Settings] = None,
        cache: Optional[CompletionCache] = None,
        renumberer: Optional[TabstopRenumberer] = None,
        planner: Optional[InsertionPlanner] = None,
    ):
        """
        Initialize the actions.

        Args:
            editor: Host editor the actions read from and write to
            engine: Abbreviation expansion engine
            settings: Settings (module defaults if not given)
            cache: Completion cache; pass a shared one to reuse completions
            renumberer: Tabstop renumberer (built from settings if not given)
            planner: Insertion planner (built from settings if not given)
        """
        self.editor = editor
        self.engine = engine
        self.settings = settings or default_settings
        self.cache = cache or CompletionCache()
        self.renumberer = renumberer or TabstopRenumberer(
            linked_base=self.settings.linked_base,
            insert_final_tabstop=self.settings.insert_final_tabstop,
            anchor_exit_as_zero=self.settings.anchor_exit_as_zero,
        )
        self.planner = planner or InsertionPlanner(
            TextNormalizer(
                newline=self.settings.newline,
                indentation=self.settings.indentation,
                trim_trailing_whitespace=self.settings.trim_trailing_whitespace,
            )
        )

    def output_info(self) -> OutputInfo:
        """Capture syntax, profile and content from the editor."""
        return OutputInfo(
            syntax=self.editor.get_detected_syntax(),
            profile=self.editor.get_output_profile(),
            content=self.editor.get_document_text(),
        )

    def preprocess(self, text: str) -> RenumberResult:
        """Renumber tabstops so unlinked caret positions stay independent."""
        return self.renumberer.renumber(text)

    def capture_context(self, pos: Optional[int] = None) -> Optional[ContextNode]:
        """
        Describe the tag enclosing a position.

        Args:
            pos: Document position (defaults to the caret)

        Returns:
            ContextNode with tag name and attributes, or None outside markup
        """
        if self.editor.get_detected_syntax() not in CONTEXT_SYNTAXES:
            return None

        content = self.editor.get_document_text()
        if pos is None:
            pos = self.editor.get_caret_position()

        try:
            tag = self.engine.find_tag_pair(content, pos)
        except Exception as e:
            logger.warning(f"Tag lookup failed at {pos}: {e}")
            return None

        if not tag:
            return None

        open_tag = tag.open.substring(content)
        name_match = TAG_NAME_PATTERN.match(open_tag)
        if not name_match:
            return None

        attributes = []
        for match in ATTRIBUTE_PATTERN.finditer(open_tag, name_match.end()):
            value = next((g for g in match.groups()[1:] if g is not None), None)
            attributes.append({"name": match.group(1), "value": value})

        return ContextNode(name=name_match.group(1), attributes=attributes)

    def expand_as_you_type(self, abbreviation: str) -> str:
        """
        Expand an abbreviation for a live preview.

        Args:
            abbreviation: Abbreviation typed so far

        Returns:
            Renumbered expansion, or an empty string if the engine fails
        """
        info = self.output_info()
        try:
            expanded = self.engine.expand_abbreviation(
                abbreviation, info.syntax, info.profile, self.capture_context()
            )
        except Exception as e:
            logger.warning(f"Failed to expand abbreviation '{abbreviation}': {e}")
            return ""
        return self.preprocess(expanded).text

    def wrap_as_you_type(self, abbreviation: str, content: str) -> str:
        """
        Wrap content with an abbreviation for a live preview.

        Args:
            abbreviation: Wrapping abbreviation typed so far
            content: Text being wrapped; tabstop characters in it are escaped

        Returns:
            Renumbered expansion, or an empty string if the engine fails
        """
        info = self.output_info()
        try:
            expanded = self.engine.wrap_with_abbreviation(
                abbreviation,
                escape_literal(content),
                info.syntax,
                info.profile,
                self.capture_context(),
            )
        except Exception as e:
            logger.warning(f"Failed to wrap with abbreviation '{abbreviation}': {e}")
            return ""
        return self.preprocess(expanded).text

    def capture_wrapping_range(self) -> Optional[TextRange]:
        """
        Find the span a wrap action should enclose.

        Returns:
            The selection, or the enclosing tag pair (narrowed to non-space)
            when nothing is selected; None if there is nothing to wrap
        """
        selection = self.editor.get_selection_range()
        if not selection.is_empty():
            return selection

        content = self.editor.get_document_text()
        try:
            tag = self.engine.find_tag_pair(content, selection.start)
        except Exception as e:
            logger.warning(f"Tag pair lookup failed at {selection.start}: {e}")
            return None

        if not tag:
            return None
        return narrow_to_non_space(content, tag.outer)

    def get_tag_name_ranges(self, pos: int) -> list[TextRange]:
        """
        Spans of the tag name in the opening and closing tags at `pos`.

        Args:
            pos: Document position

        Returns:
            One span per tag part found; empty if there is no tag
        """
        content = self.editor.get_document_text()
        try:
            tag = self.engine.find_tag(content, pos)
        except Exception as e:
            logger.warning(f"Tag lookup failed at {pos}: {e}")
            return []

        if not tag:
            return []

        name_match = TAG_NAME_PATTERN.match(tag.open.substring(content))
        if not name_match:
            return []

        name_length = len(name_match.group(1))
        ranges = [TextRange(tag.open.start + 1, tag.open.start + 1 + name_length)]
        if tag.close:
            ranges.append(TextRange(tag.close.start + 2, tag.close.start + 2 + name_length))
        return ranges

    def get_tag_ranges(self) -> list[TextRange]:
        """Spans of the opening and closing tags at the caret."""
        content = self.editor.get_document_text()
        try:
            tag = self.engine.find_tag(content, self.editor.get_caret_position())
        except Exception as e:
            logger.warning(f"Tag lookup failed: {e}")
            return []

        if not tag:
            return []
        return [tag.open, tag.close] if tag.close else [tag.open]

    def extract_abbreviation(self) -> str:
        """Abbreviation left of the caret, or the selection."""
        try:
            return self.engine.find_abbreviation(self.editor)
        except Exception as e:
            logger.warning(f"Failed to extract abbreviation: {e}")
            return ""

    def has_snippet(self, name: str) -> bool:
        """Check whether the current syntax has a snippet called `name`."""
        try:
            return self.engine.find_snippet(self.editor.get_detected_syntax(), name) is not None
        except Exception as e:
            logger.warning(f"Snippet lookup failed for '{name}': {e}")
            return False

    def get_css_completions(self, dialect: Optional[str] = None) -> list[CssCompletion]:
        """
        CSS snippet completions for a dialect.

        Built once per dialect and served from the completion cache after.

        Args:
            dialect: Stylesheet syntax (defaults to the detected syntax)

        Returns:
            Completion entries; empty (and not cached) if the engine fails
        """
        dialect = dialect or self.editor.get_detected_syntax()
        try:
            return self.cache.get_or_build(dialect, self._build_css_completions)
        except Exception as e:
            logger.warning(f"Failed to build CSS completions for {dialect}: {e}")
            return []

    def replace_content(
        self,
        value: str,
        start: Optional[int] = None,
        end: Optional[int] = None,
        no_indent: bool = False,
    ) -> InsertionPlan:
        """
        Renumber, normalize and insert text into the document.

        Args:
            value: Expanded template
            start: Start of the replaced span (default: document start)
            end: End of the replaced span (default: `start`, or the
                document end when `start` is not given either)
            no_indent: Do not indent lines after the first

        Returns:
            The InsertionPlan that was applied
        """
        content = self.editor.get_document_text()
        if end is None:
            end = len(content) if start is None else start
        if start is None:
            start = 0

        result = self.preprocess(value)
        line_start = content.rfind("\n", 0, start) + 1
        plan = self.planner.plan(
            result.text,
            start,
            end,
            exit_point=result.exit_point,
            indent=get_line_indent(content[line_start:]),
            preserve_indent=self.settings.preserve_indent and not no_indent,
        )
        apply_plan(self.editor, plan)
        return plan

    def expand_abbreviation(self) -> Optional[InsertionPlan]:
        """
        Expand the abbreviation at the caret in place.

        Returns:
            The applied plan, or None if nothing was expanded
        """
        abbreviation = self.extract_abbreviation()
        if not abbreviation:
            return None

        selection = self.editor.get_selection_range()
        if selection.is_empty():
            start, end = selection.start - len(abbreviation), selection.start
        else:
            start, end = selection.start, selection.end

        info = self.output_info()
        try:
            expanded = self.engine.expand_abbreviation(
                abbreviation, info.syntax, info.profile, self.capture_context(start)
            )
        except Exception as e:
            logger.warning(f"Failed to expand abbreviation '{abbreviation}': {e}")
            return None

        if not expanded:
            return None

        plan = self.replace_content(expanded, start, end)
        logger.info(f"Expanded '{abbreviation}' ({info.syntax}/{info.profile}) at {start}")
        return plan

    def wrap_with_abbreviation(self, abbreviation: str) -> Optional[InsertionPlan]:
        """
        Wrap the selection, or the tag pair at the caret, with an abbreviation.

        Returns:
            The applied plan, or None if there was nothing to wrap or the
            engine failed
        """
        span = self.capture_wrapping_range()
        if span is None:
            return None

        content = span.substring(self.editor.get_document_text())
        info = self.output_info()
        try:
            expanded = self.engine.wrap_with_abbreviation(
                abbreviation,
                escape_literal(content),
                info.syntax,
                info.profile,
                self.capture_context(span.start),
            )
        except Exception as e:
            logger.warning(f"Failed to wrap with abbreviation '{abbreviation}': {e}")
            return None

        if not expanded:
            return None

        plan = self.replace_content(expanded, span.start, span.end)
        logger.info(f"Wrapped [{span.start}, {span.end}) with '{abbreviation}'")
        return plan

    def _build_css_completions(self, dialect: str) -> list[CssCompletion]:
        completions = []
        for snippet in self.engine.get_all_snippets(dialect).values():
            transformed = self.engine.transform_css_snippet(snippet.value, dialect)
            completions.append(
                CssCompletion(
                    key=snippet.key,
                    label=CSS_LABEL_PATTERN.sub("", transformed),
                    value=self.engine.expand_css_snippet(snippet.key, dialect),
                )
            )
        return completions
