"""In-memory snippet table engine.

Expands abbreviations by exact snippet lookup instead of parsing the full
abbreviation grammar. Useful for hosts that only need named snippets, and
as a stand-in engine for the command line.
"""

import logging
import re
from typing import TYPE_CHECKING, Optional, Pattern

from ..detection.rules import DEFAULT_SYNTAXES
from ..editor.models import ContextNode, TextRange
from ..tabstops.scanner import PlaceholderScanner
from .base import ExpansionEngine, ExpansionError, Snippet, TagMatch

if TYPE_CHECKING:
    from ..editor.base import EditorProxy

logger = logging.getLogger(__name__)

# <tag ...>, </tag> or <tag ... />
TAG_PATTERN: Pattern = re.compile(r"<(/?)([\w\-:]+)(?:\s[^>]*?)?(/?)>")

# name*3 - repeat a snippet
MULTIPLY_PATTERN: Pattern = re.compile(r"^(.+?)\*(\d+)$")

# Run of abbreviation characters right before the caret
ABBREVIATION_PATTERN: Pattern = re.compile(r"[\w.#>+*:$@!^\-\[\]{}()=%]+$")

# Bare element name, expanded as a plain tag when no snippet matches
ELEMENT_PATTERN: Pattern = re.compile(r"^[a-zA-Z][\w\-:]*$")

VOID_ELEMENTS = frozenset(
    {"area", "base", "br", "col", "embed", "hr", "img", "input", "link", "meta", "source", "track", "wbr"}
)

# Syntaxes that fall back to another syntax's snippets
SYNTAX_PARENTS = {
    "scss": "css",
    "less": "css",
    "sass": "css",
    "stylus": "css",
    "xsl": "xml",
    "jsx": "html",
    "haml": "html",
    "slim": "html",
    "jade": "html",
}

CSS_SYNTAXES = frozenset({"css", "scss", "less", "sass", "stylus"})

MARKUP_SYNTAXES = frozenset({"html", "xml", "xsl", "jsx"})


class StaticSnippetEngine(ExpansionEngine):
    """Expansion engine backed by a dictionary of snippets per syntax."""

    def __init__(self, snippets: Optional[dict[str, dict[str, str]]] = None):
        """
        Initialize the engine.

        Args:
            snippets: Mapping of syntax id to {snippet name: template}
        """
        self._snippets: dict[str, dict[str, str]] = {}
        for syntax, table in (snippets or {}).items():
            for name, value in table.items():
                self.add_snippet(syntax, name, value)

    def add_snippet(self, syntax: str, name: str, value: str) -> None:
        """Register a snippet for a syntax."""
        self._snippets.setdefault(syntax, {})[name] = value

    def expand_abbreviation(
        self,
        abbreviation: str,
        syntax: str,
        profile: str,
        context: Optional[ContextNode] = None,
    ) -> str:
        abbreviation = abbreviation.strip()
        if not abbreviation:
            raise ExpansionError("Empty abbreviation")

        count = 1
        multiply_match = MULTIPLY_PATTERN.match(abbreviation)
        if multiply_match:
            abbreviation = multiply_match.group(1)
            count = int(multiply_match.group(2))

        snippet = self.find_snippet(syntax, abbreviation)
        if snippet:
            template = snippet.value
        elif syntax in MARKUP_SYNTAXES or SYNTAX_PARENTS.get(syntax) == "html":
            template = self._element_template(abbreviation, profile)
        else:
            raise ExpansionError(f"Unknown abbreviation '{abbreviation}' for syntax '{syntax}'")

        separator = "" if profile == "line" else "\n"
        return separator.join([template] * count)

    def wrap_with_abbreviation(
        self,
        abbreviation: str,
        content: str,
        syntax: str,
        profile: str,
        context: Optional[ContextNode] = None,
    ) -> str:
        template = self.expand_abbreviation(abbreviation, syntax, profile, context)
        for placeholder in PlaceholderScanner().extract_placeholders(template):
            if placeholder.group == 0 and not placeholder.children:
                return template[:placeholder.start] + content + template[placeholder.end:]
        return template + content

    def find_abbreviation(self, editor: "EditorProxy") -> str:
        selected = editor.get_selected_text()
        if selected:
            return selected

        line_range = editor.get_current_line_range()
        line = editor.get_current_line_text()
        column = editor.get_caret_position() - line_range.start
        match = ABBREVIATION_PATTERN.search(line[:column])
        return match.group(0) if match else ""

    def find_tag(self, content: str, pos: int) -> Optional[TagMatch]:
        for tag in self._pair_tags(content):
            if tag.open.contains(pos) or (tag.close and tag.close.contains(pos)):
                return tag
        return None

    def find_tag_pair(self, content: str, pos: int) -> Optional[TagMatch]:
        candidates = [
            tag for tag in self._pair_tags(content)
            if tag.close and tag.outer.contains(pos)
        ]
        if not candidates:
            return None
        return min(candidates, key=lambda tag: tag.outer.length)

    def find_snippet(self, syntax: str, name: str) -> Optional[Snippet]:
        while syntax:
            value = self._snippets.get(syntax, {}).get(name)
            if value is not None:
                return Snippet(name=name, value=value, syntax=syntax)
            syntax = SYNTAX_PARENTS.get(syntax)
        return None

    def get_all_snippets(self, syntax: str) -> dict[str, Snippet]:
        chain = []
        current: Optional[str] = syntax
        while current:
            chain.append(current)
            current = SYNTAX_PARENTS.get(current)

        snippets: dict[str, Snippet] = {}
        # Parents first so a syntax overrides what it inherits
        for source in reversed(chain):
            for name, value in self._snippets.get(source, {}).items():
                snippets[name] = Snippet(name=name, value=value, syntax=source)
        return snippets

    def has_syntax(self, syntax: str) -> bool:
        return syntax in self._snippets or syntax in DEFAULT_SYNTAXES

    def transform_css_snippet(self, value: str, syntax: str) -> str:
        name, separator, body = value.partition(":")
        if not separator:
            return value
        terminator = "" if syntax in ("sass", "stylus") else ";"
        return f"{name.strip()}: {body.strip().rstrip(';')}{terminator}"

    def expand_css_snippet(self, name: str, syntax: str) -> str:
        snippet = self.find_snippet(syntax, name)
        if not snippet:
            raise ExpansionError(f"Unknown CSS snippet '{name}'")
        return self.transform_css_snippet(snippet.value, syntax)

    def _element_template(self, name: str, profile: str) -> str:
        if not ELEMENT_PATTERN.match(name):
            raise ExpansionError(f"Cannot expand '{name}' without a snippet")
        if name.lower() in VOID_ELEMENTS:
            return f"<{name} />" if profile in ("xhtml", "xml") else f"<{name}>"
        return f"<{name}>${{0}}</{name}>"

    def _pair_tags(self, content: str) -> list[TagMatch]:
        """Pair opening and closing tags; unmatched tags are returned alone."""
        stack: list[tuple[str, TextRange]] = []
        tags: list[TagMatch] = []

        for match in TAG_PATTERN.finditer(content):
            span = TextRange(match.start(), match.end())
            name = match.group(2).lower()

            if match.group(1):
                for i in range(len(stack) - 1, -1, -1):
                    if stack[i][0] == name:
                        tags.extend(TagMatch(open=s) for _, s in stack[i + 1:])
                        tags.append(TagMatch(open=stack[i][1], close=span))
                        del stack[i:]
                        break
                else:
                    logger.debug(f"Unmatched closing tag </{name}> at {span.start}")
            elif match.group(3) or name in VOID_ELEMENTS:
                tags.append(TagMatch(open=span))
            else:
                stack.append((name, span))

        tags.extend(TagMatch(open=span) for _, span in stack)
        return tags
