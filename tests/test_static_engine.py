"""Tests for the snippet table engine."""

import pytest

from emmetbridge.editor import BufferEditor, TextRange
from emmetbridge.engine import ExpansionError, StaticSnippetEngine

NESTED_TAGS = "<div><p>hi</p></div>"


class TestExpansion:
    """Test abbreviation expansion by snippet lookup."""

    def test_expand_snippet(self, static_engine):
        assert static_engine.expand_abbreviation("p", "html", "html") == "<p>${0}</p>"

    def test_expand_multiplied(self, static_engine):
        assert static_engine.expand_abbreviation("p*2", "html", "html") == "<p>${0}</p>\n<p>${0}</p>"

    def test_line_profile_joins_on_one_line(self, static_engine):
        assert static_engine.expand_abbreviation("p*2", "html", "line") == "<p>${0}</p><p>${0}</p>"

    def test_element_fallback(self, static_engine):
        assert static_engine.expand_abbreviation("section", "html", "html") == "<section>${0}</section>"

    def test_void_element(self, static_engine):
        assert static_engine.expand_abbreviation("br", "html", "html") == "<br>"
        assert static_engine.expand_abbreviation("br", "html", "xhtml") == "<br />"

    def test_unknown_abbreviation_raises(self, static_engine):
        with pytest.raises(ExpansionError):
            static_engine.expand_abbreviation("ul>li", "html", "html")
        with pytest.raises(ExpansionError):
            static_engine.expand_abbreviation("zz", "css", "xhtml")
        with pytest.raises(ExpansionError):
            static_engine.expand_abbreviation("  ", "html", "html")

    def test_wrap_replaces_exit_point(self, static_engine):
        assert static_engine.wrap_with_abbreviation("div", "hello", "html", "html") == "<div>hello</div>"

    def test_wrap_skips_escaped_exit_point(self, static_engine):
        static_engine.add_snippet("html", "price", r"<b>\${0}</b>${0}")
        assert static_engine.wrap_with_abbreviation("price", "x", "html", "html") == r"<b>\${0}</b>x"

    def test_wrap_without_exit_point_appends(self, static_engine):
        static_engine.add_snippet("html", "hr", "<hr>")
        assert static_engine.wrap_with_abbreviation("hr", "x", "html", "html") == "<hr>x"


class TestSnippets:
    """Test snippet lookup and inheritance."""

    def test_find_snippet(self, static_engine):
        snippet = static_engine.find_snippet("html", "a")

        assert snippet is not None
        assert snippet.value == '<a href="${1}">${2}</a>${0}'
        assert snippet.syntax == "html"
        assert static_engine.find_snippet("html", "missing") is None

    def test_inherited_snippets(self, static_engine):
        snippet = static_engine.find_snippet("scss", "c")

        assert snippet is not None
        assert snippet.syntax == "css"

    def test_get_all_snippets_child_overrides_parent(self, static_engine):
        static_engine.add_snippet("scss", "c", "color:red")
        snippets = static_engine.get_all_snippets("scss")

        assert set(snippets) == {"c", "pos"}
        assert snippets["c"].value == "color:red"
        assert snippets["pos"].syntax == "css"

    def test_has_syntax(self, static_engine):
        assert static_engine.has_syntax("html") is True
        assert static_engine.has_syntax("stylus") is True
        assert static_engine.has_syntax("cobol") is False

    def test_transform_css_snippet(self, static_engine):
        assert static_engine.transform_css_snippet("color:#000", "css") == "color: #000;"
        assert static_engine.transform_css_snippet("color:#000;", "css") == "color: #000;"
        assert static_engine.transform_css_snippet("color:#000", "sass") == "color: #000"
        assert static_engine.transform_css_snippet("@media", "css") == "@media"

    def test_expand_css_snippet(self, static_engine):
        assert static_engine.expand_css_snippet("pos", "css") == "position: ${0};"
        with pytest.raises(ExpansionError):
            static_engine.expand_css_snippet("nope", "css")


class TestTagMatching:
    """Test the simple tag matcher."""

    def test_find_tag_on_opening_tag(self, static_engine):
        tag = static_engine.find_tag(NESTED_TAGS, 6)

        assert tag.open == TextRange(5, 8)
        assert tag.close == TextRange(10, 14)

    def test_find_tag_on_closing_tag(self, static_engine):
        tag = static_engine.find_tag(NESTED_TAGS, 16)

        assert tag.open == TextRange(0, 5)
        assert tag.close == TextRange(14, 20)

    def test_find_tag_in_text(self, static_engine):
        assert static_engine.find_tag(NESTED_TAGS, 9) is None

    def test_find_tag_pair_innermost(self, static_engine):
        assert static_engine.find_tag_pair(NESTED_TAGS, 9).outer == TextRange(5, 14)
        assert static_engine.find_tag_pair(NESTED_TAGS, 2).outer == TextRange(0, 20)

    def test_find_tag_pair_outside_tags(self, static_engine):
        assert static_engine.find_tag_pair("plain text", 3) is None

    def test_void_and_self_closing_tags(self, static_engine):
        content = '<p><br><img src="a.png" /></p>'

        assert static_engine.find_tag(content, 4).close is None
        assert static_engine.find_tag(content, 10).close is None
        assert static_engine.find_tag_pair(content, 4).outer == TextRange(0, len(content))

    def test_unclosed_inner_tag(self, static_engine):
        content = "<ul><li>one</ul>"
        tag = static_engine.find_tag(content, 5)

        assert tag.open == TextRange(4, 8)
        assert tag.close is None
        assert static_engine.find_tag(content, 1).close == TextRange(11, 16)


class TestFindAbbreviation:
    """Test abbreviation extraction from an editor."""

    def test_abbreviation_before_caret(self, static_engine):
        editor = BufferEditor("<div>\n  ul>li.item", selection=(18, 18))
        assert static_engine.find_abbreviation(editor) == "ul>li.item"

    def test_selection_is_the_abbreviation(self, static_engine):
        editor = BufferEditor("some p text", selection=(5, 6))
        assert static_engine.find_abbreviation(editor) == "p"

    def test_no_abbreviation(self, static_engine):
        editor = BufferEditor("text  ", selection=(6, 6))
        assert static_engine.find_abbreviation(editor) == ""
