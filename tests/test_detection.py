"""Tests for syntax and profile detection."""

import pytest

from emmetbridge.detection import (
    default_profile,
    detect_profile,
    detect_syntax,
    is_xhtml,
    match_selector,
)

XHTML_DOCUMENT = (
    '<!DOCTYPE html PUBLIC "-//W3C//DTD XHTML 1.0 Strict//EN" '
    '"http://www.w3.org/TR/xhtml1/DTD/xhtml1-strict.dtd">\n<html></html>'
)


class TestMatchSelector:
    """Test scope selector matching."""

    def test_single_part(self):
        assert match_selector("text.html.basic", "text.html") is True
        assert match_selector("text.html.basic", "text.xml") is False

    def test_parts_match_in_order(self):
        scope = "source.python string.quoted.double.python"
        assert match_selector(scope, "source string") is True
        assert match_selector(scope, "string source") is False

    def test_prefix_matches_whole_atoms_only(self):
        assert match_selector("source.coffeescript", "source.coffee") is False
        assert match_selector("source.coffee string.quoted", "source.coffee string") is True

    def test_alternatives(self):
        assert match_selector("text.xml", "text.html, text.xml") is True


class TestDetectSyntax:
    """Test syntax detection rules."""

    @pytest.mark.parametrize(
        "scope, expected",
        [
            ("text.html.basic", "html"),
            ("text.xml", "xml"),
            ("text.xml.xsl", "xsl"),
            ("source.css", "css"),
            ("source.scss", "scss"),
            ("source.sass", "sass"),
            ("source.stylus", "stylus"),
            ("source.styl", "stylus"),
            ("text.haml", "haml"),
            ("text.html.basic source.css.embedded.html", "css"),
            ("source.python string.quoted.double.block.python", "html"),
            ("source.php", "html"),
        ],
    )
    def test_detect_syntax(self, scope, expected):
        assert detect_syntax(scope) == expected

    def test_xsl_wins_over_everything(self):
        assert detect_syntax("text.xml.xsl source.css") == "xsl"

    def test_css_inside_string_is_not_source(self):
        """A source scope inside a string falls through to the name rules."""
        assert detect_syntax("source.less string.quoted") == "less"

    def test_custom_default(self):
        assert detect_syntax("text.plain", default="css") == "css"

    def test_unknown_default_falls_back_to_html(self):
        assert detect_syntax("text.plain", default="markdown") == "html"

    def test_custom_known_syntaxes(self):
        assert detect_syntax("source.jsx", known_syntaxes={"html", "jsx"}) == "jsx"
        assert detect_syntax("source.jsx", known_syntaxes={"html"}) == "html"

    def test_known_syntaxes_predicate(self):
        def is_known(syntax):
            return syntax in ("html", "stylus")

        assert detect_syntax("source.styl", known_syntaxes=is_known) == "stylus"
        assert detect_syntax("source.jsx", known_syntaxes=is_known) == "html"
        assert detect_syntax("text.plain", known_syntaxes=is_known, default="css") == "html"


class TestDetectProfile:
    """Test output profile detection rules."""

    def test_is_xhtml(self):
        assert is_xhtml(XHTML_DOCUMENT) is True
        assert is_xhtml("<!DOCTYPE html>") is False

    def test_html_default(self):
        assert detect_profile("text.html.basic", "html") == "html"

    def test_xhtml_autodetect(self):
        profile = detect_profile("text.html.basic", "html", XHTML_DOCUMENT, autodetect_xhtml=True)
        assert profile == "xhtml"

    def test_python_block_string_uses_syntax_default(self):
        """Block-in-block overrides beat the generic source string rule."""
        scope = "source.python string.quoted.double.block.python"
        assert detect_profile(scope, "html") == "html"

    def test_coffee_string_uses_syntax_default(self):
        assert detect_profile("source.coffee string.quoted.double.coffee", "html") == "html"

    def test_php_heredoc_uses_syntax_default(self):
        assert detect_profile("source.php string.unquoted.heredoc.php", "html") == "html"

    def test_source_string_is_single_line(self):
        assert detect_profile("source.js string.quoted.single.js", "html") == "line"

    def test_xml_profile(self):
        assert detect_profile("text.xml", "xml") == "xml"
        assert detect_profile("text.xml.xsl", "xsl") == "xml"

    def test_profile_overrides(self):
        assert detect_profile("text.html.basic", "html", profile_overrides={"html": "xhtml"}) == "xhtml"

    def test_default_profile(self):
        assert default_profile("css") == "xhtml"
        assert default_profile("html", XHTML_DOCUMENT) == "xhtml"
