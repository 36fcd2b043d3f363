"""Pytest configuration and shared fixtures."""

from unittest.mock import Mock

import pytest

from emmetbridge.config import Settings
from emmetbridge.editor import BufferEditor
from emmetbridge.engine import ExpansionEngine, StaticSnippetEngine


@pytest.fixture
def test_settings() -> Settings:
    """Create settings with test values, independent of the environment."""
    return Settings(
        insert_final_tabstop=False,
        anchor_exit_as_zero=False,
        linked_base=1000,
        preserve_indent=True,
        newline="\n",
        indentation="\t",
        trim_trailing_whitespace=False,
        default_syntax="html",
        autodetect_xhtml=False,
        profile_overrides={},
        log_level="WARNING",
    )


@pytest.fixture
def make_editor(test_settings):
    """Factory for in-memory editors using the test settings."""

    def _make(text: str = "", selection=None, scope="text.html.basic") -> BufferEditor:
        return BufferEditor(text, selection=selection, scope=scope, settings=test_settings)

    return _make


@pytest.fixture
def mock_engine() -> Mock:
    """Create a mocked expansion engine with no tags and no snippets."""
    engine = Mock(spec=ExpansionEngine)
    engine.find_tag.return_value = None
    engine.find_tag_pair.return_value = None
    engine.find_snippet.return_value = None
    engine.get_all_snippets.return_value = {}
    return engine


@pytest.fixture
def static_engine() -> StaticSnippetEngine:
    """Create a snippet table engine with a few HTML and CSS snippets."""
    return StaticSnippetEngine(
        {
            "html": {
                "ul": "<ul>\n\t<li>${0}</li>\n</ul>",
                "a": '<a href="${1}">${2}</a>${0}',
                "p": "<p>${0}</p>",
                "div": "<div>${0}</div>",
            },
            "css": {
                "c": "color:${1:#000}",
                "pos": "position:${0}",
            },
        }
    )
