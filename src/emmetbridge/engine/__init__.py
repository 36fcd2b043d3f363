"""Abbreviation expansion engine interface and implementations."""

from .base import ExpansionEngine, ExpansionError, Snippet, TagMatch
from .cache import CompletionCache
from .static import StaticSnippetEngine

__all__ = [
    "ExpansionEngine",
    "ExpansionError",
    "Snippet",
    "TagMatch",
    "CompletionCache",
    "StaticSnippetEngine",
]
