"""Syntax and output profile detection from editor scopes."""

from .rules import (
    DEFAULT_SYNTAXES,
    SYNTAX_RULES,
    PROFILE_RULES,
    SyntaxRule,
    ProfileRule,
    detect_syntax,
    detect_profile,
    default_profile,
    match_selector,
    is_xhtml,
)

__all__ = [
    "DEFAULT_SYNTAXES",
    "SYNTAX_RULES",
    "PROFILE_RULES",
    "SyntaxRule",
    "ProfileRule",
    "detect_syntax",
    "detect_profile",
    "default_profile",
    "match_selector",
    "is_xhtml",
]
