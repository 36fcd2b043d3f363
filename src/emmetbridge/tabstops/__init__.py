"""Tabstop scanning and renumbering.

Expanded abbreviations carry placeholders in the `${N}` / `${N:default}`
syntax. This package tokenizes them and assigns final indices so unlinked
caret positions stay independent and linked ones stay mirrored.
"""

from .models import (
    Placeholder,
    RenumberedPlaceholder,
    ExitPoint,
    RenumberResult,
)
from .scanner import PlaceholderScanner
from .renumber import TabstopRenumberer, renumber_tabstops, DEFAULT_LINKED_BASE
from .syntax import escape_literal

__all__ = [
    "Placeholder",
    "RenumberedPlaceholder",
    "ExitPoint",
    "RenumberResult",
    "PlaceholderScanner",
    "TabstopRenumberer",
    "renumber_tabstops",
    "DEFAULT_LINKED_BASE",
    "escape_literal",
]
