"""Ordered rule tables for syntax and output profile detection.

Both detectors are pure functions of the scope string at the caret, so they
can be tested without a host.
"""

import re
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Pattern, Union

# Syntaxes the expansion engine ships snippets for
DEFAULT_SYNTAXES = frozenset(
    {"html", "xml", "xsl", "css", "less", "scss", "sass", "stylus", "haml", "slim", "jade", "jsx"}
)

SYNTAX_ALIASES = {"styl": "stylus"}

# A set of syntax ids, or a predicate such as `ExpansionEngine.has_syntax`
KnownSyntaxes = Union[Iterable[str], Callable[[str], bool]]

XHTML_DOCTYPE_PATTERN: Pattern = re.compile(r"<!DOCTYPE[^>]+XHTML", re.IGNORECASE)


@dataclass(frozen=True)
class SyntaxRule:
    """Map a scope pattern to a syntax id.

    With no `result`, the first capture group of `pattern` is the syntax.
    """

    pattern: Pattern
    result: Optional[str] = None
    exclude: Optional[Pattern] = None  # Rule is skipped when this matches
    requires_known: bool = False  # Captured syntax must be a known one
    final: bool = False  # Skip alias and known-syntax fallback

    def apply(self, scope: str, is_known: Callable[[str], bool]) -> Optional[str]:
        if self.exclude and self.exclude.search(scope):
            return None
        match = self.pattern.search(scope)
        if not match:
            return None
        syntax = self.result or match.group(1)
        if self.requires_known and not is_known(SYNTAX_ALIASES.get(syntax, syntax)):
            return None
        return syntax


@dataclass(frozen=True)
class ProfileRule:
    """Map a scope selector to an output profile.

    With no `profile`, the syntax's default profile is used.
    """

    selector: str
    profile: Optional[str] = None
    xhtml_only: bool = False  # Only applies to documents with an XHTML doctype


SYNTAX_RULES = (
    SyntaxRule(re.compile(r"xsl"), result="xsl", final=True),
    # Embedded languages, unless the caret is inside a string literal
    SyntaxRule(
        re.compile(r"\bsource\.([\w\-]+)"),
        exclude=re.compile(r"\bstring\b"),
        requires_known=True,
    ),
    # CSS-like syntaxes are checked on their own since some highlighters
    # nest them under unrelated source scopes
    SyntaxRule(re.compile(r"\b(less|scss|sass|css|stylus)\b")),
    SyntaxRule(re.compile(r"\b(html|xml|haml|slim)\b")),
)

PROFILE_RULES = (
    ProfileRule("text.html", profile="xhtml", xhtml_only=True),
    # Markup blocks embedded in other documents use the syntax default
    ProfileRule("string.quoted.double.block.python"),
    ProfileRule("source.coffee string"),
    ProfileRule("string.unquoted.heredoc"),
    # Any other string in source code expands on a single line
    ProfileRule("source string", profile="line"),
)


def match_selector(scope: str, selector: str) -> bool:
    """
    Check a scope string against a selector.

    A selector is a comma-separated list of alternatives; each alternative
    is a space-separated list of dotted prefixes that must match scope
    atoms in order (e.g. "source string" matches
    "source.python string.quoted.double.python").
    """
    atoms = scope.split()
    for alternative in selector.split(","):
        parts = alternative.split()
        if not parts:
            continue
        index = 0
        for atom in atoms:
            if index < len(parts) and (atom == parts[index] or atom.startswith(parts[index] + ".")):
                index += 1
        if index == len(parts):
            return True
    return False


def is_xhtml(content: str) -> bool:
    """Check for an XHTML doctype in the document."""
    return bool(XHTML_DOCTYPE_PATTERN.search(content))


def detect_syntax(
    scope: str,
    known_syntaxes: KnownSyntaxes = DEFAULT_SYNTAXES,
    default: str = "html",
) -> str:
    """
    Detect the syntax id for a scope string.

    Args:
        scope: Scope at the caret
        known_syntaxes: Syntaxes the engine supports, as a collection or
            as a predicate asking the engine
        default: Syntax used when no rule matches or the match is unknown

    Returns:
        Syntax id
    """
    if callable(known_syntaxes):
        is_known = known_syntaxes
    else:
        is_known = set(known_syntaxes).__contains__

    for rule in SYNTAX_RULES:
        syntax = rule.apply(scope, is_known)
        if syntax is None:
            continue
        if rule.final:
            return syntax
        break
    else:
        syntax = default

    syntax = SYNTAX_ALIASES.get(syntax, syntax)
    if not is_known(syntax):
        return default if is_known(default) else "html"
    return syntax


def default_profile(
    syntax: str,
    content: str = "",
    profile_overrides: Optional[dict[str, str]] = None,
) -> str:
    """Default output profile for a syntax."""
    if profile_overrides and syntax in profile_overrides:
        return profile_overrides[syntax]
    if syntax in ("xml", "xsl"):
        return "xml"
    if syntax == "html":
        return "xhtml" if is_xhtml(content) else "html"
    return "xhtml"


def detect_profile(
    scope: str,
    syntax: str,
    content: str = "",
    autodetect_xhtml: bool = False,
    profile_overrides: Optional[dict[str, str]] = None,
) -> str:
    """
    Detect the output profile for a scope string.

    Args:
        scope: Scope at the caret
        syntax: Syntax detected for the same position
        content: Document content, used for doctype sniffing
        autodetect_xhtml: Allow switching HTML documents to "xhtml"
        profile_overrides: Per-syntax profiles configured by the user

    Returns:
        Profile id
    """
    for rule in PROFILE_RULES:
        if not match_selector(scope, rule.selector):
            continue
        if rule.xhtml_only and not (autodetect_xhtml and is_xhtml(content)):
            continue
        return rule.profile or default_profile(syntax, content, profile_overrides)

    return default_profile(syntax, content, profile_overrides)
