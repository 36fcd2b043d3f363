"""Configuration management for emmetbridge."""

import os

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()

NEWLINE_STYLES = {"lf": "\n", "crlf": "\r\n", "cr": "\r"}


def _parse_bool(name: str, default: str = "false") -> bool:
    """Parse a boolean flag from an environment variable."""
    return os.getenv(name, default).lower() == "true"


def _parse_newline() -> str:
    """Parse the newline style from environment variable."""
    style = os.getenv("NEWLINE", "lf").strip().lower()
    return NEWLINE_STYLES.get(style, "\n")


def _parse_indentation() -> str:
    """Parse the indentation unit: "tab" or a number of spaces."""
    value = os.getenv("INDENTATION", "tab").strip().lower()
    if value.isdigit():
        return " " * int(value)
    return "\t"


def _parse_profile_overrides() -> dict[str, str]:
    """Parse per-syntax profiles from a "syntax:profile,..." list."""
    overrides_env = os.getenv("PROFILE_OVERRIDES")
    if not overrides_env:
        return {}
    overrides = {}
    for item in overrides_env.split(","):
        syntax, _, profile = item.partition(":")
        if syntax.strip() and profile.strip():
            overrides[syntax.strip()] = profile.strip()
    return overrides


class Settings(BaseModel):
    """Application settings."""

    # Tabstop handling
    insert_final_tabstop: bool = _parse_bool("INSERT_FINAL_TABSTOP")  # Always append a ${0} final stop
    anchor_exit_as_zero: bool = _parse_bool("ANCHOR_EXIT_AS_ZERO")  # Rewrite the exit placeholder as ${0}
    linked_base: int = int(os.getenv("TABSTOP_LINKED_BASE", "1000"))  # Offset for author-numbered groups

    # Insertion
    preserve_indent: bool = _parse_bool("PRESERVE_INDENT", "true")
    newline: str = _parse_newline()
    indentation: str = _parse_indentation()
    trim_trailing_whitespace: bool = _parse_bool("TRIM_TRAILING_WHITESPACE")

    # Syntax and profile detection
    default_syntax: str = os.getenv("DEFAULT_SYNTAX", "html")
    autodetect_xhtml: bool = _parse_bool("AUTODETECT_XHTML")
    profile_overrides: dict[str, str] = _parse_profile_overrides()

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "WARNING")


settings = Settings()
