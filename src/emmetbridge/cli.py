"""Command-line interface for emmetbridge."""

import argparse
import json
import logging
import sys

from .config import settings


def main(argv=None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="emmetbridge - tabstop renumbering and abbreviation expansion glue"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Renumber command
    renumber_parser = subparsers.add_parser(
        "renumber", help="Renumber tabstops in an expanded template"
    )
    renumber_parser.add_argument(
        "file", nargs="?", help="File holding the template (default: stdin)"
    )
    renumber_parser.add_argument(
        "--json", action="store_true", help="Print placeholders and exit point as JSON"
    )
    renumber_parser.add_argument(
        "--final-tabstop", action="store_true", help="Always append a ${0} final stop"
    )

    # Detect command
    detect_parser = subparsers.add_parser(
        "detect", help="Detect syntax and output profile for a scope string"
    )
    detect_parser.add_argument("scope", help="Scope at the caret, e.g. 'text.html.basic'")
    detect_parser.add_argument(
        "--content", default="", help="Document content used for doctype sniffing"
    )

    # Expand command
    expand_parser = subparsers.add_parser(
        "expand", help="Expand an abbreviation from a snippet table"
    )
    expand_parser.add_argument("abbreviation", help="Abbreviation to expand")
    expand_parser.add_argument(
        "--snippet",
        "-s",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Snippet definition (repeatable)",
    )
    expand_parser.add_argument(
        "--syntax", default=settings.default_syntax, help="Syntax id (default: %(default)s)"
    )
    expand_parser.add_argument(
        "--profile", default="html", help="Output profile (default: %(default)s)"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "renumber":
        run_renumber(args.file, args.json, args.final_tabstop)
    elif args.command == "detect":
        run_detect(args.scope, args.content)
    elif args.command == "expand":
        run_expand(args.abbreviation, args.snippet, args.syntax, args.profile)
    else:
        parser.print_help()
        sys.exit(1)


def run_renumber(path: str = None, as_json: bool = False, final_tabstop: bool = False):
    """Renumber a template read from a file or stdin."""
    from .tabstops import TabstopRenumberer

    if path:
        with open(path, encoding="utf-8") as f:
            template = f.read()
    else:
        template = sys.stdin.read()

    renumberer = TabstopRenumberer(
        linked_base=settings.linked_base,
        insert_final_tabstop=final_tabstop or settings.insert_final_tabstop,
        anchor_exit_as_zero=settings.anchor_exit_as_zero,
    )
    result = renumberer.renumber(template)

    if as_json:
        print(json.dumps(result.model_dump(exclude={"original"}), indent=2))
    else:
        sys.stdout.write(result.text)


def run_detect(scope: str, content: str = ""):
    """Print the syntax and profile detected for a scope."""
    from .detection import detect_profile, detect_syntax
    from .engine import StaticSnippetEngine

    syntax = detect_syntax(
        scope,
        known_syntaxes=StaticSnippetEngine().has_syntax,
        default=settings.default_syntax,
    )
    profile = detect_profile(
        scope,
        syntax,
        content=content,
        autodetect_xhtml=settings.autodetect_xhtml,
        profile_overrides=settings.profile_overrides,
    )
    print(f"syntax: {syntax}")
    print(f"profile: {profile}")


def run_expand(abbreviation: str, snippet_defs: list[str], syntax: str, profile: str):
    """Expand an abbreviation with snippets given on the command line."""
    from .engine import ExpansionError, StaticSnippetEngine
    from .tabstops import TabstopRenumberer

    engine = StaticSnippetEngine()
    for definition in snippet_defs:
        name, separator, value = definition.partition("=")
        if not separator:
            print(f"Invalid snippet definition: {definition}", file=sys.stderr)
            sys.exit(2)
        engine.add_snippet(syntax, name, value)

    try:
        expanded = engine.expand_abbreviation(abbreviation, syntax, profile)
    except ExpansionError as e:
        print(f"Expansion failed: {e}", file=sys.stderr)
        sys.exit(1)

    renumberer = TabstopRenumberer(
        linked_base=settings.linked_base,
        insert_final_tabstop=settings.insert_final_tabstop,
        anchor_exit_as_zero=settings.anchor_exit_as_zero,
    )
    print(renumberer.renumber(expanded).text)


if __name__ == "__main__":
    main()
