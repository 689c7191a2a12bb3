"""vyparse command line entry point.

Usage:
    vyparse parse <file.vy> [--json] [--simple-errors] [--verbose]
                                        Parse and display the AST
    vyparse tokenize <file.vy>          Display the token stream (debug)

The log level defaults to WARNING and can be set with the
VYPARSE_LOG_LEVEL environment variable; --verbose forces DEBUG.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path

from vyparse.ast.nodes import Module
from vyparse.lexer.lexer import Lexer, LexerError
from vyparse.parser.errors import ParseError, SimpleError, VerboseError
from vyparse.parser.parser import Parser

logger = logging.getLogger(__name__)

FLAGS = frozenset({"--json", "--simple-errors", "--verbose", "-v"})


def main(argv: list[str] | None = None) -> int:
    args = argv if argv is not None else sys.argv[1:]
    flags = {a for a in args if a in FLAGS}
    args = [a for a in args if a not in FLAGS]

    _configure_logging("--verbose" in flags or "-v" in flags)

    if len(args) < 1:
        print(__doc__.strip())
        return 1

    command = args[0]

    if command in ("--help", "-h"):
        print(__doc__.strip())
        return 0

    if command == "--version":
        from vyparse import __version__
        print(f"vyparse {__version__}")
        return 0

    if len(args) < 2:
        print(f"Error: command '{command}' requires a file argument")
        return 1

    filepath = Path(args[1])
    if not filepath.exists():
        print(f"Error: file not found: {filepath}")
        return 1

    source = filepath.read_text(encoding="utf-8")
    filename = str(filepath)
    logger.debug("Read %d characters from %s", len(source), filename)

    if command == "tokenize":
        return _cmd_tokenize(source, filename)
    elif command == "parse":
        return _cmd_parse(
            source,
            filename,
            as_json="--json" in flags,
            simple_errors="--simple-errors" in flags,
        )
    else:
        print(f"Error: unknown command '{command}'")
        print(__doc__.strip())
        return 1


def _configure_logging(verbose: bool) -> None:
    level_name = "DEBUG" if verbose else os.environ.get("VYPARSE_LOG_LEVEL", "WARNING")
    level = getattr(logging, level_name.upper(), logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _cmd_tokenize(source: str, filename: str) -> int:
    """Display the token stream."""
    try:
        tokens = Lexer(source, filename).tokenize()
    except LexerError as e:
        print(f"Lexer error: {e}")
        return 1

    for tok in tokens:
        print(tok)
    return 0


def _cmd_parse(source: str, filename: str, as_json: bool = False, simple_errors: bool = False) -> int:
    """Parse the file and display the AST."""
    errors = SimpleError if simple_errors else VerboseError
    try:
        tokens = Lexer(source, filename).tokenize()
        module = Parser(tokens, filename, errors).parse()
    except (LexerError, ParseError) as e:
        print(f"Error: {e}")
        return 1

    if as_json:
        print(json.dumps(module.to_dict(), indent=2))
    else:
        _print_module(module)
    return 0


def _print_module(module: Module) -> None:
    """Pretty-print a module AST."""
    if not module.body:
        print("(empty module)")
        return

    for event in module.events:
        print(f"Event: {event.name}")
        for f in event.fields:
            print(f"  field: {f.name}: {f.type}")
        print()


if __name__ == "__main__":
    sys.exit(main())
