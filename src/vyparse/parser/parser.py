"""Parser entry points.

Filters the lexer's token stream down to the grammatically significant
tokens and runs the module grammar over it.

Usage::

    from vyparse.lexer import Lexer
    from vyparse.parser import Parser

    tokens = Lexer(source, "example.vy").tokenize()
    module = Parser(tokens, "example.vy").parse()
"""

from __future__ import annotations

import logging
from typing import Iterable

from vyparse.ast.nodes import Module
from vyparse.lexer.lexer import Lexer
from vyparse.lexer.tokens import NON_SIGNIFICANT, Token
from vyparse.parser.combinators import run_rule
from vyparse.parser.errors import ParseError, ParseFailure, TokenError, VerboseError
from vyparse.parser.grammar import parse_file
from vyparse.parser.stream import TokenStream

logger = logging.getLogger(__name__)


def filter_tokens(tokens: Iterable[Token]) -> tuple[Token, ...]:
    """Drop NL and COMMENT tokens, which never reach the grammar."""
    return tuple(t for t in tokens if t.type not in NON_SIGNIFICANT)


def get_parse_tokens(source: str, filename: str = "<unknown>") -> tuple[Token, ...]:
    """Tokenize `source` and keep only the tokens relevant to parsing."""
    return filter_tokens(Lexer(source, filename).tokenize())


def parse_tokens(
    tokens: Iterable[Token],
    errors: type[TokenError] = VerboseError,
) -> tuple[TokenStream, Module]:
    """Run the file grammar over already-filtered `tokens`.

    Returns the unconsumed stream and the module; raises `ParseFailure`
    carrying an error of type `errors` when the tokens do not match.
    """
    return run_rule(parse_file, tokens, errors)


class Parser:
    """Parses a lexer token stream into a `Module` AST."""

    def __init__(
        self,
        tokens: Iterable[Token],
        filename: str = "<unknown>",
        errors: type[TokenError] = VerboseError,
    ) -> None:
        self.tokens = filter_tokens(tokens)
        self.filename = filename
        self.errors = errors

    def parse(self) -> Module:
        """Parse the token stream, raising `ParseError` on failure."""
        logger.debug(
            "Parsing %s: %d significant tokens, %s",
            self.filename, len(self.tokens), self.errors.__name__,
        )
        try:
            _, module = parse_tokens(self.tokens, self.errors)
        except ParseFailure as exc:
            token = self._token_at(exc.error.position)
            raise ParseError(exc.error, token, self.filename) from None

        logger.debug("Parsed %s: %d module statement(s)", self.filename, len(module.body))
        return module

    def _token_at(self, position: int) -> Token | None:
        if 0 <= position < len(self.tokens):
            return self.tokens[position]
        return None


def parse_source(
    source: str,
    filename: str = "<unknown>",
    errors: type[TokenError] = VerboseError,
) -> Module:
    """Tokenize and parse `source` in one step."""
    tokens = Lexer(source, filename).tokenize()
    return Parser(tokens, filename, errors).parse()
