"""Primitive single-token matchers.

Each matcher is a funcparserlib parser that consumes exactly one token on
success. On failure nothing is consumed, and the matcher's name is what
diagnostics report as expected.

Keywords are NAME tokens with a fixed text, so `name_with_text("event")`
tells a keyword from an identifier without a keyword token type.
"""

from __future__ import annotations

from funcparserlib.parser import Parser, some

from vyparse.lexer.tokens import TokenType
from vyparse.parser.combinators import verify

any_token = some(lambda token: True).named("any token")


def token_of_type(token_type: TokenType) -> Parser:
    """Match one token whose type is `token_type`."""
    return some(lambda token: token.type is token_type).named(f"{token_type.name.lower()} token")


name_token = token_of_type(TokenType.NAME)
op_token = token_of_type(TokenType.OP)
number_token = token_of_type(TokenType.NUMBER)
string_token = token_of_type(TokenType.STRING)
indent_token = token_of_type(TokenType.INDENT)
dedent_token = token_of_type(TokenType.DEDENT)
newline_token = token_of_type(TokenType.NEWLINE)
endmarker_token = token_of_type(TokenType.ENDMARKER)


def name_with_text(text: str) -> Parser:
    """Match a NAME token spelled exactly `text`."""
    return verify(name_token, lambda token: token.string == text, repr(text))


def op_with_text(text: str) -> Parser:
    """Match an OP token spelled exactly `text`."""
    return verify(op_token, lambda token: token.string == text, repr(text))
