"""Token types and Token dataclass for the vyparse lexer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    """Every distinct token class the lexer can produce."""

    # Content
    NAME = auto()
    OP = auto()
    NUMBER = auto()
    STRING = auto()

    # Structure
    NEWLINE = auto()        # ends a logical line
    NL = auto()             # blank line or newline inside brackets
    COMMENT = auto()
    INDENT = auto()
    DEDENT = auto()
    ENDMARKER = auto()


# Token types that carry no grammatical meaning
NON_SIGNIFICANT: frozenset[TokenType] = frozenset({TokenType.NL, TokenType.COMMENT})

# Operators, longest first so scanning can take the first prefix that matches
OPERATORS: tuple[str, ...] = (
    "**=", "//=", ">>=", "<<=", "...",
    "->", "==", "!=", "<=", ">=", "**", "//", "<<", ">>", ":=",
    "+=", "-=", "*=", "/=", "%=", "&=", "|=", "^=", "@=",
    "(", ")", "[", "]", "{", "}", ",", ":", ".", ";",
    "+", "-", "*", "/", "%", "&", "|", "^", "~", "<", ">", "=", "@",
)

OPENING_BRACKETS = {"(": ")", "[": "]", "{": "}"}
CLOSING_BRACKETS = frozenset(OPENING_BRACKETS.values())

STRING_PREFIXES: frozenset[str] = frozenset({
    "b", "r", "u", "f", "br", "rb", "fr", "rf",
})


@dataclass(frozen=True, slots=True)
class Token:
    """A single token produced by the lexer.

    `string` is the exact source text of the token. Tokens are immutable
    and carry their full source span for diagnostics.
    """

    type: TokenType
    string: str
    line: int
    column: int
    end_line: int
    end_column: int
    file: str = "<unknown>"

    def describe(self) -> str:
        """Short human-readable form used in error messages."""
        if self.type in (TokenType.INDENT, TokenType.DEDENT, TokenType.NEWLINE, TokenType.ENDMARKER):
            return self.type.name
        return f"{self.type.name} {self.string!r}"

    def __repr__(self) -> str:
        if self.type in (TokenType.INDENT, TokenType.DEDENT, TokenType.NEWLINE, TokenType.ENDMARKER):
            return f"Token({self.type.name}, {self.line}:{self.column})"
        return f"Token({self.type.name}, {self.string!r}, {self.line}:{self.column})"
