"""Immutable cursor over a token sequence."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from vyparse.lexer.tokens import Token


@dataclass(frozen=True, slots=True)
class TokenStream:
    """A position in a shared, read-only tuple of tokens.

    Used to describe where a parse stopped and where an error occurred;
    the tokens themselves are never copied.
    """

    tokens: tuple[Token, ...]
    pos: int = 0

    @classmethod
    def of(cls, tokens: Iterable[Token]) -> TokenStream:
        return cls(tuple(tokens), 0)

    def __len__(self) -> int:
        return len(self.tokens) - self.pos

    @property
    def at_end(self) -> bool:
        return self.pos >= len(self.tokens)

    def peek(self) -> Token | None:
        """Return the next token without consuming it, or None at the end."""
        if self.at_end:
            return None
        return self.tokens[self.pos]

    def advance(self, count: int = 1) -> TokenStream:
        if self.pos + count > len(self.tokens):
            raise IndexError("cannot advance past the end of the token stream")
        return TokenStream(self.tokens, self.pos + count)

    def remaining(self) -> tuple[Token, ...]:
        return self.tokens[self.pos:]
