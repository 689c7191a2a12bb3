"""Error model for the token-stream parser.

Rules never hard-code an error type. When a rule fails, `run_rule` builds
the error through whichever `TokenError` class the caller chose, so the
same grammar runs with a cheap `SimpleError` (position and kind only) or a
`VerboseError` (expected item, offending token and context trail).

`ParseFailure` carries that error out of `run_rule`; the entry points turn
it into `ParseError` with a source location.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import TYPE_CHECKING

from vyparse.lexer.tokens import Token

if TYPE_CHECKING:
    from vyparse.parser.stream import TokenStream


class ErrorKind(Enum):
    """Elementary reason a primitive matcher failed."""

    EOF = auto()        # the stream was exhausted
    VERIFY = auto()     # the next token did not satisfy a predicate


class TokenError(ABC):
    """Error-construction capability shared by every grammar rule.

    Implementations are immutable; `add_context` and `or_` return new
    values. `position` is the index of the token where matching failed.
    """

    position: int

    @classmethod
    @abstractmethod
    def from_end_of_input(cls, stream: TokenStream) -> TokenError:
        """Build the error for a rule that needed a token but found none."""

    @classmethod
    @abstractmethod
    def from_unexpected(cls, stream: TokenStream, expected: str) -> TokenError:
        """Build the error for a next token that failed a predicate."""

    @abstractmethod
    def add_context(self, stream: TokenStream, label: str) -> TokenError:
        """Attach a human-readable label for the construct being attempted."""

    @abstractmethod
    def or_(self, other: TokenError) -> TokenError:
        """Combine with the error of an alternative tried from the same place."""

    @abstractmethod
    def describe(self) -> str:
        """Render the error as a one-line diagnostic."""


@dataclass(frozen=True)
class SimpleError(TokenError):
    """Position and kind only. Context labels are dropped and the error is
    reported where the parse stopped."""

    position: int
    kind: ErrorKind

    @classmethod
    def from_end_of_input(cls, stream: TokenStream) -> SimpleError:
        return cls(stream.pos, ErrorKind.EOF)

    @classmethod
    def from_unexpected(cls, stream: TokenStream, expected: str) -> SimpleError:
        return cls(stream.pos, ErrorKind.VERIFY)

    def add_context(self, stream: TokenStream, label: str) -> SimpleError:
        return self

    def or_(self, other: TokenError) -> TokenError:
        return other

    def describe(self) -> str:
        if self.kind is ErrorKind.EOF:
            return f"unexpected end of input at token {self.position}"
        return f"unexpected token at token {self.position}"


@dataclass(frozen=True)
class ContextFrame:
    """One context label and where the labelled construct started."""

    position: int
    label: str
    token: Token | None = None


@dataclass(frozen=True)
class VerboseError(TokenError):
    """Diagnostic error carrying the full context trail.

    `contexts` is ordered outermost first. Between alternatives the error
    that got furthest into the stream is kept, even when a repetition
    gave up on it before the parse stopped.
    """

    position: int
    kind: ErrorKind
    expected: str = ""
    token: Token | None = None
    contexts: tuple[ContextFrame, ...] = ()

    @classmethod
    def from_end_of_input(cls, stream: TokenStream) -> VerboseError:
        return cls(stream.pos, ErrorKind.EOF)

    @classmethod
    def from_unexpected(cls, stream: TokenStream, expected: str) -> VerboseError:
        return cls(stream.pos, ErrorKind.VERIFY, expected, stream.peek())

    def add_context(self, stream: TokenStream, label: str) -> VerboseError:
        frame = ContextFrame(stream.pos, label, stream.peek())
        return replace(self, contexts=(frame,) + self.contexts)

    def or_(self, other: TokenError) -> TokenError:
        if other.position >= self.position:
            return other
        return self

    @property
    def labels(self) -> tuple[str, ...]:
        return tuple(frame.label for frame in self.contexts)

    def describe(self) -> str:
        parts = list(self.labels)
        if self.kind is ErrorKind.EOF:
            parts.append("unexpected end of input")
        else:
            got = self.token.describe() if self.token is not None else "nothing"
            parts.append(f"expected {self.expected}, got {got}")

        message = ": ".join(parts)
        if self.token is not None:
            message += f" at line {self.token.line}"
        return message


class ParseFailure(Exception):
    """Raised by `run_rule` when a rule does not match. The entry points
    turn it into `ParseError`."""

    def __init__(self, error: TokenError):
        self.error = error
        super().__init__(error.describe())


class ParseError(Exception):
    """Raised on parse errors with human-readable diagnostics."""

    def __init__(self, error: TokenError, token: Token | None, filename: str = "<unknown>"):
        self.error = error
        self.token = token
        self.line = token.line if token is not None else None
        self.column = token.column if token is not None else None
        loc = f"{token.file}:{token.line}:{token.column}" if token is not None else filename
        super().__init__(f"{loc}: {error.describe()}")
