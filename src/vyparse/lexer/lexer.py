"""vyparse lexer — hand-written tokenizer with indentation-sensitive scanning.

Design decisions:
- Token classes follow Python's tokenize module (NAME, OP, NUMBER, STRING,
  NEWLINE, NL, COMMENT, INDENT, DEDENT, ENDMARKER).
- Every token keeps the exact source text it was scanned from.
- Blank and comment-only lines produce NL, never NEWLINE, and never move
  the indentation level.
- Newlines inside brackets produce NL; a backslash before a newline joins
  the two physical lines.
- Produces a flat token stream; the parser filters out NL and COMMENT.
"""

from __future__ import annotations

import logging

from vyparse.lexer.tokens import (
    CLOSING_BRACKETS,
    OPENING_BRACKETS,
    OPERATORS,
    STRING_PREFIXES,
    Token,
    TokenType,
)

logger = logging.getLogger(__name__)


class LexerError(Exception):
    """Raised on lexical errors with source location."""

    def __init__(self, message: str, line: int, column: int, file: str = "<unknown>"):
        self.line = line
        self.column = column
        self.file = file
        super().__init__(f"{file}:{line}:{column}: {message}")


class Lexer:
    """Tokenizes source code into a stream of `Token` objects.

    Usage::

        lexer = Lexer(source_text, filename="example.vy")
        tokens = lexer.tokenize()
    """

    TAB_SIZE = 8

    def __init__(self, source: str, filename: str = "<unknown>") -> None:
        self.source = source.replace("\r\n", "\n").replace("\r", "\n")
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: list[Token] = []
        self.indent_stack: list[int] = [0]
        self.brackets: list[str] = []

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def tokenize(self) -> list[Token]:
        """Tokenize the entire source and return the token list."""
        self.tokens = []
        self.indent_stack = [0]
        self.brackets = []
        self.pos = 0
        self.line = 1
        self.column = 1

        while not self._at_end():
            self._scan_line()

        if self.brackets:
            raise LexerError(
                f"Unexpected end of input: {self.brackets[-1]!r} was never closed",
                self.line, self.column, self.filename,
            )

        # Close every open block at EOF
        while len(self.indent_stack) > 1:
            self.indent_stack.pop()
            self._emit(TokenType.DEDENT, self._mark())

        self._emit(TokenType.ENDMARKER, self._mark())
        logger.debug("Tokenized %s into %d tokens", self.filename, len(self.tokens))
        return self.tokens

    # ------------------------------------------------------------------
    # Line-level scanning
    # ------------------------------------------------------------------

    def _scan_line(self) -> None:
        """Process one logical line (indentation + content + newline)."""
        start = self._mark()
        indent = self._measure_indent()

        # Trailing whitespace at EOF
        if self._at_end():
            return

        # Blank lines and comment-only lines
        if self._peek() == "#":
            self._scan_comment()
            self._emit_newline(TokenType.NL)
            return
        if self._peek() == "\n":
            self._emit_newline(TokenType.NL)
            return

        self._emit_indentation(indent, start)
        self._scan_logical_line()

    def _emit_indentation(self, indent: int, start: tuple[int, int, int]) -> None:
        """Emit INDENT / DEDENT tokens for a change of indentation level."""
        current = self.indent_stack[-1]
        if indent > current:
            self.indent_stack.append(indent)
            self._emit(TokenType.INDENT, start)
        elif indent < current:
            while self.indent_stack[-1] > indent:
                self.indent_stack.pop()
                self._emit(TokenType.DEDENT, self._mark())
            if self.indent_stack[-1] != indent:
                raise LexerError(
                    f"Dedent to column {indent} does not match any outer indentation level",
                    self.line, self.column, self.filename,
                )

    def _scan_logical_line(self) -> None:
        """Scan tokens up to and including the NEWLINE ending the line."""
        while not self._at_end():
            ch = self._peek()
            if ch in " \t\f":
                self._advance()
                continue
            if ch == "#":
                self._scan_comment()
                continue
            if ch == "\\" and self._peek_ahead(1) == "\n":
                self._advance()
                self._advance()
                continue
            if ch == "\n":
                if self.brackets:
                    self._emit_newline(TokenType.NL)
                    continue
                self._emit_newline(TokenType.NEWLINE)
                return
            self._scan_token()

        # Last line without a trailing newline
        if not self.brackets:
            self._emit_newline(TokenType.NEWLINE)

    # ------------------------------------------------------------------
    # Token scanning
    # ------------------------------------------------------------------

    def _scan_token(self) -> None:
        """Scan a single token at the current position."""
        ch = self._peek()
        start = self._mark()

        if ch in "\"'":
            self._scan_string(start)
            return

        next_ch = self._peek_ahead(1)
        if ch.isdigit() or (ch == "." and next_ch is not None and next_ch.isdigit()):
            self._scan_number(start)
            return

        if ch.isalpha() or ch == "_":
            self._scan_name(start)
            return

        for op in OPERATORS:
            if self.source.startswith(op, self.pos):
                self._advance_by(len(op))
                self._track_bracket(op, start)
                self._emit(TokenType.OP, start)
                return

        raise LexerError(
            f"Unexpected character: {ch!r}",
            self.line, self.column, self.filename,
        )

    def _scan_name(self, start: tuple[int, int, int]) -> None:
        """Scan an identifier, or a prefixed string literal such as b"..."."""
        while not self._at_end() and (self._peek().isalnum() or self._peek() == "_"):
            self._advance()

        word = self.source[start[0]:self.pos]
        if word.lower() in STRING_PREFIXES and not self._at_end() and self._peek() in "\"'":
            self._scan_string(start)
            return

        self._emit(TokenType.NAME, start)

    def _scan_string(self, start: tuple[int, int, int]) -> None:
        """Scan a quoted string literal, single or triple quoted."""
        quote = self._peek()
        delimiter = quote * 3 if self.source.startswith(quote * 3, self.pos) else quote
        self._advance_by(len(delimiter))

        while True:
            if self._at_end():
                raise LexerError("Unterminated string literal", start[1], start[2], self.filename)
            if self.source.startswith(delimiter, self.pos):
                self._advance_by(len(delimiter))
                break
            ch = self._peek()
            if ch == "\\":
                self._advance()
                if not self._at_end():
                    self._advance()
                continue
            if ch == "\n" and len(delimiter) == 1:
                raise LexerError("Unterminated string literal", start[1], start[2], self.filename)
            self._advance()

        self._emit(TokenType.STRING, start)

    def _scan_number(self, start: tuple[int, int, int]) -> None:
        """Scan an integer, float or imaginary literal."""
        if self._peek() == "0" and self._peek_ahead(1) in ("x", "X", "o", "O", "b", "B"):
            self._advance_by(2)
            while not self._at_end() and (self._peek().isalnum() or self._peek() == "_"):
                self._advance()
            self._emit(TokenType.NUMBER, start)
            return

        self._scan_digits()
        if not self._at_end() and self._peek() == ".":
            self._advance()
            self._scan_digits()

        if not self._at_end() and self._peek() in "eE":
            sign = self._peek_ahead(1)
            digit = self._peek_ahead(2) if sign in ("+", "-") else sign
            if digit is not None and digit.isdigit():
                self._advance_by(2 if sign in ("+", "-") else 1)
                self._scan_digits()

        if not self._at_end() and self._peek() in "jJ":
            self._advance()

        self._emit(TokenType.NUMBER, start)

    def _scan_digits(self) -> None:
        while not self._at_end() and (self._peek().isdigit() or self._peek() == "_"):
            self._advance()

    def _scan_comment(self) -> None:
        """Scan from # to end of line into a COMMENT token."""
        start = self._mark()
        while not self._at_end() and self._peek() != "\n":
            self._advance()
        self._emit(TokenType.COMMENT, start)

    def _track_bracket(self, op: str, start: tuple[int, int, int]) -> None:
        if op in OPENING_BRACKETS:
            self.brackets.append(op)
        elif op in CLOSING_BRACKETS:
            if not self.brackets or OPENING_BRACKETS[self.brackets[-1]] != op:
                raise LexerError(f"Unmatched {op!r}", start[1], start[2], self.filename)
            self.brackets.pop()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _peek(self) -> str:
        """Return the current character without consuming it."""
        return self.source[self.pos]

    def _peek_ahead(self, offset: int) -> str | None:
        """Return a character at an offset ahead, or None if past end."""
        idx = self.pos + offset
        if idx >= len(self.source):
            return None
        return self.source[idx]

    def _advance(self) -> str:
        """Consume and return the current character."""
        ch = self.source[self.pos]
        self.pos += 1
        if ch == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return ch

    def _advance_by(self, count: int) -> None:
        for _ in range(count):
            self._advance()

    def _at_end(self) -> bool:
        return self.pos >= len(self.source)

    def _measure_indent(self) -> int:
        """Consume leading whitespace and return its width in columns."""
        width = 0
        while not self._at_end():
            ch = self._peek()
            if ch == " ":
                width += 1
            elif ch == "\t":
                width = (width // self.TAB_SIZE + 1) * self.TAB_SIZE
            elif ch == "\f":
                width = 0
            else:
                break
            self._advance()
        return width

    def _mark(self) -> tuple[int, int, int]:
        return (self.pos, self.line, self.column)

    def _emit_newline(self, token_type: TokenType) -> None:
        """Emit NEWLINE or NL, consuming the newline character if present."""
        start = self._mark()
        if not self._at_end():
            self._advance()
        self._emit(token_type, start)

    def _emit(self, token_type: TokenType, start: tuple[int, int, int]) -> None:
        pos, line, column = start
        self.tokens.append(Token(
            token_type,
            self.source[pos:self.pos],
            line,
            column,
            self.line,
            self.column,
            self.filename,
        ))
