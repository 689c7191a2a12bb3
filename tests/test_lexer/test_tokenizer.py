"""Tests for the vyparse lexer/tokenizer."""

import pytest

from vyparse.lexer.lexer import Lexer, LexerError
from vyparse.lexer.tokens import TokenType


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def token_types(source: str) -> list[TokenType]:
    """Return the token types, structural tokens included."""
    tokens = Lexer(source).tokenize()
    return [t.type for t in tokens]


def token_strings(source: str, token_type: TokenType) -> list[str]:
    """Return the source text of every token of `token_type`."""
    tokens = Lexer(source).tokenize()
    return [t.string for t in tokens if t.type == token_type]


N = TokenType.NAME
OP = TokenType.OP
NUM = TokenType.NUMBER
NEWLINE = TokenType.NEWLINE
NL = TokenType.NL
INDENT = TokenType.INDENT
DEDENT = TokenType.DEDENT
END = TokenType.ENDMARKER


# ---------------------------------------------------------------------------
# Blank input
# ---------------------------------------------------------------------------

class TestBlankInput:
    def test_empty_source(self):
        tokens = Lexer("").tokenize()
        assert len(tokens) == 1
        assert tokens[0].type == TokenType.ENDMARKER

    def test_whitespace_only(self):
        assert token_types("  \t ") == [END]

    def test_blank_lines_are_nl(self):
        assert token_types(" \n\n   \t \n \t ") == [NL, NL, NL, END]

    def test_comment_only_line(self):
        tokens = Lexer("# just a comment\n").tokenize()
        assert [t.type for t in tokens] == [TokenType.COMMENT, NL, END]
        assert tokens[0].string == "# just a comment"


# ---------------------------------------------------------------------------
# Basic token recognition
# ---------------------------------------------------------------------------

class TestBasicTokens:
    def test_names(self):
        assert token_strings("event Greet _private x1", N) == ["event", "Greet", "_private", "x1"]

    def test_last_line_without_newline(self):
        tokens = Lexer("x").tokenize()
        assert [t.type for t in tokens] == [N, NEWLINE, END]
        assert tokens[1].string == ""

    def test_newline_string(self):
        tokens = Lexer("x\n").tokenize()
        assert tokens[1].type == NEWLINE
        assert tokens[1].string == "\n"

    def test_numbers(self):
        source = "42 3.14 0xFF 1_000 1e10 2.5e-3 .5 3j"
        assert token_strings(source, NUM) == [
            "42", "3.14", "0xFF", "1_000", "1e10", "2.5e-3", ".5", "3j",
        ]

    def test_strings_keep_source_text(self):
        source = "\"hi\" 'x' b\"\\x00\" r'\\d'"
        assert token_strings(source, TokenType.STRING) == [
            '"hi"', "'x'", 'b"\\x00"', "r'\\d'",
        ]

    def test_escaped_quote_in_string(self):
        assert token_strings('"say \\"hi\\""', TokenType.STRING) == ['"say \\"hi\\""']

    def test_triple_quoted_string_spans_lines(self):
        tokens = Lexer('s = """a\nb"""\nt\n').tokenize()
        strings = [t for t in tokens if t.type == TokenType.STRING]
        assert strings[0].string == '"""a\nb"""'
        assert strings[0].end_line == 2
        t = [tok for tok in tokens if tok.string == "t"][0]
        assert t.line == 3

    def test_inline_comment(self):
        tokens = Lexer("x  # note\n").tokenize()
        assert [t.type for t in tokens] == [N, TokenType.COMMENT, NEWLINE, END]
        assert tokens[1].string == "# note"

    def test_crlf_line_endings(self):
        assert token_types("a\r\nb\r\n") == [N, NEWLINE, N, NEWLINE, END]


# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------

class TestOperators:
    def test_longest_match(self):
        source = "a -> b == c != d <= e >= f ** g // h **= i"
        assert token_strings(source, OP) == ["->", "==", "!=", "<=", ">=", "**", "//", "**="]

    def test_single_character_operators(self):
        assert token_strings("a: b, c.d; e = f + g", OP) == [":", ",", ".", ";", "=", "+"]

    def test_newline_inside_brackets_is_nl(self):
        assert token_types("f(a,\n  b)\n") == [N, OP, N, OP, NL, N, OP, NEWLINE, END]

    def test_backslash_continuation(self):
        assert token_types("x = 1 + \\\n    2\n") == [N, OP, NUM, OP, NUM, NEWLINE, END]


# ---------------------------------------------------------------------------
# Indentation
# ---------------------------------------------------------------------------

class TestIndentation:
    def test_single_indent(self):
        assert token_types("event Greet:\n    name: bytes32\n") == [
            N, N, OP, NEWLINE,
            INDENT, N, OP, N, NEWLINE,
            DEDENT, END,
        ]

    def test_indent_string_is_leading_whitespace(self):
        tokens = Lexer("a:\n    b\n").tokenize()
        indent = [t for t in tokens if t.type == INDENT][0]
        assert indent.string == "    "

    def test_dedent_multiple_levels(self):
        assert token_types("a:\n  b:\n    c\nd\n") == [
            N, OP, NEWLINE,
            INDENT, N, OP, NEWLINE,
            INDENT, N, NEWLINE,
            DEDENT, DEDENT, N, NEWLINE, END,
        ]

    def test_eof_produces_remaining_dedents(self):
        types = token_types("a:\n  b:\n    c")
        assert types[-3:] == [DEDENT, DEDENT, END]

    def test_blank_line_inside_block_keeps_level(self):
        assert token_types("a:\n  b\n\n  c\n") == [
            N, OP, NEWLINE,
            INDENT, N, NEWLINE, NL, N, NEWLINE,
            DEDENT, END,
        ]

    def test_tab_counts_to_next_tab_stop(self):
        types = token_types("a:\n\tb\n        c\n")
        assert types.count(INDENT) == 1
        assert types.count(DEDENT) == 1

    def test_inconsistent_dedent_error(self):
        with pytest.raises(LexerError, match="does not match any outer indentation level"):
            Lexer("a:\n    b\n  c\n").tokenize()


# ---------------------------------------------------------------------------
# Source locations
# ---------------------------------------------------------------------------

class TestSourceLocations:
    def test_line_numbers(self):
        tokens = Lexer("a\nb\nc\n").tokenize()
        names = [t for t in tokens if t.type == N]
        assert [t.line for t in names] == [1, 2, 3]

    def test_column_numbers(self):
        tokens = Lexer("event Greet:\n    name: bytes32\n").tokenize()
        positions = [(t.string, t.line, t.column) for t in tokens if t.type in (N, OP)]
        assert positions == [
            ("event", 1, 1), ("Greet", 1, 7), (":", 1, 12),
            ("name", 2, 5), (":", 2, 9), ("bytes32", 2, 11),
        ]

    def test_end_positions(self):
        tokens = Lexer("bytes32").tokenize()
        assert (tokens[0].end_line, tokens[0].end_column) == (1, 8)

    def test_filename_propagated(self):
        tokens = Lexer("x", filename="token.vy").tokenize()
        assert all(t.file == "token.vy" for t in tokens)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class TestErrors:
    def test_unterminated_string(self):
        with pytest.raises(LexerError, match="Unterminated string"):
            Lexer('"never closed').tokenize()

    def test_string_broken_by_newline(self):
        with pytest.raises(LexerError, match="Unterminated string"):
            Lexer('"abc\n"').tokenize()

    def test_unexpected_character(self):
        with pytest.raises(LexerError, match="Unexpected character"):
            Lexer("a ? b").tokenize()

    def test_unmatched_closing_bracket(self):
        with pytest.raises(LexerError, match="Unmatched"):
            Lexer("f(a]\n").tokenize()

    def test_unclosed_bracket(self):
        with pytest.raises(LexerError, match="never closed"):
            Lexer("f(a,\n").tokenize()

    def test_error_location_in_message(self):
        with pytest.raises(LexerError) as exc_info:
            Lexer("ok\n  ?", filename="bad.vy").tokenize()
        assert str(exc_info.value).startswith("bad.vy:2:")
        assert exc_info.value.line == 2
