"""vyparse lexer — tokenizer with indentation-sensitive scanning."""

from vyparse.lexer.tokens import NON_SIGNIFICANT, Token, TokenType
from vyparse.lexer.lexer import Lexer, LexerError

__all__ = ["NON_SIGNIFICANT", "Token", "TokenType", "Lexer", "LexerError"]
