"""Token-stream parser: primitive matchers, combinators and the module grammar."""

from vyparse.parser.errors import (
    ContextFrame,
    ErrorKind,
    ParseError,
    ParseFailure,
    SimpleError,
    TokenError,
    VerboseError,
)
from vyparse.parser.stream import TokenStream
from vyparse.parser.combinators import context, many_till, run_rule, verify
from vyparse.parser.grammar import (
    parse_event_def,
    parse_event_field,
    parse_file,
    parse_module_stmt,
)
from vyparse.parser.parser import (
    Parser,
    filter_tokens,
    get_parse_tokens,
    parse_source,
    parse_tokens,
)

__all__ = [
    "ContextFrame",
    "ErrorKind",
    "ParseError",
    "ParseFailure",
    "SimpleError",
    "TokenError",
    "VerboseError",
    "TokenStream",
    "context",
    "many_till",
    "run_rule",
    "verify",
    "parse_event_def",
    "parse_event_field",
    "parse_file",
    "parse_module_stmt",
    "Parser",
    "filter_tokens",
    "get_parse_tokens",
    "parse_source",
    "parse_tokens",
]
