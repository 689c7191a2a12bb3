"""Project-specific combinators on top of funcparserlib.

Sequencing (``+``, ``skip``), repetition (``many``, ``oneplus``) and ordered
choice (``|``) come straight from funcparserlib. funcparserlib tracks the
furthest position any branch reached (``State.max``) and the parser that
failed there, so a repetition that stops early still leaves the deepest
failure behind for error reporting.

What funcparserlib does not provide lives here:

- `verify`: reject a value without consuming, reported under a name;
- `context`: attach a label to failures of a rule;
- `many_till`: repeat until a terminator, propagating item failures;
- `run_rule`: run a rule and turn ``NoParseError`` into the caller's
  `TokenError` type.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable

from funcparserlib.parser import NoParseError, Parser, State

from vyparse.lexer.tokens import Token
from vyparse.parser.errors import ParseFailure, TokenError, VerboseError
from vyparse.parser.stream import TokenStream


def verify(rule: Parser, predicate: Callable[[Any], bool], expected: str) -> Parser:
    """Apply `rule`, then reject its value unless `predicate` holds.

    A rejection is reported at the position `rule` started from, under the
    name `expected`, as if `rule` itself had not matched.
    """

    @Parser
    def _verify(tokens, s):
        try:
            value, rest = rule.run(tokens, s)
        except NoParseError as e:
            if e.state.max != s.pos:
                raise
            # failed right here: report the narrower name
            raise NoParseError(e.msg, State(e.state.pos, e.state.max, _verify)) from None
        if not predicate(value):
            raise NoParseError(
                "got unexpected token",
                State(s.pos, s.max, _verify if s.pos == s.max else s.parser),
            )
        return value, rest

    return _verify.named(expected)


def context(label: str, rule: Parser) -> Parser:
    """Label failures of `rule` with the construct it was attempting.

    Labels are kept on the exception as ``(position, label)`` pairs,
    outermost first.
    """

    @Parser
    def _context(tokens, s):
        try:
            return rule.run(tokens, s)
        except NoParseError as e:
            e.contexts = ((s.pos, label),) + getattr(e, "contexts", ())
            raise

    return _context.named(label)


def many_till(rule: Parser, end: Parser) -> Parser:
    """Apply `rule` until `end` matches, then consume `end` too.

    Produces ``(values, end_value)``. Unlike ``many``, a failure of `rule`
    is not swallowed: it propagates with its context labels.
    """

    @Parser
    def _many_till(tokens, s):
        values = []
        while True:
            try:
                end_value, rest = end.run(tokens, s)
            except NoParseError as e:
                s = State(s.pos, e.state.max, e.state.parser)
            else:
                return (values, end_value), rest

            value, rest = rule.run(tokens, s)
            if rest.pos == s.pos:
                raise NoParseError("rule matched without consuming input", s)
            values.append(value)
            s = rest

    return _many_till.named(f"{{ {rule.name} }} {end.name}")


def run_rule(
    rule: Parser,
    tokens: Iterable[Token],
    errors: type[TokenError] = VerboseError,
    pos: int = 0,
) -> tuple[TokenStream, Any]:
    """Run `rule` over `tokens` starting at `pos`.

    Returns the unconsumed stream and the value; raises `ParseFailure`
    carrying an error of type `errors` when the rule does not match.
    """
    tokens = tuple(tokens)
    try:
        value, state = rule.run(tokens, State(pos, pos))
    except NoParseError as e:
        raise ParseFailure(_to_error(tokens, e, errors)) from None
    return TokenStream(tokens, state.pos), value


def _to_error(tokens: tuple[Token, ...], exc: NoParseError, errors: type[TokenError]) -> TokenError:
    state = exc.state
    deepest = _elementary(errors, TokenStream(tokens, state.max), state.parser)
    latest = _elementary(
        errors,
        TokenStream(tokens, state.pos),
        state.parser if state.pos == state.max else None,
    )
    # SimpleError keeps where the parse stopped, VerboseError the furthest point reached
    error = deepest.or_(latest)
    for position, label in reversed(getattr(exc, "contexts", ())):
        error = error.add_context(TokenStream(tokens, position), label)
    return error


def _elementary(errors: type[TokenError], stream: TokenStream, parser: Parser | None) -> TokenError:
    if stream.at_end:
        return errors.from_end_of_input(stream)
    return errors.from_unexpected(stream, parser.name if parser is not None else "")
