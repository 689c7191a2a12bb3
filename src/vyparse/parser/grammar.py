"""Module-level grammar.

Grammar reference (simplified EBNF):

    file         ::= NEWLINE* module_stmt* ENDMARKER
    module_stmt  ::= event_def
    event_def    ::= 'event' NAME ':' NEWLINE INDENT event_field+ DEDENT
    event_field  ::= NAME ':' NAME NEWLINE

Each rule is a funcparserlib parser; run one with `run_rule`. A rule that
fails consumes nothing, so a node is only ever built from a complete match.
"""

from __future__ import annotations

import operator
from functools import reduce

from funcparserlib.parser import many, oneplus, skip

from vyparse.ast.nodes import EventDef, EventField, Module, SourceLocation
from vyparse.lexer.tokens import Token
from vyparse.parser.combinators import context, many_till
from vyparse.parser.matchers import (
    dedent_token,
    endmarker_token,
    indent_token,
    name_token,
    name_with_text,
    newline_token,
    op_with_text,
)

event_keyword = name_with_text("event")
colon = op_with_text(":")


def _loc(token: Token) -> SourceLocation:
    return SourceLocation(token.file, token.line, token.column, token.end_line, token.end_column)


def make_event_field(args) -> EventField:
    name, typ = args
    return EventField(name=name.string, type=typ.string, loc=_loc(name))


def make_event_def(args) -> EventDef:
    keyword, name, fields = args
    return EventDef(name=name.string, fields=tuple(fields), loc=_loc(keyword))


def make_module(args) -> Module:
    body, _ = args
    return Module(body=tuple(body), loc=body[0].loc if body else None)


# name ":" type <newline>
parse_event_field = (
    name_token + skip(colon) + name_token + skip(newline_token)
) >> make_event_field

# "event" name ":" <newline> <indent> event_field+ <dedent>
parse_event_def = (
    event_keyword + name_token + skip(colon) + skip(newline_token) +
    skip(indent_token) + oneplus(parse_event_field) + skip(dedent_token)
) >> make_event_def

# Ordered alternatives for module_stmt; every statement kind starts with its
# own keyword, so the order only matters for which error is reported.
MODULE_STMT_RULES = (
    context("expected event definition", parse_event_def),
)

parse_module_stmt = reduce(operator.or_, MODULE_STMT_RULES)

# <newline>* module_stmt* <endmarker>
parse_file = (
    skip(many(newline_token)) + many_till(parse_module_stmt, endmarker_token)
) >> make_module
