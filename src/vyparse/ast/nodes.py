"""Immutable AST node definitions.

Nodes are built bottom-up by the grammar rules and never mutated after
construction. Children are held in tuples and there are no back-references,
so the AST is a strict tree.

Every node carries the location of the first token of its construct. The
location is excluded from equality so that two parses of the same
declarations compare equal regardless of blank lines or comments.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, TypeAlias, Union


# ---------------------------------------------------------------------------
# Source location
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Pinpoints a span in a source file."""

    file: str
    line: int
    column: int
    end_line: int | None = None
    end_column: int | None = None

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}"


# ---------------------------------------------------------------------------
# Event definitions
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class EventField:
    """One `name: type` line of an event body.

    The type is kept as the raw type name; resolving it is left to
    semantic analysis.
    """

    name: str
    type: str
    loc: SourceLocation | None = field(default=None, compare=False, repr=False)

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "type": self.type}


@dataclass(frozen=True)
class EventDef:
    name: str
    fields: tuple[EventField, ...]
    loc: SourceLocation | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if not self.fields:
            raise ValueError(f"event {self.name!r} must declare at least one field")

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": "EventDef",
            "name": self.name,
            "fields": [f.to_dict() for f in self.fields],
        }


# ---------------------------------------------------------------------------
# Module
# ---------------------------------------------------------------------------

# Closed set of top-level declarations. A new statement kind needs an arm in
# this union and an entry in MODULE_STMT_KINDS.
ModuleStmt: TypeAlias = Union[EventDef]

MODULE_STMT_KINDS: tuple[type, ...] = (EventDef,)


@dataclass(frozen=True)
class Module:
    """Root node: top-level statements in declaration order."""

    body: tuple[ModuleStmt, ...] = ()
    loc: SourceLocation | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        for stmt in self.body:
            if not isinstance(stmt, MODULE_STMT_KINDS):
                raise TypeError(f"not a module statement: {type(stmt).__name__}")

    @property
    def events(self) -> tuple[EventDef, ...]:
        return tuple(stmt for stmt in self.body if isinstance(stmt, EventDef))

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "Module", "body": [stmt.to_dict() for stmt in self.body]}
