"""AST model produced by the vyparse grammar."""

from vyparse.ast.nodes import (
    MODULE_STMT_KINDS,
    EventDef,
    EventField,
    Module,
    ModuleStmt,
    SourceLocation,
)

__all__ = ["MODULE_STMT_KINDS", "EventDef", "EventField", "Module", "ModuleStmt", "SourceLocation"]
