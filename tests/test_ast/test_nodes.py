"""Tests for the AST node definitions."""

import dataclasses

import pytest

from vyparse.ast.nodes import MODULE_STMT_KINDS, EventDef, EventField, Module, SourceLocation


class TestEventDef:
    def test_requires_a_field(self):
        with pytest.raises(ValueError, match="at least one field"):
            EventDef(name="Empty", fields=())

    def test_location_ignored_in_equality(self):
        a = EventField("x", "uint8", loc=SourceLocation("a.vy", 1, 5))
        b = EventField("x", "uint8", loc=SourceLocation("b.vy", 9, 5))
        assert a == b

    def test_nodes_are_immutable(self):
        field = EventField("x", "uint8")
        with pytest.raises(dataclasses.FrozenInstanceError):
            field.name = "y"


class TestModule:
    def test_empty_by_default(self):
        assert Module().body == ()

    def test_events(self):
        event = EventDef("E", (EventField("x", "uint8"),))
        assert Module(body=(event,)).events == (event,)

    def test_location_str(self):
        assert str(SourceLocation("m.vy", 3, 1)) == "m.vy:3:1"

    def test_body_accepts_only_module_statements(self):
        with pytest.raises(TypeError, match="not a module statement: EventField"):
            Module(body=(EventField("x", "uint8"),))

    def test_every_statement_kind_is_accepted(self):
        assert EventDef in MODULE_STMT_KINDS
        event = EventDef("E", (EventField("x", "uint8"),))
        assert isinstance(event, MODULE_STMT_KINDS)
