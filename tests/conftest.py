"""Shared test fixtures for Complexity Insight."""

from types import SimpleNamespace

import pytest

from complexity_insight.engine import MetricDescriptor, SyntaxEntry


class ScriptedWalker:
    """Walker that replays a fixed list of hook events.

    Events:
        ("node", node, entry)         -> hooks.process_node(node, entry)
        ("enter", name, loc, params)  -> hooks.create_scope(name, loc, params)
        ("exit",)                     -> hooks.pop_scope()
    """

    def __init__(self, events):
        self.events = list(events)
        self.calls = []

    def walk(self, tree, settings, hooks):
        self.calls.append((tree, settings))
        for event in self.events:
            kind = event[0]
            if kind == "node":
                hooks.process_node(event[1], event[2])
            elif kind == "enter":
                hooks.create_scope(*event[1:])
            elif kind == "exit":
                hooks.pop_scope()
            else:
                raise ValueError(f"unknown event {kind!r}")


def node_event(entry, node=None):
    return ("node", node if node is not None else SimpleNamespace(), entry)


def operator(identifier):
    return node_event(SyntaxEntry(operators=(MetricDescriptor(identifier),)))


def operand(identifier):
    return node_event(SyntaxEntry(operands=(MetricDescriptor(identifier),)))


@pytest.fixture
def scripted_walker():
    """Factory building a ScriptedWalker from events."""
    return ScriptedWalker


@pytest.fixture
def events():
    """Helpers for building walker events."""
    return SimpleNamespace(
        node=node_event,
        operator=operator,
        operand=operand,
        enter=lambda name=None, loc=None, params=0: ("enter", name, loc, params),
        exit=lambda: ("exit",),
    )


@pytest.fixture
def tree():
    """Minimal structured syntax tree with location metadata."""
    return {"type": "Program", "loc": {"start": {"line": 1}, "end": {"line": 20}}}


@pytest.fixture
def single_function_events(events):
    """One function: cyclomatic 1, 5 lloc, 4 operators (2 distinct), 6 operands (3 distinct)."""
    return [
        events.enter("f", {"start": {"line": 2}, "end": {"line": 8}}, 2),
        events.node(SyntaxEntry(lloc=5)),
        events.operator("+"),
        events.operator("+"),
        events.operator("-"),
        events.operator("-"),
        events.operand("a"),
        events.operand("a"),
        events.operand("b"),
        events.operand("b"),
        events.operand("c"),
        events.operand("c"),
        events.exit(),
    ]
