#!/usr/bin/env python3
"""
Example: Driving the engine with a custom walker over ESTree-style dicts

Any tree shape works as long as a walker visits its nodes and a syntax table
says how each node kind contributes.
"""

from complexity_insight import MetricDescriptor, SyntaxEntry, analyse

SYNTAX = {
    "IfStatement": SyntaxEntry(lloc=1, complexity=1, operators=(MetricDescriptor("if"),)),
    "ReturnStatement": SyntaxEntry(lloc=1, operators=(MetricDescriptor("return"),)),
    "Identifier": SyntaxEntry(operands=(MetricDescriptor(lambda node: node["name"]),)),
}

FUNCTIONS = {"FunctionDeclaration", "FunctionExpression"}


class EstreeWalker:
    def walk(self, tree, settings, hooks):
        self._visit(tree, hooks)

    def _visit(self, node, hooks):
        entry = SYNTAX.get(node["type"])
        if entry is not None:
            hooks.process_node(node, entry)

        is_function = node["type"] in FUNCTIONS
        if is_function:
            name = node.get("id", {}).get("name")
            hooks.create_scope(name, node.get("loc"), len(node.get("params", [])))

        for child in node.get("body", []):
            self._visit(child, hooks)

        if is_function:
            hooks.pop_scope()


tree = {
    "type": "Program",
    "loc": {"start": {"line": 1}, "end": {"line": 5}},
    "body": [
        {
            "type": "FunctionDeclaration",
            "id": {"name": "check"},
            "params": [{"name": "x"}],
            "loc": {"start": {"line": 1}, "end": {"line": 5}},
            "body": [
                {"type": "IfStatement", "body": [{"type": "Identifier", "name": "x"}]},
                {"type": "ReturnStatement", "body": [{"type": "Identifier", "name": "x"}]},
            ],
        }
    ],
}

report = analyse(tree, EstreeWalker())
fn = report.functions[0]
print(f"{fn.name}: cyclomatic={fn.cyclomatic} lloc={fn.logical_sloc} "
      f"density={fn.cyclomatic_density:.0f}% maintainability={report.maintainability:.1f}")
