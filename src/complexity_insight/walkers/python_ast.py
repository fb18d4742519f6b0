"""Walker over Python ``ast`` trees.

Visits nodes depth-first in field order, which for ``ast`` matches source
order. Function definitions and lambdas open a scope: the definition node
itself, its decorators and default values belong to the enclosing scope;
parameters, annotations and body belong to the new one. A lambda body is
also processed under the ``LAMBDA_BODY`` entry so the lambda scope gets its
logical line.

Usage:
    tree = parse_source(text, filename="module.py")
    report = analyse(tree, PythonAstWalker())
"""

from __future__ import annotations

import ast
from typing import Any, Optional

from ..config import AnalysisSettings
from ..engine.models import Location
from ..engine.syntax import SyntaxEntry
from ..engine.walker import WalkerHooks
from ..exceptions import ParsingError
from ..syntax.python import LAMBDA_BODY, build_syntax_table

FUNCTION_NODES = (ast.FunctionDef, ast.AsyncFunctionDef, ast.Lambda)
LAMBDA_NAME = "<lambda>"


def parse_source(source: str, filename: str = "<string>") -> ast.Module:
    """Parse Python source and attach a module-wide ``loc``.

    Raises:
        ParsingError: If the source is not valid Python
    """
    try:
        tree = ast.parse(source, filename=filename)
    except (SyntaxError, ValueError) as e:
        raise ParsingError(filename, "python", str(e)) from e

    tree.loc = Location(1, len(source.splitlines()))
    return tree


class PythonAstWalker:
    """Drives the engine hooks over a Python ``ast`` tree."""

    def __init__(self, syntax_table: Optional[dict[str, SyntaxEntry]] = None):
        # When None, the table is rebuilt from the settings of each walk
        self.syntax_table = syntax_table

    def walk(self, tree: ast.AST, settings: AnalysisSettings, hooks: WalkerHooks) -> None:
        table = self.syntax_table
        if table is None:
            table = build_syntax_table(settings)
        self._visit(tree, table, hooks)

    def _visit(self, node: ast.AST, table: dict[str, SyntaxEntry], hooks: WalkerHooks) -> None:
        entry = table.get(type(node).__name__)
        if entry is not None:
            hooks.process_node(node, entry)

        if not isinstance(node, FUNCTION_NODES):
            for child in ast.iter_child_nodes(node):
                self._visit(child, table, hooks)
            return

        outer, params, inner = _split_function(node)
        for child in outer:
            self._visit(child, table, hooks)

        hooks.create_scope(getattr(node, "name", LAMBDA_NAME), node, len(params))
        if isinstance(node, ast.Lambda):
            body_entry = table.get(LAMBDA_BODY)
            if body_entry is not None:
                hooks.process_node(node.body, body_entry)
        for child in inner:
            self._visit(child, table, hooks)
        hooks.pop_scope()


def _split_function(node: Any) -> tuple[list[ast.AST], list[ast.arg], list[ast.AST]]:
    """Partition a function's children into (enclosing, parameters, own scope)."""
    args = node.args
    outer: list[ast.AST] = list(getattr(node, "decorator_list", []))
    outer.extend(args.defaults)
    outer.extend(d for d in args.kw_defaults if d is not None)

    params: list[ast.arg] = [*args.posonlyargs, *args.args]
    if args.vararg is not None:
        params.append(args.vararg)
    params.extend(args.kwonlyargs)
    if args.kwarg is not None:
        params.append(args.kwarg)

    inner: list[ast.AST] = list(params)
    returns = getattr(node, "returns", None)
    if returns is not None:
        inner.append(returns)
    if isinstance(node.body, list):
        inner.extend(node.body)
    else:
        inner.append(node.body)

    return outer, params, inner
