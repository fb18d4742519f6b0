"""Syntax table for Python ``ast`` trees.

Maps ``ast`` node class names to SyntaxEntry declarations. Adding a node
kind means adding one entry to ``build_syntax_table``; the walker picks it
up automatically.

Conventions:
    - Every statement contributes one logical line.
    - A lambda body is an expression; it is looked up under ``LAMBDA_BODY``
      and contributes the single logical line of the lambda scope.
    - Keywords and operator symbols are Halstead operators.
    - Names, attributes, literals, parameters and definition names are operands.
    - Comparison operators (``Eq``, ``Lt`` ...) only occur inside ``Compare``
      and are mapped directly; arithmetic, unary and boolean operators are
      resolved from their parent node so augmented assignment can report
      ``+=`` instead of ``+``.
"""

from __future__ import annotations

import ast
from typing import Any, Optional

from ..config import AnalysisSettings
from ..engine.syntax import MetricDescriptor, SyntaxEntry

BINARY_OPERATORS = {
    "Add": "+",
    "Sub": "-",
    "Mult": "*",
    "MatMult": "@",
    "Div": "/",
    "Mod": "%",
    "Pow": "**",
    "LShift": "<<",
    "RShift": ">>",
    "BitOr": "|",
    "BitXor": "^",
    "BitAnd": "&",
    "FloorDiv": "//",
}

UNARY_OPERATORS = {
    "Invert": "~",
    "Not": "not",
    "UAdd": "+",
    "USub": "-",
}

BOOLEAN_OPERATORS = {
    "And": "and",
    "Or": "or",
}

COMPARISON_OPERATORS = {
    "Eq": "==",
    "NotEq": "!=",
    "Lt": "<",
    "LtE": "<=",
    "Gt": ">",
    "GtE": ">=",
    "Is": "is",
    "IsNot": "is not",
    "In": "in",
    "NotIn": "not in",
}

DYNAMIC_IMPORT_FUNCTIONS = {"__import__", "import_module"}

LAMBDA_BODY = "Lambda.body"


# ── Re-usable building blocks ──────────────────────────────────────


def _op(identifier: Any, filter=None) -> MetricDescriptor:
    return MetricDescriptor(identifier=identifier, filter=filter)


def _symbol(table: dict[str, str]):
    return lambda node: table[type(node.op).__name__]


def _has_orelse(node: ast.AST) -> bool:
    return bool(getattr(node, "orelse", None))


def _has_else(node: ast.AST) -> bool:
    """True when an ``if`` carries a literal ``else`` rather than an ``elif``."""
    if not _has_orelse(node):
        return False
    orelse = node.orelse
    # an elif parses as a lone nested If aligned with its parent
    return not (
        len(orelse) == 1
        and isinstance(orelse[0], ast.If)
        and orelse[0].col_offset == node.col_offset
    )


_ELSE = _op("else", filter=_has_orelse)
_NAME = _op(lambda node: node.name)


def _statement(*operators: MetricDescriptor, **kwargs) -> SyntaxEntry:
    return SyntaxEntry(lloc=1, operators=operators, **kwargs)


def _bool_op_complexity(logicalor: bool):
    def complexity(node: ast.BoolOp) -> int:
        if isinstance(node.op, ast.Or) and not logicalor:
            return 0
        return len(node.values) - 1

    return complexity


def _comprehension_complexity(forin: bool):
    def complexity(node: ast.comprehension) -> int:
        return (1 if forin else 0) + len(node.ifs)

    return complexity


# ── Dependency extractors ──────────────────────────────────────────


def import_dependencies(node: ast.Import, clear: bool) -> list[dict[str, Any]]:
    return [
        {"line": node.lineno, "path": alias.name, "type": "import"} for alias in node.names
    ]


def import_from_dependencies(node: ast.ImportFrom, clear: bool) -> dict[str, Any]:
    path = "." * node.level + (node.module or "")
    return {"line": node.lineno, "path": path, "type": "import"}


def call_dependencies(node: ast.Call, clear: bool) -> Optional[dict[str, Any]]:
    """Detect ``__import__("x")`` and ``importlib.import_module("x")``."""
    func = node.func
    if isinstance(func, ast.Name):
        name = func.id
    elif isinstance(func, ast.Attribute):
        name = func.attr
    else:
        return None

    if name not in DYNAMIC_IMPORT_FUNCTIONS or not node.args:
        return None

    target = node.args[0]
    if isinstance(target, ast.Constant) and isinstance(target.value, str):
        return {"line": node.lineno, "path": target.value, "type": "dynamic"}
    return None


# ── Table ──────────────────────────────────────────────────────────


def build_syntax_table(settings: Optional[AnalysisSettings] = None) -> dict[str, SyntaxEntry]:
    """Build the node-kind → SyntaxEntry table for the given settings."""
    settings = settings or AnalysisSettings()

    table: dict[str, SyntaxEntry] = {
        # Definitions
        "FunctionDef": _statement(_op("def"), operands=(_NAME,)),
        "AsyncFunctionDef": _statement(_op("async def"), operands=(_NAME,)),
        "ClassDef": _statement(_op("class"), operands=(_NAME,)),
        "Lambda": SyntaxEntry(operators=(_op("lambda"),)),
        LAMBDA_BODY: SyntaxEntry(lloc=1),
        "arg": SyntaxEntry(operands=(_op(lambda node: node.arg),)),
        "Return": _statement(_op("return")),
        "Yield": SyntaxEntry(operators=(_op("yield"),)),
        "YieldFrom": SyntaxEntry(operators=(_op("yield from"),)),
        "Await": SyntaxEntry(operators=(_op("await"),)),
        # Assignment
        "Assign": _statement(_op("=")),
        "AugAssign": _statement(_op(lambda node: BINARY_OPERATORS[type(node.op).__name__] + "=")),
        "AnnAssign": _statement(_op("=", filter=lambda node: node.value is not None)),
        "NamedExpr": SyntaxEntry(operators=(_op(":="),)),
        "Delete": _statement(_op("del")),
        "Global": _statement(_op("global")),
        "Nonlocal": _statement(_op("nonlocal")),
        # Control flow
        "If": _statement(_op("if"), _op("else", filter=_has_else), complexity=1),
        "For": _statement(_op("for"), _op("in"), _ELSE, complexity=1),
        "AsyncFor": _statement(_op("async for"), _op("in"), _ELSE, complexity=1),
        "While": _statement(_op("while"), _ELSE, complexity=1),
        "IfExp": SyntaxEntry(operators=(_op("if"), _op("else")), complexity=1),
        "Break": _statement(_op("break")),
        "Continue": _statement(_op("continue")),
        "Pass": _statement(_op("pass")),
        "Match": _statement(_op("match")),
        "match_case": SyntaxEntry(
            operators=(_op("case"), _op("if", filter=lambda node: node.guard is not None)),
            complexity=1 if settings.switchcase else None,
        ),
        # Exceptions and context managers
        "Raise": _statement(_op("raise"), _op("from", filter=lambda node: node.cause is not None)),
        "Try": _statement(
            _op("try"),
            _ELSE,
            _op("finally", filter=lambda node: bool(node.finalbody)),
        ),
        "ExceptHandler": SyntaxEntry(
            operators=(_op("except"),),
            operands=(_op(lambda node: node.name, filter=lambda node: node.name is not None),),
            complexity=1 if settings.trycatch else None,
        ),
        "Assert": _statement(_op("assert")),
        "With": _statement(_op("with")),
        "AsyncWith": _statement(_op("async with")),
        "withitem": SyntaxEntry(
            operators=(_op("as", filter=lambda node: node.optional_vars is not None),)
        ),
        # Imports
        "Import": _statement(_op("import"), dependencies=import_dependencies),
        "ImportFrom": _statement(_op("from"), _op("import"), dependencies=import_from_dependencies),
        "alias": SyntaxEntry(
            operators=(_op("as", filter=lambda node: node.asname is not None),),
            operands=(_op(lambda node: node.name),),
        ),
        # Expressions
        "Expr": SyntaxEntry(lloc=1),
        "BoolOp": SyntaxEntry(
            operators=(_op(_symbol(BOOLEAN_OPERATORS)),),
            complexity=_bool_op_complexity(settings.logicalor),
        ),
        "BinOp": SyntaxEntry(operators=(_op(_symbol(BINARY_OPERATORS)),)),
        "UnaryOp": SyntaxEntry(operators=(_op(_symbol(UNARY_OPERATORS)),)),
        "Call": SyntaxEntry(operators=(_op("()"),), dependencies=call_dependencies),
        "keyword": SyntaxEntry(
            operators=(
                _op("=", filter=lambda node: node.arg is not None),
                _op("**", filter=lambda node: node.arg is None),
            ),
            operands=(_op(lambda node: node.arg, filter=lambda node: node.arg is not None),),
        ),
        "Attribute": SyntaxEntry(operators=(_op("."),), operands=(_op(lambda node: node.attr),)),
        "Subscript": SyntaxEntry(operators=(_op("[]"),)),
        "Slice": SyntaxEntry(operators=(_op(":"),)),
        "Starred": SyntaxEntry(operators=(_op("*"),)),
        "List": SyntaxEntry(operators=(_op("[]"),)),
        "Dict": SyntaxEntry(operators=(_op("{}"),)),
        "Set": SyntaxEntry(operators=(_op("{}"),)),
        "comprehension": SyntaxEntry(
            operators=(
                _op("for"),
                _op("in"),
                _op("if", filter=lambda node: bool(node.ifs)),
            ),
            complexity=_comprehension_complexity(settings.forin),
        ),
        "Name": SyntaxEntry(operands=(_op(lambda node: node.id),)),
        "Constant": SyntaxEntry(operands=(_op(lambda node: repr(node.value)),)),
    }

    for name, symbol in COMPARISON_OPERATORS.items():
        table[name] = SyntaxEntry(operators=(_op(symbol),))

    if hasattr(ast, "TryStar"):
        table["TryStar"] = table["Try"]

    return table
