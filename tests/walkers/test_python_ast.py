"""Tests for the Python ast walker and syntax table."""

import sys
import textwrap

import pytest

from complexity_insight.api import analyse_source
from complexity_insight.config import AnalysisSettings
from complexity_insight.engine import SyntaxEntry, analyse
from complexity_insight.exceptions import ParsingError
from complexity_insight.syntax.python import build_syntax_table
from complexity_insight.walkers import PythonAstWalker, parse_source

SAMPLE = textwrap.dedent(
    """\
    import os
    from collections import OrderedDict


    def outer(a, b=1, *args, c, **kw):
        if a and b:
            return a
        return lambda x: x + 1


    class Thing:
        def method(self):
            for i in range(3):
                pass
    """
)


def _source(text):
    return textwrap.dedent(text)


class TestScopes:
    """Function scopes reported by the walker."""

    def test_functions_in_source_order(self):
        report = analyse_source(SAMPLE)
        assert [fn.name for fn in report.functions] == ["outer", "<lambda>", "method"]

    def test_parameter_counts(self):
        report = analyse_source(SAMPLE)
        assert [fn.params for fn in report.functions] == [5, 1, 1]
        assert report.aggregate.params == 7
        assert report.params == pytest.approx(7 / 3)

    def test_locations(self):
        report = analyse_source(SAMPLE)
        outer, lam, method = report.functions
        assert (outer.line, outer.physical_sloc) == (5, 4)
        assert lam.line == 8
        assert (method.line, method.physical_sloc) == (12, 3)
        assert report.aggregate.physical_sloc == 14

    def test_cyclomatic(self):
        report = analyse_source(SAMPLE)
        outer, lam, method = report.functions
        assert outer.cyclomatic == 3
        assert lam.cyclomatic == 1
        assert method.cyclomatic == 2
        assert report.aggregate.cyclomatic == 4

    def test_logical_lines(self):
        """The def statement counts in the enclosing scope, its body in its own."""
        report = analyse_source(SAMPLE)
        outer, lam, method = report.functions
        assert outer.logical_sloc == 3
        assert lam.logical_sloc == 1
        assert method.logical_sloc == 2
        assert report.aggregate.logical_sloc == 11

    def test_lambda_body_is_one_logical_line(self):
        """A lambda scope counts its body expression, so its density is finite."""
        report = analyse_source("f = lambda x: x\n")
        lam = report.functions[0]
        assert lam.logical_sloc == 1
        assert lam.cyclomatic_density == pytest.approx(100.0)
        assert report.aggregate.logical_sloc == 2

    def test_decorators_belong_to_enclosing_scope(self):
        report = analyse_source(
            _source(
                """\
                @decorate(1)
                def f():
                    pass
                """
            )
        )
        fn = report.functions[0]
        assert fn.halstead.operators.identifiers == ["pass"]
        assert "()" in report.aggregate.halstead.operators.identifiers


class TestHalstead:
    """Operator/operand identification."""

    def test_repeated_operand(self):
        report = analyse_source("def f(x):\n    return x + x\n")
        fn = report.functions[0]
        assert (fn.halstead.operands.distinct, fn.halstead.operands.total) == (1, 3)
        assert (fn.halstead.operators.distinct, fn.halstead.operators.total) == (2, 2)

        aggregate = report.aggregate.halstead
        assert (aggregate.operands.distinct, aggregate.operands.total) == (2, 4)

    def test_augmented_assignment(self):
        report = analyse_source("x = 0\nx += 1\n")
        operators = report.aggregate.halstead.operators.identifiers
        assert "+=" in operators
        assert "+" not in operators

    def test_comparison_operators(self):
        report = analyse_source("a < b <= c\n")
        assert {"<", "<="} <= set(report.aggregate.halstead.operators.identifiers)

    def test_else_only_when_present(self):
        without = analyse_source("if a:\n    pass\n")
        with_else = analyse_source("if a:\n    pass\nelse:\n    pass\n")
        assert "else" not in without.aggregate.halstead.operators.identifiers
        assert "else" in with_else.aggregate.halstead.operators.identifiers

    def test_elif_is_not_an_else(self):
        chain = analyse_source("if a:\n    pass\nelif b:\n    pass\n")
        nested = analyse_source("if a:\n    pass\nelse:\n    if b:\n        pass\n")
        assert "else" not in chain.aggregate.halstead.operators.identifiers
        assert "else" in nested.aggregate.halstead.operators.identifiers

    def test_elif_chain_with_final_else(self):
        report = analyse_source("if a:\n    x = 1\nelif b:\n    x = 2\nelse:\n    x = 3\n")
        operators = report.aggregate.halstead.operators
        # if, if, else and three assignments
        assert (operators.distinct, operators.total) == (3, 6)
        assert report.aggregate.cyclomatic == 3


class TestSettings:
    """Settings reach the syntax table through the walker."""

    def test_logicalor(self):
        source = "def f(a, b, c):\n    return a or b or c\n"
        assert analyse_source(source).functions[0].cyclomatic == 3
        assert analyse_source(source, settings={"logicalor": False}).functions[0].cyclomatic == 1

    def test_and_always_counts(self):
        source = "def f(a, b):\n    return a and b\n"
        assert analyse_source(source, settings={"logicalor": False}).functions[0].cyclomatic == 2

    def test_trycatch(self):
        source = _source(
            """\
            def f():
                try:
                    pass
                except ValueError:
                    pass
                except KeyError as e:
                    pass
            """
        )
        assert analyse_source(source).functions[0].cyclomatic == 1
        assert analyse_source(source, settings={"trycatch": True}).functions[0].cyclomatic == 3

    def test_forin(self):
        source = "def f(y):\n    return [x for x in y if x]\n"
        assert analyse_source(source).functions[0].cyclomatic == 2
        assert analyse_source(source, settings={"forin": True}).functions[0].cyclomatic == 3

    @pytest.mark.skipif(sys.version_info < (3, 10), reason="match requires Python 3.10+")
    def test_switchcase(self):
        source = _source(
            """\
            def f(v):
                match v:
                    case 1:
                        return "one"
                    case 2:
                        return "two"
                    case _:
                        return "many"
            """
        )
        assert analyse_source(source).functions[0].cyclomatic == 4
        assert analyse_source(source, settings={"switchcase": False}).functions[0].cyclomatic == 1

    def test_table_built_per_settings(self):
        assert build_syntax_table()["match_case"].complexity == 1
        assert build_syntax_table(AnalysisSettings(switchcase=False))["match_case"].complexity is None
        assert build_syntax_table(AnalysisSettings(trycatch=True))["ExceptHandler"].complexity == 1


class TestDependencies:
    """Import statements and dynamic imports."""

    def test_static_imports(self):
        report = analyse_source(SAMPLE)
        assert report.dependencies == [
            {"line": 1, "path": "os", "type": "import"},
            {"line": 2, "path": "collections", "type": "import"},
        ]

    def test_relative_import(self):
        report = analyse_source("from ..pkg import mod\n")
        assert report.dependencies == [{"line": 1, "path": "..pkg", "type": "import"}]

    def test_dynamic_import(self):
        report = analyse_source('import importlib\nmod = importlib.import_module("json")\n')
        assert report.dependencies[-1] == {"line": 2, "path": "json", "type": "dynamic"}

    def test_non_literal_dynamic_import_ignored(self):
        report = analyse_source("name = 'x'\n__import__(name)\n")
        assert report.dependencies == []


class TestWalker:
    """Walker plumbing."""

    def test_parse_error(self):
        with pytest.raises(ParsingError) as exc_info:
            parse_source("def (:", filename="broken.py")
        assert exc_info.value.filepath == "broken.py"

    def test_module_location(self):
        tree = parse_source("a = 1\nb = 2\n")
        assert tree.loc.start_line == 1
        assert tree.loc.end_line == 2

    def test_custom_syntax_table(self):
        walker = PythonAstWalker(syntax_table={"Name": SyntaxEntry(lloc=1)})
        report = analyse(parse_source("x = y\n"), walker)
        assert report.aggregate.logical_sloc == 2
        assert report.aggregate.halstead.length == 0

    def test_empty_module(self):
        report = analyse_source("")
        assert report.functions == []
        assert report.maintainability == 171
