"""Per-analysis accumulation state: scope stack and node-processing pipeline.

One AnalysisContext exists per call to ``analyse``. It owns the in-progress
Report, the stack of open function scopes and the dependency "clear" flag,
so concurrent analyses never share counters.

Every increment lands on the aggregate and, when a function scope is open,
on the innermost one as well.
"""

from __future__ import annotations

from collections.abc import Mapping
from numbers import Number
from typing import Any, Optional

from ..logging_config import get_logger
from . import halstead
from .models import FunctionReport, Report
from .syntax import SyntaxEntry, resolve_contribution
from .walker import WalkerHooks

logger = get_logger(__name__)

OPERATORS = "operators"
OPERANDS = "operands"


class AnalysisContext:
    """Mutable state of one analysis, exposed to walkers through ``hooks``."""

    def __init__(self, report: Report):
        self.report = report
        # Indices into report.functions
        self._scope_stack: list[int] = []
        self.clear_dependencies = True

    @property
    def hooks(self) -> WalkerHooks:
        return WalkerHooks(
            process_node=self.process_node,
            create_scope=self.create_scope,
            pop_scope=self.pop_scope,
        )

    @property
    def current(self) -> Optional[FunctionReport]:
        """Innermost open function report, or None at module level."""
        if not self._scope_stack:
            return None
        return self.report.functions[self._scope_stack[-1]]

    @property
    def depth(self) -> int:
        return len(self._scope_stack)

    # ── Scope stack ────────────────────────────────────────────────

    def create_scope(self, name: Optional[str], location: Any, parameter_count: int) -> None:
        function_report = FunctionReport.create(name, location, parameter_count)

        self.report.functions.append(function_report)
        self.report.aggregate.params += parameter_count
        self._scope_stack.append(len(self.report.functions) - 1)

        logger.debug(f"Entered scope {name!r} (depth {self.depth})")

    def pop_scope(self) -> None:
        if not self._scope_stack:
            logger.debug("pop_scope called with no open scope")
            return
        self._scope_stack.pop()

    # ── Node processing ────────────────────────────────────────────

    def process_node(self, node: Any, syntax: Any) -> None:
        entry = SyntaxEntry.coerce(syntax)

        self._process_lloc(node, entry)
        self._process_complexity(node, entry)
        self._process_halstead(node, entry, OPERATORS)
        self._process_halstead(node, entry, OPERANDS)

        if self._process_dependencies(node, entry):
            # Single flag for the whole analysis, not scoped to a function
            self.clear_dependencies = False

    def _targets(self) -> list[FunctionReport]:
        current = self.current
        if current is None:
            return [self.report.aggregate]
        return [self.report.aggregate, current]

    def _process_lloc(self, node: Any, entry: SyntaxEntry) -> None:
        amount = resolve_contribution(entry.lloc, node)
        if amount is None:
            return
        for target in self._targets():
            target.logical_sloc += amount

    def _process_complexity(self, node: Any, entry: SyntaxEntry) -> None:
        amount = resolve_contribution(entry.complexity, node)
        if amount is None:
            return
        for target in self._targets():
            target.cyclomatic += amount

    def _process_halstead(self, node: Any, entry: SyntaxEntry, metric: str) -> None:
        for descriptor in getattr(entry, metric):
            identifier = descriptor.resolve_identifier(node)
            if descriptor.applies_to(node):
                for target in self._targets():
                    halstead.record(getattr(target.halstead, metric), identifier)

    def _process_dependencies(self, node: Any, entry: SyntaxEntry) -> bool:
        if not callable(entry.dependencies):
            return False

        dependencies = entry.dependencies(node, self.clear_dependencies)
        if isinstance(dependencies, (list, tuple)):
            self.report.dependencies.extend(dependencies)
        elif _is_dependency_record(dependencies):
            self.report.dependencies.append(dependencies)

        return True


def _is_dependency_record(value: Any) -> bool:
    """A single extractor result worth keeping: a non-empty mapping or object."""
    if value is None or isinstance(value, (Number, str, bytes, bytearray)):
        return False
    if isinstance(value, Mapping):
        return bool(value)
    return True
