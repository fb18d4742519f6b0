"""Report dataclasses produced by the metrics engine.

A Report holds one aggregate FunctionReport for the whole tree, one
FunctionReport per function scope (in scope-creation order) and the list of
dependencies reported by the syntax table. Derived fields (density, Halstead
derivatives, maintainability) stay unset until the finalizer runs.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class Location:
    """Start/end source lines of a tree or function (1-indexed, inclusive)."""

    start_line: int
    end_line: int

    @property
    def physical_lines(self) -> int:
        return self.end_line - self.start_line + 1

    @classmethod
    def coerce(cls, value: Any) -> Optional[Location]:
        """Normalise location metadata into a Location.

        Accepts a Location, an ESTree-style mapping
        ``{"start": {"line": 1}, "end": {"line": 9}}`` or any object with
        ``lineno``/``end_lineno`` attributes (Python ``ast`` nodes).
        Returns None when no usable location is present.
        """
        if value is None:
            return None
        if isinstance(value, Location):
            return value
        if isinstance(value, Mapping):
            start = value.get("start")
            end = value.get("end")
            if isinstance(start, Mapping) and isinstance(end, Mapping):
                start_line = start.get("line")
                end_line = end.get("line")
                if isinstance(start_line, int) and isinstance(end_line, int):
                    return cls(start_line, end_line)
            return None
        start_line = getattr(value, "lineno", None)
        end_line = getattr(value, "end_lineno", None)
        if isinstance(start_line, int) and isinstance(end_line, int):
            return cls(start_line, end_line)
        return None


@dataclass
class HalsteadItemState:
    """Distinct/total counters for one Halstead bucket (operators or operands).

    ``identifiers`` lists each distinct identifier once, in first-seen order.
    ``keys`` holds the type-qualified keys of the hashable ones. Both are
    bookkeeping and are left out of ``to_dict()``.
    """

    distinct: int = 0
    total: int = 0
    identifiers: list[Any] = field(default_factory=list, repr=False)
    keys: set[tuple[type, Any]] = field(default_factory=set, repr=False)

    def to_dict(self) -> dict[str, int]:
        return {"distinct": self.distinct, "total": self.total}


@dataclass
class HalsteadState:
    """Halstead operator/operand counters plus derived statistics."""

    operators: HalsteadItemState = field(default_factory=HalsteadItemState)
    operands: HalsteadItemState = field(default_factory=HalsteadItemState)

    # Derived by the finalizer
    length: int = 0
    vocabulary: int = 0
    difficulty: float = 0.0
    volume: float = 0.0
    effort: float = 0.0
    bugs: float = 0.0
    time: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "operators": self.operators.to_dict(),
            "operands": self.operands.to_dict(),
            "length": self.length,
            "vocabulary": self.vocabulary,
            "difficulty": self.difficulty,
            "volume": self.volume,
            "effort": self.effort,
            "bugs": self.bugs,
            "time": self.time,
        }


@dataclass
class FunctionReport:
    """Metrics for one function scope, or for the whole tree (the aggregate).

    Attributes:
        name: Function name (None for the aggregate and anonymous scopes
            the walker does not name)
        line: First source line, only when location metadata was supplied
        physical_sloc: Physical line span, only when location metadata was supplied
        logical_sloc: Logical source lines declared by the syntax table
        cyclomatic: Cyclomatic complexity, seeded at 1
        params: Declared parameter count (running total for the aggregate)
        halstead: Operator/operand counters and derived Halstead metrics
        cyclomatic_density: cyclomatic / logical_sloc * 100, set on finalization
    """

    name: Optional[str] = None
    line: Optional[int] = None
    physical_sloc: Optional[int] = None
    logical_sloc: float = 0
    cyclomatic: float = 1
    params: int = 0
    halstead: HalsteadState = field(default_factory=HalsteadState)
    cyclomatic_density: Optional[float] = None

    @classmethod
    def create(cls, name: Optional[str], location: Any, params: int) -> FunctionReport:
        report = cls(name=name, params=params)
        loc = Location.coerce(location)
        if loc is not None:
            report.line = loc.start_line
            report.physical_sloc = loc.physical_lines
        return report

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"name": self.name}
        if self.line is not None:
            result["line"] = self.line
        result["sloc"] = {"logical": self.logical_sloc}
        if self.physical_sloc is not None:
            result["sloc"]["physical"] = self.physical_sloc
        result.update(
            {
                "cyclomatic": self.cyclomatic,
                "cyclomatic_density": _finite_or_none(self.cyclomatic_density),
                "params": self.params,
                "halstead": self.halstead.to_dict(),
            }
        )
        return result


@dataclass
class Report:
    """Root container returned by ``analyse``.

    Attributes:
        aggregate: FunctionReport covering the whole tree
        functions: One FunctionReport per scope, in scope-creation order
        dependencies: Opaque dependency values from the syntax table
        maintainability: Maintainability index, set on finalization
        params: Average parameter count, set on finalization
    """

    aggregate: FunctionReport
    functions: list[FunctionReport] = field(default_factory=list)
    dependencies: list[Any] = field(default_factory=list)
    maintainability: Optional[float] = None
    params: Optional[float] = None

    @classmethod
    def create(cls, location: Any = None) -> Report:
        return cls(aggregate=FunctionReport.create(None, location, 0))

    def to_dict(self) -> dict[str, Any]:
        return {
            "aggregate": self.aggregate.to_dict(),
            "functions": [fn.to_dict() for fn in self.functions],
            "dependencies": list(self.dependencies),
            "maintainability": _finite_or_none(self.maintainability),
            "params": self.params,
        }


def _finite_or_none(value: Optional[float]) -> Optional[float]:
    """Map inf/nan to None so ``to_dict()`` output is strict JSON."""
    if value is None or not math.isfinite(value):
        return None
    return value
