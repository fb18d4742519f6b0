"""Syntax-table entry types consumed by the engine.

A syntax table maps node kinds to a SyntaxEntry declaring how a node of that
kind contributes to each metric. Every field is optional; a missing or
malformed declaration contributes nothing.

Contributions (``lloc``, ``complexity``) are either a number or a callable
taking the node and returning a number. Halstead descriptors carry an
identifier (a value, or a callable computing it from the node) and an
optional filter predicate.

Walkers may also hand the engine plain mappings with the same keys; they are
normalised with ``SyntaxEntry.coerce``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from numbers import Real
from typing import Any, Callable, Optional, Union

Contribution = Union[int, float, Callable[[Any], Any]]
DependencyExtractor = Callable[[Any, bool], Any]


@dataclass(frozen=True)
class MetricDescriptor:
    """One Halstead operator or operand declaration.

    Attributes:
        identifier: Identifier value, or callable computing it from the node
        filter: Optional predicate; the occurrence counts only if it is truthy
    """

    identifier: Any
    filter: Optional[Callable[[Any], Any]] = None

    def resolve_identifier(self, node: Any) -> Any:
        if callable(self.identifier):
            return self.identifier(node)
        return self.identifier

    def applies_to(self, node: Any) -> bool:
        if not callable(self.filter):
            return True
        return bool(self.filter(node))

    @classmethod
    def coerce(cls, value: Any) -> Optional[MetricDescriptor]:
        if isinstance(value, MetricDescriptor):
            return value
        if isinstance(value, Mapping) and "identifier" in value:
            return cls(identifier=value["identifier"], filter=value.get("filter"))
        return None


@dataclass(frozen=True)
class SyntaxEntry:
    """How one node kind contributes to the metrics.

    Attributes:
        lloc: Logical-line contribution
        complexity: Cyclomatic contribution
        operators: Halstead operator descriptors
        operands: Halstead operand descriptors
        dependencies: Callable ``(node, clear) -> value | list | None``
    """

    lloc: Optional[Contribution] = None
    complexity: Optional[Contribution] = None
    operators: tuple[MetricDescriptor, ...] = ()
    operands: tuple[MetricDescriptor, ...] = ()
    dependencies: Optional[DependencyExtractor] = None

    @classmethod
    def coerce(cls, value: Any) -> SyntaxEntry:
        """Normalise a SyntaxEntry, mapping or None into a SyntaxEntry."""
        if isinstance(value, SyntaxEntry):
            return value
        if not isinstance(value, Mapping):
            return EMPTY_ENTRY
        return cls(
            lloc=value.get("lloc"),
            complexity=value.get("complexity"),
            operators=_coerce_descriptors(value.get("operators")),
            operands=_coerce_descriptors(value.get("operands")),
            dependencies=value.get("dependencies"),
        )


EMPTY_ENTRY = SyntaxEntry()


def _coerce_descriptors(value: Any) -> tuple[MetricDescriptor, ...]:
    if not isinstance(value, (list, tuple)):
        return ()
    descriptors = (MetricDescriptor.coerce(item) for item in value)
    return tuple(d for d in descriptors if d is not None)


def is_number(value: Any) -> bool:
    """True for ints and floats, but not bools."""
    return isinstance(value, Real) and not isinstance(value, bool)


def resolve_contribution(contribution: Any, node: Any) -> Optional[float]:
    """Evaluate a contribution against a node.

    Returns None when the declaration is absent or does not produce a number.
    """
    if is_number(contribution):
        return contribution
    if callable(contribution):
        amount = contribution(node)
        if is_number(amount):
            return amount
    return None
