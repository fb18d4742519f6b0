"""Walker protocol and the hooks the engine hands to it.

A walker visits every node of a tree in document order. For each node it
looks up the syntax-table entry and calls ``hooks.process_node``; around the
nodes of a function body it calls ``hooks.create_scope`` and
``hooks.pop_scope``, properly nested.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Optional, Protocol

if TYPE_CHECKING:
    from ..config import AnalysisSettings


@dataclass(frozen=True)
class WalkerHooks:
    """Callbacks bound to a single analysis."""

    process_node: Callable[[Any, Any], None]
    create_scope: Callable[[Optional[str], Any, int], None]
    pop_scope: Callable[[], None]


class Walker(Protocol):
    """Anything with a ``walk(tree, settings, hooks)`` method."""

    def walk(self, tree: Any, settings: AnalysisSettings, hooks: WalkerHooks) -> None: ...
