"""Analysis entry point: validate inputs, drive the walker, finalize.

Example:
    >>> from complexity_insight.walkers import PythonAstWalker, parse_source
    >>> report = analyse(parse_source("def f(a):\\n    return a\\n"), PythonAstWalker())
    >>> report.functions[0].params
    1
"""

from __future__ import annotations

from collections.abc import Mapping
from numbers import Number
from typing import Any, Optional, Union

from ..config import AnalysisSettings
from ..exceptions import InvalidSyntaxTreeError, InvalidWalkerError
from ..logging_config import get_logger
from .context import AnalysisContext
from .finalizer import finalize
from .models import Report

logger = get_logger(__name__)

_PRIMITIVES = (str, bytes, bytearray, Number, list, tuple)


def analyse(
    tree: Any,
    walker: Any,
    settings: Optional[Union[AnalysisSettings, Mapping[str, Any]]] = None,
) -> Report:
    """Compute complexity metrics for one syntax tree.

    Args:
        tree: Root of the syntax tree. Its optional ``loc`` attribute (or
            ``"loc"`` key) supplies start/end lines for the aggregate.
        walker: Object with ``walk(tree, settings, hooks)``
        settings: AnalysisSettings, a mapping of option values, or None for
            defaults

    Returns:
        Finalized Report

    Raises:
        InvalidSyntaxTreeError: If tree is not a structured object
        InvalidWalkerError: If walker is missing or ``walker.walk`` is not callable
        InvalidConfigError: If settings contain unknown or non-boolean options
        MaintainabilityError: If the average cyclomatic complexity is zero
    """
    _check_tree(tree)
    _check_walker(walker)
    settings = _resolve_settings(settings)

    context = AnalysisContext(Report.create(_tree_location(tree)))

    logger.debug(f"Walking {type(tree).__name__} with {type(walker).__name__}")
    walker.walk(tree, settings, context.hooks)

    return finalize(context.report, settings)


def _check_tree(tree: Any) -> None:
    if tree is None or isinstance(tree, _PRIMITIVES):
        raise InvalidSyntaxTreeError(tree)


def _check_walker(walker: Any) -> None:
    if walker is None or isinstance(walker, _PRIMITIVES):
        raise InvalidWalkerError(walker, "walker must be an object")
    if not callable(getattr(walker, "walk", None)):
        raise InvalidWalkerError(walker, "walker.walk must be callable")


def _resolve_settings(
    settings: Optional[Union[AnalysisSettings, Mapping[str, Any]]],
) -> AnalysisSettings:
    if isinstance(settings, AnalysisSettings):
        return settings
    if isinstance(settings, Mapping):
        return AnalysisSettings.from_mapping(settings)
    return AnalysisSettings()


def _tree_location(tree: Any) -> Any:
    if isinstance(tree, Mapping):
        return tree.get("loc")
    return getattr(tree, "loc", None)
