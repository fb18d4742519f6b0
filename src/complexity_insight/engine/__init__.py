"""Metrics accumulation engine.

Key Components:
    - analyse: Entry point driving a walker over one syntax tree
    - AnalysisContext: Scope stack and node-processing pipeline for one analysis
    - Report / FunctionReport / HalsteadState: Report model
    - SyntaxEntry / MetricDescriptor: Syntax-table declarations
    - finalize: Derived metrics and maintainability index
"""

from .analyser import analyse
from .context import AnalysisContext
from .finalizer import finalize, maintainability_index
from .models import FunctionReport, HalsteadItemState, HalsteadState, Location, Report
from .syntax import MetricDescriptor, SyntaxEntry
from .walker import Walker, WalkerHooks

__all__ = [
    "analyse",
    "AnalysisContext",
    "finalize",
    "maintainability_index",
    "Report",
    "FunctionReport",
    "HalsteadState",
    "HalsteadItemState",
    "Location",
    "SyntaxEntry",
    "MetricDescriptor",
    "Walker",
    "WalkerHooks",
]
