"""
Complexity Insight - Software complexity metrics for syntax trees

Computes logical SLOC, cyclomatic complexity, Halstead statistics and the
maintainability index for a single syntax tree. Any walker that can visit the
tree and any syntax table that declares how node kinds contribute can drive
the engine; a Python ``ast`` walker and syntax table ship with the package.
"""

__version__ = "0.1.0"

from .api import analyse_file, analyse_source
from .config import AnalysisSettings, load_settings
from .engine import FunctionReport, MetricDescriptor, Report, SyntaxEntry, WalkerHooks, analyse

__all__ = [
    "analyse",  # Engine entry point (any tree, any walker)
    "analyse_source",
    "analyse_file",
    "AnalysisSettings",
    "load_settings",
    "Report",
    "FunctionReport",
    "SyntaxEntry",
    "MetricDescriptor",
    "WalkerHooks",
]
