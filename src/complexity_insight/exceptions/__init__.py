"""Exception hierarchy for Complexity Insight."""

from .analysis import (
    AnalysisError,
    FileAccessError,
    InvalidSyntaxTreeError,
    InvalidWalkerError,
    MaintainabilityError,
    ParsingError,
)
from .base import ComplexityInsightError
from .config import ConfigurationError, InvalidConfigError

__all__ = [
    "ComplexityInsightError",
    "AnalysisError",
    "InvalidSyntaxTreeError",
    "InvalidWalkerError",
    "MaintainabilityError",
    "FileAccessError",
    "ParsingError",
    "ConfigurationError",
    "InvalidConfigError",
]
