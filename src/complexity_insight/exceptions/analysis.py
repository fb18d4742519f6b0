"""Analysis-related exceptions: invalid inputs, parsing, metric invariants."""

from pathlib import Path
from typing import Any

from .base import ComplexityInsightError


class AnalysisError(ComplexityInsightError):
    """Base class for analysis-related errors."""
    pass


class InvalidSyntaxTreeError(AnalysisError):
    """Raised when the syntax tree handed to the engine is not a structured object."""

    def __init__(self, tree: Any):
        super().__init__(
            "Invalid syntax tree",
            details={"type": type(tree).__name__},
        )
        self.tree = tree


class InvalidWalkerError(AnalysisError):
    """Raised when the walker is missing or has no callable ``walk`` method."""

    def __init__(self, walker: Any, reason: str):
        super().__init__(
            "Invalid walker",
            details={"type": type(walker).__name__, "reason": reason},
        )
        self.walker = walker
        self.reason = reason


class MaintainabilityError(AnalysisError):
    """Raised when the maintainability index cannot be computed.

    Only reachable when the average cyclomatic complexity is exactly zero,
    which points at a broken syntax table rather than odd source code.
    """

    def __init__(self, average_complexity: float):
        super().__init__(
            "Encountered function with cyclomatic complexity zero",
            details={"average_complexity": str(average_complexity)},
        )
        self.average_complexity = average_complexity


class FileAccessError(AnalysisError):
    """Raised when a file cannot be accessed or read."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(
            f"Cannot access file: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class ParsingError(AnalysisError):
    """Raised when file content cannot be parsed."""

    def __init__(self, filepath: str, language: str, reason: str):
        super().__init__(
            f"Failed to parse {language} file: {filepath}",
            details={"filepath": str(filepath), "language": language, "reason": reason},
        )
        self.filepath = filepath
        self.language = language
        self.reason = reason
