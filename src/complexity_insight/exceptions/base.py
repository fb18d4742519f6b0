"""Root of the Complexity Insight exception hierarchy.

Every error raised by the engine, the Python walker, the settings loader and
the CLI derives from ComplexityInsightError, so callers can catch one type.
"""

from typing import Any, Dict, Optional


class ComplexityInsightError(Exception):
    """Base exception for all Complexity Insight errors.

    ``details`` carries the context needed to act on the error without a
    traceback: the offending value's type for invalid trees and walkers, the
    setting name and value for configuration errors, the file path for parse
    and read failures. ``str()`` renders them after the message, which is
    what the CLI prints.

    Example:
        >>> str(ComplexityInsightError("Invalid walker", {"type": "NoneType"}))
        'Invalid walker (type=NoneType)'
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = dict(details) if details else {}

    def __str__(self) -> str:
        if not self.details:
            return self.message
        rendered = ", ".join(f"{key}={value}" for key, value in self.details.items())
        return f"{self.message} ({rendered})"
