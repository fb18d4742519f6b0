"""Tests for the exception hierarchy."""

from pathlib import Path

from complexity_insight.exceptions import (
    AnalysisError,
    ComplexityInsightError,
    ConfigurationError,
    FileAccessError,
    InvalidConfigError,
    InvalidSyntaxTreeError,
    InvalidWalkerError,
    MaintainabilityError,
    ParsingError,
)


class TestHierarchy:
    """Every error is catchable through the package base class."""

    def test_analysis_errors(self):
        for error in (
            InvalidSyntaxTreeError(None),
            InvalidWalkerError(None, "missing"),
            MaintainabilityError(0.0),
            FileAccessError(Path("a.py"), "denied"),
            ParsingError("a.py", "python", "bad"),
        ):
            assert isinstance(error, AnalysisError)
            assert isinstance(error, ComplexityInsightError)

    def test_config_errors(self):
        error = InvalidConfigError("newmi", "x", "expected a boolean")
        assert isinstance(error, ConfigurationError)
        assert isinstance(error, ComplexityInsightError)


class TestFormatting:
    """Details are rendered after the message."""

    def test_details_in_str(self):
        error = InvalidWalkerError("walker", "walker must be an object")
        assert str(error) == "Invalid walker (type=str, reason=walker must be an object)"

    def test_plain_message(self):
        assert str(ComplexityInsightError("boom")) == "boom"

    def test_maintainability_message(self):
        error = MaintainabilityError(0.0)
        assert "cyclomatic complexity zero" in str(error)
        assert error.average_complexity == 0.0

    def test_details_are_copied(self):
        """Mutating the caller's mapping does not change the error."""
        details = {"key": "newmi"}
        error = ComplexityInsightError("Invalid configuration", details)
        details["key"] = "forin"
        assert str(error) == "Invalid configuration (key=newmi)"
