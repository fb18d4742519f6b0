"""Syntax tables mapping node kinds to metric declarations."""

from .python import LAMBDA_BODY, build_syntax_table

__all__ = ["LAMBDA_BODY", "build_syntax_table"]
