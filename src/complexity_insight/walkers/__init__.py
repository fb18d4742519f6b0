"""Walkers driving the engine hooks over concrete syntax trees."""

from .python_ast import PythonAstWalker, parse_source

__all__ = ["PythonAstWalker", "parse_source"]
