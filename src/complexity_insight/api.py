"""Public API for analysing Python source.

Example:
    >>> from complexity_insight import analyse_source
    >>> report = analyse_source("def f(x):\\n    return x + 1\\n")
    >>> report.functions[0].name
    'f'
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional, Union

from .config import AnalysisSettings
from .engine import Report, analyse
from .exceptions import FileAccessError
from .logging_config import get_logger
from .walkers import PythonAstWalker, parse_source

logger = get_logger(__name__)

Settings = Optional[Union[AnalysisSettings, Mapping[str, Any]]]


def analyse_source(source: str, filename: str = "<string>", settings: Settings = None) -> Report:
    """Parse and analyse Python source text.

    Raises:
        ParsingError: If the source is not valid Python
        MaintainabilityError: If the average cyclomatic complexity is zero
    """
    tree = parse_source(source, filename=filename)
    return analyse(tree, PythonAstWalker(), settings)


def analyse_file(path: Union[str, Path], settings: Settings = None) -> Report:
    """Read a UTF-8 Python file and analyse it.

    Raises:
        FileAccessError: If the file cannot be read
        ParsingError: If the file is not valid Python
    """
    path = Path(path)
    try:
        source = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FileAccessError(path, str(e)) from e

    logger.info(f"Analysing {path}")
    return analyse_source(source, filename=str(path), settings=settings)
