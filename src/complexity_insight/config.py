"""Configuration loading for Complexity Insight.

Settings control how a syntax table counts decision points and how the
maintainability index is scaled. Sources are merged in priority order:
    1. Defaults (defined in AnalysisSettings)
    2. Project config (./complexity-insight.toml)
    3. Explicit config file
    4. Environment variables (COMPLEXITY_* prefix)
    5. Overrides passed as kwargs (typically CLI flags)

Example:
    >>> settings = load_settings(newmi=True)
    >>> settings.newmi
    True
    >>> settings.logicalor
    True
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Optional

from .exceptions import ConfigurationError, InvalidConfigError

ENV_PREFIX = "COMPLEXITY_"
PROJECT_CONFIG_NAME = "complexity-insight.toml"


@dataclass(frozen=True)
class AnalysisSettings:
    """Options recognised by the engine and by syntax tables.

    Only ``newmi`` is read by the engine itself. The other flags are passed
    through the walker to the syntax table, which decides what counts as a
    decision point.

    Attributes:
        logicalor: Count each ``or`` operand as a decision point
        switchcase: Count each ``case`` of a switch/match as a decision point
        forin: Count for-in style iterations (comprehensions) as decision points
        trycatch: Count exception handlers as decision points
        newmi: Rescale the maintainability index to the 0-100 range
    """

    logicalor: bool = True
    switchcase: bool = True
    forin: bool = False
    trycatch: bool = False
    newmi: bool = False

    def __post_init__(self) -> None:
        """Validate that every option is a real boolean."""
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, bool):
                raise InvalidConfigError(f.name, value, "expected a boolean")

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> AnalysisSettings:
        """Build settings from a plain mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        for key in options:
            if key not in known:
                raise InvalidConfigError(
                    str(key), options[key], f"unknown option (expected one of {sorted(known)})"
                )
        return cls(**dict(options))

    def to_dict(self) -> dict[str, bool]:
        return asdict(self)


def load_settings(config_file: Optional[Path] = None, **overrides) -> AnalysisSettings:
    """Load settings with auto-discovery and merging.

    Args:
        config_file: Optional explicit TOML file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so unset CLI flags fall through.

    Returns:
        Validated AnalysisSettings instance

    Raises:
        ConfigurationError: If a config file is missing or unparseable
        InvalidConfigError: If a key is unknown or a value is not boolean
    """
    merged: dict[str, Any] = {}

    project_config = Path.cwd() / PROJECT_CONFIG_NAME
    if project_config.exists():
        merged.update(_load_config_section(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        merged.update(_load_config_section(config_file))

    merged.update(_load_env_vars())

    merged.update({key: value for key, value in overrides.items() if value is not None})

    return AnalysisSettings.from_mapping(merged)


def _load_config_section(path: Path) -> dict[str, Any]:
    """Read settings from a TOML file.

    Options may live at the top level or under a ``[settings]`` table.
    """
    try:
        data = _load_toml_file(path)
    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigurationError(f"Invalid config file '{path}': {e}")

    section = data.get("settings", data)
    if not isinstance(section, dict):
        raise ConfigurationError(f"Invalid [settings] table in '{path}'")
    return section


def _load_env_vars() -> dict[str, bool]:
    """Load settings from COMPLEXITY_* environment variables.

    Supported environment variables:
        COMPLEXITY_LOGICALOR, COMPLEXITY_SWITCHCASE, COMPLEXITY_FORIN,
        COMPLEXITY_TRYCATCH, COMPLEXITY_NEWMI (true/false/1/0/yes/no/on/off)
    """
    result: dict[str, bool] = {}

    for f in fields(AnalysisSettings):
        env_key = f"{ENV_PREFIX}{f.name.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue
        result[f.name] = _parse_bool(env_key, env_value)

    return result


def _parse_bool(key: str, value: str) -> bool:
    lower = value.strip().lower()
    if lower in ("true", "1", "yes", "on"):
        return True
    if lower in ("false", "0", "no", "off"):
        return False
    raise InvalidConfigError(key, value, "expected true/false")


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        ConfigurationError: If tomllib/tomli not available
        Exception: If TOML parsing fails
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        try:
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise ConfigurationError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        return tomllib.load(f)
