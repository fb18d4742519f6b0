"""Post-traversal pass deriving aggregate statistics from raw counters.

For every function report and then the aggregate:
    cyclomatic density = cyclomatic / logical SLOC * 100
    Halstead derivatives (see halstead.calculate_derived)

Averages of (logical SLOC, cyclomatic, Halstead effort, params) over the
functions feed the maintainability index:

    MI = 171 - 3.42·ln(E_avg) - 0.23·ln(CC_avg) - 16.2·ln(LOC_avg)

A module without functions uses the aggregate as its single sample.

Arithmetic runs on float64 with IEEE semantics: zero logical lines gives an
infinite (or NaN) density instead of raising.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from ..config import AnalysisSettings
from ..exceptions import MaintainabilityError
from ..logging_config import get_logger
from . import halstead
from .models import FunctionReport, Report

logger = get_logger(__name__)

MI_CEILING = 171.0
MI_EFFORT_WEIGHT = 3.42
MI_COMPLEXITY_WEIGHT = 0.23
MI_LOC_WEIGHT = 16.2

# Positions in the sums vector
LOC, COMPLEXITY, EFFORT, PARAMS = range(4)


def finalize(report: Report, settings: Optional[AnalysisSettings] = None) -> Report:
    """Compute derived metrics in place and return the report.

    Must run exactly once per analysis; a second pass is not idempotent.

    Raises:
        MaintainabilityError: If the average cyclomatic complexity is zero
    """
    settings = settings or AnalysisSettings()
    sums = np.zeros(4, dtype=np.float64)

    for function_report in report.functions:
        _finalize_function(function_report)
        sums += _maintainability_sample(function_report)

    _finalize_function(report.aggregate)

    count = len(report.functions)
    if count == 0:
        sums += _maintainability_sample(report.aggregate)
        count = 1

    averages = sums / count

    report.maintainability = maintainability_index(
        averages[EFFORT],
        averages[COMPLEXITY],
        averages[LOC],
        newmi=settings.newmi,
    )
    report.params = float(averages[PARAMS])

    logger.debug(
        f"Finalized {len(report.functions)} functions, "
        f"maintainability={report.maintainability:.2f}"
    )
    return report


def cyclomatic_density(cyclomatic: float, logical_sloc: float) -> float:
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.float64(cyclomatic) / np.float64(logical_sloc) * 100)


def maintainability_index(
    average_effort: float,
    average_complexity: float,
    average_loc: float,
    newmi: bool = False,
) -> float:
    """Maintainability index from averaged metrics.

    Args:
        average_effort: Mean Halstead effort
        average_complexity: Mean cyclomatic complexity
        average_loc: Mean logical SLOC
        newmi: Rescale to 0-100 (clamped at 0) instead of the raw scale

    Returns:
        171 for trivial modules (zero effort or zero lines), otherwise the
        raw or rescaled index

    Raises:
        MaintainabilityError: If average_complexity is exactly zero
    """
    if average_complexity == 0:
        raise MaintainabilityError(float(average_complexity))

    if average_effort == 0 or average_loc == 0:
        maintainability = MI_CEILING
    else:
        with np.errstate(divide="ignore", invalid="ignore"):
            maintainability = float(
                MI_CEILING
                - MI_EFFORT_WEIGHT * np.log(np.float64(average_effort))
                - MI_COMPLEXITY_WEIGHT * np.log(np.float64(average_complexity))
                - MI_LOC_WEIGHT * np.log(np.float64(average_loc))
            )

    if newmi:
        maintainability = max(0.0, maintainability * 100 / MI_CEILING)

    return maintainability


def _finalize_function(function_report: FunctionReport) -> None:
    function_report.cyclomatic_density = cyclomatic_density(
        function_report.cyclomatic, function_report.logical_sloc
    )
    halstead.calculate_derived(function_report.halstead)


def _maintainability_sample(function_report: FunctionReport) -> np.ndarray:
    sample = np.zeros(4, dtype=np.float64)
    sample[LOC] = function_report.logical_sloc
    sample[COMPLEXITY] = function_report.cyclomatic
    sample[EFFORT] = function_report.halstead.effort
    sample[PARAMS] = function_report.params
    return sample
