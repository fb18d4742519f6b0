"""Halstead accounting: occurrence counting and derived statistics.

    length     N = N1 + N2               (total operators + total operands)
    vocabulary n = n1 + n2               (distinct operators + distinct operands)
    difficulty D = (n1 / 2) * (N2 / n2)  (N2 / n2 taken as 1 when n2 == 0)
    volume     V = N * log₂(n)
    effort     E = D * V
    bugs       B = V / 3000
    time       T = E / 18                (seconds)
"""

from __future__ import annotations

import math
from typing import Any, Optional

from .models import HalsteadItemState, HalsteadState

BUGS_DIVISOR = 3000
SECONDS_DIVISOR = 18


def record(item: HalsteadItemState, identifier: Any) -> bool:
    """Record one occurrence of ``identifier`` in a bucket.

    ``total`` always grows by one; ``distinct`` grows only the first time the
    identifier is seen in this bucket. Identifiers match on type and value,
    so ``True``, ``1`` and ``1.0`` stay distinct. Unhashable identifiers are
    compared against the recorded ones by the same rule.

    Returns:
        True if the identifier was new to the bucket
    """
    item.total += 1
    key = _identity_key(identifier)
    if key is None:
        seen = any(
            type(known) is type(identifier) and known == identifier
            for known in item.identifiers
        )
    else:
        seen = key in item.keys
    if seen:
        return False

    if key is not None:
        item.keys.add(key)
    item.identifiers.append(identifier)
    item.distinct += 1
    return True


def _identity_key(identifier: Any) -> Optional[tuple[type, Any]]:
    try:
        hash(identifier)
    except TypeError:
        return None
    return (type(identifier), identifier)


def calculate_derived(halstead: HalsteadState) -> None:
    """Fill in the derived Halstead fields from the raw counters."""
    operators = halstead.operators
    operands = halstead.operands

    halstead.length = operators.total + operands.total
    if halstead.length == 0:
        _nil_derived(halstead)
        return

    halstead.vocabulary = operators.distinct + operands.distinct
    halstead.difficulty = (operators.distinct / 2) * (
        1 if operands.distinct == 0 else operands.total / operands.distinct
    )
    halstead.volume = halstead.length * math.log2(halstead.vocabulary)
    halstead.effort = halstead.difficulty * halstead.volume
    halstead.bugs = halstead.volume / BUGS_DIVISOR
    halstead.time = halstead.effort / SECONDS_DIVISOR


def _nil_derived(halstead: HalsteadState) -> None:
    halstead.vocabulary = 0
    halstead.difficulty = 0
    halstead.volume = 0
    halstead.effort = 0
    halstead.bugs = 0
    halstead.time = 0
