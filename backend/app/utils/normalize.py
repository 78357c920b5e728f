"""Numeric helpers shared by the rollup and the pillar scorers.

Every helper is total: empty inputs and zero denominators produce 0 rather
than raising, so sparse history never breaks a score.
"""

from __future__ import annotations

import math
from collections.abc import Sequence


def clamp(x: float, lo: float = 0.0, hi: float = 1.0) -> float:
    return max(lo, min(hi, x))


def safe_divide(numerator: float, denominator: float) -> float:
    # denominator floored to 1 (one cent), not an epsilon
    return numerator / max(denominator, 1)


def mean(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


def std(values: Sequence[float]) -> float:
    """Population standard deviation."""
    if not values:
        return 0.0
    avg = mean(values)
    return math.sqrt(sum((x - avg) ** 2 for x in values) / len(values))


def log_saturation(x: float, saturate_at: float) -> float:
    """ln(x + 1) / ln(saturate_at + 1), reaching 1.0 at ``saturate_at``."""
    return clamp(math.log(max(x, 0.0) + 1) / math.log(saturate_at + 1))


def exp_decay(x: float, rate: float) -> float:
    return clamp(math.exp(-rate * x))
