from __future__ import annotations

import math
from collections.abc import Mapping, Sequence

from app.models.enums import ScoreBand
from app.services.pillars import HISTORY_MONTHS, MonthFigures
from app.utils.decimal_math import round_ratio, round_score
from app.utils.normalize import clamp


# Adding a pillar means re-normalizing every weight.
PILLAR_WEIGHTS: dict[str, float] = {
    "cashflow": 0.25,
    "stability": 0.30,
    "growth": 0.25,
    "behavior": 0.20,
}

if not math.isclose(sum(PILLAR_WEIGHTS.values()), 1.0):
    raise RuntimeError("Pillar weights must sum to 1.0.")

BAND_THRESHOLDS: tuple[tuple[int, ScoreBand], ...] = (
    (80, ScoreBand.great),
    (60, ScoreBand.good),
    (40, ScoreBand.needs_work),
)

MISSING_EMERGENCY_FUND_PENALTY = 0.9
NO_INVESTMENT_HISTORY_PENALTY = 0.95


def composite_index(scores: Mapping[str, int]) -> int:
    return round_score(sum(weight * scores[name] for name, weight in PILLAR_WEIGHTS.items()))


def band_for(index: int) -> ScoreBand:
    for threshold, band in BAND_THRESHOLDS:
        if index >= threshold:
            return band
    return ScoreBand.critical


def estimate_confidence(history: Sequence[MonthFigures]) -> float:
    """How much data backs the score, 0..1. Not a statistical error bound."""
    confidence = clamp(len(history) / HISTORY_MONTHS)
    latest = history[0] if history else MonthFigures()
    if latest.emergency_fund_cents == 0:
        confidence *= MISSING_EMERGENCY_FUND_PENALTY
    if all(month.investment_contrib_cents == 0 for month in history):
        confidence *= NO_INVESTMENT_HISTORY_PENALTY
    return round_ratio(confidence)
