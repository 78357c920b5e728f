from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from app.models.enums import ScoreBand
from app.services.composite import band_for, composite_index, estimate_confidence
from app.services.drivers import synthesize_drivers
from app.services.pillars import (
    HISTORY_MONTHS,
    MonthFigures,
    score_behavior,
    score_cashflow,
    score_growth,
    score_stability,
)
from app.services.storage import ScoringStorage
from app.utils.months import month_start, shift_months


logger = logging.getLogger("twealth.scoring")


@dataclass(frozen=True)
class ScoreResult:
    cashflow_score: int
    stability_score: int
    growth_score: int
    behavior_score: int
    twealth_index: int
    band: ScoreBand
    confidence: float
    drivers: dict[str, dict[str, Any]]
    components: dict[str, Any]


def compute_scores(history: Sequence[Any]) -> ScoreResult:
    """Score a user from their trailing monthly figures.

    ``history`` may hold ``MonthlyFinancials`` rows or ``MonthFigures`` in any
    order; it is sorted most recent first when rows carry a ``month`` and
    trimmed to the last six months.
    """
    if history and all(hasattr(row, "month") for row in history):
        history = sorted(history, key=lambda row: row.month, reverse=True)
    figures = [
        row if isinstance(row, MonthFigures) else MonthFigures.from_record(row)
        for row in list(history)[:HISTORY_MONTHS]
    ]

    pillars = [
        score_cashflow(figures),
        score_stability(figures),
        score_growth(figures),
        score_behavior(figures),
    ]
    scores = {pillar.name: pillar.score for pillar in pillars}
    twealth_index = composite_index(scores)
    band = band_for(twealth_index)

    components: dict[str, Any] = {}
    for pillar in pillars:
        components.update(pillar.components)

    return ScoreResult(
        cashflow_score=scores["cashflow"],
        stability_score=scores["stability"],
        growth_score=scores["growth"],
        behavior_score=scores["behavior"],
        twealth_index=twealth_index,
        band=band,
        confidence=estimate_confidence(figures),
        drivers=synthesize_drivers(pillars, twealth_index, band),
        components=components,
    )


def load_score_history(
    storage: ScoringStorage,
    user_id: int,
    month: date | datetime,
) -> list[Any]:
    """Monthly rows for the six months ending at ``month`` (inclusive), newest first."""
    end = month_start(month)
    start = shift_months(end, -(HISTORY_MONTHS - 1))
    rows = storage.get_monthly_financials(user_id, start, end)
    return sorted(rows, key=lambda row: row.month, reverse=True)


def compute_user_scores(
    storage: ScoringStorage,
    user_id: int,
    month: date | datetime | None = None,
) -> ScoreResult:
    target = month or datetime.now()
    history = load_score_history(storage, user_id, target)
    result = compute_scores(history)
    logger.debug(
        "Scored user %s over %s months: index=%s band=%s",
        user_id,
        len(history),
        result.twealth_index,
        result.band.value,
    )
    return result
