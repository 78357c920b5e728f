from __future__ import annotations

import logging
from datetime import date, datetime
from decimal import Decimal

from app.models.score import ScoreSnapshot
from app.services.classification import ClassificationTable
from app.services.rollup import rollup_monthly_financials
from app.services.scoring_engine import ScoreResult, compute_user_scores
from app.services.storage import ScoreSnapshotInput, ScoringStorage
from app.utils.months import month_start


logger = logging.getLogger("twealth.scoring")


def save_score_snapshot(
    storage: ScoringStorage,
    user_id: int,
    result: ScoreResult,
    month: date | datetime | None = None,
) -> ScoreSnapshot:
    return storage.upsert_score_snapshot(
        ScoreSnapshotInput(
            user_id=user_id,
            month=month_start(month or datetime.now()),
            cashflow_score=result.cashflow_score,
            stability_score=result.stability_score,
            growth_score=result.growth_score,
            behavior_score=result.behavior_score,
            twealth_index=result.twealth_index,
            band=result.band,
            confidence=Decimal(str(result.confidence)),
            drivers=result.drivers,
            components=result.components,
        )
    )


def recompute_scores(
    storage: ScoringStorage,
    user_id: int,
    month: date | datetime | None = None,
    *,
    classification: ClassificationTable | None = None,
) -> ScoreResult:
    """Roll up the month, score the trailing window and persist the snapshot.

    Storage errors propagate; both writes are upserts keyed by (user, month),
    so a failed run can be retried in full.
    """
    target = month or datetime.now()
    rollup_monthly_financials(storage, user_id, target, classification=classification)
    result = compute_user_scores(storage, user_id, target)
    save_score_snapshot(storage, user_id, result, target)
    logger.info(
        "Recomputed scores for user %s month %s: index=%s (%s) confidence=%.3f",
        user_id,
        month_start(target).isoformat(),
        result.twealth_index,
        result.band.value,
        result.confidence,
    )
    return result
