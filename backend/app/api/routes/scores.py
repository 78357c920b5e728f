from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_user_or_404
from app.schemas.scores import MonthlyFinancialsOut, ScoreResultOut, ScoreSnapshotOut
from app.services.recompute import recompute_scores
from app.services.scoring_engine import load_score_history
from app.services.storage import SqlAlchemyStorage
from app.utils.months import month_start


router = APIRouter(prefix="/users/{user_id}", tags=["scores"])


@router.post("/scores/recompute", response_model=ScoreResultOut)
def recompute_user_scores(
    user_id: int,
    month: date | None = Query(default=None),
    db: Session = Depends(get_db),
) -> ScoreResultOut:
    get_user_or_404(db, user_id)
    target = month_start(month or date.today())
    storage = SqlAlchemyStorage(db)
    result = recompute_scores(storage, user_id, target)
    db.commit()
    return ScoreResultOut(
        user_id=user_id,
        month=target,
        cashflow_score=result.cashflow_score,
        stability_score=result.stability_score,
        growth_score=result.growth_score,
        behavior_score=result.behavior_score,
        twealth_index=result.twealth_index,
        band=result.band,
        confidence=result.confidence,
        drivers=result.drivers,
        components=result.components,
    )


@router.get("/scores/latest", response_model=ScoreSnapshotOut)
def get_latest_score(
    user_id: int,
    db: Session = Depends(get_db),
) -> ScoreSnapshotOut:
    get_user_or_404(db, user_id)
    snapshot = SqlAlchemyStorage(db).get_latest_score_snapshot(user_id)
    if snapshot is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No score snapshot found for this user.",
        )
    return ScoreSnapshotOut.model_validate(snapshot)


@router.get("/scores", response_model=list[ScoreSnapshotOut])
def list_scores(
    user_id: int,
    limit: int = Query(default=12, ge=1, le=60),
    db: Session = Depends(get_db),
) -> list[ScoreSnapshotOut]:
    get_user_or_404(db, user_id)
    rows = SqlAlchemyStorage(db).get_score_snapshots(user_id, limit=limit)
    return [ScoreSnapshotOut.model_validate(row) for row in rows]


@router.get("/monthly-financials", response_model=list[MonthlyFinancialsOut])
def list_monthly_financials(
    user_id: int,
    month: date | None = Query(default=None),
    db: Session = Depends(get_db),
) -> list[MonthlyFinancialsOut]:
    get_user_or_404(db, user_id)
    rows = load_score_history(SqlAlchemyStorage(db), user_id, month or date.today())
    return [MonthlyFinancialsOut.model_validate(row) for row in rows]
