from datetime import date

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from app.models.enums import ScoreBand
from app.models.score import ScoreSnapshot
from app.services.recompute import recompute_scores
from app.services.storage import SqlAlchemyStorage
from factories import add_scenario_month, add_user, scenario_months, session


AUGUST = date(2026, 8, 1)


def _scenario_user(db):
    user = add_user(db, emergency_fund="10500.00")
    for month in scenario_months(AUGUST):
        add_scenario_month(db, user, month)
    db.flush()
    storage = SqlAlchemyStorage(db)
    for month in scenario_months(AUGUST)[:-1]:
        recompute_scores(storage, user.id, month)
    return user, storage


def test_recompute_scores_worked_scenario_and_persists_snapshot() -> None:
    db = session()
    user, storage = _scenario_user(db)

    result = recompute_scores(storage, user.id, date(2026, 8, 21))

    assert result.twealth_index == 86
    assert result.band == ScoreBand.great
    assert result.confidence == 1.0
    snapshot = storage.get_latest_score_snapshot(user.id)
    assert snapshot is not None
    assert snapshot.month == AUGUST
    assert snapshot.twealth_index == 86
    assert snapshot.band == ScoreBand.great
    assert snapshot.drivers["overall"]["action"] == "Consider health, life, or disability insurance"
    assert snapshot.components["P"] == 0.0


def test_recompute_is_idempotent_per_month() -> None:
    db = session()
    user, storage = _scenario_user(db)

    first = recompute_scores(storage, user.id, AUGUST)
    second = recompute_scores(storage, user.id, AUGUST)

    assert first == second
    count = db.scalar(
        select(func.count()).select_from(ScoreSnapshot).where(ScoreSnapshot.user_id == user.id)
    )
    assert count == 6
    assert [row.month for row in storage.get_score_snapshots(user.id, limit=2)] == [
        AUGUST,
        date(2026, 7, 1),
    ]


def test_confidence_grows_with_history() -> None:
    db = session()
    user = add_user(db, emergency_fund="10500.00")
    months = scenario_months(AUGUST, count=3)
    for month in months:
        add_scenario_month(db, user, month)
    db.flush()
    storage = SqlAlchemyStorage(db)

    results = [recompute_scores(storage, user.id, month) for month in months]

    assert [result.confidence for result in results] == [pytest.approx(1 / 6, abs=1e-3), 0.333, 0.5]


class _FailingStorage:
    def get_transactions_by_user_id(self, user_id, limit):
        raise OperationalError("SELECT", {}, Exception("database unavailable"))


def test_storage_errors_propagate() -> None:
    with pytest.raises(OperationalError):
        recompute_scores(_FailingStorage(), 1, AUGUST)
