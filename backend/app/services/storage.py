from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Protocol

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.enums import ScoreBand
from app.models.profile import FinancialGoal, UserDebt, UserFinancialProfile
from app.models.score import MonthlyFinancials, ScoreSnapshot
from app.models.transaction import Transaction


@dataclass(frozen=True)
class MonthlyFinancialsInput:
    user_id: int
    month: date
    income_cents: int
    expense_cents: int
    fixed_expense_cents: int
    emergency_fund_cents: int
    total_debt_cents: int
    investment_contrib_cents: int
    insured_amount_cents: int
    transaction_count: int


@dataclass(frozen=True)
class ScoreSnapshotInput:
    user_id: int
    month: date
    cashflow_score: int
    stability_score: int
    growth_score: int
    behavior_score: int
    twealth_index: int
    band: ScoreBand
    confidence: Decimal
    drivers: dict[str, Any]
    components: dict[str, Any]


class ScoringStorage(Protocol):
    def get_transactions_by_user_id(self, user_id: int, limit: int) -> list[Transaction]: ...

    def get_user_debts(self, user_id: int) -> list[UserDebt]: ...

    def get_user_financial_profile(self, user_id: int) -> UserFinancialProfile | None: ...

    def get_financial_goals_by_user_id(self, user_id: int) -> list[FinancialGoal]: ...

    def upsert_monthly_financials(self, record: MonthlyFinancialsInput) -> MonthlyFinancials: ...

    def get_monthly_financials(
        self, user_id: int, from_month: date, to_month: date
    ) -> list[MonthlyFinancials]: ...

    def upsert_score_snapshot(self, record: ScoreSnapshotInput) -> ScoreSnapshot: ...

    def get_latest_score_snapshot(self, user_id: int) -> ScoreSnapshot | None: ...

    def get_score_snapshots(self, user_id: int, limit: int = 12) -> list[ScoreSnapshot]: ...


_MONTHLY_FIELDS = (
    "income_cents",
    "expense_cents",
    "fixed_expense_cents",
    "emergency_fund_cents",
    "total_debt_cents",
    "investment_contrib_cents",
    "insured_amount_cents",
    "transaction_count",
)

_SNAPSHOT_FIELDS = (
    "cashflow_score",
    "stability_score",
    "growth_score",
    "behavior_score",
    "twealth_index",
    "band",
    "confidence",
    "drivers",
    "components",
)


class SqlAlchemyStorage:
    """ScoringStorage over a SQLAlchemy session.

    Writes are flushed, never committed; the caller owns the transaction.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def get_transactions_by_user_id(self, user_id: int, limit: int) -> list[Transaction]:
        return list(
            self.db.scalars(
                select(Transaction)
                .where(Transaction.user_id == user_id)
                .order_by(Transaction.date.desc(), Transaction.id.desc())
                .limit(limit)
            ).all()
        )

    def get_user_debts(self, user_id: int) -> list[UserDebt]:
        return list(
            self.db.scalars(
                select(UserDebt).where(UserDebt.user_id == user_id).order_by(UserDebt.id)
            ).all()
        )

    def get_user_financial_profile(self, user_id: int) -> UserFinancialProfile | None:
        return self.db.scalar(
            select(UserFinancialProfile).where(UserFinancialProfile.user_id == user_id)
        )

    def get_financial_goals_by_user_id(self, user_id: int) -> list[FinancialGoal]:
        return list(
            self.db.scalars(
                select(FinancialGoal).where(FinancialGoal.user_id == user_id).order_by(FinancialGoal.id)
            ).all()
        )

    def upsert_monthly_financials(self, record: MonthlyFinancialsInput) -> MonthlyFinancials:
        row = self.db.scalar(
            select(MonthlyFinancials).where(
                MonthlyFinancials.user_id == record.user_id,
                MonthlyFinancials.month == record.month,
            )
        )
        if row is None:
            row = MonthlyFinancials(user_id=record.user_id, month=record.month)
            self.db.add(row)
        for name in _MONTHLY_FIELDS:
            setattr(row, name, getattr(record, name))
        self.db.flush()
        return row

    def get_monthly_financials(
        self, user_id: int, from_month: date, to_month: date
    ) -> list[MonthlyFinancials]:
        return list(
            self.db.scalars(
                select(MonthlyFinancials)
                .where(
                    MonthlyFinancials.user_id == user_id,
                    MonthlyFinancials.month >= from_month,
                    MonthlyFinancials.month <= to_month,
                )
                .order_by(MonthlyFinancials.month.desc())
            ).all()
        )

    def upsert_score_snapshot(self, record: ScoreSnapshotInput) -> ScoreSnapshot:
        row = self.db.scalar(
            select(ScoreSnapshot).where(
                ScoreSnapshot.user_id == record.user_id,
                ScoreSnapshot.month == record.month,
            )
        )
        if row is None:
            row = ScoreSnapshot(user_id=record.user_id, month=record.month)
            self.db.add(row)
        for name in _SNAPSHOT_FIELDS:
            setattr(row, name, getattr(record, name))
        self.db.flush()
        return row

    def get_latest_score_snapshot(self, user_id: int) -> ScoreSnapshot | None:
        return self.db.scalar(
            select(ScoreSnapshot)
            .where(ScoreSnapshot.user_id == user_id)
            .order_by(ScoreSnapshot.month.desc())
            .limit(1)
        )

    def get_score_snapshots(self, user_id: int, limit: int = 12) -> list[ScoreSnapshot]:
        return list(
            self.db.scalars(
                select(ScoreSnapshot)
                .where(ScoreSnapshot.user_id == user_id)
                .order_by(ScoreSnapshot.month.desc())
                .limit(limit)
            ).all()
        )
