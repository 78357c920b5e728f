from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import (
    JSON,
    BigInteger,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    Numeric,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.models.enums import ScoreBand


class MonthlyFinancials(Base):
    __tablename__ = "monthly_financials"
    __table_args__ = (
        UniqueConstraint("user_id", "month", name="uq_monthly_financials_user_month"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    month: Mapped[date] = mapped_column(Date, nullable=False)

    income_cents: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
    expense_cents: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
    fixed_expense_cents: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
    emergency_fund_cents: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
    total_debt_cents: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
    investment_contrib_cents: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
    # insurance tracking is not implemented yet; always 0
    insured_amount_cents: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
    transaction_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    user: Mapped["User"] = relationship("User", back_populates="monthly_financials")


class ScoreSnapshot(Base):
    __tablename__ = "score_snapshots"
    __table_args__ = (
        UniqueConstraint("user_id", "month", name="uq_score_snapshots_user_month"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    month: Mapped[date] = mapped_column(Date, nullable=False)

    cashflow_score: Mapped[int] = mapped_column(Integer, nullable=False)
    stability_score: Mapped[int] = mapped_column(Integer, nullable=False)
    growth_score: Mapped[int] = mapped_column(Integer, nullable=False)
    behavior_score: Mapped[int] = mapped_column(Integer, nullable=False)
    twealth_index: Mapped[int] = mapped_column(Integer, nullable=False)
    band: Mapped[ScoreBand] = mapped_column(Enum(ScoreBand, name="score_band"), nullable=False)
    confidence: Mapped[Decimal] = mapped_column(Numeric(4, 3), nullable=False)
    drivers: Mapped[dict] = mapped_column(JSON, nullable=False)
    components: Mapped[dict] = mapped_column(JSON, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    user: Mapped["User"] = relationship("User", back_populates="score_snapshots")
