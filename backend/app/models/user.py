from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    is_active: Mapped[bool] = mapped_column(default=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    transactions: Mapped[list["Transaction"]] = relationship(
        "Transaction", back_populates="user", cascade="all, delete-orphan"
    )
    debts: Mapped[list["UserDebt"]] = relationship(
        "UserDebt", back_populates="user", cascade="all, delete-orphan"
    )
    financial_profile: Mapped["UserFinancialProfile | None"] = relationship(
        "UserFinancialProfile",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
    )
    goals: Mapped[list["FinancialGoal"]] = relationship(
        "FinancialGoal", back_populates="user", cascade="all, delete-orphan"
    )
    monthly_financials: Mapped[list["MonthlyFinancials"]] = relationship(
        "MonthlyFinancials", back_populates="user", cascade="all, delete-orphan"
    )
    score_snapshots: Mapped[list["ScoreSnapshot"]] = relationship(
        "ScoreSnapshot", back_populates="user", cascade="all, delete-orphan"
    )
