from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.enums import GoalStatus, TransactionType
from app.models.profile import FinancialGoal, UserDebt, UserFinancialProfile
from app.models.transaction import Transaction
from app.models.user import User
from app.services.recompute import recompute_scores
from app.services.storage import SqlAlchemyStorage
from app.utils.months import month_start, shift_months

DEMO_EMAIL = "demo@twealth.app"
DEMO_HISTORY_MONTHS = 6

# (type, category, destination, amount, day of month)
DEMO_MONTH_TEMPLATE: tuple[tuple[TransactionType, str, str | None, Decimal, int], ...] = (
    (TransactionType.income, "Salary", None, Decimal("5000.00"), 1),
    (TransactionType.expense, "Rent", None, Decimal("1200.00"), 2),
    (TransactionType.expense, "Utilities", None, Decimal("180.00"), 5),
    (TransactionType.expense, "Streaming subscription", None, Decimal("120.00"), 6),
    (TransactionType.expense, "Groceries", None, Decimal("900.00"), 10),
    (TransactionType.expense, "Dining", None, Decimal("600.00"), 14),
    (TransactionType.expense, "Transport", None, Decimal("500.00"), 18),
    (TransactionType.transfer, "Transfer", "Brokerage stocks", Decimal("750.00"), 20),
)

logger = logging.getLogger("twealth.seed")


def _get_or_create_user(db: Session, *, email: str, full_name: str) -> User:
    user = db.scalar(select(User).where(User.email == email))
    if user is not None:
        return user

    user = User(email=email, full_name=full_name, is_active=True)
    db.add(user)
    db.flush()
    return user


def _ensure_profile(db: Session, *, user_id: int, emergency_fund: Decimal) -> None:
    profile = db.scalar(select(UserFinancialProfile).where(UserFinancialProfile.user_id == user_id))
    if profile is None:
        db.add(UserFinancialProfile(user_id=user_id, emergency_fund=emergency_fund))


def _ensure_month_transactions(db: Session, *, user_id: int, month: date) -> None:
    next_month = shift_months(month, 1)
    exists = db.scalar(
        select(Transaction.id)
        .where(
            Transaction.user_id == user_id,
            Transaction.date >= datetime(month.year, month.month, 1, tzinfo=timezone.utc),
            Transaction.date < datetime(next_month.year, next_month.month, 1, tzinfo=timezone.utc),
        )
        .limit(1)
    )
    if exists is not None:
        return
    for tx_type, category, destination, amount, day in DEMO_MONTH_TEMPLATE:
        db.add(
            Transaction(
                user_id=user_id,
                amount=amount,
                type=tx_type,
                category=category,
                destination=destination,
                description=category,
                date=datetime(month.year, month.month, day, 12, tzinfo=timezone.utc),
            )
        )


def seed_demo_data(db: Session, *, today: date | None = None) -> User:
    """Create a demo user with six months of activity and score every month."""
    current = month_start(today or date.today())
    user = _get_or_create_user(db, email=DEMO_EMAIL, full_name="Demo Saver")
    _ensure_profile(db, user_id=user.id, emergency_fund=Decimal("10500.00"))

    if db.scalar(select(UserDebt.id).where(UserDebt.user_id == user.id)) is None:
        db.add(UserDebt(user_id=user.id, name="Car loan", balance=Decimal("8000.00")))
    if db.scalar(select(FinancialGoal.id).where(FinancialGoal.user_id == user.id)) is None:
        db.add(
            FinancialGoal(
                user_id=user.id,
                title="Six-month emergency fund",
                target_amount=Decimal("21000.00"),
                current_amount=Decimal("10500.00"),
                target_date=datetime(current.year + 1, current.month, 1, tzinfo=timezone.utc),
                category="emergency",
                status=GoalStatus.active,
            )
        )

    months = [shift_months(current, -offset) for offset in range(DEMO_HISTORY_MONTHS - 1, -1, -1)]
    for month in months:
        _ensure_month_transactions(db, user_id=user.id, month=month)
    db.flush()

    storage = SqlAlchemyStorage(db)
    for month in months:
        recompute_scores(storage, user.id, month)
    db.commit()
    logger.info("Seeded demo user %s with %s months of history.", user.email, len(months))
    return user
