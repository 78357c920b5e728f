from datetime import date, datetime, timezone
from decimal import Decimal

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.db.base import Base
from app.models.enums import TransactionType
from app.models.profile import UserDebt, UserFinancialProfile
from app.models.transaction import Transaction
from app.models.user import User
from app.services.pillars import MonthFigures
from app.utils.months import shift_months


SCENARIO_MONTH = MonthFigures(
    income_cents=500_000,
    expense_cents=350_000,
    fixed_expense_cents=150_000,
    emergency_fund_cents=1_050_000,
    total_debt_cents=0,
    investment_contrib_cents=75_000,
    insured_amount_cents=0,
    transaction_count=20,
)


def session_factory() -> sessionmaker[Session]:
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)


def session() -> Session:
    return session_factory()()


def add_user(db: Session, *, email: str = "saver@test.com", emergency_fund: str | None = None) -> User:
    user = User(email=email, full_name="Saver", is_active=True)
    db.add(user)
    db.flush()
    if emergency_fund is not None:
        db.add(UserFinancialProfile(user_id=user.id, emergency_fund=Decimal(emergency_fund)))
    return user


def add_tx(
    db: Session,
    user: User,
    *,
    tx_type: TransactionType,
    amount: str,
    category: str,
    on: date,
    destination: str | None = None,
) -> Transaction:
    tx = Transaction(
        user_id=user.id,
        amount=Decimal(amount),
        type=tx_type,
        category=category,
        destination=destination,
        description=category,
        date=datetime(on.year, on.month, on.day, 12, tzinfo=timezone.utc),
    )
    db.add(tx)
    return tx


def add_debt(db: Session, user: User, *, balance: str, name: str = "Card") -> UserDebt:
    debt = UserDebt(user_id=user.id, name=name, balance=Decimal(balance))
    db.add(debt)
    return debt


def add_scenario_month(db: Session, user: User, month: date) -> None:
    """Income 5000, expenses 3500 (1500 fixed), 750 invested."""
    add_tx(db, user, tx_type=TransactionType.income, amount="5000.00", category="Salary", on=month.replace(day=1))
    add_tx(db, user, tx_type=TransactionType.expense, amount="1200.00", category="Rent", on=month.replace(day=2))
    add_tx(db, user, tx_type=TransactionType.expense, amount="300.00", category="Utilities", on=month.replace(day=3))
    add_tx(db, user, tx_type=TransactionType.expense, amount="2000.00", category="Groceries", on=month.replace(day=9))
    add_tx(
        db,
        user,
        tx_type=TransactionType.transfer,
        amount="750.00",
        category="Transfer",
        destination="Vanguard IRA",
        on=month.replace(day=15),
    )


def scenario_months(last: date, count: int = 6) -> list[date]:
    return [shift_months(last, -offset) for offset in range(count - 1, -1, -1)]
