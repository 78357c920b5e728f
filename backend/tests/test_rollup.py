from datetime import date

from sqlalchemy import BigInteger, func, select

from app.models.enums import TransactionType
from app.models.score import MonthlyFinancials
from app.services.classification import DEFAULT_CLASSIFICATION, ClassificationTable
from app.services.rollup import rollup_monthly_financials
from app.services.storage import SqlAlchemyStorage
from factories import add_debt, add_tx, add_user, session


MARCH = date(2026, 3, 1)


def _seed_march(db):
    user = add_user(db, emergency_fund="3000.00")
    add_tx(db, user, tx_type=TransactionType.income, amount="4200.50", category="Salary", on=date(2026, 3, 1))
    add_tx(db, user, tx_type=TransactionType.income, amount="300.00", category="Freelance", on=date(2026, 3, 20))
    add_tx(db, user, tx_type=TransactionType.expense, amount="1200.00", category="Rent", on=date(2026, 3, 2))
    add_tx(db, user, tx_type=TransactionType.expense, amount="80.25", category="Home Insurance", on=date(2026, 3, 4))
    add_tx(db, user, tx_type=TransactionType.expense, amount="410.10", category="Groceries", on=date(2026, 3, 8))
    add_tx(
        db,
        user,
        tx_type=TransactionType.transfer,
        amount="500.00",
        category="Transfer",
        destination="Vanguard IRA",
        on=date(2026, 3, 15),
    )
    add_tx(
        db,
        user,
        tx_type=TransactionType.transfer,
        amount="200.00",
        category="Transfer",
        destination="Checking",
        on=date(2026, 3, 16),
    )
    add_tx(db, user, tx_type=TransactionType.expense, amount="99.00", category="Rent", on=date(2026, 2, 28))
    add_tx(db, user, tx_type=TransactionType.expense, amount="77.00", category="Rent", on=date(2026, 4, 1))
    add_debt(db, user, balance="1000.10")
    add_debt(db, user, balance="250.00", name="Student loan")
    db.flush()
    return user


def test_rollup_classifies_month_transactions() -> None:
    db = session()
    user = _seed_march(db)

    record = rollup_monthly_financials(SqlAlchemyStorage(db), user.id, date(2026, 3, 17))

    assert record.month == MARCH
    assert record.income_cents == 450_050
    assert record.expense_cents == 169_035
    assert record.fixed_expense_cents == 128_025
    assert record.investment_contrib_cents == 50_000
    assert record.total_debt_cents == 125_010
    assert record.emergency_fund_cents == 300_000
    assert record.insured_amount_cents == 0
    assert record.transaction_count == 7


def test_rollup_is_idempotent() -> None:
    db = session()
    user = _seed_march(db)
    storage = SqlAlchemyStorage(db)

    first = rollup_monthly_financials(storage, user.id, MARCH)
    first_values = (
        first.income_cents,
        first.expense_cents,
        first.fixed_expense_cents,
        first.investment_contrib_cents,
        first.total_debt_cents,
        first.emergency_fund_cents,
        first.transaction_count,
    )
    second = rollup_monthly_financials(storage, user.id, MARCH)

    assert second.id == first.id
    assert (
        second.income_cents,
        second.expense_cents,
        second.fixed_expense_cents,
        second.investment_contrib_cents,
        second.total_debt_cents,
        second.emergency_fund_cents,
        second.transaction_count,
    ) == first_values
    count = db.scalar(select(func.count()).select_from(MonthlyFinancials).where(MonthlyFinancials.user_id == user.id))
    assert count == 1


def test_rollup_overwrites_with_latest_data() -> None:
    db = session()
    user = _seed_march(db)
    storage = SqlAlchemyStorage(db)
    rollup_monthly_financials(storage, user.id, MARCH)

    add_tx(db, user, tx_type=TransactionType.expense, amount="50.00", category="Dining", on=date(2026, 3, 30))
    db.flush()
    record = rollup_monthly_financials(storage, user.id, MARCH)

    assert record.expense_cents == 174_035
    assert record.transaction_count == 8


def test_rollup_without_profile_or_transactions_is_zeroed() -> None:
    db = session()
    user = add_user(db)

    record = rollup_monthly_financials(SqlAlchemyStorage(db), user.id, MARCH)

    assert record.income_cents == 0
    assert record.emergency_fund_cents == 0
    assert record.total_debt_cents == 0
    assert record.transaction_count == 0


def test_custom_classification_table() -> None:
    db = session()
    user = _seed_march(db)
    table = ClassificationTable.from_keywords("test.1", fixed=["groceries"], investment=["checking"])

    record = rollup_monthly_financials(SqlAlchemyStorage(db), user.id, MARCH, classification=table)

    assert record.fixed_expense_cents == 41_010
    assert record.investment_contrib_cents == 20_000


def test_default_classification_matches_substrings_case_insensitively() -> None:
    assert DEFAULT_CLASSIFICATION.has_tag("Monthly RENT payment", "fixed")
    assert DEFAULT_CLASSIFICATION.has_tag("Coinbase Crypto", "investment")
    assert not DEFAULT_CLASSIFICATION.has_tag("Groceries", "fixed")
    assert DEFAULT_CLASSIFICATION.tags_for(None) == frozenset()


def test_rollup_keeps_money_fields_non_negative() -> None:
    db = session()
    user = add_user(db, emergency_fund="-500.00")
    add_tx(db, user, tx_type=TransactionType.expense, amount="-120.00", category="Rent", on=date(2026, 3, 3))
    add_tx(db, user, tx_type=TransactionType.income, amount="-900.00", category="Salary", on=date(2026, 3, 1))
    add_debt(db, user, balance="-300.00")
    add_debt(db, user, balance="200.00", name="Student loan")
    db.flush()

    record = rollup_monthly_financials(SqlAlchemyStorage(db), user.id, MARCH)

    assert record.income_cents == 90_000
    assert record.expense_cents == 12_000
    assert record.fixed_expense_cents == 12_000
    assert record.emergency_fund_cents == 0
    assert record.total_debt_cents == 20_000
    for column in MonthlyFinancials.__table__.columns:
        if column.name.endswith("_cents"):
            assert getattr(record, column.name) >= 0


def test_rollup_stores_balances_beyond_32_bit_cents() -> None:
    db = session()
    user = add_user(db, emergency_fund="25000000.00")
    add_debt(db, user, balance="30000000.00")
    db.flush()

    record = rollup_monthly_financials(SqlAlchemyStorage(db), user.id, MARCH)

    assert record.emergency_fund_cents == 2_500_000_000
    assert record.total_debt_cents == 3_000_000_000
    cents_columns = [c for c in MonthlyFinancials.__table__.columns if c.name.endswith("_cents")]
    assert len(cents_columns) == 7
    assert all(isinstance(column.type, BigInteger) for column in cents_columns)
