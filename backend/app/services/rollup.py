from __future__ import annotations

import logging
from datetime import date, datetime

from app.core.config import get_settings
from app.models.enums import TransactionType
from app.models.score import MonthlyFinancials
from app.models.transaction import Transaction
from app.services.classification import (
    FIXED_TAG,
    INVESTMENT_TAG,
    ClassificationTable,
    classification_from_settings,
)
from app.services.storage import MonthlyFinancialsInput, ScoringStorage
from app.utils.decimal_math import to_cents
from app.utils.months import month_window


logger = logging.getLogger("twealth.rollup")


def _tx_day(tx: Transaction) -> date:
    return tx.date.date() if isinstance(tx.date, datetime) else tx.date


def aggregate_transactions(
    transactions: list[Transaction],
    classification: ClassificationTable,
) -> dict[str, int]:
    totals = {
        "income_cents": 0,
        "expense_cents": 0,
        "fixed_expense_cents": 0,
        "investment_contrib_cents": 0,
    }
    for tx in transactions:
        # stored sign is not trusted; the type carries the direction
        amount_cents = abs(to_cents(tx.amount))
        tx_type = TransactionType(tx.type)
        if tx_type == TransactionType.income:
            totals["income_cents"] += amount_cents
        elif tx_type == TransactionType.expense:
            totals["expense_cents"] += amount_cents
            if classification.has_tag(tx.category, FIXED_TAG):
                totals["fixed_expense_cents"] += amount_cents
        elif tx_type == TransactionType.transfer and tx.destination:
            if classification.has_tag(tx.destination, INVESTMENT_TAG):
                totals["investment_contrib_cents"] += amount_cents
    return totals


def rollup_monthly_financials(
    storage: ScoringStorage,
    user_id: int,
    month: date | datetime,
    *,
    classification: ClassificationTable | None = None,
) -> MonthlyFinancials:
    settings = get_settings()
    table = classification or classification_from_settings(settings)
    start, end = month_window(month)

    transactions = storage.get_transactions_by_user_id(user_id, settings.transaction_fetch_limit)
    month_txns = [tx for tx in transactions if start <= _tx_day(tx) < end]
    totals = aggregate_transactions(month_txns, table)

    debts = storage.get_user_debts(user_id)
    profile = storage.get_user_financial_profile(user_id)
    # goals are loaded for future pillars; no current pillar reads them
    storage.get_financial_goals_by_user_id(user_id)

    total_debt_cents = sum(max(0, to_cents(debt.balance)) for debt in debts)
    emergency_fund_cents = max(0, to_cents(profile.emergency_fund)) if profile is not None else 0

    record = storage.upsert_monthly_financials(
        MonthlyFinancialsInput(
            user_id=user_id,
            month=start,
            income_cents=totals["income_cents"],
            expense_cents=totals["expense_cents"],
            fixed_expense_cents=totals["fixed_expense_cents"],
            emergency_fund_cents=emergency_fund_cents,
            total_debt_cents=total_debt_cents,
            investment_contrib_cents=totals["investment_contrib_cents"],
            insured_amount_cents=0,
            transaction_count=len(month_txns),
        )
    )
    logger.info(
        "Rolled up %s transactions for user %s month %s (classification %s).",
        len(month_txns),
        user_id,
        start.isoformat(),
        table.version,
    )
    return record
