"""The four pillar scorers.

Each scorer is a pure function over up to six trailing months of figures,
most recent first. Ratios go through ``safe_divide`` and every normalized
component is clamped to [0, 1] before weighting, so empty or short history
yields a valid score instead of an error. Normalization constants are
hand-tuned and must stay as they are for score compatibility.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from app.utils.decimal_math import round_score
from app.utils.normalize import clamp, exp_decay, log_saturation, mean, safe_divide, std


HISTORY_MONTHS = 6
DRIVER_THRESHOLD = 0.35


@dataclass(frozen=True)
class MonthFigures:
    income_cents: int = 0
    expense_cents: int = 0
    fixed_expense_cents: int = 0
    emergency_fund_cents: int = 0
    total_debt_cents: int = 0
    investment_contrib_cents: int = 0
    insured_amount_cents: int = 0
    transaction_count: int = 0

    @classmethod
    def from_record(cls, record: Any) -> "MonthFigures":
        return cls(
            income_cents=int(record.income_cents),
            expense_cents=int(record.expense_cents),
            fixed_expense_cents=int(record.fixed_expense_cents),
            emergency_fund_cents=int(record.emergency_fund_cents),
            total_debt_cents=int(record.total_debt_cents),
            investment_contrib_cents=int(record.investment_contrib_cents),
            insured_amount_cents=int(record.insured_amount_cents),
            transaction_count=int(record.transaction_count),
        )


EMPTY_MONTH = MonthFigures()


@dataclass(frozen=True)
class PillarResult:
    name: str
    score: int
    drivers: list[str]
    actions: list[str] = field(default_factory=list)
    components: dict[str, float] = field(default_factory=dict)

    @property
    def action(self) -> str | None:
        return self.actions[0] if self.actions else None


def _latest(history: Sequence[MonthFigures]) -> MonthFigures:
    return history[0] if history else EMPTY_MONTH


def score_cashflow(history: Sequence[MonthFigures]) -> PillarResult:
    latest = _latest(history)
    income = latest.income_cents
    expense = latest.expense_cents

    net_ratio = safe_divide(income - expense, income)
    fixed_ratio = safe_divide(latest.fixed_expense_cents, income)
    incomes = [month.income_cents for month in history]
    income_vol = safe_divide(std(incomes), mean(incomes))

    a = clamp((net_ratio + 0.20) / 0.40)
    b = clamp(1 - fixed_ratio / 0.70)
    c = clamp(1 - income_vol / 0.60)
    score = round_score(100 * (0.55 * a + 0.30 * b + 0.15 * c))

    drivers: list[str] = []
    actions: list[str] = []
    if a < DRIVER_THRESHOLD:
        drivers.append("Savings rate is low (cashflow is tight)")
        actions.append("Increase savings by cutting expenses or boosting income")
    if b < DRIVER_THRESHOLD:
        drivers.append("Fixed costs are high relative to income")
        actions.append("Review fixed costs: subscriptions, rent, insurance")
    if c < DRIVER_THRESHOLD:
        drivers.append("Income is volatile month-to-month")
        actions.append("Build 3-6 month buffer for income gaps")
    if not drivers:
        drivers.append("Cashflow is healthy and sustainable")

    return PillarResult(
        name="cashflow",
        score=score,
        drivers=drivers,
        actions=actions,
        components={
            "netRatio": net_ratio,
            "fixedRatio": fixed_ratio,
            "incomeVol": income_vol,
            "A": a,
            "B": b,
            "C": c,
        },
    )


def score_stability(history: Sequence[MonthFigures]) -> PillarResult:
    latest = _latest(history)
    expense = latest.expense_cents
    insured = latest.insured_amount_cents

    liquidity_coverage = safe_divide(latest.emergency_fund_cents, expense)
    # log curve, 6 months of expenses saturates at 1.0
    l_score = log_saturation(liquidity_coverage, 6)

    annual_income = mean([month.income_cents for month in history[:3]]) * 12
    leverage = safe_divide(latest.total_debt_cents, annual_income)
    d_score = exp_decay(leverage, 1.2)

    protection_ratio = safe_divide(insured, expense * 12)
    p_score = clamp(protection_ratio)

    score = round_score(100 * (0.55 * l_score + 0.35 * d_score + 0.10 * p_score))

    drivers: list[str] = []
    actions: list[str] = []
    if l_score < DRIVER_THRESHOLD:
        drivers.append(f"Emergency fund covers only {liquidity_coverage:.1f} months")
        actions.append("Build emergency fund to 3-6 months of expenses")
    if d_score < DRIVER_THRESHOLD:
        drivers.append(f"Debt-to-income ratio is {leverage * 100:.0f}%")
        actions.append("Focus on paying down highest-interest debt first")
    if p_score < DRIVER_THRESHOLD and insured == 0:
        drivers.append("No insurance protection detected")
        actions.append("Consider health, life, or disability insurance")
    if not drivers:
        drivers.append("Strong financial safety net in place")

    return PillarResult(
        name="stability",
        score=score,
        drivers=drivers,
        actions=actions,
        components={
            "liquidityCoverage": liquidity_coverage,
            "leverage": leverage,
            "protectionRatio": protection_ratio,
            "L": l_score,
            "D": d_score,
            "P": p_score,
        },
    )


def score_growth(history: Sequence[MonthFigures]) -> PillarResult:
    latest = _latest(history)
    income = latest.income_cents

    saving_rate = safe_divide(income - latest.expense_cents, income)
    s_score = clamp(saving_rate / 0.25)

    invest_rate = safe_divide(latest.investment_contrib_cents, income)
    i_score = clamp(invest_rate / 0.15)

    last3_income = mean([month.income_cents for month in history[:3]])
    prev3_income = mean([month.income_cents for month in history[3:6]])
    income_growth = safe_divide(last3_income - prev3_income, prev3_income)
    g_score = clamp((income_growth + 0.10) / 0.30)

    window = history[:HISTORY_MONTHS]
    invest_months = sum(1 for month in window if month.investment_contrib_cents > 0)
    consistency = invest_months / max(len(window), 1)
    co_score = clamp(consistency)

    score = round_score(100 * (0.35 * s_score + 0.30 * i_score + 0.15 * g_score + 0.20 * co_score))

    drivers: list[str] = []
    actions: list[str] = []
    if s_score < DRIVER_THRESHOLD:
        drivers.append(f"Savings rate is {saving_rate * 100:.0f}% (target: 20%+)")
        actions.append("Automate savings: set up automatic transfers on payday")
    if i_score < DRIVER_THRESHOLD:
        drivers.append("Investment contributions are low")
        actions.append("Start with $100/month into index funds")
    if co_score < DRIVER_THRESHOLD:
        drivers.append("Investment contributions are inconsistent")
        actions.append("Set up recurring investments for consistency")
    if not drivers:
        drivers.append("Strong wealth-building habits")

    return PillarResult(
        name="growth",
        score=score,
        drivers=drivers,
        actions=actions,
        components={
            "savingRate": saving_rate,
            "investRate": invest_rate,
            "incomeGrowth": income_growth,
            "consistency": consistency,
            "S": s_score,
            "I": i_score,
            "G": g_score,
            "Co": co_score,
        },
    )


def score_behavior(history: Sequence[MonthFigures]) -> PillarResult:
    latest = _latest(history)

    logging_months = sum(1 for month in history[:3] if month.transaction_count > 0)
    logging_consistency = logging_months / 3
    ba_score = clamp(logging_consistency)

    # spending up to income is full marks; 2x income or worse is zero
    budget_adherence = 1 - clamp(safe_divide(latest.expense_cents, latest.income_cents) - 1)
    bc_score = clamp(budget_adherence)

    score = round_score(100 * (0.55 * bc_score + 0.45 * ba_score))

    drivers: list[str] = []
    actions: list[str] = []
    if ba_score < DRIVER_THRESHOLD:
        drivers.append("Transaction logging is inconsistent")
        actions.append("Log transactions daily or connect your accounts")
    if bc_score < DRIVER_THRESHOLD:
        drivers.append("Spending exceeds income")
        actions.append("Create a monthly budget and track against it")
    if not drivers:
        drivers.append("Excellent financial habits")

    return PillarResult(
        name="behavior",
        score=score,
        drivers=drivers,
        actions=actions,
        components={
            "loggingConsistency": logging_consistency,
            "budgetAdherence": budget_adherence,
            "Ba": ba_score,
            "Bc": bc_score,
        },
    )
