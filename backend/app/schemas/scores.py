from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field

from app.models.enums import ScoreBand
from app.schemas.common import ORMModel


class PillarDriversOut(BaseModel):
    drivers: list[str]
    action: str


class ScoreDriversOut(BaseModel):
    cashflow: PillarDriversOut
    stability: PillarDriversOut
    growth: PillarDriversOut
    behavior: PillarDriversOut
    overall: PillarDriversOut


class ScoreResultOut(BaseModel):
    user_id: int
    month: date
    cashflow_score: int = Field(ge=0, le=100)
    stability_score: int = Field(ge=0, le=100)
    growth_score: int = Field(ge=0, le=100)
    behavior_score: int = Field(ge=0, le=100)
    twealth_index: int = Field(ge=0, le=100)
    band: ScoreBand
    confidence: float = Field(ge=0, le=1)
    drivers: ScoreDriversOut
    components: dict[str, Any]


class ScoreSnapshotOut(ORMModel):
    id: int
    user_id: int
    month: date
    cashflow_score: int
    stability_score: int
    growth_score: int
    behavior_score: int
    twealth_index: int
    band: ScoreBand
    confidence: Decimal
    drivers: ScoreDriversOut
    components: dict[str, Any]
    updated_at: datetime


class MonthlyFinancialsOut(ORMModel):
    month: date
    income_cents: int
    expense_cents: int
    fixed_expense_cents: int
    emergency_fund_cents: int
    total_debt_cents: int
    investment_contrib_cents: int
    insured_amount_cents: int
    transaction_count: int
