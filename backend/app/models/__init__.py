from app.models.enums import GoalStatus, ScoreBand, TransactionType
from app.models.profile import FinancialGoal, UserDebt, UserFinancialProfile
from app.models.score import MonthlyFinancials, ScoreSnapshot
from app.models.transaction import Transaction
from app.models.user import User

__all__ = [
    "GoalStatus",
    "ScoreBand",
    "TransactionType",
    "FinancialGoal",
    "UserDebt",
    "UserFinancialProfile",
    "MonthlyFinancials",
    "ScoreSnapshot",
    "Transaction",
    "User",
]
