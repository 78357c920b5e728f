import enum


class TransactionType(str, enum.Enum):
    income = "income"
    expense = "expense"
    transfer = "transfer"


class ScoreBand(str, enum.Enum):
    critical = "Critical"
    needs_work = "Needs Work"
    good = "Good"
    great = "Great"


class GoalStatus(str, enum.Enum):
    active = "active"
    completed = "completed"
    paused = "paused"
