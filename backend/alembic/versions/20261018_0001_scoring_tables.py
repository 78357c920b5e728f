"""Initial schema for the Twealth scoring service.

Revision ID: 20261018_0001
Revises:
Create Date: 2026-10-18 09:00:00
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "20261018_0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    transaction_type = sa.Enum("income", "expense", "transfer", name="transaction_type")
    goal_status = sa.Enum("active", "completed", "paused", name="goal_status")
    score_band = sa.Enum("critical", "needs_work", "good", "great", name="score_band")

    transaction_type.create(op.get_bind(), checkfirst=True)
    goal_status.create(op.get_bind(), checkfirst=True)
    score_band.create(op.get_bind(), checkfirst=True)

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("full_name", sa.String(length=255), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "transactions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("type", transaction_type, nullable=False),
        sa.Column("category", sa.String(length=100), nullable=False, server_default="general"),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("destination", sa.String(length=255), nullable=True),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_transactions_id", "transactions", ["id"])
    op.create_index("ix_transactions_user_id", "transactions", ["user_id"])
    op.create_index("ix_transactions_date", "transactions", ["date"])

    op.create_table(
        "user_financial_profiles",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("emergency_fund", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("user_id", name="uq_user_financial_profiles_user"),
    )

    op.create_table(
        "user_debts",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("balance", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_user_debts_user_id", "user_debts", ["user_id"])

    op.create_table(
        "financial_goals",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("target_amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("current_amount", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("target_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("category", sa.String(length=100), nullable=True),
        sa.Column("status", goal_status, nullable=False, server_default="active"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_financial_goals_user_id", "financial_goals", ["user_id"])

    op.create_table(
        "monthly_financials",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("month", sa.Date(), nullable=False),
        sa.Column("income_cents", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("expense_cents", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("fixed_expense_cents", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("emergency_fund_cents", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("total_debt_cents", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("investment_contrib_cents", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("insured_amount_cents", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("transaction_count", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
        sa.UniqueConstraint("user_id", "month", name="uq_monthly_financials_user_month"),
    )
    op.create_index("ix_monthly_financials_user_id", "monthly_financials", ["user_id"])

    op.create_table(
        "score_snapshots",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("month", sa.Date(), nullable=False),
        sa.Column("cashflow_score", sa.Integer(), nullable=False),
        sa.Column("stability_score", sa.Integer(), nullable=False),
        sa.Column("growth_score", sa.Integer(), nullable=False),
        sa.Column("behavior_score", sa.Integer(), nullable=False),
        sa.Column("twealth_index", sa.Integer(), nullable=False),
        sa.Column("band", score_band, nullable=False),
        sa.Column("confidence", sa.Numeric(4, 3), nullable=False),
        sa.Column("drivers", sa.JSON(), nullable=False),
        sa.Column("components", sa.JSON(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("user_id", "month", name="uq_score_snapshots_user_month"),
        sa.CheckConstraint("twealth_index BETWEEN 0 AND 100", name="ck_score_snapshots_index_range"),
    )
    op.create_index("ix_score_snapshots_user_id", "score_snapshots", ["user_id"])


def downgrade() -> None:
    op.drop_index("ix_score_snapshots_user_id", table_name="score_snapshots")
    op.drop_table("score_snapshots")
    op.drop_index("ix_monthly_financials_user_id", table_name="monthly_financials")
    op.drop_table("monthly_financials")
    op.drop_index("ix_financial_goals_user_id", table_name="financial_goals")
    op.drop_table("financial_goals")
    op.drop_index("ix_user_debts_user_id", table_name="user_debts")
    op.drop_table("user_debts")
    op.drop_table("user_financial_profiles")
    op.drop_index("ix_transactions_date", table_name="transactions")
    op.drop_index("ix_transactions_user_id", table_name="transactions")
    op.drop_index("ix_transactions_id", table_name="transactions")
    op.drop_table("transactions")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_index("ix_users_id", table_name="users")
    op.drop_table("users")

    sa.Enum(name="score_band").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="goal_status").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="transaction_type").drop(op.get_bind(), checkfirst=True)
