"""Initial schema: accounts, payments, payment_errors

Revision ID: 001
Revises:
Create Date: 2022-01-04

"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "accounts",
        sa.Column("account_id", sa.Integer, primary_key=True, autoincrement=False),
        sa.Column("name", sa.String(150), nullable=True),
        sa.Column("email", sa.String(100), nullable=False, unique=True),
        sa.Column("birthdate", sa.Date, nullable=True),
        sa.Column("last_payment_date", sa.DateTime(timezone=False), nullable=True),
    )

    op.create_table(
        "payments",
        sa.Column("payment_id", sa.String(100), primary_key=True),
        sa.Column("account_id", sa.Integer, sa.ForeignKey("accounts.account_id"), nullable=False),
        sa.Column("payment_type", sa.String(150), nullable=False),
        sa.Column("credit_card", sa.String(100), nullable=True),
        sa.Column("amount", sa.Numeric(19, 4), nullable=False),
        sa.Column("created_on", sa.DateTime(timezone=False), nullable=True),
    )
    op.create_index("ix_payments_account_id", "payments", ["account_id"])

    op.create_table(
        "payment_errors",
        sa.Column("id", sa.BigInteger, sa.Identity(), primary_key=True),
        sa.Column("payment_id", sa.String(100), nullable=False),
        sa.Column("error", sa.String(50), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_payment_errors_payment_id", "payment_errors", ["payment_id"])


def downgrade() -> None:
    op.drop_table("payment_errors")
    op.drop_table("payments")
    op.drop_table("accounts")
