"""create ledgers, kids and accounts tables

Revision ID: 0001_ledgers_module
Revises:
Create Date: 2026-10-18 00:00:00.000000
"""

from alembic import op
import sqlalchemy as sa

revision = "0001_ledgers_module"
down_revision = None
branch_labels = None
depends_on = None


def _timestamp(name: str) -> sa.Column:
    return sa.Column(
        name,
        sa.DateTime(timezone=True),
        nullable=False,
        server_default=sa.func.current_timestamp(),
    )


def upgrade() -> None:
    op.create_table(
        "ledgers",
        sa.Column("Id", sa.String(length=64), primary_key=True),
        sa.Column("Name", sa.String(length=200), nullable=False),
        _timestamp("CreatedAt"),
        _timestamp("UpdatedAt"),
    )

    op.create_table(
        "kids",
        sa.Column("Id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "LedgerId",
            sa.String(length=64),
            sa.ForeignKey("ledgers.Id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("Name", sa.String(length=200), nullable=False),
        sa.Column("Emoji", sa.String(length=16), nullable=False),
        sa.Column("SortOrder", sa.Float(), nullable=False, server_default=sa.text("0")),
        _timestamp("CreatedAt"),
        _timestamp("UpdatedAt"),
    )
    op.create_index("ix_kids_Id", "kids", ["Id"])
    op.create_index("ix_kids_LedgerId", "kids", ["LedgerId"])
    op.create_index("ix_kids_ledger_sort", "kids", ["LedgerId", "SortOrder"])

    op.create_table(
        "accounts",
        sa.Column("Id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "KidId",
            sa.Integer(),
            sa.ForeignKey("kids.Id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("Name", sa.String(length=200), nullable=False),
        sa.Column("Balance", sa.Numeric(12, 2), nullable=False, server_default=sa.text("0")),
        sa.Column("SortOrder", sa.Float(), nullable=False, server_default=sa.text("0")),
        _timestamp("CreatedAt"),
        _timestamp("UpdatedAt"),
    )
    op.create_index("ix_accounts_Id", "accounts", ["Id"])
    op.create_index("ix_accounts_KidId", "accounts", ["KidId"])
    op.create_index("ix_accounts_kid_sort", "accounts", ["KidId", "SortOrder"])


def downgrade() -> None:
    op.drop_index("ix_accounts_kid_sort", table_name="accounts")
    op.drop_index("ix_accounts_KidId", table_name="accounts")
    op.drop_index("ix_accounts_Id", table_name="accounts")
    op.drop_table("accounts")
    op.drop_index("ix_kids_ledger_sort", table_name="kids")
    op.drop_index("ix_kids_LedgerId", table_name="kids")
    op.drop_index("ix_kids_Id", table_name="kids")
    op.drop_table("kids")
    op.drop_table("ledgers")
