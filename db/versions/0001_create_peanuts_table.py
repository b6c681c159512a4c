"""create peanuts table

Revision ID: 0001_peanuts
Revises:
Create Date: 2026-10-18 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001_peanuts"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "peanuts",
        sa.Column(
            "id",
            sa.BigInteger().with_variant(sa.Integer(), "sqlite"),
            primary_key=True,
        ),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sqlite_autoincrement=True,
    )


def downgrade():
    op.drop_table("peanuts")
