"""Add address and image columns to camping_spots

Revision ID: 0002
Revises: 0001
Create Date: 2025-07-02

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0002"
down_revision: Union[str, None] = "0001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

NEW_COLUMNS = ("address", "postal_code", "city", "country", "image_url")


def upgrade() -> None:
    for name in NEW_COLUMNS:
        op.add_column("camping_spots", sa.Column(name, sa.String(), nullable=True))


def downgrade() -> None:
    with op.batch_alter_table("camping_spots") as batch_op:
        for name in reversed(NEW_COLUMNS):
            batch_op.drop_column(name)
