"""make_vote_comment_nullable

Votes may be submitted without a comment.

Revision ID: 8b4e6d2f0a31
Revises: 3f1c2a9d7b10
Create Date: 2026-10-19 11:02:07.540916

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "8b4e6d2f0a31"
down_revision: Union[str, Sequence[str], None] = "3f1c2a9d7b10"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Allow NULL in votes.comment."""
    with op.batch_alter_table("votes") as batch_op:
        batch_op.alter_column("comment", existing_type=sa.Text(), nullable=True)


def downgrade() -> None:
    """Backfill empty comments, then make votes.comment NOT NULL again."""
    op.execute(sa.text("UPDATE votes SET comment = '' WHERE comment IS NULL"))
    with op.batch_alter_table("votes") as batch_op:
        batch_op.alter_column("comment", existing_type=sa.Text(), nullable=False)
