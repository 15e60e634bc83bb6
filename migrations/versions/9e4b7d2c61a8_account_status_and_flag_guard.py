"""account status, strike suspension source and pending flag guard

Revision ID: 9e4b7d2c61a8
Revises: 5c1e2a9f3b70
Create Date: 2026-10-19 10:04:17.338902

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "9e4b7d2c61a8"
down_revision: Union[str, Sequence[str], None] = "5c1e2a9f3b70"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_PENDING = sa.text("status = 'PENDING'")


def upgrade() -> None:
    """Add account status, mark strike suspensions and guard pending flags."""
    op.add_column(
        "user_account",
        sa.Column("status", sa.String(length=16), nullable=False, server_default="ACTIVE"),
    )
    op.add_column(
        "channel",
        sa.Column(
            "suspended_by_strikes",
            sa.Boolean(),
            nullable=False,
            server_default=sa.false(),
        ),
    )

    # Keep the oldest pending report per reporter and video.
    op.execute(
        "UPDATE flag SET status = 'REJECTED', decision = 'Duplicate report' "
        "WHERE status = 'PENDING' AND id NOT IN ("
        "SELECT MIN(id) FROM flag WHERE status = 'PENDING' GROUP BY reporter_id, video_id)"
    )
    op.create_index(
        "uq_flag_pending_reporter_video",
        "flag",
        ["reporter_id", "video_id"],
        unique=True,
        sqlite_where=_PENDING,
        postgresql_where=_PENDING,
    )


def downgrade() -> None:
    op.drop_index("uq_flag_pending_reporter_video", table_name="flag")
    with op.batch_alter_table("channel") as batch:
        batch.drop_column("suspended_by_strikes")
    with op.batch_alter_table("user_account") as batch:
        batch.drop_column("status")
