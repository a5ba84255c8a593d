"""006: create user_rankings table

Revision ID: 006
Revises: 005
Create Date: 2026-09-14
"""
from typing import Sequence, Union
from alembic import op

revision: str = "006"
down_revision: Union[str, None] = "005"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE user_rankings (
            user_id         VARCHAR(32)     PRIMARY KEY REFERENCES users (id),
            tier            VARCHAR(16)     NOT NULL DEFAULT 'Rookie',
            rank_points     INTEGER         NOT NULL DEFAULT 0,
            global_rank     INTEGER         NOT NULL DEFAULT 0,
            tier_rank       INTEGER         NOT NULL DEFAULT 0,
            win_streak      INTEGER         NOT NULL DEFAULT 0,
            best_streak     INTEGER         NOT NULL DEFAULT 0,
            loss_streak     INTEGER         NOT NULL DEFAULT 0,
            updated_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_user_rankings_tier CHECK (tier IN (
                'Rookie', 'Amateur', 'Semi-Pro', 'Professional',
                'Expert', 'Master', 'Legend'
            )),
            CONSTRAINT ck_user_rankings_streaks CHECK (
                win_streak >= 0 AND loss_streak >= 0 AND best_streak >= win_streak
            )
        );
    """)
    op.execute("CREATE INDEX idx_user_rankings_points ON user_rankings (rank_points DESC, user_id);")
    op.execute("""
        CREATE TRIGGER trg_user_rankings_updated_at
            BEFORE UPDATE ON user_rankings
            FOR EACH ROW EXECUTE FUNCTION fn_touch_updated_at();
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS user_rankings CASCADE;")
