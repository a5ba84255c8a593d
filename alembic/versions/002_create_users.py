"""002: create users table

Revision ID: 002
Revises: 001
Create Date: 2026-09-14
"""
from typing import Sequence, Union
from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE users (
            id                  VARCHAR(32)         PRIMARY KEY,
            username            VARCHAR(64)         NOT NULL,
            prediction_coins    DOUBLE PRECISION    NOT NULL DEFAULT 1000,
            fantasy_coins       DOUBLE PRECISION    NOT NULL DEFAULT 1000,
            created_at          TIMESTAMPTZ         NOT NULL DEFAULT NOW(),
            updated_at          TIMESTAMPTZ         NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_users_username            UNIQUE (username),
            CONSTRAINT ck_users_username_len        CHECK (LENGTH(username) >= 3),
            CONSTRAINT ck_users_prediction_coins    CHECK (prediction_coins >= 0),
            CONSTRAINT ck_users_fantasy_coins       CHECK (fantasy_coins >= 0)
        );
    """)
    op.execute("""
        CREATE TRIGGER trg_users_updated_at
            BEFORE UPDATE ON users
            FOR EACH ROW EXECUTE FUNCTION fn_touch_updated_at();
    """)
    op.execute("COMMENT ON TABLE users IS 'Players and their coin balances';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS users CASCADE;")
