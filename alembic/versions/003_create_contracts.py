"""003: create contracts table

Revision ID: 003
Revises: 002
Create Date: 2026-09-14
"""
from typing import Sequence, Union
from alembic import op

revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE contracts (
            id                          VARCHAR(32)         PRIMARY KEY,
            title                       VARCHAR(200)        NOT NULL,
            description                 VARCHAR(1000),
            category                    VARCHAR(32)         NOT NULL DEFAULT 'general',
            creator_id                  VARCHAR(32)         REFERENCES users (id),
            status                      VARCHAR(16)         NOT NULL DEFAULT 'open',
            resolution                  VARCHAR(8),
            yes_pool                    DOUBLE PRECISION    NOT NULL DEFAULT 500,
            no_pool                     DOUBLE PRECISION    NOT NULL DEFAULT 500,
            liquidity_pool              DOUBLE PRECISION    NOT NULL DEFAULT 1000,
            current_yes_probability     DOUBLE PRECISION    NOT NULL DEFAULT 0.5,
            closing_date                TIMESTAMPTZ,
            resolved_at                 TIMESTAMPTZ,
            created_at                  TIMESTAMPTZ         NOT NULL DEFAULT NOW(),
            updated_at                  TIMESTAMPTZ         NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_contracts_title       UNIQUE (title),
            CONSTRAINT ck_contracts_category    CHECK (category IN (
                'general', 'sports', 'politics', 'entertainment',
                'finance', 'weather', 'technology'
            )),
            CONSTRAINT ck_contracts_status      CHECK (status IN ('open', 'closed')),
            CONSTRAINT ck_contracts_resolution  CHECK (
                (status = 'open' AND resolution IS NULL)
                OR (status = 'closed' AND resolution IN ('yes', 'no'))
            ),
            CONSTRAINT ck_contracts_pools       CHECK (yes_pool >= 0 AND no_pool >= 0),
            CONSTRAINT ck_contracts_probability CHECK (
                current_yes_probability >= 0 AND current_yes_probability <= 1
            )
        );
    """)
    op.execute("CREATE INDEX idx_contracts_status_created ON contracts (status, created_at DESC);")
    op.execute("CREATE INDEX idx_contracts_category ON contracts (category);")
    op.execute("""
        CREATE TRIGGER trg_contracts_updated_at
            BEFORE UPDATE ON contracts
            FOR EACH ROW EXECUTE FUNCTION fn_touch_updated_at();
    """)
    op.execute("COMMENT ON TABLE contracts IS 'Binary yes/no contracts priced by a single-sided pool AMM';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS contracts CASCADE;")
