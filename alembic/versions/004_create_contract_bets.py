"""004: create contract_bets table

Revision ID: 004
Revises: 003
Create Date: 2026-09-14
"""
from typing import Sequence, Union
from alembic import op

revision: str = "004"
down_revision: Union[str, None] = "003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE contract_bets (
            id                  VARCHAR(32)         PRIMARY KEY,
            user_id             VARCHAR(32)         NOT NULL REFERENCES users (id),
            contract_id         VARCHAR(32)         NOT NULL REFERENCES contracts (id),
            position            VARCHAR(8)          NOT NULL,
            amount              DOUBLE PRECISION    NOT NULL,
            shares              DOUBLE PRECISION    NOT NULL,
            purchase_price      DOUBLE PRECISION    NOT NULL,
            potential_payout    DOUBLE PRECISION    NOT NULL DEFAULT 0,
            payout_amount       DOUBLE PRECISION    NOT NULL DEFAULT 0,
            settled_at          TIMESTAMPTZ,
            created_at          TIMESTAMPTZ         NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_contract_bets_position    CHECK (position IN ('yes', 'no')),
            CONSTRAINT ck_contract_bets_amount      CHECK (amount > 0),
            CONSTRAINT ck_contract_bets_shares      CHECK (shares > 0),
            CONSTRAINT ck_contract_bets_price       CHECK (purchase_price > 0 AND purchase_price <= 1),
            CONSTRAINT ck_contract_bets_payout      CHECK (payout_amount >= 0)
        );
    """)
    op.execute("CREATE INDEX idx_contract_bets_contract ON contract_bets (contract_id, created_at);")
    op.execute("CREATE INDEX idx_contract_bets_user ON contract_bets (user_id, created_at DESC);")
    op.execute("COMMENT ON TABLE contract_bets IS 'Accepted bets; payout written once at resolution';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS contract_bets CASCADE;")
