"""005: create contract_price_history table

Revision ID: 005
Revises: 004
Create Date: 2026-09-14
"""
from typing import Sequence, Union
from alembic import op

revision: str = "005"
down_revision: Union[str, None] = "004"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE contract_price_history (
            id                  BIGSERIAL           PRIMARY KEY,
            contract_id         VARCHAR(32)         NOT NULL REFERENCES contracts (id),
            yes_probability     DOUBLE PRECISION    NOT NULL,
            yes_pool            DOUBLE PRECISION    NOT NULL,
            no_pool             DOUBLE PRECISION    NOT NULL,
            recorded_at         TIMESTAMPTZ         NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_price_history_probability CHECK (
                yes_probability >= 0 AND yes_probability <= 1
            )
        );
    """)
    op.execute(
        "CREATE INDEX idx_price_history_contract ON contract_price_history (contract_id, recorded_at);"
    )
    op.execute("COMMENT ON TABLE contract_price_history IS 'Append-only pool snapshots, one per accepted bet';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS contract_price_history CASCADE;")
