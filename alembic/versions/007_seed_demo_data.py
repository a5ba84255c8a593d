"""007: seed demo data

Revision ID: 007
Revises: 006
Create Date: 2026-09-14
"""

from typing import Sequence, Union

from alembic import op

revision: str = "007"
down_revision: Union[str, None] = "006"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Demo players
    op.execute("""
        INSERT INTO users (id, username, prediction_coins, fantasy_coins) VALUES
            ('USR-DEMO-ALICE', 'alice', 1000, 1000),
            ('USR-DEMO-BOB', 'bob', 1000, 1000),
            ('USR-DEMO-CAROL', 'carol', 1000, 1000);
    """)

    # Sample contracts, each opened at 500/500
    op.execute("""
        INSERT INTO contracts (id, title, description, category, creator_id, closing_date) VALUES
            ('CTR-RAIN-FRIDAY',
             'Will it rain in Seattle this Friday?',
             'Resolves YES if measurable precipitation is recorded at SEA on Friday.',
             'weather', 'USR-DEMO-ALICE', '2026-12-31T23:59:59Z'),
            ('CTR-HOME-TEAM-WIN',
             'Will the home team win the season opener?',
             'Resolves YES if the home team wins the first regular-season game.',
             'sports', 'USR-DEMO-BOB', '2026-12-31T23:59:59Z'),
            ('CTR-PHONE-LAUNCH',
             'Will a new flagship phone launch before December?',
             'Resolves YES on an official launch announcement before December 1st.',
             'technology', 'USR-DEMO-CAROL', '2026-11-30T23:59:59Z');
    """)
    op.execute("""
        INSERT INTO contract_price_history (contract_id, yes_probability, yes_pool, no_pool)
        SELECT id, current_yes_probability, yes_pool, no_pool FROM contracts
        WHERE id IN ('CTR-RAIN-FRIDAY', 'CTR-HOME-TEAM-WIN', 'CTR-PHONE-LAUNCH');
    """)


def downgrade() -> None:
    ids = "('CTR-RAIN-FRIDAY', 'CTR-HOME-TEAM-WIN', 'CTR-PHONE-LAUNCH')"
    op.execute(f"DELETE FROM contract_price_history WHERE contract_id IN {ids};")
    op.execute(f"DELETE FROM contracts WHERE id IN {ids};")
    op.execute("DELETE FROM users WHERE id IN ('USR-DEMO-ALICE', 'USR-DEMO-BOB', 'USR-DEMO-CAROL');")
