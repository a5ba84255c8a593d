"""BetRepository — concrete implementation of BetRepositoryProtocol.

Bets are written once at placement; the only later mutation is the payout
written at resolution, guarded by ``settled_at IS NULL`` so a bet is paid
at most once.
"""

from datetime import datetime

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.pc_betting.domain.models import Bet, BetView

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_BET_COLUMNS = """
    b.id, b.user_id, b.contract_id, b.position, b.amount, b.shares,
    b.purchase_price, b.potential_payout, b.payout_amount, b.settled_at,
    b.created_at
"""

_INSERT_BET_SQL = text("""
    INSERT INTO contract_bets
        (id, user_id, contract_id, position, amount, shares,
         purchase_price, potential_payout, payout_amount, created_at)
    VALUES
        (:id, :user_id, :contract_id, :position, :amount, :shares,
         :purchase_price, :potential_payout, :payout_amount, :created_at)
""")

_LIST_BETS_FOR_CONTRACT_SQL = text(f"""
    SELECT {_BET_COLUMNS}
    FROM contract_bets b
    WHERE b.contract_id = :contract_id
    ORDER BY b.created_at ASC, b.id ASC
""")

_LIST_BETS_FOR_USER_SQL = text(f"""
    SELECT {_BET_COLUMNS},
           c.title AS contract_title,
           c.status AS contract_status,
           c.resolution AS contract_resolution,
           c.yes_pool AS contract_yes_pool,
           c.no_pool AS contract_no_pool
    FROM contract_bets b
    JOIN contracts c ON c.id = b.contract_id
    WHERE b.user_id = :user_id
      AND (CAST(:open_only AS BOOLEAN) IS FALSE OR c.status = 'open')
    ORDER BY b.created_at DESC, b.id DESC
""")

_LIST_USER_BETS_IN_CONTRACT_SQL = text(f"""
    SELECT {_BET_COLUMNS}
    FROM contract_bets b
    WHERE b.user_id = :user_id AND b.contract_id = :contract_id
    ORDER BY b.created_at DESC, b.id DESC
""")

_SET_PAYOUT_SQL = text("""
    UPDATE contract_bets
    SET payout_amount = :payout_amount,
        settled_at = :settled_at
    WHERE id = :bet_id AND settled_at IS NULL
    RETURNING id
""")

# ---------------------------------------------------------------------------
# Row mappers
# ---------------------------------------------------------------------------

def _row_to_bet(row: object) -> Bet:
    return Bet(
        id=row.id,  # type: ignore[attr-defined]
        user_id=row.user_id,  # type: ignore[attr-defined]
        contract_id=row.contract_id,  # type: ignore[attr-defined]
        position=row.position,  # type: ignore[attr-defined]
        amount=float(row.amount),  # type: ignore[attr-defined]
        shares=float(row.shares),  # type: ignore[attr-defined]
        purchase_price=float(row.purchase_price),  # type: ignore[attr-defined]
        potential_payout=float(row.potential_payout),  # type: ignore[attr-defined]
        payout_amount=float(row.payout_amount),  # type: ignore[attr-defined]
        settled_at=row.settled_at,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
    )


def _row_to_bet_view(row: object) -> BetView:
    return BetView(
        bet=_row_to_bet(row),
        contract_title=row.contract_title,  # type: ignore[attr-defined]
        contract_status=row.contract_status,  # type: ignore[attr-defined]
        contract_resolution=row.contract_resolution,  # type: ignore[attr-defined]
        yes_pool=float(row.contract_yes_pool),  # type: ignore[attr-defined]
        no_pool=float(row.contract_no_pool),  # type: ignore[attr-defined]
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------

class BetRepository:
    """Concrete repository. Transactions are owned by the caller."""

    async def insert_bet(self, db: AsyncSession, bet: Bet) -> None:
        await db.execute(
            _INSERT_BET_SQL,
            {
                "id": bet.id,
                "user_id": bet.user_id,
                "contract_id": bet.contract_id,
                "position": bet.position,
                "amount": bet.amount,
                "shares": bet.shares,
                "purchase_price": bet.purchase_price,
                "potential_payout": bet.potential_payout,
                "payout_amount": bet.payout_amount,
                "created_at": bet.created_at,
            },
        )

    async def list_bets_for_contract(
        self, db: AsyncSession, contract_id: str
    ) -> list[Bet]:
        rows = (
            await db.execute(_LIST_BETS_FOR_CONTRACT_SQL, {"contract_id": contract_id})
        ).fetchall()
        return [_row_to_bet(r) for r in rows]

    async def list_bets_for_user(
        self, db: AsyncSession, user_id: str, open_only: bool = False
    ) -> list[BetView]:
        rows = (
            await db.execute(
                _LIST_BETS_FOR_USER_SQL, {"user_id": user_id, "open_only": open_only}
            )
        ).fetchall()
        return [_row_to_bet_view(r) for r in rows]

    async def list_user_bets_in_contract(
        self, db: AsyncSession, user_id: str, contract_id: str
    ) -> list[Bet]:
        rows = (
            await db.execute(
                _LIST_USER_BETS_IN_CONTRACT_SQL,
                {"user_id": user_id, "contract_id": contract_id},
            )
        ).fetchall()
        return [_row_to_bet(r) for r in rows]

    async def set_payout(
        self, db: AsyncSession, bet_id: str, payout_amount: float, settled_at: datetime
    ) -> bool:
        """False when the bet was already settled (or does not exist)."""
        row = (
            await db.execute(
                _SET_PAYOUT_SQL,
                {"bet_id": bet_id, "payout_amount": payout_amount, "settled_at": settled_at},
            )
        ).fetchone()
        return row is not None
