"""Repository Protocol — dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from datetime import datetime
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.pc_betting.domain.models import Bet, BetView


class BetRepositoryProtocol(Protocol):
    async def insert_bet(self, db: AsyncSession, bet: Bet) -> None: ...

    async def list_bets_for_contract(
        self, db: AsyncSession, contract_id: str
    ) -> list[Bet]: ...

    async def list_bets_for_user(
        self, db: AsyncSession, user_id: str, open_only: bool = False
    ) -> list[BetView]: ...

    async def list_user_bets_in_contract(
        self, db: AsyncSession, user_id: str, contract_id: str
    ) -> list[Bet]: ...

    async def set_payout(
        self, db: AsyncSession, bet_id: str, payout_amount: float, settled_at: datetime
    ) -> bool: ...
