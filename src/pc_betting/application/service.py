"""BettingApplicationService — bet placement plus per-user bet read models.

Placement validates first, hands the atomic work to the process-wide
BettingEngine and owns the commit. Reads run without an explicit transaction.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from src.pc_account.domain.repository import UserRepositoryProtocol
from src.pc_account.infrastructure.persistence import UserRepository
from src.pc_betting.application.schemas import (
    BetHistoryItem,
    BetHistoryResponse,
    BetItem,
    ContractBetsResponse,
    PlaceBetRequest,
    PlaceBetResponse,
    PositionItem,
    PositionsResponse,
    QuoteResponse,
    StatisticsResponse,
)
from src.pc_betting.domain import statistics
from src.pc_betting.domain.repository import BetRepositoryProtocol
from src.pc_betting.domain.validation import validate_bet
from src.pc_betting.engine.engine import BettingEngine
from src.pc_betting.infrastructure.persistence import BetRepository
from src.pc_common.errors import ContractNotFoundError, UserNotFoundError
from src.pc_contract.domain.ledger import ContractLedger
from src.pc_contract.domain.repository import ContractRepositoryProtocol
from src.pc_contract.infrastructure.persistence import ContractRepository
from src.pc_settlement.domain.payout import potential_payout

_engine: BettingEngine | None = None


def get_betting_engine() -> BettingEngine:
    global _engine  # noqa: PLW0603
    if _engine is None:
        _engine = BettingEngine()
    return _engine


class BettingApplicationService:
    def __init__(
        self,
        engine: BettingEngine | None = None,
        bet_repo: BetRepositoryProtocol | None = None,
        user_repo: UserRepositoryProtocol | None = None,
        contract_repo: ContractRepositoryProtocol | None = None,
    ) -> None:
        self._engine = engine
        self._bets: BetRepositoryProtocol = bet_repo or BetRepository()
        self._users: UserRepositoryProtocol = user_repo or UserRepository()
        self._contracts: ContractRepositoryProtocol = contract_repo or ContractRepository()

    @property
    def engine(self) -> BettingEngine:
        return self._engine or get_betting_engine()

    async def place_bet(
        self, db: AsyncSession, contract_id: str, req: PlaceBetRequest
    ) -> PlaceBetResponse:
        validate_bet(req.side.value, req.amount)
        try:
            placement = await self.engine.place_bet(
                db, req.user_id, contract_id, req.side.value, req.amount
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        return PlaceBetResponse.from_placement(placement)

    async def quote(
        self, db: AsyncSession, contract_id: str, side: str, amount: int
    ) -> QuoteResponse:
        """Price a hypothetical bet against the current pools; nothing is written."""
        validate_bet(side, amount)
        contract = await self._contracts.get_contract(db, contract_id)
        if contract is None:
            raise ContractNotFoundError(contract_id)
        q = ContractLedger(contract).quote(amount, side)
        return QuoteResponse(
            contract_id=contract_id,
            side=q.side,
            amount=q.amount,
            shares=q.shares,
            price=q.price,
            potential_payout=potential_payout(q.shares, q.new_yes_pool, q.new_no_pool, q.side),
            current_probability=contract.current_yes_probability,
            new_probability=q.new_probability,
        )

    async def get_bet_history(self, db: AsyncSession, user_id: str) -> BetHistoryResponse:
        await self._require_user(db, user_id)
        views = await self._bets.list_bets_for_user(db, user_id)
        items = [BetHistoryItem.from_view(v) for v in views]
        return BetHistoryResponse(user_id=user_id, items=items, count=len(items))

    async def get_active_positions(self, db: AsyncSession, user_id: str) -> PositionsResponse:
        await self._require_user(db, user_id)
        views = await self._bets.list_bets_for_user(db, user_id, open_only=True)
        items = [PositionItem.from_view(v) for v in views]
        return PositionsResponse(user_id=user_id, items=items, count=len(items))

    async def get_statistics(self, db: AsyncSession, user_id: str) -> StatisticsResponse:
        await self._require_user(db, user_id)
        views = await self._bets.list_bets_for_user(db, user_id)
        return StatisticsResponse.from_domain(user_id, statistics.summarize(views))

    async def list_user_bets_in_contract(
        self, db: AsyncSession, contract_id: str, user_id: str
    ) -> ContractBetsResponse:
        if await self._contracts.get_contract(db, contract_id) is None:
            raise ContractNotFoundError(contract_id)
        bets = await self._bets.list_user_bets_in_contract(db, user_id, contract_id)
        items = [BetItem.from_domain(b) for b in bets]
        return ContractBetsResponse(
            contract_id=contract_id, user_id=user_id, items=items, count=len(items)
        )

    async def _require_user(self, db: AsyncSession, user_id: str) -> None:
        if await self._users.get_user(db, user_id) is None:
            raise UserNotFoundError(user_id)
