"""BettingEngine — per-contract serialization of pool read-modify-write.

Every mutation of a contract (bet placement and the resolution close step)
runs under that contract's asyncio.Lock and inside a SAVEPOINT that first
loads the contract row FOR UPDATE. The lock serializes callers within this
process; the row lock serializes across processes. Different contracts
proceed in parallel.
"""

import asyncio
import logging
from collections import defaultdict

from sqlalchemy.ext.asyncio import AsyncSession

from src.pc_account.domain.repository import UserRepositoryProtocol
from src.pc_account.infrastructure.persistence import UserRepository
from src.pc_betting.domain.models import Bet, Placement
from src.pc_betting.domain.repository import BetRepositoryProtocol
from src.pc_betting.infrastructure.persistence import BetRepository
from src.pc_common.errors import (
    ContractAlreadyResolvedError,
    ContractNotFoundError,
    ContractNotOpenError,
    InsufficientFundsError,
    UserNotFoundError,
)
from src.pc_common.id_generator import generate_id
from src.pc_contract.domain.ledger import ContractLedger
from src.pc_contract.domain.models import Contract
from src.pc_contract.domain.repository import ContractRepositoryProtocol
from src.pc_contract.infrastructure.persistence import ContractRepository
from src.pc_settlement.domain.payout import potential_payout

logger = logging.getLogger(__name__)


class BettingEngine:
    def __init__(
        self,
        contract_repo: ContractRepositoryProtocol | None = None,
        user_repo: UserRepositoryProtocol | None = None,
        bet_repo: BetRepositoryProtocol | None = None,
    ) -> None:
        self._contracts: ContractRepositoryProtocol = contract_repo or ContractRepository()
        self._users: UserRepositoryProtocol = user_repo or UserRepository()
        self._bets: BetRepositoryProtocol = bet_repo or BetRepository()
        self._contract_locks: dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    def lock_for(self, contract_id: str) -> asyncio.Lock:
        return self._contract_locks[contract_id]

    async def place_bet(
        self,
        db: AsyncSession,
        user_id: str,
        contract_id: str,
        side: str,
        amount: int,
    ) -> Placement:
        """Atomically record a bet, move the pools and debit the user.

        The caller validates inputs beforehand and commits afterwards.
        """
        async with self.lock_for(contract_id):
            async with db.begin_nested():
                return await self._place_bet_inner(db, user_id, contract_id, side, amount)

    async def _place_bet_inner(
        self,
        db: AsyncSession,
        user_id: str,
        contract_id: str,
        side: str,
        amount: int,
    ) -> Placement:
        contract = await self._contracts.get_contract_for_update(db, contract_id)
        if contract is None:
            raise ContractNotFoundError(contract_id)
        ledger = ContractLedger(contract)
        ledger.ensure_open()

        user = await self._users.get_user(db, user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        if user.prediction_coins < amount:
            raise InsufficientFundsError(amount, user.prediction_coins)

        q = ledger.quote(amount, side)
        point = ledger.apply(q)

        bet = Bet(
            id=generate_id(),
            user_id=user_id,
            contract_id=contract_id,
            position=q.side,
            amount=float(amount),
            shares=q.shares,
            purchase_price=q.price,
            potential_payout=potential_payout(q.shares, q.new_yes_pool, q.new_no_pool, q.side),
            payout_amount=0.0,
            settled_at=None,
            created_at=point.timestamp,
        )
        await self._bets.insert_bet(db, bet)

        if not await self._contracts.update_pools(db, contract):
            raise ContractNotOpenError(contract_id)
        await self._contracts.append_price_point(db, point)

        debited = await self._users.debit_prediction_coins(db, user_id, float(amount))
        if debited is None:
            raise InsufficientFundsError(amount, user.prediction_coins)

        logger.info(
            "Bet placed: id=%s contract=%s user=%s %s %d coins -> %.4f shares @ %.4f, p=%.4f",
            bet.id,
            contract_id,
            user_id,
            bet.position,
            amount,
            bet.shares,
            bet.purchase_price,
            q.new_probability,
        )
        return Placement(
            bet=bet,
            new_probability=q.new_probability,
            balance_after=debited.prediction_coins,
        )

    async def close_contract(
        self, db: AsyncSession, contract_id: str, resolution: str
    ) -> Contract:
        """One-way open -> closed transition under the contract lock."""
        async with self.lock_for(contract_id):
            async with db.begin_nested():
                contract = await self._contracts.get_contract_for_update(db, contract_id)
                if contract is None:
                    raise ContractNotFoundError(contract_id)
                ContractLedger(contract).close(resolution)
                if not await self._contracts.close_contract(db, contract):
                    raise ContractAlreadyResolvedError(contract_id, contract.resolution)
                return contract
