"""ContractApplicationService — contract creation and read models.

Creation writes the contract row and its first price-history point in one
transaction. Reads run without an explicit transaction.
Bet placement and resolution mutate contracts through BettingEngine, not here.
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.pc_account.domain.repository import UserRepositoryProtocol
from src.pc_account.infrastructure.persistence import UserRepository
from src.pc_common.errors import (
    ContractNotFoundError,
    ContractTitleExistsError,
    UserNotFoundError,
)
from src.pc_contract.application.schemas import (
    ContractDetail,
    ContractListResponse,
    CreateContractRequest,
    PriceHistoryItem,
    PriceHistoryResponse,
)
from src.pc_contract.domain.ledger import ContractLedger
from src.pc_contract.domain.repository import ContractRepositoryProtocol
from src.pc_contract.infrastructure.persistence import ContractRepository

logger = logging.getLogger(__name__)

_TITLE_UNIQUE_CONSTRAINT = "uq_contracts_title"


def _is_title_conflict(exc: IntegrityError) -> bool:
    return _TITLE_UNIQUE_CONSTRAINT in str(exc.orig)


class ContractApplicationService:
    def __init__(
        self,
        repo: ContractRepositoryProtocol | None = None,
        user_repo: UserRepositoryProtocol | None = None,
    ) -> None:
        self._repo: ContractRepositoryProtocol = repo or ContractRepository()
        self._users: UserRepositoryProtocol = user_repo or UserRepository()

    async def create_contract(
        self, db: AsyncSession, req: CreateContractRequest
    ) -> ContractDetail:
        # Check title uniqueness (DB UNIQUE constraint is the final guard)
        if await self._repo.get_contract_by_title(db, req.title) is not None:
            raise ContractTitleExistsError(req.title)
        if req.creator_id is not None and await self._users.get_user(db, req.creator_id) is None:
            raise UserNotFoundError(req.creator_id)

        liquidity = req.initial_liquidity or settings.DEFAULT_LIQUIDITY
        ledger, first_point = ContractLedger.open_new(
            title=req.title,
            description=req.description,
            category=req.category.value,
            creator_id=req.creator_id,
            closing_date=req.closing_date,
            liquidity=liquidity,
        )
        try:
            await self._repo.insert_contract(db, ledger.contract)
            await self._repo.append_price_point(db, first_point)
            await db.commit()
        except IntegrityError as exc:
            await db.rollback()
            if _is_title_conflict(exc):
                raise ContractTitleExistsError(req.title) from None
            raise
        except Exception:
            await db.rollback()
            raise

        logger.info(
            "Contract created: id=%s title=%r pools=%.2f/%.2f",
            ledger.contract.id,
            ledger.contract.title,
            ledger.contract.yes_pool,
            ledger.contract.no_pool,
        )
        return ContractDetail.from_domain(ledger.contract)

    async def get_contract(self, db: AsyncSession, contract_id: str) -> ContractDetail:
        contract = await self._repo.get_contract(db, contract_id)
        if contract is None:
            raise ContractNotFoundError(contract_id)
        return ContractDetail.from_domain(contract)

    async def list_contracts(
        self,
        db: AsyncSession,
        status: str | None,
        category: str | None,
        limit: int,
    ) -> ContractListResponse:
        contracts = await self._repo.list_contracts(db, status, category, limit)
        items = [ContractDetail.from_domain(c) for c in contracts]
        return ContractListResponse(items=items, count=len(items))

    async def get_price_history(
        self, db: AsyncSession, contract_id: str
    ) -> PriceHistoryResponse:
        if await self._repo.get_contract(db, contract_id) is None:
            raise ContractNotFoundError(contract_id)
        points = await self._repo.list_price_history(db, contract_id)
        return PriceHistoryResponse(
            contract_id=contract_id,
            points=[PriceHistoryItem.from_domain(p) for p in points],
        )
