# src/pc_contract/domain/repository.py
"""Repository Protocol — dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.pc_contract.domain.models import Contract, PriceHistoryPoint


class ContractRepositoryProtocol(Protocol):
    async def get_contract(
        self, db: AsyncSession, contract_id: str
    ) -> Contract | None: ...

    async def get_contract_for_update(
        self, db: AsyncSession, contract_id: str
    ) -> Contract | None: ...

    async def get_contract_by_title(
        self, db: AsyncSession, title: str
    ) -> Contract | None: ...

    async def list_contracts(
        self,
        db: AsyncSession,
        status: str | None,
        category: str | None,
        limit: int,
    ) -> list[Contract]: ...

    async def insert_contract(self, db: AsyncSession, contract: Contract) -> None: ...

    async def update_pools(self, db: AsyncSession, contract: Contract) -> bool: ...

    async def close_contract(self, db: AsyncSession, contract: Contract) -> bool: ...

    async def append_price_point(
        self, db: AsyncSession, point: PriceHistoryPoint
    ) -> PriceHistoryPoint: ...

    async def list_price_history(
        self, db: AsyncSession, contract_id: str
    ) -> list[PriceHistoryPoint]: ...
