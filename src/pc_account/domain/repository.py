"""Repository Protocol — dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.pc_account.domain.models import User


class UserRepositoryProtocol(Protocol):
    async def create_user(
        self,
        db: AsyncSession,
        user_id: str,
        username: str,
        prediction_coins: float,
        fantasy_coins: float,
    ) -> User: ...

    async def get_user(self, db: AsyncSession, user_id: str) -> User | None: ...

    async def get_user_by_username(
        self, db: AsyncSession, username: str
    ) -> User | None: ...

    async def list_users(self, db: AsyncSession, limit: int) -> list[User]: ...

    async def debit_prediction_coins(
        self, db: AsyncSession, user_id: str, amount: float
    ) -> User | None: ...

    async def credit_prediction_coins(
        self, db: AsyncSession, user_id: str, amount: float
    ) -> User | None: ...
