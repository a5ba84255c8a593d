"""AccountApplicationService — user registration and balance reads.

Balance mutations (debit on bet placement, credit on resolution) are not
exposed here; BettingEngine and ResolutionService call the repository
directly inside their own transactions.
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.pc_account.application.schemas import (
    BalanceResponse,
    CreateUserRequest,
    UserDetail,
    UserListResponse,
)
from src.pc_account.domain.repository import UserRepositoryProtocol
from src.pc_account.infrastructure.persistence import UserRepository
from src.pc_common.errors import UserNotFoundError, UsernameExistsError
from src.pc_common.id_generator import generate_id

logger = logging.getLogger(__name__)


class AccountApplicationService:
    def __init__(self, repo: UserRepositoryProtocol | None = None) -> None:
        self._repo: UserRepositoryProtocol = repo or UserRepository()

    async def create_user(self, db: AsyncSession, req: CreateUserRequest) -> UserDetail:
        if await self._repo.get_user_by_username(db, req.username) is not None:
            raise UsernameExistsError(req.username)
        try:
            user = await self._repo.create_user(
                db,
                user_id=generate_id(),
                username=req.username,
                prediction_coins=settings.STARTING_PREDICTION_COINS,
                fantasy_coins=settings.STARTING_FANTASY_COINS,
            )
            await db.commit()
        except IntegrityError:
            await db.rollback()
            raise UsernameExistsError(req.username) from None
        except Exception:
            await db.rollback()
            raise
        logger.info("User created: id=%s username=%s", user.id, user.username)
        return UserDetail.from_domain(user)

    async def get_user(self, db: AsyncSession, user_id: str) -> UserDetail:
        user = await self._repo.get_user(db, user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return UserDetail.from_domain(user)

    async def list_users(self, db: AsyncSession, limit: int) -> UserListResponse:
        users = await self._repo.list_users(db, limit)
        items = [UserDetail.from_domain(u) for u in users]
        return UserListResponse(items=items, count=len(items))

    async def get_balance(self, db: AsyncSession, user_id: str) -> BalanceResponse:
        user = await self._repo.get_user(db, user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return BalanceResponse(
            user_id=user.id,
            prediction_coins=user.prediction_coins,
            fantasy_coins=user.fantasy_coins,
        )
