"""Repository Protocol for user rankings."""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.pc_ranking.domain.models import LeaderboardEntry, UserRanking


class RankingRepositoryProtocol(Protocol):
    async def get_ranking(self, db: AsyncSession, user_id: str) -> UserRanking | None: ...

    async def get_ranking_for_update(
        self, db: AsyncSession, user_id: str
    ) -> UserRanking | None: ...

    async def upsert_ranking(self, db: AsyncSession, ranking: UserRanking) -> None: ...

    async def list_rankings(self, db: AsyncSession) -> list[UserRanking]: ...

    async def update_ranks(self, db: AsyncSession, rankings: list[UserRanking]) -> None: ...

    async def list_leaderboard(
        self, db: AsyncSession, limit: int, tier: str | None
    ) -> list[LeaderboardEntry]: ...
