"""RankingApplicationService — points updates, rank recompute, leaderboard.

apply_outcome runs inside the caller's transaction (one SAVEPOINT per bet
during resolution). recompute_ranks owns its own commit and is serialized
in-process by a module-level lock; concurrent recomputes in other processes
are last-writer-wins on global_rank/tier_rank.
"""

import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.pc_account.domain.repository import UserRepositoryProtocol
from src.pc_account.infrastructure.persistence import UserRepository
from src.pc_common.errors import RankingNotFoundError, UserNotFoundError
from src.pc_ranking.application.schemas import LeaderboardResponse, RankingDetail
from src.pc_ranking.domain import points
from src.pc_ranking.domain.leaderboard import recompute_ranks
from src.pc_ranking.domain.models import BetOutcome, PointsAward
from src.pc_ranking.domain.repository import RankingRepositoryProtocol
from src.pc_ranking.infrastructure.cache import LeaderboardCache
from src.pc_ranking.infrastructure.persistence import RankingRepository

logger = logging.getLogger(__name__)

_recompute_lock = asyncio.Lock()


class RankingApplicationService:
    def __init__(
        self,
        repo: RankingRepositoryProtocol | None = None,
        cache: LeaderboardCache | None = None,
        user_repo: UserRepositoryProtocol | None = None,
    ) -> None:
        self._repo: RankingRepositoryProtocol = repo or RankingRepository()
        self._cache = cache or LeaderboardCache()
        self._users: UserRepositoryProtocol = user_repo or UserRepository()

    async def apply_outcome(self, db: AsyncSession, outcome: BetOutcome) -> PointsAward:
        current = await self._repo.get_ranking_for_update(db, outcome.user_id)
        if current is None:
            current = points.new_ranking(outcome.user_id)
        updated, award = points.apply_bet_outcome(current, outcome)
        await self._repo.upsert_ranking(db, updated)
        logger.debug(
            "Ranking updated: user=%s %s %+d (bonus %d) -> %d %s",
            outcome.user_id,
            outcome.result.value,
            award.bet_points,
            award.streak_bonus,
            updated.rank_points,
            updated.tier,
        )
        return award

    async def recompute_ranks(self, db: AsyncSession) -> int:
        """Reassign global and tier ranks for every row, then drop cached pages."""
        async with _recompute_lock:
            try:
                ranked = recompute_ranks(await self._repo.list_rankings(db))
                await self._repo.update_ranks(db, ranked)
                await db.commit()
            except Exception:
                await db.rollback()
                raise
        await self._cache.invalidate()
        logger.info("Ranks recomputed for %d users", len(ranked))
        return len(ranked)

    async def get_leaderboard(
        self, db: AsyncSession, limit: int, tier: str | None
    ) -> LeaderboardResponse:
        cached = await self._cache.get(limit, tier)
        if cached is not None:
            return LeaderboardResponse.model_validate_json(cached)

        entries = await self._repo.list_leaderboard(db, limit, tier)
        items = [RankingDetail.from_domain(e.ranking, e.username) for e in entries]
        resp = LeaderboardResponse(tier=tier, limit=limit, items=items, count=len(items))
        await self._cache.set(limit, tier, resp.model_dump_json())
        return resp

    async def get_user_ranking(self, db: AsyncSession, user_id: str) -> RankingDetail:
        user = await self._users.get_user(db, user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        ranking = await self._repo.get_ranking(db, user_id)
        if ranking is None:
            raise RankingNotFoundError(user_id)
        return RankingDetail.from_domain(ranking, user.username)
