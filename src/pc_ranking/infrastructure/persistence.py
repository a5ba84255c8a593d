"""RankingRepository — concrete implementation of RankingRepositoryProtocol.

Rows are created lazily on a user's first resolved bet. Points and streaks
are written per bet; global_rank and tier_rank only by the recompute pass.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.pc_ranking.domain.models import LeaderboardEntry, UserRanking

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_RANKING_COLUMNS = """
    r.user_id, r.tier, r.rank_points, r.global_rank, r.tier_rank,
    r.win_streak, r.best_streak, r.loss_streak, r.updated_at
"""

_GET_RANKING_SQL = text(f"SELECT {_RANKING_COLUMNS} FROM user_rankings r WHERE r.user_id = :user_id")

_GET_RANKING_FOR_UPDATE_SQL = text(
    f"SELECT {_RANKING_COLUMNS} FROM user_rankings r WHERE r.user_id = :user_id FOR UPDATE"
)

_UPSERT_RANKING_SQL = text("""
    INSERT INTO user_rankings
        (user_id, tier, rank_points, global_rank, tier_rank,
         win_streak, best_streak, loss_streak)
    VALUES
        (:user_id, :tier, :rank_points, :global_rank, :tier_rank,
         :win_streak, :best_streak, :loss_streak)
    ON CONFLICT (user_id) DO UPDATE
    SET tier = EXCLUDED.tier,
        rank_points = EXCLUDED.rank_points,
        win_streak = EXCLUDED.win_streak,
        best_streak = EXCLUDED.best_streak,
        loss_streak = EXCLUDED.loss_streak,
        updated_at = NOW()
""")

_LIST_RANKINGS_SQL = text(f"SELECT {_RANKING_COLUMNS} FROM user_rankings r")

_UPDATE_RANKS_SQL = text("""
    UPDATE user_rankings
    SET global_rank = :global_rank,
        tier_rank = :tier_rank
    WHERE user_id = :user_id
""")

_LIST_LEADERBOARD_SQL = text(f"""
    SELECT {_RANKING_COLUMNS}, u.username
    FROM user_rankings r
    JOIN users u ON u.id = r.user_id
    WHERE (CAST(:tier AS TEXT) IS NULL OR r.tier = CAST(:tier AS TEXT))
    ORDER BY r.rank_points DESC, r.user_id ASC
    LIMIT :limit
""")

# ---------------------------------------------------------------------------
# Row mappers
# ---------------------------------------------------------------------------

def _row_to_ranking(row: object) -> UserRanking:
    return UserRanking(
        user_id=row.user_id,  # type: ignore[attr-defined]
        tier=row.tier,  # type: ignore[attr-defined]
        rank_points=row.rank_points,  # type: ignore[attr-defined]
        global_rank=row.global_rank,  # type: ignore[attr-defined]
        tier_rank=row.tier_rank,  # type: ignore[attr-defined]
        win_streak=row.win_streak,  # type: ignore[attr-defined]
        best_streak=row.best_streak,  # type: ignore[attr-defined]
        loss_streak=row.loss_streak,  # type: ignore[attr-defined]
        updated_at=row.updated_at,  # type: ignore[attr-defined]
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------

class RankingRepository:
    """Concrete repository. Transactions are owned by the caller."""

    async def get_ranking(self, db: AsyncSession, user_id: str) -> UserRanking | None:
        row = (await db.execute(_GET_RANKING_SQL, {"user_id": user_id})).fetchone()
        return _row_to_ranking(row) if row else None

    async def get_ranking_for_update(
        self, db: AsyncSession, user_id: str
    ) -> UserRanking | None:
        row = (await db.execute(_GET_RANKING_FOR_UPDATE_SQL, {"user_id": user_id})).fetchone()
        return _row_to_ranking(row) if row else None

    async def upsert_ranking(self, db: AsyncSession, ranking: UserRanking) -> None:
        await db.execute(
            _UPSERT_RANKING_SQL,
            {
                "user_id": ranking.user_id,
                "tier": ranking.tier,
                "rank_points": ranking.rank_points,
                "global_rank": ranking.global_rank,
                "tier_rank": ranking.tier_rank,
                "win_streak": ranking.win_streak,
                "best_streak": ranking.best_streak,
                "loss_streak": ranking.loss_streak,
            },
        )

    async def list_rankings(self, db: AsyncSession) -> list[UserRanking]:
        rows = (await db.execute(_LIST_RANKINGS_SQL)).fetchall()
        return [_row_to_ranking(r) for r in rows]

    async def update_ranks(self, db: AsyncSession, rankings: list[UserRanking]) -> None:
        if not rankings:
            return
        await db.execute(
            _UPDATE_RANKS_SQL,
            [
                {"user_id": r.user_id, "global_rank": r.global_rank, "tier_rank": r.tier_rank}
                for r in rankings
            ],
        )

    async def list_leaderboard(
        self, db: AsyncSession, limit: int, tier: str | None
    ) -> list[LeaderboardEntry]:
        rows = (await db.execute(_LIST_LEADERBOARD_SQL, {"limit": limit, "tier": tier})).fetchall()
        return [
            LeaderboardEntry(ranking=_row_to_ranking(r), username=r.username)  # type: ignore[attr-defined]
            for r in rows
        ]
