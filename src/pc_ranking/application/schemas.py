"""Pydantic schemas for pc_ranking API responses."""

from pydantic import BaseModel

from src.pc_ranking.domain import points
from src.pc_ranking.domain.models import UserRanking


class RankingDetail(BaseModel):
    user_id: str
    username: str
    tier: str
    rank_points: int
    global_rank: int
    tier_rank: int
    win_streak: int
    best_streak: int
    loss_streak: int
    tier_min_points: int
    tier_max_points: int | None
    next_tier: str | None
    points_to_next_tier: int | None

    @classmethod
    def from_domain(cls, r: UserRanking, username: str) -> "RankingDetail":
        band = points.band_for_points(r.rank_points)
        upcoming = points.next_band(band.tier)
        return cls(
            user_id=r.user_id,
            username=username,
            tier=r.tier,
            rank_points=r.rank_points,
            global_rank=r.global_rank,
            tier_rank=r.tier_rank,
            win_streak=r.win_streak,
            best_streak=r.best_streak,
            loss_streak=r.loss_streak,
            tier_min_points=band.min_points,
            tier_max_points=band.max_points,
            next_tier=upcoming.tier.value if upcoming else None,
            points_to_next_tier=upcoming.min_points - r.rank_points if upcoming else None,
        )


class LeaderboardResponse(BaseModel):
    tier: str | None
    limit: int
    items: list[RankingDetail]  # rank_points desc
    count: int
