"""Global and per-tier rank assignment over every ranking row."""

from dataclasses import replace

from src.pc_ranking.domain.models import UserRanking


def recompute_ranks(rankings: list[UserRanking]) -> list[UserRanking]:
    """Full resort by points; ties broken by user id so the order is total.

    Returns new rows in rank order; the input is left untouched.
    """
    ordered = sorted(rankings, key=lambda r: (-r.rank_points, r.user_id))
    seen_per_tier: dict[str, int] = {}
    result: list[UserRanking] = []
    for position, r in enumerate(ordered, start=1):
        seen_per_tier[r.tier] = seen_per_tier.get(r.tier, 0) + 1
        result.append(replace(r, global_rank=position, tier_rank=seen_per_tier[r.tier]))
    return result
