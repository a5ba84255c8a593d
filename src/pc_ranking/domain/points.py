"""Ranking points state machine.

A resolved bet moves its owner's ranking row through one transition:

    win  -> +round(10 * odds [x3 underdog] [x2 high confidence])
            + min(new_win_streak * 5, 50)
    loss -> -5, win streak reset

The tier is a pure function of the resulting points. Transitions never
mutate their input; they return a new UserRanking.
"""

import math
from dataclasses import replace

from src.pc_common.datetime_utils import utc_now
from src.pc_common.enums import BetResult, Tier
from src.pc_ranking.domain.models import (
    TIER_BANDS,
    BetOutcome,
    PointsAward,
    TierBand,
    UserRanking,
)

WIN_BASE_POINTS = 10
LOSS_POINTS = -5
UNDERDOG_MULTIPLIER = 3
HIGH_CONFIDENCE_MULTIPLIER = 2
STREAK_BONUS_PER_WIN = 5
STREAK_BONUS_CAP = 50


def _round_half_away(x: float) -> int:
    return int(math.copysign(math.floor(abs(x) + 0.5), x))


def calculate_bet_points(
    result: str,
    amount: float,
    odds: float,
    is_underdog: bool,
    is_high_confidence: bool,
) -> int:
    if result == BetResult.LOSS:
        return LOSS_POINTS
    points = WIN_BASE_POINTS * odds
    if is_underdog:
        points *= UNDERDOG_MULTIPLIER
    if is_high_confidence:
        points *= HIGH_CONFIDENCE_MULTIPLIER
    return _round_half_away(points)


def streak_bonus(win_streak: int) -> int:
    if win_streak <= 0:
        return 0
    return min(win_streak * STREAK_BONUS_PER_WIN, STREAK_BONUS_CAP)


def band_for_points(points: int) -> TierBand:
    for band in TIER_BANDS:
        if band.max_points is None or points <= band.max_points:
            return band if points >= band.min_points else TIER_BANDS[0]
    return TIER_BANDS[-1]


def tier_for_points(points: int) -> Tier:
    """Negative totals fall into the lowest tier."""
    return band_for_points(points).tier


def next_band(tier: str) -> TierBand | None:
    tiers = [b.tier for b in TIER_BANDS]
    idx = tiers.index(Tier(tier))
    return TIER_BANDS[idx + 1] if idx + 1 < len(TIER_BANDS) else None


def new_ranking(user_id: str) -> UserRanking:
    return UserRanking(
        user_id=user_id,
        tier=Tier.ROOKIE.value,
        rank_points=0,
        global_rank=0,
        tier_rank=0,
        win_streak=0,
        best_streak=0,
        loss_streak=0,
    )


def apply_bet_outcome(
    ranking: UserRanking, outcome: BetOutcome
) -> tuple[UserRanking, PointsAward]:
    bet_points = calculate_bet_points(
        outcome.result,
        outcome.amount,
        outcome.odds,
        outcome.is_underdog,
        outcome.is_high_confidence,
    )
    if outcome.result == BetResult.WIN:
        win_streak = ranking.win_streak + 1
        loss_streak = 0
        best_streak = max(ranking.best_streak, win_streak)
        bonus = streak_bonus(win_streak)
    else:
        win_streak = 0
        loss_streak = ranking.loss_streak + 1
        best_streak = ranking.best_streak
        bonus = 0

    award = PointsAward(bet_points=bet_points, streak_bonus=bonus)
    points = ranking.rank_points + award.total
    updated = replace(
        ranking,
        rank_points=points,
        tier=tier_for_points(points).value,
        win_streak=win_streak,
        loss_streak=loss_streak,
        best_streak=best_streak,
        updated_at=utc_now(),
    )
    return updated, award
