"""Domain models for pc_ranking — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime

from src.pc_common.enums import BetResult, Tier

UNDERDOG_ODDS = 2.0          # odds strictly above this count as an underdog win
HIGH_CONFIDENCE_AMOUNT = 100  # stake strictly above this counts as high confidence


@dataclass(frozen=True)
class TierBand:
    tier: Tier
    min_points: int
    max_points: int | None   # None = unbounded


TIER_BANDS: tuple[TierBand, ...] = (
    TierBand(Tier.ROOKIE, 0, 100),
    TierBand(Tier.AMATEUR, 101, 500),
    TierBand(Tier.SEMI_PRO, 501, 1500),
    TierBand(Tier.PROFESSIONAL, 1501, 5000),
    TierBand(Tier.EXPERT, 5001, 15000),
    TierBand(Tier.MASTER, 15001, 50000),
    TierBand(Tier.LEGEND, 50001, None),
)


@dataclass
class UserRanking:
    user_id: str
    tier: str
    rank_points: int        # may go negative
    global_rank: int        # 1-based; 0 until first recompute
    tier_rank: int          # 1-based within tier; 0 until first recompute
    win_streak: int
    best_streak: int
    loss_streak: int
    updated_at: datetime | None = None


@dataclass(frozen=True)
class BetOutcome:
    """What a settled bet contributes to its owner's ranking."""

    user_id: str
    result: BetResult
    amount: float
    odds: float
    is_underdog: bool
    is_high_confidence: bool

    @classmethod
    def from_settled_bet(
        cls, user_id: str, amount: float, purchase_price: float, payout: float
    ) -> "BetOutcome":
        odds = 1 / purchase_price if purchase_price > 0 else 1.0
        return cls(
            user_id=user_id,
            result=BetResult.WIN if payout > 0 else BetResult.LOSS,
            amount=amount,
            odds=odds,
            is_underdog=odds > UNDERDOG_ODDS,
            is_high_confidence=amount > HIGH_CONFIDENCE_AMOUNT,
        )


@dataclass(frozen=True)
class PointsAward:
    bet_points: int
    streak_bonus: int

    @property
    def total(self) -> int:
        return self.bet_points + self.streak_bonus


@dataclass
class LeaderboardEntry:
    ranking: UserRanking
    username: str
