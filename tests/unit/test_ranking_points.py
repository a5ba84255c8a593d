"""Unit tests for the ranking points state machine."""

import pytest

from src.pc_common.enums import BetResult, Tier
from src.pc_ranking.domain.models import BetOutcome
from src.pc_ranking.domain.points import (
    apply_bet_outcome,
    calculate_bet_points,
    new_ranking,
    next_band,
    streak_bonus,
    tier_for_points,
)
from tests.unit.fakes import make_ranking


def _outcome(result: BetResult, amount: float = 50, odds: float = 2.0) -> BetOutcome:
    return BetOutcome(
        user_id="user-1",
        result=result,
        amount=amount,
        odds=odds,
        is_underdog=odds > 2.0,
        is_high_confidence=amount > 100,
    )


class TestCalculateBetPoints:
    def test_loss_is_fixed_penalty(self) -> None:
        assert calculate_bet_points("loss", 5000, 10.0, True, True) == -5

    def test_plain_win(self) -> None:
        assert calculate_bet_points("win", 50, 2.0, False, False) == 20

    def test_underdog_and_high_confidence_compose(self) -> None:
        # 10 * 3 odds * 3 underdog * 2 high confidence
        assert calculate_bet_points("win", 150, 3.0, True, True) == 180

    def test_odds_from_one_third_price(self) -> None:
        assert calculate_bet_points("win", 150, 1 / (1 / 3), True, True) == 180

    def test_rounds_half_up(self) -> None:
        assert calculate_bet_points("win", 10, 1.25, False, False) == 13

    def test_rounds_down_below_half(self) -> None:
        assert calculate_bet_points("win", 10, 1.24, False, False) == 12


class TestStreakBonus:
    @pytest.mark.parametrize(
        ("streak", "bonus"), [(-1, 0), (0, 0), (1, 5), (3, 15), (10, 50), (11, 50), (40, 50)]
    )
    def test_bonus(self, streak: int, bonus: int) -> None:
        assert streak_bonus(streak) == bonus


class TestTierForPoints:
    @pytest.mark.parametrize(
        ("points", "tier"),
        [
            (-50, Tier.ROOKIE),
            (0, Tier.ROOKIE),
            (100, Tier.ROOKIE),
            (101, Tier.AMATEUR),
            (500, Tier.AMATEUR),
            (501, Tier.SEMI_PRO),
            (1500, Tier.SEMI_PRO),
            (1501, Tier.PROFESSIONAL),
            (5000, Tier.PROFESSIONAL),
            (5001, Tier.EXPERT),
            (15000, Tier.EXPERT),
            (15001, Tier.MASTER),
            (50000, Tier.MASTER),
            (50001, Tier.LEGEND),
            (10**9, Tier.LEGEND),
        ],
    )
    def test_bands(self, points: int, tier: Tier) -> None:
        assert tier_for_points(points) == tier

    def test_next_band(self) -> None:
        assert next_band("Rookie").min_points == 101  # type: ignore[union-attr]
        assert next_band("Legend") is None


class TestApplyBetOutcome:
    def test_first_win_from_new_ranking(self) -> None:
        updated, award = apply_bet_outcome(new_ranking("user-1"), _outcome(BetResult.WIN))
        assert award.bet_points == 20
        assert award.streak_bonus == 5
        assert updated.rank_points == 25
        assert updated.win_streak == 1
        assert updated.best_streak == 1
        assert updated.loss_streak == 0
        assert updated.tier == "Rookie"

    def test_streak_bonus_uses_new_streak(self) -> None:
        start = make_ranking(points=0, win_streak=9, best_streak=9)
        updated, award = apply_bet_outcome(start, _outcome(BetResult.WIN))
        assert updated.win_streak == 10
        assert award.streak_bonus == 50
        assert updated.best_streak == 10

    def test_loss_resets_win_streak_keeps_best(self) -> None:
        start = make_ranking(points=30, win_streak=4, best_streak=6, loss_streak=0)
        updated, award = apply_bet_outcome(start, _outcome(BetResult.LOSS))
        assert award.total == -5
        assert updated.rank_points == 25
        assert updated.win_streak == 0
        assert updated.loss_streak == 1
        assert updated.best_streak == 6

    def test_win_resets_loss_streak(self) -> None:
        start = make_ranking(loss_streak=3)
        updated, _ = apply_bet_outcome(start, _outcome(BetResult.WIN))
        assert updated.loss_streak == 0

    def test_points_can_go_negative(self) -> None:
        updated, _ = apply_bet_outcome(make_ranking(points=2), _outcome(BetResult.LOSS))
        assert updated.rank_points == -3
        assert updated.tier == "Rookie"

    def test_crossing_into_next_tier(self) -> None:
        start = make_ranking(points=90)
        updated, _ = apply_bet_outcome(start, _outcome(BetResult.WIN, amount=150, odds=4.0))
        # 10*4*3*2 = 240 + 5 bonus
        assert updated.rank_points == 335
        assert updated.tier == "Amateur"

    def test_input_not_mutated(self) -> None:
        start = make_ranking(points=10, win_streak=1, best_streak=1)
        apply_bet_outcome(start, _outcome(BetResult.WIN))
        assert start.rank_points == 10
        assert start.win_streak == 1


class TestBetOutcomeFromSettledBet:
    def test_even_price_is_not_underdog(self) -> None:
        o = BetOutcome.from_settled_bet("u", amount=100, purchase_price=0.5, payout=200)
        assert o.result == BetResult.WIN
        assert o.odds == 2.0
        assert not o.is_underdog
        assert not o.is_high_confidence

    def test_cheap_side_is_underdog(self) -> None:
        o = BetOutcome.from_settled_bet("u", amount=101, purchase_price=0.25, payout=404)
        assert o.odds == 4.0
        assert o.is_underdog
        assert o.is_high_confidence

    def test_zero_payout_is_loss(self) -> None:
        o = BetOutcome.from_settled_bet("u", amount=10, purchase_price=0.5, payout=0)
        assert o.result == BetResult.LOSS

    def test_non_positive_price_defaults_odds(self) -> None:
        o = BetOutcome.from_settled_bet("u", amount=10, purchase_price=0, payout=0)
        assert o.odds == 1.0
