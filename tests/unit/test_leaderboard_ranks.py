"""Unit tests for global/tier rank recompute."""

from src.pc_ranking.domain.leaderboard import recompute_ranks
from tests.unit.fakes import make_ranking


class TestRecomputeRanks:
    def test_global_rank_by_points_desc(self) -> None:
        rows = [
            make_ranking("a", 10),
            make_ranking("b", 300, tier="Amateur"),
            make_ranking("c", 50),
        ]
        ranked = recompute_ranks(rows)
        assert [r.user_id for r in ranked] == ["b", "c", "a"]
        assert [r.global_rank for r in ranked] == [1, 2, 3]

    def test_tier_rank_within_tier(self) -> None:
        rows = [
            make_ranking("a", 10),
            make_ranking("b", 300, tier="Amateur"),
            make_ranking("c", 50),
            make_ranking("d", 120, tier="Amateur"),
        ]
        by_user = {r.user_id: r for r in recompute_ranks(rows)}
        assert by_user["b"].tier_rank == 1
        assert by_user["d"].tier_rank == 2
        assert by_user["c"].tier_rank == 1
        assert by_user["a"].tier_rank == 2

    def test_ties_broken_by_user_id(self) -> None:
        ranked = recompute_ranks([make_ranking("z", 5), make_ranking("m", 5)])
        assert [r.user_id for r in ranked] == ["m", "z"]

    def test_negative_points_rank_last(self) -> None:
        ranked = recompute_ranks([make_ranking("neg", -15), make_ranking("zero", 0)])
        assert ranked[-1].user_id == "neg"

    def test_input_not_mutated(self) -> None:
        rows = [make_ranking("a", 10), make_ranking("b", 20)]
        recompute_ranks(rows)
        assert all(r.global_rank == 0 for r in rows)

    def test_empty(self) -> None:
        assert recompute_ranks([]) == []
