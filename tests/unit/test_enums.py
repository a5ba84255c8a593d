"""Tests for pc_common.enums — values must match DB CHECK constraints."""

from src.pc_common.enums import (
    BetOutcomeStatus,
    BetResult,
    ContractCategory,
    ContractStatus,
    Side,
    Tier,
)


class TestAllEnumsAreStr:
    def test_side_is_str(self) -> None:
        assert isinstance(Side.YES, str)
        assert Side.YES == "yes"
        assert Side("no") is Side.NO

    def test_status_values(self) -> None:
        assert {s.value for s in ContractStatus} == {"open", "closed"}

    def test_result_values(self) -> None:
        assert {r.value for r in BetResult} == {"win", "loss"}
        assert {o.value for o in BetOutcomeStatus} == {"pending", "win", "loss"}


class TestCategories:
    def test_seven_categories(self) -> None:
        assert [c.value for c in ContractCategory] == [
            "general", "sports", "politics", "entertainment",
            "finance", "weather", "technology",
        ]


class TestTiers:
    def test_tier_names_in_band_order(self) -> None:
        assert [t.value for t in Tier] == [
            "Rookie", "Amateur", "Semi-Pro", "Professional", "Expert", "Master", "Legend",
        ]
