"""Unit tests for BettingApplicationService."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from pydantic import ValidationError

from src.pc_betting.application.schemas import PlaceBetRequest
from src.pc_betting.application.service import BettingApplicationService, get_betting_engine
from src.pc_betting.domain.validation import validate_bet
from src.pc_betting.engine.engine import BettingEngine
from src.pc_common.errors import (
    BetValidationError,
    ContractNotFoundError,
    InsufficientFundsError,
    UserNotFoundError,
)
from tests.unit.fakes import (
    FakeSession,
    InMemoryBets,
    InMemoryContracts,
    InMemoryUsers,
    make_contract,
    make_user,
)


def _service(*contracts, users=()):  # type: ignore[no-untyped-def]
    contract_repo = InMemoryContracts(*contracts)
    user_repo = InMemoryUsers(*users)
    bet_repo = InMemoryBets(contract_repo)
    engine = BettingEngine(contract_repo, user_repo, bet_repo)
    svc = BettingApplicationService(
        engine=engine, bet_repo=bet_repo, user_repo=user_repo, contract_repo=contract_repo
    )
    return svc, contract_repo, user_repo, bet_repo


class TestValidateBet:
    @pytest.mark.parametrize("amount", [1, 500, 10_000])
    def test_accepts_bounds(self, amount: int) -> None:
        validate_bet("yes", amount)

    @pytest.mark.parametrize("amount", [0, -1, 10_001])
    def test_rejects_out_of_range(self, amount: int) -> None:
        with pytest.raises(BetValidationError):
            validate_bet("no", amount)

    def test_rejects_fractional_amount(self) -> None:
        with pytest.raises(BetValidationError):
            validate_bet("yes", 10.5)  # type: ignore[arg-type]

    def test_rejects_bool(self) -> None:
        with pytest.raises(BetValidationError):
            validate_bet("yes", True)

    def test_rejects_unknown_side(self) -> None:
        with pytest.raises(BetValidationError):
            validate_bet("YES", 10)


class TestPlaceBetRequest:
    def test_side_enum(self) -> None:
        with pytest.raises(ValidationError):
            PlaceBetRequest(user_id="u", side="maybe", amount=10)

    def test_amount_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            PlaceBetRequest(user_id="u", side="yes", amount=0)


class TestPlaceBet:
    async def test_commits_and_returns_summary(self, db: FakeSession) -> None:
        svc, *_ = _service(make_contract(), users=[make_user()])

        result = await svc.place_bet(
            db, "ctr-1", PlaceBetRequest(user_id="user-1", side="yes", amount=100)
        )

        assert result.shares == pytest.approx(200)
        assert result.price == 0.5
        assert result.new_probability == pytest.approx(600 / 1100)
        assert result.balance_after == 900
        assert result.side == "yes"
        db.commit.assert_awaited_once()

    async def test_over_limit_rejected_before_any_read(self, db: FakeSession) -> None:
        engine = MagicMock()
        svc = BettingApplicationService(engine=engine)
        with pytest.raises(BetValidationError):
            await svc.place_bet(
                db, "ctr-1", PlaceBetRequest(user_id="u", side="no", amount=10_001)
            )
        engine.place_bet.assert_not_called()
        assert db.savepoints == 0

    async def test_failure_rolls_back(self, db: FakeSession) -> None:
        svc, *_ = _service(make_contract(), users=[make_user(coins=5)])
        with pytest.raises(InsufficientFundsError):
            await svc.place_bet(db, "ctr-1", PlaceBetRequest(user_id="user-1", side="yes", amount=10))
        db.rollback.assert_awaited_once()
        db.commit.assert_not_awaited()


class TestQuote:
    async def test_preview_does_not_mutate(self) -> None:
        svc, contracts, _, bets = _service(make_contract())

        q = await svc.quote(MagicMock(), "ctr-1", "no", 100)

        assert q.price == 0.5
        assert q.shares == pytest.approx(200)
        assert q.current_probability == 0.5
        assert q.new_probability == pytest.approx(500 / 1100)
        assert contracts.rows["ctr-1"].no_pool == 500
        assert bets.rows == []

    async def test_unknown_contract(self) -> None:
        svc, *_ = _service()
        with pytest.raises(ContractNotFoundError):
            await svc.quote(MagicMock(), "nope", "yes", 10)


class TestUserReads:
    async def _seeded(self, db: FakeSession):  # type: ignore[no-untyped-def]
        svc, contracts, users, bets = _service(
            make_contract("c1"), make_contract("c2"), users=[make_user()]
        )
        req = PlaceBetRequest(user_id="user-1", side="yes", amount=100)
        await svc.place_bet(db, "c1", req)
        await svc.place_bet(db, "c2", req)
        await svc.engine.close_contract(db, "c1", "yes")
        await bets.set_payout(db, bets.rows[0].id, 200.0, None)
        return svc

    async def test_history_marks_outcomes(self, db: FakeSession) -> None:
        svc = await self._seeded(db)

        history = await svc.get_bet_history(db, "user-1")

        assert history.count == 2
        by_contract = {i.contract_id: i for i in history.items}
        assert by_contract["c1"].outcome == "win"
        assert by_contract["c1"].profit_loss == 100
        assert by_contract["c2"].outcome == "pending"
        assert by_contract["c2"].profit_loss == 0

    async def test_positions_only_open_contracts(self, db: FakeSession) -> None:
        svc = await self._seeded(db)

        positions = await svc.get_active_positions(db, "user-1")

        assert [p.contract_id for p in positions.items] == ["c2"]
        p = positions.items[0]
        assert p.potential_payout == pytest.approx(200 * 1100 / 800)
        assert p.potential_profit == pytest.approx(p.potential_payout - 100)

    async def test_statistics(self, db: FakeSession) -> None:
        svc = await self._seeded(db)

        stats = await svc.get_statistics(db, "user-1")

        assert stats.total_bets == 2
        assert stats.winning_bets == 1
        assert stats.pending_bets == 1
        assert stats.total_volume == 200
        assert stats.win_rate == 1.0

    async def test_bets_in_contract(self, db: FakeSession) -> None:
        svc = await self._seeded(db)
        result = await svc.list_user_bets_in_contract(db, "c2", "user-1")
        assert result.count == 1
        assert result.items[0].position == "yes"

    async def test_unknown_user(self) -> None:
        svc, *_ = _service()
        with pytest.raises(UserNotFoundError):
            await svc.get_statistics(MagicMock(), "ghost")


class TestEngineSingleton:
    def test_same_instance(self) -> None:
        assert get_betting_engine() is get_betting_engine()

    def test_service_defaults_to_singleton(self) -> None:
        assert BettingApplicationService(bet_repo=AsyncMock()).engine is get_betting_engine()
