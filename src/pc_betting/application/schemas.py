"""Pydantic schemas for pc_betting API requests and responses."""

from pydantic import BaseModel, Field

from src.pc_betting.domain import statistics
from src.pc_betting.domain.models import Bet, BetView, Placement, UserStatistics
from src.pc_common.datetime_utils import to_iso
from src.pc_common.enums import Side
from src.pc_settlement.domain.payout import potential_payout

# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class PlaceBetRequest(BaseModel):
    user_id: str = Field(..., min_length=1)
    side: Side
    amount: int = Field(..., gt=0, description="Whole coins; bounds from settings")


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class BetItem(BaseModel):
    id: str
    user_id: str
    contract_id: str
    position: str
    amount: float
    shares: float
    purchase_price: float
    potential_payout: float
    payout_amount: float
    settled_at: str | None
    created_at: str

    @classmethod
    def from_domain(cls, b: Bet) -> "BetItem":
        return cls(
            id=b.id,
            user_id=b.user_id,
            contract_id=b.contract_id,
            position=b.position,
            amount=b.amount,
            shares=b.shares,
            purchase_price=b.purchase_price,
            potential_payout=b.potential_payout,
            payout_amount=b.payout_amount,
            settled_at=to_iso(b.settled_at),
            created_at=b.created_at.isoformat(),
        )


class PlaceBetResponse(BaseModel):
    bet_id: str
    contract_id: str
    user_id: str
    side: str
    amount: float
    shares: float
    price: float
    potential_payout: float
    new_probability: float
    balance_after: float

    @classmethod
    def from_placement(cls, p: Placement) -> "PlaceBetResponse":
        return cls(
            bet_id=p.bet.id,
            contract_id=p.bet.contract_id,
            user_id=p.bet.user_id,
            side=p.bet.position,
            amount=p.bet.amount,
            shares=p.bet.shares,
            price=p.bet.purchase_price,
            potential_payout=p.bet.potential_payout,
            new_probability=p.new_probability,
            balance_after=p.balance_after,
        )


class QuoteResponse(BaseModel):
    contract_id: str
    side: str
    amount: float
    shares: float
    price: float
    potential_payout: float
    current_probability: float
    new_probability: float


class BetHistoryItem(BaseModel):
    bet_id: str
    contract_id: str
    contract_title: str
    contract_status: str
    resolution: str | None
    position: str
    amount: float
    shares: float
    purchase_price: float
    payout_amount: float
    outcome: str
    profit_loss: float
    created_at: str

    @classmethod
    def from_view(cls, v: BetView) -> "BetHistoryItem":
        return cls(
            bet_id=v.bet.id,
            contract_id=v.bet.contract_id,
            contract_title=v.contract_title,
            contract_status=v.contract_status,
            resolution=v.contract_resolution,
            position=v.bet.position,
            amount=v.bet.amount,
            shares=v.bet.shares,
            purchase_price=v.bet.purchase_price,
            payout_amount=v.bet.payout_amount,
            outcome=statistics.bet_outcome(v).value,
            profit_loss=statistics.profit_loss(v),
            created_at=v.bet.created_at.isoformat(),
        )


class BetHistoryResponse(BaseModel):
    user_id: str
    items: list[BetHistoryItem]  # newest first
    count: int


class PositionItem(BaseModel):
    bet_id: str
    contract_id: str
    contract_title: str
    position: str
    amount: float
    shares: float
    purchase_price: float
    current_yes_probability: float
    potential_payout: float
    potential_profit: float
    created_at: str

    @classmethod
    def from_view(cls, v: BetView) -> "PositionItem":
        total = v.yes_pool + v.no_pool
        estimate = potential_payout(v.bet.shares, v.yes_pool, v.no_pool, v.bet.position)
        return cls(
            bet_id=v.bet.id,
            contract_id=v.bet.contract_id,
            contract_title=v.contract_title,
            position=v.bet.position,
            amount=v.bet.amount,
            shares=v.bet.shares,
            purchase_price=v.bet.purchase_price,
            current_yes_probability=v.yes_pool / total if total else 0.5,
            potential_payout=estimate,
            potential_profit=estimate - v.bet.amount,
            created_at=v.bet.created_at.isoformat(),
        )


class PositionsResponse(BaseModel):
    user_id: str
    items: list[PositionItem]
    count: int


class StatisticsResponse(BaseModel):
    user_id: str
    total_bets: int
    resolved_bets: int
    winning_bets: int
    losing_bets: int
    pending_bets: int
    total_volume: float
    total_payouts: float
    total_profit: float
    win_rate: float

    @classmethod
    def from_domain(cls, user_id: str, s: UserStatistics) -> "StatisticsResponse":
        return cls(
            user_id=user_id,
            total_bets=s.total_bets,
            resolved_bets=s.resolved_bets,
            winning_bets=s.winning_bets,
            losing_bets=s.losing_bets,
            pending_bets=s.pending_bets,
            total_volume=s.total_volume,
            total_payouts=s.total_payouts,
            total_profit=s.total_profit,
            win_rate=s.win_rate,
        )


class ContractBetsResponse(BaseModel):
    contract_id: str
    user_id: str
    items: list[BetItem]  # newest first
    count: int
