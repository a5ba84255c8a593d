"""Domain models for pc_betting: plain dataclasses."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Bet:
    id: str
    user_id: str
    contract_id: str
    position: str              # Side value
    amount: float              # coins debited
    shares: float              # amount / purchase_price
    purchase_price: float      # side probability at purchase, in (0, 1]
    potential_payout: float    # advisory estimate from post-trade pools
    payout_amount: float       # 0 until resolution
    settled_at: datetime | None
    created_at: datetime


@dataclass
class BetView:
    """A bet joined with the contract it belongs to."""

    bet: Bet
    contract_title: str
    contract_status: str
    contract_resolution: str | None
    yes_pool: float
    no_pool: float


@dataclass
class UserStatistics:
    total_bets: int
    resolved_bets: int
    winning_bets: int
    losing_bets: int
    pending_bets: int
    total_volume: float
    total_payouts: float
    total_profit: float
    win_rate: float            # winning / resolved, 0.0 with no resolved bets


@dataclass(frozen=True)
class Placement:
    """Outcome of one accepted bet."""

    bet: Bet
    new_probability: float
    balance_after: float
