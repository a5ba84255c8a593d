"""Domain models for pc_contract — pure dataclasses, no business logic."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Contract:
    id: str
    title: str
    description: str | None
    category: str
    creator_id: str | None
    status: str                      # ContractStatus value
    resolution: str | None           # Side value once closed
    yes_pool: float
    no_pool: float
    liquidity_pool: float            # yes_pool + no_pool at creation
    current_yes_probability: float   # cached, kept equal to yes/(yes+no)
    closing_date: datetime | None    # advisory only
    resolved_at: datetime | None
    created_at: datetime
    updated_at: datetime


@dataclass
class PriceHistoryPoint:
    """Append-only pool snapshot; id is None until persisted."""

    contract_id: str
    yes_probability: float
    yes_pool: float
    no_pool: float
    timestamp: datetime
    id: int | None = None


@dataclass(frozen=True)
class Quote:
    """Result of pricing one order against the current pools."""

    side: str
    amount: float
    shares: float
    price: float
    new_yes_pool: float
    new_no_pool: float
    new_probability: float


@dataclass(frozen=True)
class MarketState:
    yes_pool: float
    no_pool: float
    total_pool: float
    probability: float
    yes_price: float
    no_price: float
