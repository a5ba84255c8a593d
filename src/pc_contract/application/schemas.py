"""Pydantic schemas for pc_contract API requests and responses."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from src.pc_common.datetime_utils import to_iso
from src.pc_common.enums import ContractCategory
from src.pc_contract.domain import pricing
from src.pc_contract.domain.models import Contract, PriceHistoryPoint

# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class CreateContractRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = Field(None, max_length=1000)
    category: ContractCategory = ContractCategory.GENERAL
    creator_id: str | None = None
    closing_date: datetime | None = Field(
        None, description="Advisory only; betting is not cut off automatically"
    )
    initial_liquidity: float | None = Field(
        None, gt=0, description="Defaults to settings.DEFAULT_LIQUIDITY, split 50/50"
    )

    @field_validator("title")
    @classmethod
    def _strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("title must be a non-empty string")
        return v


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class ContractDetail(BaseModel):
    id: str
    title: str
    description: str | None
    category: str
    creator_id: str | None
    status: str
    resolution: str | None
    yes_pool: float
    no_pool: float
    total_pool: float
    liquidity_pool: float
    probability: float
    yes_price: float
    no_price: float
    closing_date: str | None
    resolved_at: str | None
    created_at: str

    @classmethod
    def from_domain(cls, c: Contract) -> "ContractDetail":
        state = pricing.market_state(c.yes_pool, c.no_pool)
        return cls(
            id=c.id,
            title=c.title,
            description=c.description,
            category=c.category,
            creator_id=c.creator_id,
            status=c.status,
            resolution=c.resolution,
            yes_pool=state.yes_pool,
            no_pool=state.no_pool,
            total_pool=state.total_pool,
            liquidity_pool=c.liquidity_pool,
            probability=state.probability,
            yes_price=state.yes_price,
            no_price=state.no_price,
            closing_date=to_iso(c.closing_date),
            resolved_at=to_iso(c.resolved_at),
            created_at=c.created_at.isoformat(),
        )


class ContractListResponse(BaseModel):
    items: list[ContractDetail]
    count: int


class PriceHistoryItem(BaseModel):
    yes_probability: float
    yes_pool: float
    no_pool: float
    timestamp: str

    @classmethod
    def from_domain(cls, p: PriceHistoryPoint) -> "PriceHistoryItem":
        return cls(
            yes_probability=p.yes_probability,
            yes_pool=p.yes_pool,
            no_pool=p.no_pool,
            timestamp=p.timestamp.isoformat(),
        )


class PriceHistoryResponse(BaseModel):
    contract_id: str
    points: list[PriceHistoryItem]  # oldest first
