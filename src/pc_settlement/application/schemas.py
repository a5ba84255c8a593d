"""Pydantic schemas for contract resolution."""

from pydantic import BaseModel

from src.pc_common.enums import Side


class ResolveContractRequest(BaseModel):
    resolution: Side


class ResolutionResponse(BaseModel):
    contract_id: str
    resolution: str
    resolved_at: str | None
    total_payouts: float
    bet_count: int
    winning_bets: int
    failed_bet_ids: list[str]
    ranks_recomputed: bool  # False: global/tier ranks are stale until the next recompute
