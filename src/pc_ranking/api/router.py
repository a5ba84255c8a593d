"""pc_ranking REST endpoints.

GET /rankings/leaderboard?limit=&tier= — rank_points desc, cached briefly
GET /users/{user_id}/ranking          — one user's row and tier progress
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.pc_common.database import get_db_session
from src.pc_common.enums import Tier
from src.pc_common.response import ApiResponse, success_response
from src.pc_ranking.application.service import RankingApplicationService

router = APIRouter(prefix="/rankings", tags=["rankings"])
user_router = APIRouter(prefix="/users", tags=["rankings"])

_service = RankingApplicationService()


@router.get("/leaderboard")
async def get_leaderboard(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    limit: int = Query(10, ge=1, le=100),
    tier: Tier | None = Query(None),
) -> ApiResponse:
    data = await _service.get_leaderboard(db, limit, tier.value if tier else None)
    return success_response(data.model_dump(), request)


@user_router.get("/{user_id}/ranking")
async def get_user_ranking(
    user_id: str,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    data = await _service.get_user_ranking(db, user_id)
    return success_response(data.model_dump(), request)
