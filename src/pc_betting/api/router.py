"""pc_betting REST endpoints.

POST /contracts/{contract_id}/bets               — place a bet
GET  /contracts/{contract_id}/bets?user_id=      — a user's bets in one contract
GET  /contracts/{contract_id}/quote?side=&amount= — price preview, no state change
GET  /users/{user_id}/bets                       — history with outcome and P/L
GET  /users/{user_id}/positions                  — bets on open contracts
GET  /users/{user_id}/statistics                 — aggregate figures
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.pc_betting.application.schemas import PlaceBetRequest
from src.pc_betting.application.service import BettingApplicationService
from src.pc_common.database import get_db_session
from src.pc_common.enums import Side
from src.pc_common.response import ApiResponse, success_response

router = APIRouter(prefix="/contracts", tags=["bets"])
user_router = APIRouter(prefix="/users", tags=["bets"])

_service = BettingApplicationService()


@router.post("/{contract_id}/bets", status_code=201)
async def place_bet(
    contract_id: str,
    body: PlaceBetRequest,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    data = await _service.place_bet(db, contract_id, body)
    return success_response(data.model_dump(), request)


@router.get("/{contract_id}/bets")
async def list_user_bets_in_contract(
    contract_id: str,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    user_id: str = Query(..., min_length=1),
) -> ApiResponse:
    data = await _service.list_user_bets_in_contract(db, contract_id, user_id)
    return success_response(data.model_dump(), request)


@router.get("/{contract_id}/quote")
async def quote(
    contract_id: str,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    side: Side = Query(...),
    amount: int = Query(..., gt=0),
) -> ApiResponse:
    data = await _service.quote(db, contract_id, side.value, amount)
    return success_response(data.model_dump(), request)


@user_router.get("/{user_id}/bets")
async def get_bet_history(
    user_id: str,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    data = await _service.get_bet_history(db, user_id)
    return success_response(data.model_dump(), request)


@user_router.get("/{user_id}/positions")
async def get_active_positions(
    user_id: str,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    data = await _service.get_active_positions(db, user_id)
    return success_response(data.model_dump(), request)


@user_router.get("/{user_id}/statistics")
async def get_statistics(
    user_id: str,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    data = await _service.get_statistics(db, user_id)
    return success_response(data.model_dump(), request)
