"""pc_account REST API — user registration and balances (no authentication)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.pc_account.application.schemas import CreateUserRequest
from src.pc_account.application.service import AccountApplicationService
from src.pc_common.database import get_db_session
from src.pc_common.response import ApiResponse, success_response

router = APIRouter(prefix="/users", tags=["users"])

_service = AccountApplicationService()


@router.post("", status_code=201)
async def create_user(
    body: CreateUserRequest,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    data = await _service.create_user(db, body)
    return success_response(data.model_dump(), request)


@router.get("")
async def list_users(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    limit: int = Query(50, ge=1, le=200),
) -> ApiResponse:
    data = await _service.list_users(db, limit)
    return success_response(data.model_dump(), request)


@router.get("/{user_id}")
async def get_user(
    user_id: str,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    data = await _service.get_user(db, user_id)
    return success_response(data.model_dump(), request)


@router.get("/{user_id}/balance")
async def get_balance(
    user_id: str,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    data = await _service.get_balance(db, user_id)
    return success_response(data.model_dump(), request)
