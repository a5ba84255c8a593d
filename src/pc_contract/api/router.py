"""pc_contract REST endpoints.

POST /contracts                          — create a contract (500/500 pools)
GET  /contracts                          — list, newest first
GET  /contracts/{contract_id}            — pools, probability, prices, status
GET  /contracts/{contract_id}/price-history — oldest first
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.pc_common.database import get_db_session
from src.pc_common.enums import ContractCategory, ContractStatus
from src.pc_common.response import ApiResponse, success_response
from src.pc_contract.application.schemas import CreateContractRequest
from src.pc_contract.application.service import ContractApplicationService

router = APIRouter(prefix="/contracts", tags=["contracts"])

_service = ContractApplicationService()


@router.post("", status_code=201)
async def create_contract(
    body: CreateContractRequest,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.create_contract(db, body)
    return success_response(result.model_dump(), request)


@router.get("")
async def list_contracts(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    status: ContractStatus | None = Query(None),
    category: ContractCategory | None = Query(None),
    limit: int = Query(50, ge=1, le=200),
) -> ApiResponse:
    result = await _service.list_contracts(
        db,
        status.value if status else None,
        category.value if category else None,
        limit,
    )
    return success_response(result.model_dump(), request)


@router.get("/{contract_id}")
async def get_contract(
    contract_id: str,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.get_contract(db, contract_id)
    return success_response(result.model_dump(), request)


@router.get("/{contract_id}/price-history")
async def get_price_history(
    contract_id: str,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.get_price_history(db, contract_id)
    return success_response(result.model_dump(), request)
