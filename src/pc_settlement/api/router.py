"""Administrative resolution endpoint (no authentication in this service)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.pc_common.database import get_db_session
from src.pc_common.response import ApiResponse, success_response
from src.pc_settlement.application.schemas import ResolveContractRequest
from src.pc_settlement.application.service import ResolutionService

router = APIRouter(prefix="/admin/contracts", tags=["admin"])

_service = ResolutionService()


@router.post("/{contract_id}/resolve")
async def resolve_contract(
    contract_id: str,
    body: ResolveContractRequest,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    data = await _service.resolve(db, contract_id, body.resolution.value)
    return success_response(data.model_dump(), request)
