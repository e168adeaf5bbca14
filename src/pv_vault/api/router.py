"""pv_vault REST endpoints.

GET /markets/{market_id}/vault - escrow balance of one market
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.pv_common.amounts import U64_MAX
from src.pv_common.database import get_db_session
from src.pv_common.response import ApiResponse, success_response
from src.pv_gateway.auth.dependencies import get_caller_id
from src.pv_vault.application.service import VaultService

router = APIRouter(prefix="/markets", tags=["vault"])

_service = VaultService()


@router.get("/{market_id}/vault")
async def get_vault(
    request: Request,
    caller_id: Annotated[str, Depends(get_caller_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    market_id: int = Path(..., ge=0, le=U64_MAX),
) -> ApiResponse:
    result = await _service.get_vault(db, market_id)
    return success_response(result.model_dump(), request)
