"""pv_settlement REST endpoints.

POST /markets/{market_id}/claim - reveal secret + side, collect payout
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.pv_common.amounts import U64_MAX
from src.pv_common.database import get_db_session
from src.pv_common.response import ApiResponse, success_response
from src.pv_gateway.auth.dependencies import get_caller_id
from src.pv_settlement.application.schemas import ClaimRequest
from src.pv_settlement.application.service import SettlementService

router = APIRouter(prefix="/markets", tags=["settlement"])

_service = SettlementService()


@router.post("/{market_id}/claim")
async def claim_winnings(
    body: ClaimRequest,
    request: Request,
    caller_id: Annotated[str, Depends(get_caller_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    market_id: int = Path(..., ge=0, le=U64_MAX),
) -> ApiResponse:
    result = await _service.claim_winnings(
        db, caller_id, market_id, body.secret_bytes, body.side
    )
    return success_response(result.model_dump(), request)
