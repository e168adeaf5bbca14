"""pv_betting REST endpoints.

POST /markets/{market_id}/bets - place the caller's single bet
GET  /markets/{market_id}/position - the caller's own position
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.pv_betting.application.schemas import PlaceBetRequest
from src.pv_betting.application.service import BettingService
from src.pv_common.amounts import U64_MAX
from src.pv_common.database import get_db_session
from src.pv_common.response import ApiResponse, success_response
from src.pv_gateway.auth.dependencies import get_caller_id
from src.pv_settlement.domain.commitment import Commitment

router = APIRouter(prefix="/markets", tags=["bets"])

_service = BettingService()


@router.post("/{market_id}/bets")
async def place_bet(
    body: PlaceBetRequest,
    request: Request,
    caller_id: Annotated[str, Depends(get_caller_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    market_id: int = Path(..., ge=0, le=U64_MAX),
) -> ApiResponse:
    result = await _service.place_bet(
        db, caller_id, market_id, Commitment.from_hex(body.commitment), body.amount
    )
    return success_response(result.model_dump(), request)


@router.get("/{market_id}/position")
async def get_position(
    request: Request,
    caller_id: Annotated[str, Depends(get_caller_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    market_id: int = Path(..., ge=0, le=U64_MAX),
) -> ApiResponse:
    result = await _service.get_position(db, market_id, caller_id)
    return success_response(result.model_dump(), request)
