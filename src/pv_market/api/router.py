"""pv_market REST endpoints.

POST /markets - create (authority only)
GET  /markets - list with cursor pagination
GET  /markets/{market_id} - full detail
POST /markets/{market_id}/resolve - resolve (authority only, after deadline)
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.pv_common.amounts import U64_MAX
from src.pv_common.database import get_db_session
from src.pv_common.enums import MarketStatus
from src.pv_common.response import ApiResponse, success_response
from src.pv_gateway.auth.dependencies import get_caller_id
from src.pv_market.application.schemas import CreateMarketRequest, ResolveRequest
from src.pv_market.application.service import MarketApplicationService

router = APIRouter(prefix="/markets", tags=["markets"])

_service = MarketApplicationService()


@router.post("")
async def create_market(
    body: CreateMarketRequest,
    request: Request,
    caller_id: Annotated[str, Depends(get_caller_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.create_market(
        db, caller_id, body.market_id, body.question, body.deadline
    )
    return success_response(result.model_dump(), request)


@router.get("")
async def list_markets(
    request: Request,
    caller_id: Annotated[str, Depends(get_caller_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    status: MarketStatus | None = Query(None, description="Filter by status; omit for all."),
    limit: int = Query(20, ge=1, le=100),
    cursor: str | None = Query(None),
) -> ApiResponse:
    result = await _service.list_markets(
        db, status.value if status else None, cursor, limit
    )
    return success_response(result.model_dump(), request)


@router.get("/{market_id}")
async def get_market(
    request: Request,
    caller_id: Annotated[str, Depends(get_caller_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    market_id: int = Path(..., ge=0, le=U64_MAX),
) -> ApiResponse:
    result = await _service.get_market(db, market_id)
    return success_response(result.model_dump(), request)


@router.post("/{market_id}/resolve")
async def resolve_market(
    body: ResolveRequest,
    request: Request,
    caller_id: Annotated[str, Depends(get_caller_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    market_id: int = Path(..., ge=0, le=U64_MAX),
) -> ApiResponse:
    result = await _service.resolve_market(db, caller_id, market_id, body.outcome)
    return success_response(result.model_dump(), request)
