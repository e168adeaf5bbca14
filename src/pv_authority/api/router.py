"""pv_authority REST endpoints.

POST /authority/initialize - caller becomes the single admin (once)
GET  /authority - current admin identity
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.pv_authority.application.service import AuthorityService
from src.pv_common.database import get_db_session
from src.pv_common.response import ApiResponse, success_response
from src.pv_gateway.auth.dependencies import get_caller_id

router = APIRouter(prefix="/authority", tags=["authority"])

_service = AuthorityService()


@router.post("/initialize")
async def initialize(
    request: Request,
    caller_id: Annotated[str, Depends(get_caller_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.initialize(db, caller_id)
    return success_response(result.model_dump(), request)


@router.get("")
async def get_authority(
    request: Request,
    caller_id: Annotated[str, Depends(get_caller_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.get_authority(db)
    return success_response(result.model_dump(), request)
