# src/pv_admin/api/router.py
"""Admin REST API."""
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.pv_admin.application.service import AdminService
from src.pv_common.database import get_db_session
from src.pv_common.response import ApiResponse, success_response
from src.pv_gateway.auth.dependencies import get_caller_id

router = APIRouter(prefix="/admin", tags=["admin"])
_service = AdminService()


@router.get("/invariants")
async def verify_invariants(
    request: Request,
    caller_id: Annotated[str, Depends(get_caller_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.verify_all_invariants(db, caller_id)
    return success_response(result, request)
