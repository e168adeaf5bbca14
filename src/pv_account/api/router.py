"""pv_account REST API: balance, funding and ledger history for the authenticated caller."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.pv_account.application.schemas import DepositRequest, WithdrawRequest
from src.pv_account.application.service import AccountApplicationService
from src.pv_common.database import get_db_session
from src.pv_common.enums import LedgerEntryType
from src.pv_common.response import ApiResponse, success_response
from src.pv_gateway.auth.dependencies import get_caller_id

router = APIRouter(prefix="/account", tags=["account"])

_service = AccountApplicationService()


@router.get("/balance")
async def get_balance(
    request: Request,
    caller_id: Annotated[str, Depends(get_caller_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    data = await _service.get_balance(db, caller_id)
    return success_response(data.model_dump(), request)


@router.post("/deposit")
async def deposit(
    body: DepositRequest,
    request: Request,
    caller_id: Annotated[str, Depends(get_caller_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    data = await _service.deposit(db, caller_id, body.amount)
    return success_response(data.model_dump(), request)


@router.post("/withdraw")
async def withdraw(
    body: WithdrawRequest,
    request: Request,
    caller_id: Annotated[str, Depends(get_caller_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    data = await _service.withdraw(db, caller_id, body.amount)
    return success_response(data.model_dump(), request)


@router.get("/ledger")
async def list_ledger(
    request: Request,
    caller_id: Annotated[str, Depends(get_caller_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    cursor: str | None = Query(None, description="Pagination cursor (opaque Base64)"),
    limit: int = Query(20, ge=1, le=100, description="Items per page"),
    entry_type: LedgerEntryType | None = Query(None, description="Filter by entry type"),
) -> ApiResponse:
    data = await _service.list_ledger(
        db, caller_id, cursor, limit, entry_type.value if entry_type else None
    )
    return success_response(data.model_dump(), request)
