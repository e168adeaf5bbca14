"""Pydantic schemas for pv_account API.

Ledger cursor (ordered by entry id DESC): Base64 JSON {"id": <last entry id>}.
"""

import base64
import json

from pydantic import BaseModel, Field

from src.pv_account.domain.models import LedgerEntry
from src.pv_common.amounts import U64_MAX


def cursor_encode(last_entry: LedgerEntry) -> str:
    return base64.b64encode(json.dumps({"id": last_entry.id}).encode()).decode()


def cursor_decode(cursor: str | None) -> int | None:
    """Decode cursor -> last entry id, or None on error."""
    if cursor is None:
        return None
    try:
        data = json.loads(base64.b64decode(cursor.encode()).decode())
        return int(data["id"])
    except (ValueError, KeyError, TypeError):
        return None


class DepositRequest(BaseModel):
    amount: int = Field(..., gt=0, le=U64_MAX, description="Amount to credit")


class WithdrawRequest(BaseModel):
    amount: int = Field(..., gt=0, le=U64_MAX, description="Amount to debit")


class BalanceResponse(BaseModel):
    address: str
    balance: int


class DepositResponse(BaseModel):
    address: str
    deposited: int
    balance: int


class WithdrawResponse(BaseModel):
    address: str
    withdrawn: int
    balance: int


class LedgerEntryItem(BaseModel):
    id: int
    entry_type: str
    amount: int
    balance_after: int
    reference_type: str | None
    reference_id: str | None
    created_at: str | None

    @classmethod
    def from_domain(cls, e: LedgerEntry) -> "LedgerEntryItem":
        return cls(
            id=e.id,
            entry_type=e.entry_type,
            amount=e.amount,
            balance_after=e.balance_after,
            reference_type=e.reference_type,
            reference_id=e.reference_id,
            created_at=e.created_at.isoformat() if e.created_at else None,
        )


class LedgerResponse(BaseModel):
    items: list[LedgerEntryItem]
    next_cursor: str | None
    has_more: bool
