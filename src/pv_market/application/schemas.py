"""Pydantic schemas for pv_market API.

Cursor format for markets (ordered by market_id DESC):
  {"id": <last market_id>}
  Encoded as Base64 JSON string.
"""

import base64
import json

from pydantic import AwareDatetime, BaseModel, Field, StrictBool

from src.pv_common.amounts import U64_MAX
from src.pv_market.domain.models import Market

# ---------------------------------------------------------------------------
# Cursor utilities
# ---------------------------------------------------------------------------


def cursor_encode(last_market: Market) -> str:
    payload = {"id": last_market.market_id}
    return base64.b64encode(json.dumps(payload).encode()).decode()


def cursor_decode(cursor: str | None) -> int | None:
    """Decode cursor -> last market_id, or None on error."""
    if cursor is None:
        return None
    try:
        data = json.loads(base64.b64decode(cursor.encode()).decode())
        return int(data["id"])
    except (ValueError, KeyError, TypeError):
        return None


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class CreateMarketRequest(BaseModel):
    market_id: int = Field(..., ge=0, le=U64_MAX)
    # Length is enforced in the domain so the caller gets QuestionTooLongError.
    question: str
    deadline: AwareDatetime


class ResolveRequest(BaseModel):
    outcome: StrictBool


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class MarketDetail(BaseModel):
    market_id: int
    creator_id: str
    question: str
    deadline: str
    status: str
    outcome: bool | None
    total_pool: int
    total_yes_pool: int
    total_no_pool: int
    created_at: str
    resolved_at: str | None

    @classmethod
    def from_domain(cls, m: Market) -> "MarketDetail":
        return cls(
            market_id=m.market_id,
            creator_id=m.creator_id,
            question=m.question,
            deadline=m.deadline.isoformat(),
            status=m.status.value,
            outcome=m.outcome,
            total_pool=m.total_pool,
            total_yes_pool=m.total_yes_pool,
            total_no_pool=m.total_no_pool,
            created_at=m.created_at.isoformat(),
            resolved_at=m.resolved_at.isoformat() if m.resolved_at else None,
        )


class MarketListResponse(BaseModel):
    items: list[MarketDetail]
    next_cursor: str | None
    has_more: bool
