"""Pydantic schemas for pv_betting API.

Binary values travel as lowercase or uppercase hex: a commitment is 64 hex
characters (32 bytes).
"""

from pydantic import BaseModel, Field

from src.pv_betting.domain.models import Position
from src.pv_common.amounts import U64_MAX

HEX32_PATTERN = r"^[0-9a-fA-F]{64}$"


class PlaceBetRequest(BaseModel):
    commitment: str = Field(..., pattern=HEX32_PATTERN, description="SHA-256(secret ‖ side_byte)")
    # Zero is let through so the domain can reject it with InvalidAmountError.
    amount: int = Field(..., ge=0, le=U64_MAX)


class PositionResponse(BaseModel):
    market_id: int
    bettor_id: str
    commitment: str
    amount: int
    claimed: bool
    created_at: str
    claimed_at: str | None

    @classmethod
    def from_domain(cls, p: Position) -> "PositionResponse":
        return cls(
            market_id=p.market_id,
            bettor_id=p.bettor_id,
            commitment=p.commitment.hex(),
            amount=p.amount,
            claimed=p.claimed,
            created_at=p.created_at.isoformat(),
            claimed_at=p.claimed_at.isoformat() if p.claimed_at else None,
        )
