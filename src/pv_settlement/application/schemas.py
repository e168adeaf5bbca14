"""Pydantic schemas for pv_settlement API."""

from pydantic import BaseModel, Field, StrictBool

from src.pv_betting.application.schemas import HEX32_PATTERN
from src.pv_settlement.domain.payout import ClaimSettlement


class ClaimRequest(BaseModel):
    secret: str = Field(..., pattern=HEX32_PATTERN, description="32-byte secret as hex")
    side: StrictBool

    @property
    def secret_bytes(self) -> bytes:
        return bytes.fromhex(self.secret)


class ClaimResponse(BaseModel):
    market_id: int
    bettor_id: str
    side: bool
    amount: int
    payout: int
    winning_pool: int
    losing_pool: int
    vault_balance: int

    @classmethod
    def from_settlement(cls, s: ClaimSettlement, vault_balance: int) -> "ClaimResponse":
        return cls(
            market_id=s.market.market_id,
            bettor_id=s.position.bettor_id,
            side=s.side,
            amount=s.position.amount,
            payout=s.payout,
            winning_pool=s.winning_pool,
            losing_pool=s.losing_pool,
            vault_balance=vault_balance,
        )
