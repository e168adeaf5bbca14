"""Domain models for pv_betting: one position per (market, bettor)."""

from dataclasses import dataclass
from datetime import datetime

from src.pv_common.amounts import validate_u64
from src.pv_common.errors import InvalidAmountError
from src.pv_settlement.domain.commitment import Commitment


@dataclass(frozen=True)
class Position:
    market_id: int
    bettor_id: str
    commitment: Commitment       # the only trace of the chosen side
    amount: int
    claimed: bool
    created_at: datetime
    claimed_at: datetime | None = None


def validate_stake(amount: int) -> int:
    if amount <= 0:
        raise InvalidAmountError(amount)
    return validate_u64(amount, "amount")


def new_position(
    market_id: int,
    bettor_id: str,
    commitment: Commitment,
    amount: int,
    now: datetime,
) -> Position:
    return Position(
        market_id=market_id,
        bettor_id=bettor_id,
        commitment=commitment,
        amount=validate_stake(amount),
        claimed=False,
        created_at=now,
    )
