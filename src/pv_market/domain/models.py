"""Domain models for pv_market: pure dataclasses, no business logic."""

from dataclasses import dataclass
from datetime import datetime

from src.pv_common.enums import MarketStatus


@dataclass(frozen=True)
class Market:
    market_id: int
    creator_id: str
    question: str
    deadline: datetime
    status: MarketStatus
    outcome: bool | None         # None while OPEN
    total_pool: int              # grows with every bet, frozen once RESOLVED
    total_yes_pool: int          # zero during betting, filled as winners reveal
    total_no_pool: int
    created_at: datetime
    resolved_at: datetime | None = None
