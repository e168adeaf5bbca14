"""Market lifecycle: OPEN → RESOLVED, nothing else.

Each transition is a function with explicit guards that returns a new
Market value; persistence is left to the caller. Guards raise before any
state is produced, so a failed transition never leaves a partial update.
"""

from dataclasses import replace
from datetime import datetime

from src.pv_common.amounts import checked_add, validate_u64
from src.pv_common.enums import MarketStatus
from src.pv_common.errors import (
    DeadlineNotPassedError,
    DeadlinePassedError,
    MarketAlreadyResolvedError,
    MarketNotOpenError,
    MarketNotResolvedError,
    QuestionTooLongError,
)
from src.pv_market.domain.models import Market

MAX_QUESTION_LENGTH = 200  # UTF-8 code units


def question_length(question: str) -> int:
    return len(question.encode("utf-8"))


def new_market(
    market_id: int,
    creator_id: str,
    question: str,
    deadline: datetime,
    now: datetime,
) -> Market:
    """Guarded creation of an OPEN market with empty pools."""
    validate_u64(market_id, "market_id")
    length = question_length(question)
    if length > MAX_QUESTION_LENGTH:
        raise QuestionTooLongError(length, MAX_QUESTION_LENGTH)
    if deadline <= now:
        raise DeadlinePassedError()
    return Market(
        market_id=market_id,
        creator_id=creator_id,
        question=question,
        deadline=deadline,
        status=MarketStatus.OPEN,
        outcome=None,
        total_pool=0,
        total_yes_pool=0,
        total_no_pool=0,
        created_at=now,
    )


def ensure_open_for_bets(market: Market, now: datetime) -> None:
    if market.status != MarketStatus.OPEN:
        raise MarketNotOpenError(market.market_id)
    if now >= market.deadline:
        raise DeadlinePassedError()


def record_stake(market: Market, amount: int) -> Market:
    """Grow total_pool only; the side of the stake stays hidden."""
    return replace(market, total_pool=checked_add(market.total_pool, amount))


def resolve(market: Market, outcome: bool, now: datetime) -> Market:
    if market.status != MarketStatus.OPEN:
        raise MarketAlreadyResolvedError(market.market_id)
    if now < market.deadline:
        raise DeadlineNotPassedError()
    return replace(
        market,
        status=MarketStatus.RESOLVED,
        outcome=outcome,
        resolved_at=now,
    )


def resolved_outcome(market: Market) -> bool:
    """Return the final outcome, or raise if the market is still OPEN."""
    if market.status != MarketStatus.RESOLVED or market.outcome is None:
        raise MarketNotResolvedError(market.market_id)
    return market.outcome


def check_market_invariants(market: Market) -> list[str]:
    """Record-level invariants; returns human-readable violations."""
    violations: list[str] = []
    mid = market.market_id
    if market.total_yes_pool + market.total_no_pool > market.total_pool:
        violations.append(
            f"market {mid}: yes({market.total_yes_pool}) + no({market.total_no_pool}) "
            f"> total({market.total_pool})"
        )
    if (market.outcome is None) != (market.status == MarketStatus.OPEN):
        violations.append(
            f"market {mid}: status={market.status.value} with outcome={market.outcome}"
        )
    return violations
