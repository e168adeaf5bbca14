"""Reveal-and-pay settlement of one winning position.

Pools are discovered lazily: a stake is attributed to a side only when its
owner reveals at claim time, so winning_pool counts only winners who have
claimed so far. Consequences kept as-is:

- payout depends on claim order; the first winner to claim sees the
  smallest winning pool and receives the largest share.
- losing stakes are never revealed and stay in the vault.
"""

from dataclasses import dataclass, replace
from datetime import datetime

from src.pv_betting.domain.models import Position
from src.pv_common.amounts import checked_add, checked_div, checked_mul, saturating_sub
from src.pv_common.errors import AlreadyClaimedError, NotAWinnerError, ZeroWinningPoolError
from src.pv_market.domain.lifecycle import resolved_outcome
from src.pv_market.domain.models import Market
from src.pv_vault.domain.models import Vault


def compute_payout(amount: int, winning_pool: int, losing_pool: int) -> int:
    """payout = amount + floor(amount * losing_pool / winning_pool)"""
    if winning_pool == 0:
        raise ZeroWinningPoolError()
    share = checked_div(checked_mul(amount, losing_pool), winning_pool)
    return checked_add(amount, share)


@dataclass(frozen=True)
class ClaimSettlement:
    market: Market          # pools after this reveal
    position: Position      # claimed=True
    side: bool
    winning_pool: int
    losing_pool: int
    payout: int


def settle_claim(
    market: Market,
    position: Position,
    secret: bytes,
    claimed_side: bool,
    vault: Vault,
    now: datetime,
) -> ClaimSettlement:
    """Run every claim precondition in order and compute the new state.

    Nothing is persisted here; any raised error means no mutation at all.
    """
    outcome = resolved_outcome(market)
    if position.claimed:
        raise AlreadyClaimedError()
    choice = position.commitment.reveal(secret, claimed_side)
    if choice.side != outcome:
        raise NotAWinnerError()

    if choice.side:
        revealed = replace(
            market, total_yes_pool=checked_add(market.total_yes_pool, position.amount)
        )
    else:
        revealed = replace(
            market, total_no_pool=checked_add(market.total_no_pool, position.amount)
        )

    winning_pool = revealed.total_yes_pool if outcome else revealed.total_no_pool
    losing_pool = saturating_sub(revealed.total_pool, winning_pool)
    payout = compute_payout(position.amount, winning_pool, losing_pool)
    vault.ensure_covers(payout)

    return ClaimSettlement(
        market=revealed,
        position=replace(position, claimed=True, claimed_at=now),
        side=choice.side,
        winning_pool=winning_pool,
        losing_pool=losing_pool,
        payout=payout,
    )
