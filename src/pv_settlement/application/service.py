"""SettlementService: claim_winnings.

One transaction, in this order:
  1. lock market, position and vault rows (SELECT ... FOR UPDATE)
  2. settle_claim: every precondition, pool discovery, payout
  3. mark the position claimed (guarded UPDATE ... WHERE claimed = FALSE)
  4. write the revealed pools
  5. transfer payout vault → bettor
  6. commit; any error rolls back all of it

Step 3 precedes step 5 so a re-entrant or concurrent claim on the same
position can never be paid twice.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.pv_betting.domain.repository import PositionRepositoryProtocol
from src.pv_betting.infrastructure.persistence import PositionRepository
from src.pv_common.datetime_utils import Clock, utc_now
from src.pv_common.errors import (
    AlreadyClaimedError,
    MarketNotFoundError,
    PositionNotFoundError,
)
from src.pv_common.identity import ensure_caller_identity
from src.pv_market.domain.repository import MarketRepositoryProtocol
from src.pv_market.infrastructure.persistence import MarketRepository
from src.pv_settlement.application.schemas import ClaimResponse
from src.pv_settlement.domain.payout import settle_claim
from src.pv_vault.application.service import VaultService

logger = logging.getLogger(__name__)


class SettlementService:
    def __init__(
        self,
        positions: PositionRepositoryProtocol | None = None,
        markets: MarketRepositoryProtocol | None = None,
        vault: VaultService | None = None,
        clock: Clock = utc_now,
    ) -> None:
        self._positions: PositionRepositoryProtocol = positions or PositionRepository()
        self._markets: MarketRepositoryProtocol = markets or MarketRepository()
        self._vault = vault or VaultService()
        self._clock = clock

    async def claim_winnings(
        self,
        db: AsyncSession,
        bettor_id: str,
        market_id: int,
        secret: bytes,
        claimed_side: bool,
    ) -> ClaimResponse:
        try:
            ensure_caller_identity(bettor_id)
            market = await self._markets.get_market(db, market_id, for_update=True)
            if market is None:
                raise MarketNotFoundError(market_id)
            position = await self._positions.get_position(
                db, market_id, bettor_id, for_update=True
            )
            if position is None:
                raise PositionNotFoundError(market_id, bettor_id)
            vault = await self._vault.load(db, market_id, for_update=True)

            settlement = settle_claim(
                market, position, secret, claimed_side, vault, self._clock()
            )

            if not await self._positions.mark_claimed(db, settlement.position):
                raise AlreadyClaimedError()
            await self._markets.update_pools(db, settlement.market)
            paid_from = await self._vault.release(db, market_id, bettor_id, settlement.payout)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info(
            "Winnings claimed: market=%d bettor=%s payout=%d winning_pool=%d losing_pool=%d",
            market_id, bettor_id, settlement.payout,
            settlement.winning_pool, settlement.losing_pool,
        )
        return ClaimResponse.from_settlement(settlement, paid_from.balance)
