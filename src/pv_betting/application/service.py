"""BettingService: place a hidden-side bet and escrow its stake.

place_bet is one transaction: the position row, the total_pool increment and
the bettor→vault transfer commit together or not at all.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.pv_betting.application.schemas import PositionResponse
from src.pv_betting.domain.models import new_position, validate_stake
from src.pv_betting.domain.repository import PositionRepositoryProtocol
from src.pv_betting.infrastructure.persistence import PositionRepository
from src.pv_common.datetime_utils import Clock, utc_now
from src.pv_common.errors import (
    MarketNotFoundError,
    PositionExistsError,
    PositionNotFoundError,
)
from src.pv_common.identity import ensure_caller_identity
from src.pv_market.domain.lifecycle import ensure_open_for_bets, record_stake
from src.pv_market.domain.repository import MarketRepositoryProtocol
from src.pv_market.infrastructure.persistence import MarketRepository
from src.pv_settlement.domain.commitment import Commitment
from src.pv_vault.application.service import VaultService

logger = logging.getLogger(__name__)


class BettingService:
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

    async def place_bet(
        self,
        db: AsyncSession,
        bettor_id: str,
        market_id: int,
        commitment: Commitment,
        amount: int,
    ) -> PositionResponse:
        try:
            ensure_caller_identity(bettor_id)
            validate_stake(amount)
            market = await self._markets.get_market(db, market_id, for_update=True)
            if market is None:
                raise MarketNotFoundError(market_id)
            now = self._clock()
            ensure_open_for_bets(market, now)

            position = new_position(market_id, bettor_id, commitment, amount, now)
            updated = record_stake(market, amount)

            if not await self._positions.insert_position(db, position):
                raise PositionExistsError(market_id, bettor_id)
            await self._markets.update_pools(db, updated)
            await self._vault.escrow(db, market_id, bettor_id, amount)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info(
            "Bet placed: market=%d bettor=%s amount=%d total_pool=%d",
            market_id, bettor_id, amount, updated.total_pool,
        )
        return PositionResponse.from_domain(position)

    async def get_position(
        self, db: AsyncSession, market_id: int, bettor_id: str
    ) -> PositionResponse:
        position = await self._positions.get_position(db, market_id, bettor_id)
        if position is None:
            raise PositionNotFoundError(market_id, bettor_id)
        return PositionResponse.from_domain(position)
