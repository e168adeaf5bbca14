"""MarketApplicationService: create, resolve and read markets.

create_market and resolve_market are authority-only and run as one
transaction each: authorize, guard, write, commit; rollback on any error.
"""

import logging
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from src.pv_authority.application.service import AuthorityService
from src.pv_common.datetime_utils import Clock, utc_now
from src.pv_common.errors import MarketExistsError, MarketNotFoundError
from src.pv_market.application.schemas import (
    MarketDetail,
    MarketListResponse,
    cursor_decode,
    cursor_encode,
)
from src.pv_market.domain.lifecycle import new_market, resolve
from src.pv_market.domain.models import Market
from src.pv_market.domain.repository import MarketRepositoryProtocol
from src.pv_market.infrastructure.persistence import MarketRepository
from src.pv_vault.application.service import VaultService

logger = logging.getLogger(__name__)


class MarketApplicationService:
    def __init__(
        self,
        repo: MarketRepositoryProtocol | None = None,
        authority: AuthorityService | None = None,
        vault: VaultService | None = None,
        clock: Clock = utc_now,
    ) -> None:
        self._repo: MarketRepositoryProtocol = repo or MarketRepository()
        self._authority = authority or AuthorityService()
        self._vault = vault or VaultService()
        self._clock = clock

    async def create_market(
        self,
        db: AsyncSession,
        caller_id: str,
        market_id: int,
        question: str,
        deadline: datetime,
    ) -> MarketDetail:
        try:
            await self._authority.authorize(db, caller_id)
            market = new_market(market_id, caller_id, question, deadline, self._clock())
            if not await self._repo.insert_market(db, market):
                raise MarketExistsError(market_id)
            await self._vault.open(db, market_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Market created: id=%d deadline=%s", market_id, deadline.isoformat())
        return MarketDetail.from_domain(market)

    async def resolve_market(
        self, db: AsyncSession, caller_id: str, market_id: int, outcome: bool
    ) -> MarketDetail:
        try:
            await self._authority.authorize(db, caller_id)
            market = await self._load(db, market_id, for_update=True)
            resolved = resolve(market, outcome, self._clock())
            await self._repo.save_resolution(db, resolved)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info(
            "Market resolved: id=%d outcome=%s total_pool=%d",
            market_id, outcome, resolved.total_pool,
        )
        return MarketDetail.from_domain(resolved)

    async def get_market(self, db: AsyncSession, market_id: int) -> MarketDetail:
        return MarketDetail.from_domain(await self._load(db, market_id))

    async def list_markets(
        self,
        db: AsyncSession,
        status: str | None,
        cursor: str | None,
        limit: int,
    ) -> MarketListResponse:
        cursor_id = cursor_decode(cursor)
        # Fetch limit+1 to detect has_more without COUNT(*)
        markets = await self._repo.list_markets(db, status, cursor_id, limit + 1)
        has_more = len(markets) > limit
        page = markets[:limit]

        items = [MarketDetail.from_domain(m) for m in page]
        next_cursor = cursor_encode(page[-1]) if has_more and page else None
        return MarketListResponse(items=items, next_cursor=next_cursor, has_more=has_more)

    async def _load(self, db: AsyncSession, market_id: int, for_update: bool = False) -> Market:
        market = await self._repo.get_market(db, market_id, for_update)
        if market is None:
            raise MarketNotFoundError(market_id)
        return market
