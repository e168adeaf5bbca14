# src/pv_market/domain/repository.py
"""Repository Protocol: dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.pv_market.domain.models import Market


class MarketRepositoryProtocol(Protocol):
    async def insert_market(self, db: AsyncSession, market: Market) -> bool:
        """False when market_id is already taken."""
        ...

    async def get_market(
        self, db: AsyncSession, market_id: int, for_update: bool = False
    ) -> Market | None: ...

    async def update_pools(self, db: AsyncSession, market: Market) -> None: ...

    async def save_resolution(self, db: AsyncSession, market: Market) -> None: ...

    async def list_markets(
        self,
        db: AsyncSession,
        status: str | None,
        cursor_id: int | None,
        limit: int,
    ) -> list[Market]: ...
