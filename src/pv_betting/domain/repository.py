from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.pv_betting.domain.models import Position


class PositionRepositoryProtocol(Protocol):
    async def insert_position(self, db: AsyncSession, position: Position) -> bool:
        """False when the bettor already holds a position in this market."""
        ...

    async def get_position(
        self,
        db: AsyncSession,
        market_id: int,
        bettor_id: str,
        for_update: bool = False,
    ) -> Position | None: ...

    async def mark_claimed(
        self, db: AsyncSession, position: Position
    ) -> bool:
        """Flip claimed false→true; False when it was already true."""
        ...
