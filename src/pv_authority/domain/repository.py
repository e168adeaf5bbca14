from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.pv_authority.domain.models import Authority


class AuthorityRepositoryProtocol(Protocol):
    async def create_authority(
        self, db: AsyncSession, admin_id: str
    ) -> Authority | None:
        """Insert the singleton row; None when it already exists."""
        ...

    async def get_authority(self, db: AsyncSession) -> Authority | None: ...
