"""AuthorityService: initialize once, then gate privileged operations.

authorize() is called by other services inside their own transaction and
never commits.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.pv_authority.application.schemas import AuthorityResponse
from src.pv_authority.domain.models import Authority
from src.pv_authority.domain.repository import AuthorityRepositoryProtocol
from src.pv_authority.infrastructure.persistence import AuthorityRepository
from src.pv_common.errors import (
    AuthorityAlreadyInitializedError,
    AuthorityNotInitializedError,
)
from src.pv_common.identity import ensure_caller_identity

logger = logging.getLogger(__name__)


class AuthorityService:
    def __init__(self, repo: AuthorityRepositoryProtocol | None = None) -> None:
        self._repo: AuthorityRepositoryProtocol = repo or AuthorityRepository()

    async def initialize(self, db: AsyncSession, admin_id: str) -> AuthorityResponse:
        try:
            ensure_caller_identity(admin_id)
            authority = await self._repo.create_authority(db, admin_id)
            if authority is None:
                raise AuthorityAlreadyInitializedError()
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Authority initialized: admin=%s", admin_id)
        return AuthorityResponse.from_domain(authority)

    async def load(self, db: AsyncSession) -> Authority:
        authority = await self._repo.get_authority(db)
        if authority is None:
            raise AuthorityNotInitializedError()
        return authority

    async def authorize(self, db: AsyncSession, caller_id: str) -> Authority:
        authority = await self.load(db)
        authority.authorize(caller_id)
        return authority

    async def get_authority(self, db: AsyncSession) -> AuthorityResponse:
        return AuthorityResponse.from_domain(await self.load(db))
