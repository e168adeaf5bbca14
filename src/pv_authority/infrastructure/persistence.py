"""AuthorityRepository: the singleton row is keyed by the constant id 1."""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.pv_authority.domain.models import Authority

_CREATE_AUTHORITY_SQL = text("""
    INSERT INTO authority (id, admin_id)
    VALUES (1, :admin_id)
    ON CONFLICT (id) DO NOTHING
    RETURNING admin_id, created_at
""")

_GET_AUTHORITY_SQL = text("""
    SELECT admin_id, created_at
    FROM authority
    WHERE id = 1
""")


class AuthorityRepository:
    async def create_authority(
        self, db: AsyncSession, admin_id: str
    ) -> Authority | None:
        result = await db.execute(_CREATE_AUTHORITY_SQL, {"admin_id": admin_id})
        row = result.fetchone()
        if row is None:
            return None
        return Authority(admin_id=row.admin_id, created_at=row.created_at)

    async def get_authority(self, db: AsyncSession) -> Authority | None:
        result = await db.execute(_GET_AUTHORITY_SQL)
        row = result.fetchone()
        if row is None:
            return None
        return Authority(admin_id=row.admin_id, created_at=row.created_at)
