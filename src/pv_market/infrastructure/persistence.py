"""MarketRepository: concrete implementation of MarketRepositoryProtocol.

All queries use raw text() SQL (no ORM).
asyncpg NULL parameter pattern: CAST(:param AS TYPE) IS NULL required for None values.
NUMERIC(20,0) columns (u64) come back as Decimal and are converted to int.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.pv_common.enums import MarketStatus
from src.pv_market.domain.models import Market

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_MARKET_COLUMNS = """
    market_id, creator_id, question, deadline, status, outcome,
    total_pool, total_yes_pool, total_no_pool,
    created_at, resolved_at
"""

_INSERT_MARKET_SQL = text("""
    INSERT INTO markets
        (market_id, creator_id, question, deadline, status, outcome,
         total_pool, total_yes_pool, total_no_pool, created_at)
    VALUES
        (:market_id, :creator_id, :question, :deadline, :status, NULL,
         0, 0, 0, :created_at)
    ON CONFLICT (market_id) DO NOTHING
    RETURNING market_id
""")

_GET_MARKET_SQL = text(f"""
    SELECT {_MARKET_COLUMNS}
    FROM markets
    WHERE market_id = :market_id
""")

_GET_MARKET_FOR_UPDATE_SQL = text(f"""
    SELECT {_MARKET_COLUMNS}
    FROM markets
    WHERE market_id = :market_id
    FOR UPDATE
""")

_UPDATE_POOLS_SQL = text("""
    UPDATE markets
    SET total_pool = :total_pool,
        total_yes_pool = :total_yes_pool,
        total_no_pool = :total_no_pool,
        updated_at = NOW()
    WHERE market_id = :market_id
""")

# status guard: a RESOLVED row is never rewritten
_SAVE_RESOLUTION_SQL = text("""
    UPDATE markets
    SET status = :status,
        outcome = :outcome,
        resolved_at = :resolved_at,
        updated_at = NOW()
    WHERE market_id = :market_id AND status = 'OPEN'
""")

_LIST_MARKETS_SQL = text(f"""
    SELECT {_MARKET_COLUMNS}
    FROM markets
    WHERE
        (CAST(:status AS TEXT) IS NULL OR status = CAST(:status AS TEXT))
        AND (
            CAST(:cursor_id AS NUMERIC) IS NULL
            OR market_id < CAST(:cursor_id AS NUMERIC)
        )
    ORDER BY market_id DESC
    LIMIT :limit
""")

# ---------------------------------------------------------------------------
# Row mappers
# ---------------------------------------------------------------------------


def _row_to_market(row: object) -> Market:
    return Market(
        market_id=int(row.market_id),  # type: ignore[attr-defined]
        creator_id=row.creator_id,  # type: ignore[attr-defined]
        question=row.question,  # type: ignore[attr-defined]
        deadline=row.deadline,  # type: ignore[attr-defined]
        status=MarketStatus(row.status),  # type: ignore[attr-defined]
        outcome=row.outcome,  # type: ignore[attr-defined]
        total_pool=int(row.total_pool),  # type: ignore[attr-defined]
        total_yes_pool=int(row.total_yes_pool),  # type: ignore[attr-defined]
        total_no_pool=int(row.total_no_pool),  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
        resolved_at=row.resolved_at,  # type: ignore[attr-defined]
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class MarketRepository:
    async def insert_market(self, db: AsyncSession, market: Market) -> bool:
        result = await db.execute(
            _INSERT_MARKET_SQL,
            {
                "market_id": market.market_id,
                "creator_id": market.creator_id,
                "question": market.question,
                "deadline": market.deadline,
                "status": market.status.value,
                "created_at": market.created_at,
            },
        )
        return result.fetchone() is not None

    async def get_market(
        self, db: AsyncSession, market_id: int, for_update: bool = False
    ) -> Market | None:
        sql = _GET_MARKET_FOR_UPDATE_SQL if for_update else _GET_MARKET_SQL
        result = await db.execute(sql, {"market_id": market_id})
        row = result.fetchone()
        return _row_to_market(row) if row else None

    async def update_pools(self, db: AsyncSession, market: Market) -> None:
        await db.execute(
            _UPDATE_POOLS_SQL,
            {
                "market_id": market.market_id,
                "total_pool": market.total_pool,
                "total_yes_pool": market.total_yes_pool,
                "total_no_pool": market.total_no_pool,
            },
        )

    async def save_resolution(self, db: AsyncSession, market: Market) -> None:
        await db.execute(
            _SAVE_RESOLUTION_SQL,
            {
                "market_id": market.market_id,
                "status": market.status.value,
                "outcome": market.outcome,
                "resolved_at": market.resolved_at,
            },
        )

    async def list_markets(
        self,
        db: AsyncSession,
        status: str | None,
        cursor_id: int | None,
        limit: int,
    ) -> list[Market]:
        result = await db.execute(
            _LIST_MARKETS_SQL,
            {"status": status, "cursor_id": cursor_id, "limit": limit},
        )
        return [_row_to_market(row) for row in result.fetchall()]
