"""PositionRepository: positions keyed by (market_id, bettor_id).

The composite primary key is the uniqueness-on-create guard: a second bet
from the same bettor on the same market inserts nothing.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.pv_betting.domain.models import Position
from src.pv_settlement.domain.commitment import Commitment

_POSITION_COLUMNS = """
    market_id, bettor_id, commitment, amount, claimed, created_at, claimed_at
"""

_INSERT_POSITION_SQL = text("""
    INSERT INTO positions
        (market_id, bettor_id, commitment, amount, claimed, created_at)
    VALUES
        (:market_id, :bettor_id, :commitment, :amount, FALSE, :created_at)
    ON CONFLICT (market_id, bettor_id) DO NOTHING
    RETURNING market_id
""")

_GET_POSITION_SQL = text(f"""
    SELECT {_POSITION_COLUMNS}
    FROM positions
    WHERE market_id = :market_id AND bettor_id = :bettor_id
""")

_GET_POSITION_FOR_UPDATE_SQL = text(f"""
    SELECT {_POSITION_COLUMNS}
    FROM positions
    WHERE market_id = :market_id AND bettor_id = :bettor_id
    FOR UPDATE
""")

# claimed = FALSE guard: a concurrent claim that lost the race updates 0 rows
_MARK_CLAIMED_SQL = text("""
    UPDATE positions
    SET claimed = TRUE,
        claimed_at = :claimed_at
    WHERE market_id = :market_id AND bettor_id = :bettor_id AND claimed = FALSE
    RETURNING market_id
""")


def _row_to_position(row: object) -> Position:
    return Position(
        market_id=int(row.market_id),  # type: ignore[attr-defined]
        bettor_id=row.bettor_id,  # type: ignore[attr-defined]
        commitment=Commitment(bytes(row.commitment)),  # type: ignore[attr-defined]
        amount=int(row.amount),  # type: ignore[attr-defined]
        claimed=row.claimed,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
        claimed_at=row.claimed_at,  # type: ignore[attr-defined]
    )


class PositionRepository:
    async def insert_position(self, db: AsyncSession, position: Position) -> bool:
        result = await db.execute(
            _INSERT_POSITION_SQL,
            {
                "market_id": position.market_id,
                "bettor_id": position.bettor_id,
                "commitment": position.commitment.digest,
                "amount": position.amount,
                "created_at": position.created_at,
            },
        )
        return result.fetchone() is not None

    async def get_position(
        self,
        db: AsyncSession,
        market_id: int,
        bettor_id: str,
        for_update: bool = False,
    ) -> Position | None:
        sql = _GET_POSITION_FOR_UPDATE_SQL if for_update else _GET_POSITION_SQL
        result = await db.execute(sql, {"market_id": market_id, "bettor_id": bettor_id})
        row = result.fetchone()
        return _row_to_position(row) if row else None

    async def mark_claimed(self, db: AsyncSession, position: Position) -> bool:
        result = await db.execute(
            _MARK_CLAIMED_SQL,
            {
                "market_id": position.market_id,
                "bettor_id": position.bettor_id,
                "claimed_at": position.claimed_at,
            },
        )
        return result.fetchone() is not None
