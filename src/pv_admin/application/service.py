# src/pv_admin/application/service.py
"""Admin application service: authority-only invariant verification."""
import logging
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.pv_authority.application.service import AuthorityService
from src.pv_market.domain.lifecycle import check_market_invariants
from src.pv_market.domain.repository import MarketRepositoryProtocol
from src.pv_market.infrastructure.persistence import MarketRepository

logger = logging.getLogger(__name__)

_PAGE_SIZE = 500

_OPEN_MARKET_TOTALS_SQL = text("""
    SELECT m.market_id,
           m.total_pool,
           COALESCE(p.staked, 0) AS staked,
           COALESCE(a.balance, 0) AS vault_balance
    FROM markets m
    LEFT JOIN (
        SELECT market_id, SUM(amount) AS staked
        FROM positions
        GROUP BY market_id
    ) p ON p.market_id = m.market_id
    LEFT JOIN accounts a ON a.address = 'vault:' || m.market_id::TEXT
    WHERE m.status = 'OPEN'
""")


class AdminService:
    def __init__(
        self,
        markets: MarketRepositoryProtocol | None = None,
        authority: AuthorityService | None = None,
    ) -> None:
        self._markets: MarketRepositoryProtocol = markets or MarketRepository()
        self._authority = authority or AuthorityService()

    async def verify_all_invariants(self, db: AsyncSession, caller_id: str) -> dict[str, Any]:
        """Record-level checks on every market plus escrow checks on OPEN ones.

        While a market is OPEN: total_pool == sum of position stakes, and the
        vault holds exactly total_pool.
        """
        await self._authority.authorize(db, caller_id)
        violations: list[str] = []

        cursor_id: int | None = None
        while True:
            page = await self._markets.list_markets(db, None, cursor_id, _PAGE_SIZE)
            for market in page:
                violations.extend(check_market_invariants(market))
            if len(page) < _PAGE_SIZE:
                break
            cursor_id = page[-1].market_id

        rows = (await db.execute(_OPEN_MARKET_TOTALS_SQL)).fetchall()
        for row in rows:
            total = int(row.total_pool)
            staked = int(row.staked)
            vault_balance = int(row.vault_balance)
            if total != staked:
                violations.append(
                    f"market {row.market_id}: total_pool({total}) != staked({staked})"
                )
            if vault_balance != total:
                violations.append(
                    f"market {row.market_id}: vault({vault_balance}) != total_pool({total})"
                )

        for msg in violations:
            logger.error("Invariant violated: %s", msg)
        return {
            "ok": len(violations) == 0,
            "violations": violations,
            "open_markets_checked": len(rows),
        }
