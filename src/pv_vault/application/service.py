"""VaultService: sole destination for stakes and sole source for payouts.

All methods run inside the caller's transaction; none of them commit.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.pv_account.domain.repository import AccountRepositoryProtocol
from src.pv_account.infrastructure.persistence import AccountRepository
from src.pv_common.enums import LedgerEntryType
from src.pv_common.errors import MarketNotFoundError
from src.pv_vault.application.schemas import VaultResponse
from src.pv_vault.domain.models import Vault, vault_address

logger = logging.getLogger(__name__)

_REF_TYPE = "MARKET"


class VaultService:
    def __init__(self, repo: AccountRepositoryProtocol | None = None) -> None:
        self._repo: AccountRepositoryProtocol = repo or AccountRepository()

    async def open(self, db: AsyncSession, market_id: int) -> None:
        await self._repo.open_account(db, vault_address(market_id))

    async def load(self, db: AsyncSession, market_id: int, for_update: bool = False) -> Vault:
        account = await self._repo.get_account(db, vault_address(market_id), for_update)
        if account is None:
            raise MarketNotFoundError(market_id)
        return Vault(market_id=market_id, balance=account.balance)

    async def escrow(
        self, db: AsyncSession, market_id: int, from_address: str, amount: int
    ) -> Vault:
        """Move a stake from the bettor into the market's vault."""
        _, account = await self._repo.transfer(
            db,
            from_address,
            vault_address(market_id),
            amount,
            debit_type=LedgerEntryType.BET_STAKE,
            credit_type=LedgerEntryType.VAULT_STAKE_IN,
            ref_type=_REF_TYPE,
            ref_id=str(market_id),
        )
        return Vault(market_id=market_id, balance=account.balance)

    async def release(
        self, db: AsyncSession, market_id: int, to_address: str, amount: int
    ) -> Vault:
        """Pay amount out of the vault; fails if the vault cannot cover it."""
        vault = await self.load(db, market_id, for_update=True)
        vault.ensure_covers(amount)
        account, _ = await self._repo.transfer(
            db,
            vault.address,
            to_address,
            amount,
            debit_type=LedgerEntryType.VAULT_PAYOUT_OUT,
            credit_type=LedgerEntryType.CLAIM_PAYOUT,
            ref_type=_REF_TYPE,
            ref_id=str(market_id),
        )
        logger.debug("Vault release: market=%d to=%s amount=%d", market_id, to_address, amount)
        return Vault(market_id=market_id, balance=account.balance)

    async def get_vault(self, db: AsyncSession, market_id: int) -> VaultResponse:
        return VaultResponse.from_domain(await self.load(db, market_id))
