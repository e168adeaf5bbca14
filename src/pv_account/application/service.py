"""AccountApplicationService: funding and history of a caller's address.

Deposits stand in for the ledger's own funding path during development.
Mutations commit on success and roll back on any error.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.pv_account.application.schemas import (
    BalanceResponse,
    DepositResponse,
    LedgerEntryItem,
    LedgerResponse,
    WithdrawResponse,
    cursor_decode,
    cursor_encode,
)
from src.pv_account.domain.repository import AccountRepositoryProtocol
from src.pv_account.infrastructure.persistence import AccountRepository
from src.pv_common.enums import LedgerEntryType
from src.pv_common.identity import ensure_caller_identity

logger = logging.getLogger(__name__)


class AccountApplicationService:
    def __init__(self, repo: AccountRepositoryProtocol | None = None) -> None:
        self._repo: AccountRepositoryProtocol = repo or AccountRepository()

    async def get_balance(self, db: AsyncSession, address: str) -> BalanceResponse:
        account = await self._repo.get_account(db, address)
        return BalanceResponse(address=address, balance=account.balance if account else 0)

    async def deposit(self, db: AsyncSession, address: str, amount: int) -> DepositResponse:
        try:
            ensure_caller_identity(address)
            account = await self._repo.credit(db, address, amount, LedgerEntryType.DEPOSIT)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Deposit: address=%s amount=%d balance=%d", address, amount, account.balance)
        return DepositResponse(address=address, deposited=amount, balance=account.balance)

    async def withdraw(self, db: AsyncSession, address: str, amount: int) -> WithdrawResponse:
        try:
            ensure_caller_identity(address)
            account = await self._repo.debit(db, address, amount, LedgerEntryType.WITHDRAW)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Withdraw: address=%s amount=%d balance=%d", address, amount, account.balance)
        return WithdrawResponse(address=address, withdrawn=amount, balance=account.balance)

    async def list_ledger(
        self,
        db: AsyncSession,
        address: str,
        cursor: str | None,
        limit: int,
        entry_type: str | None,
    ) -> LedgerResponse:
        cursor_id = cursor_decode(cursor)
        entries = await self._repo.list_ledger_entries(
            db, address, cursor_id, limit + 1, entry_type
        )
        has_more = len(entries) > limit
        page = entries[:limit]
        next_cursor = cursor_encode(page[-1]) if has_more and page else None
        return LedgerResponse(
            items=[LedgerEntryItem.from_domain(e) for e in page],
            next_cursor=next_cursor,
            has_more=has_more,
        )
