"""Repository Protocol: the ledger's value-transfer primitive.

Unit tests inject a mock or an in-memory ledger conforming to this Protocol.
Every method runs inside the caller's transaction.
"""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.pv_account.domain.models import Account, LedgerEntry


class AccountRepositoryProtocol(Protocol):
    async def get_account(
        self, db: AsyncSession, address: str, for_update: bool = False
    ) -> Account | None: ...

    async def open_account(self, db: AsyncSession, address: str) -> None: ...

    async def credit(
        self,
        db: AsyncSession,
        address: str,
        amount: int,
        entry_type: str,
        ref_type: str | None = None,
        ref_id: str | None = None,
    ) -> Account: ...

    async def debit(
        self,
        db: AsyncSession,
        address: str,
        amount: int,
        entry_type: str,
        ref_type: str | None = None,
        ref_id: str | None = None,
    ) -> Account: ...

    async def transfer(
        self,
        db: AsyncSession,
        from_address: str,
        to_address: str,
        amount: int,
        debit_type: str,
        credit_type: str,
        ref_type: str,
        ref_id: str,
    ) -> tuple[Account, Account]: ...

    async def list_ledger_entries(
        self,
        db: AsyncSession,
        address: str,
        cursor_id: int | None,
        limit: int,
        entry_type: str | None,
    ) -> list[LedgerEntry]: ...
