"""AccountRepository: concrete implementation of AccountRepositoryProtocol.

All balance mutations are single guarded UPDATE ... RETURNING statements.
A result of 0 rows means a constraint was violated (insufficient funds or
u64 overflow). NUMERIC columns come back from asyncpg as Decimal and are
converted to int here.

Transaction ownership: the CALLER (application service) commits or rolls back.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.pv_account.domain.models import Account, LedgerEntry
from src.pv_common.amounts import U64_MAX
from src.pv_common.errors import ArithmeticOverflowError, InsufficientBalanceError

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_GET_ACCOUNT_SQL = text("""
    SELECT address, balance, created_at, updated_at
    FROM accounts
    WHERE address = :address
""")

_GET_ACCOUNT_FOR_UPDATE_SQL = text("""
    SELECT address, balance, created_at, updated_at
    FROM accounts
    WHERE address = :address
    FOR UPDATE
""")

_OPEN_ACCOUNT_SQL = text("""
    INSERT INTO accounts (address, balance)
    VALUES (:address, 0)
    ON CONFLICT (address) DO NOTHING
""")

# Upsert; the WHERE on the conflict branch keeps balance inside u64.
_CREDIT_SQL = text("""
    INSERT INTO accounts (address, balance)
    VALUES (:address, :amount)
    ON CONFLICT (address) DO UPDATE
        SET balance = accounts.balance + :amount,
            updated_at = NOW()
        WHERE accounts.balance <= :limit
    RETURNING address, balance, created_at, updated_at
""")

_DEBIT_SQL = text("""
    UPDATE accounts
    SET balance = balance - :amount,
        updated_at = NOW()
    WHERE address = :address AND balance >= :amount
    RETURNING address, balance, created_at, updated_at
""")

_INSERT_LEDGER_SQL = text("""
    INSERT INTO ledger_entries
        (address, entry_type, amount, balance_after, reference_type, reference_id)
    VALUES
        (:address, :entry_type, :amount, :balance_after, :reference_type, :reference_id)
""")

_LIST_LEDGER_SQL = text("""
    SELECT id, address, entry_type, amount, balance_after,
           reference_type, reference_id, created_at
    FROM ledger_entries
    WHERE address = :address
      AND (CAST(:cursor_id AS BIGINT) IS NULL OR id < CAST(:cursor_id AS BIGINT))
      AND (CAST(:entry_type AS TEXT) IS NULL OR entry_type = CAST(:entry_type AS TEXT))
    ORDER BY id DESC
    LIMIT :limit
""")

# ---------------------------------------------------------------------------
# Row mappers
# ---------------------------------------------------------------------------


def _row_to_account(row: object) -> Account:
    return Account(
        address=row.address,  # type: ignore[attr-defined]
        balance=int(row.balance),  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
        updated_at=row.updated_at,  # type: ignore[attr-defined]
    )


def _row_to_ledger(row: object) -> LedgerEntry:
    return LedgerEntry(
        id=row.id,  # type: ignore[attr-defined]
        address=row.address,  # type: ignore[attr-defined]
        entry_type=row.entry_type,  # type: ignore[attr-defined]
        amount=int(row.amount),  # type: ignore[attr-defined]
        balance_after=int(row.balance_after),  # type: ignore[attr-defined]
        reference_type=row.reference_type,  # type: ignore[attr-defined]
        reference_id=row.reference_id,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class AccountRepository:
    async def get_account(
        self, db: AsyncSession, address: str, for_update: bool = False
    ) -> Account | None:
        sql = _GET_ACCOUNT_FOR_UPDATE_SQL if for_update else _GET_ACCOUNT_SQL
        result = await db.execute(sql, {"address": address})
        row = result.fetchone()
        return _row_to_account(row) if row else None

    async def open_account(self, db: AsyncSession, address: str) -> None:
        await db.execute(_OPEN_ACCOUNT_SQL, {"address": address})

    async def credit(
        self,
        db: AsyncSession,
        address: str,
        amount: int,
        entry_type: str,
        ref_type: str | None = None,
        ref_id: str | None = None,
    ) -> Account:
        result = await db.execute(
            _CREDIT_SQL,
            {"address": address, "amount": amount, "limit": U64_MAX - amount},
        )
        row = result.fetchone()
        if row is None:
            raise ArithmeticOverflowError(f"balance of {address} + {amount}")
        account = _row_to_account(row)
        await self._write_ledger(db, account, amount, entry_type, ref_type, ref_id)
        return account

    async def debit(
        self,
        db: AsyncSession,
        address: str,
        amount: int,
        entry_type: str,
        ref_type: str | None = None,
        ref_id: str | None = None,
    ) -> Account:
        result = await db.execute(_DEBIT_SQL, {"address": address, "amount": amount})
        row = result.fetchone()
        if row is None:
            current = await self.get_account(db, address)
            raise InsufficientBalanceError(
                required=amount, available=current.balance if current else 0
            )
        account = _row_to_account(row)
        await self._write_ledger(db, account, -amount, entry_type, ref_type, ref_id)
        return account

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
    ) -> tuple[Account, Account]:
        """Debit then credit within the caller's transaction."""
        source = await self.debit(db, from_address, amount, debit_type, ref_type, ref_id)
        target = await self.credit(db, to_address, amount, credit_type, ref_type, ref_id)
        return source, target

    async def list_ledger_entries(
        self,
        db: AsyncSession,
        address: str,
        cursor_id: int | None,
        limit: int,
        entry_type: str | None,
    ) -> list[LedgerEntry]:
        result = await db.execute(
            _LIST_LEDGER_SQL,
            {
                "address": address,
                "cursor_id": cursor_id,
                "entry_type": entry_type,
                "limit": limit,
            },
        )
        return [_row_to_ledger(row) for row in result.fetchall()]

    async def _write_ledger(
        self,
        db: AsyncSession,
        account: Account,
        signed_amount: int,
        entry_type: str,
        ref_type: str | None,
        ref_id: str | None,
    ) -> None:
        await db.execute(
            _INSERT_LEDGER_SQL,
            {
                "address": account.address,
                "entry_type": entry_type,
                "amount": signed_amount,
                "balance_after": account.balance,
                "reference_type": ref_type,
                "reference_id": ref_id,
            },
        )
