"""In-memory ledger fakes for service-level tests.

The fakes implement the repository Protocols over plain dicts. FakeSession
snapshots that state on every commit and restores it on rollback, so tests
can assert the all-or-nothing behaviour of each service operation without a
database.
"""

import copy
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone

from src.pv_account.application.service import AccountApplicationService
from src.pv_account.domain.models import Account, LedgerEntry
from src.pv_authority.application.service import AuthorityService
from src.pv_authority.domain.models import Authority
from src.pv_betting.application.service import BettingService
from src.pv_betting.domain.models import Position
from src.pv_common.amounts import U64_MAX
from src.pv_common.errors import ArithmeticOverflowError, InsufficientBalanceError
from src.pv_market.application.service import MarketApplicationService
from src.pv_market.domain.models import Market
from src.pv_settlement.application.service import SettlementService
from src.pv_vault.application.service import VaultService

T0 = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

ADMIN = "admin-1"
ALICE = "alice"
BOB = "bob"


@dataclass
class LedgerState:
    authority: Authority | None = None
    markets: dict[int, Market] = field(default_factory=dict)
    positions: dict[tuple[int, str], Position] = field(default_factory=dict)
    balances: dict[str, int] = field(default_factory=dict)
    entries: list[LedgerEntry] = field(default_factory=list)


class FakeSession:
    """Stand-in for AsyncSession: commit snapshots, rollback restores."""

    def __init__(self, state: LedgerState) -> None:
        self.state = state
        self._snapshot = copy.deepcopy(state)
        self.commits = 0
        self.rollbacks = 0

    async def commit(self) -> None:
        self._snapshot = copy.deepcopy(self.state)
        self.commits += 1

    async def rollback(self) -> None:
        restored = copy.deepcopy(self._snapshot)
        self.state.__dict__.update(restored.__dict__)
        self.rollbacks += 1


class FakeAuthorityRepo:
    def __init__(self, state: LedgerState) -> None:
        self.state = state

    async def create_authority(self, db, admin_id: str) -> Authority | None:
        if self.state.authority is not None:
            return None
        self.state.authority = Authority(admin_id=admin_id, created_at=T0)
        return self.state.authority

    async def get_authority(self, db) -> Authority | None:
        return self.state.authority


class FakeMarketRepo:
    def __init__(self, state: LedgerState) -> None:
        self.state = state

    async def insert_market(self, db, market: Market) -> bool:
        if market.market_id in self.state.markets:
            return False
        self.state.markets[market.market_id] = market
        return True

    async def get_market(self, db, market_id: int, for_update: bool = False) -> Market | None:
        return self.state.markets.get(market_id)

    async def update_pools(self, db, market: Market) -> None:
        current = self.state.markets[market.market_id]
        self.state.markets[market.market_id] = replace(
            current,
            total_pool=market.total_pool,
            total_yes_pool=market.total_yes_pool,
            total_no_pool=market.total_no_pool,
        )

    async def save_resolution(self, db, market: Market) -> None:
        self.state.markets[market.market_id] = market

    async def list_markets(self, db, status, cursor_id, limit) -> list[Market]:
        items = sorted(self.state.markets.values(), key=lambda m: m.market_id, reverse=True)
        if status is not None:
            items = [m for m in items if m.status.value == status]
        if cursor_id is not None:
            items = [m for m in items if m.market_id < cursor_id]
        return items[:limit]


class FakePositionRepo:
    def __init__(self, state: LedgerState) -> None:
        self.state = state

    async def insert_position(self, db, position: Position) -> bool:
        key = (position.market_id, position.bettor_id)
        if key in self.state.positions:
            return False
        self.state.positions[key] = position
        return True

    async def get_position(self, db, market_id, bettor_id, for_update=False) -> Position | None:
        return self.state.positions.get((market_id, bettor_id))

    async def mark_claimed(self, db, position: Position) -> bool:
        key = (position.market_id, position.bettor_id)
        current = self.state.positions[key]
        if current.claimed:
            return False
        self.state.positions[key] = replace(
            current, claimed=True, claimed_at=position.claimed_at
        )
        return True


class FakeAccountRepo:
    def __init__(self, state: LedgerState) -> None:
        self.state = state

    async def get_account(self, db, address: str, for_update: bool = False) -> Account | None:
        if address not in self.state.balances:
            return None
        return Account(address=address, balance=self.state.balances[address])

    async def open_account(self, db, address: str) -> None:
        self.state.balances.setdefault(address, 0)

    async def credit(self, db, address, amount, entry_type, ref_type=None, ref_id=None):
        balance = self.state.balances.get(address, 0) + amount
        if balance > U64_MAX:
            raise ArithmeticOverflowError(f"balance of {address} + {amount}")
        self.state.balances[address] = balance
        self._record(address, entry_type, amount, balance, ref_type, ref_id)
        return Account(address=address, balance=balance)

    async def debit(self, db, address, amount, entry_type, ref_type=None, ref_id=None):
        available = self.state.balances.get(address, 0)
        if available < amount:
            raise InsufficientBalanceError(required=amount, available=available)
        self.state.balances[address] = available - amount
        self._record(address, entry_type, -amount, available - amount, ref_type, ref_id)
        return Account(address=address, balance=available - amount)

    async def transfer(
        self, db, from_address, to_address, amount, debit_type, credit_type, ref_type, ref_id
    ):
        source = await self.debit(db, from_address, amount, debit_type, ref_type, ref_id)
        target = await self.credit(db, to_address, amount, credit_type, ref_type, ref_id)
        return source, target

    async def list_ledger_entries(self, db, address, cursor_id, limit, entry_type):
        items = [e for e in reversed(self.state.entries) if e.address == address]
        if entry_type is not None:
            items = [e for e in items if e.entry_type == entry_type]
        if cursor_id is not None:
            items = [e for e in items if e.id < cursor_id]
        return items[:limit]

    def _record(self, address, entry_type, amount, balance_after, ref_type, ref_id) -> None:
        self.state.entries.append(
            LedgerEntry(
                id=len(self.state.entries) + 1,
                address=address,
                entry_type=entry_type.value,
                amount=amount,
                balance_after=balance_after,
                reference_type=ref_type,
                reference_id=ref_id,
                created_at=T0,
            )
        )


class FakeClock:
    def __init__(self, now: datetime = T0) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now = self.now + timedelta(seconds=seconds)


@dataclass
class Services:
    state: LedgerState
    db: FakeSession
    clock: FakeClock
    authority: AuthorityService
    markets: MarketApplicationService
    betting: BettingService
    settlement: SettlementService
    vault: VaultService
    accounts: AccountApplicationService

