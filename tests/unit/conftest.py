"""Fixtures wiring every service onto one shared in-memory ledger."""
from datetime import timedelta

import pytest

from src.pv_account.application.service import AccountApplicationService
from src.pv_authority.application.service import AuthorityService
from src.pv_betting.application.service import BettingService
from src.pv_market.application.service import MarketApplicationService
from src.pv_settlement.application.service import SettlementService
from src.pv_vault.application.service import VaultService
from tests.unit.fakes import (
    ADMIN,
    ALICE,
    BOB,
    T0,
    FakeAccountRepo,
    FakeAuthorityRepo,
    FakeClock,
    FakeMarketRepo,
    FakePositionRepo,
    FakeSession,
    LedgerState,
    Services,
)


@pytest.fixture
def services() -> Services:
    state = LedgerState()
    clock = FakeClock()
    account_repo = FakeAccountRepo(state)
    market_repo = FakeMarketRepo(state)
    position_repo = FakePositionRepo(state)
    authority = AuthorityService(repo=FakeAuthorityRepo(state))
    vault = VaultService(repo=account_repo)
    return Services(
        state=state,
        db=FakeSession(state),
        clock=clock,
        authority=authority,
        markets=MarketApplicationService(
            repo=market_repo, authority=authority, vault=vault, clock=clock
        ),
        betting=BettingService(
            positions=position_repo, markets=market_repo, vault=vault, clock=clock
        ),
        settlement=SettlementService(
            positions=position_repo, markets=market_repo, vault=vault, clock=clock
        ),
        vault=vault,
        accounts=AccountApplicationService(repo=account_repo),
    )


@pytest.fixture
async def open_market(services: Services) -> Services:
    """Authority initialized, market 1 open with deadline T0+100, Alice and Bob funded."""
    await services.authority.initialize(services.db, ADMIN)
    await services.markets.create_market(
        services.db, ADMIN, 1, "Will it rain tomorrow?", T0 + timedelta(seconds=100)
    )
    await services.accounts.deposit(services.db, ALICE, 1_000)
    await services.accounts.deposit(services.db, BOB, 1_000)
    return services
