# tests/unit/test_market_service.py
"""Unit tests for MarketApplicationService over the in-memory ledger."""
from datetime import timedelta

import pytest

from src.pv_common.errors import (
    AuthorityNotInitializedError,
    DeadlineNotPassedError,
    DeadlinePassedError,
    MarketAlreadyResolvedError,
    MarketExistsError,
    MarketNotFoundError,
    QuestionTooLongError,
    UnauthorizedError,
)
from src.pv_market.application.schemas import cursor_decode
from src.pv_vault.domain.models import vault_address
from tests.unit.fakes import ADMIN, ALICE, T0

DEADLINE = T0 + timedelta(seconds=100)


@pytest.fixture
async def initialized(services):
    await services.authority.initialize(services.db, ADMIN)
    return services


class TestCreateMarket:
    @pytest.mark.asyncio
    async def test_creates_open_market_and_vault(self, initialized):
        s = initialized
        detail = await s.markets.create_market(s.db, ADMIN, 7, "Q?", DEADLINE)

        assert detail.market_id == 7
        assert detail.status == "OPEN"
        assert detail.outcome is None
        assert detail.creator_id == ADMIN
        assert detail.total_pool == 0
        assert s.state.balances[vault_address(7)] == 0

    @pytest.mark.asyncio
    async def test_requires_initialized_authority(self, services):
        with pytest.raises(AuthorityNotInitializedError):
            await services.markets.create_market(services.db, ADMIN, 1, "Q?", DEADLINE)
        assert services.state.markets == {}

    @pytest.mark.asyncio
    async def test_non_admin_rejected(self, initialized):
        s = initialized
        with pytest.raises(UnauthorizedError):
            await s.markets.create_market(s.db, ALICE, 1, "Q?", DEADLINE)
        assert s.state.markets == {}
        assert s.db.rollbacks == 1

    @pytest.mark.asyncio
    async def test_duplicate_id(self, initialized):
        s = initialized
        await s.markets.create_market(s.db, ADMIN, 1, "Q?", DEADLINE)
        with pytest.raises(MarketExistsError):
            await s.markets.create_market(s.db, ADMIN, 1, "Other?", DEADLINE)
        assert s.state.markets[1].question == "Q?"

    @pytest.mark.asyncio
    async def test_question_too_long(self, initialized):
        s = initialized
        with pytest.raises(QuestionTooLongError):
            await s.markets.create_market(s.db, ADMIN, 1, "x" * 201, DEADLINE)

    @pytest.mark.asyncio
    async def test_deadline_not_in_future(self, initialized):
        s = initialized
        with pytest.raises(DeadlinePassedError):
            await s.markets.create_market(s.db, ADMIN, 1, "Q?", T0)


class TestResolveMarket:
    @pytest.mark.asyncio
    async def test_resolve_after_deadline(self, open_market):
        s = open_market
        s.clock.advance(101)
        detail = await s.markets.resolve_market(s.db, ADMIN, 1, True)

        assert detail.status == "RESOLVED"
        assert detail.outcome is True
        assert detail.resolved_at == s.clock.now.isoformat()

    @pytest.mark.asyncio
    async def test_resolve_exactly_at_deadline(self, open_market):
        s = open_market
        s.clock.advance(100)
        detail = await s.markets.resolve_market(s.db, ADMIN, 1, False)
        assert detail.outcome is False

    @pytest.mark.asyncio
    async def test_before_deadline(self, open_market):
        s = open_market
        s.clock.advance(99)
        with pytest.raises(DeadlineNotPassedError):
            await s.markets.resolve_market(s.db, ADMIN, 1, True)
        assert s.state.markets[1].outcome is None

    @pytest.mark.asyncio
    async def test_second_resolution_rejected(self, open_market):
        s = open_market
        s.clock.advance(101)
        await s.markets.resolve_market(s.db, ADMIN, 1, True)
        with pytest.raises(MarketAlreadyResolvedError):
            await s.markets.resolve_market(s.db, ADMIN, 1, False)
        assert s.state.markets[1].outcome is True

    @pytest.mark.asyncio
    async def test_non_admin_rejected(self, open_market):
        s = open_market
        s.clock.advance(101)
        with pytest.raises(UnauthorizedError):
            await s.markets.resolve_market(s.db, ALICE, 1, True)

    @pytest.mark.asyncio
    async def test_unknown_market(self, open_market):
        s = open_market
        with pytest.raises(MarketNotFoundError):
            await s.markets.resolve_market(s.db, ADMIN, 99, True)


class TestListMarkets:
    @pytest.mark.asyncio
    async def test_pages_by_cursor(self, initialized):
        s = initialized
        for market_id in range(1, 6):
            await s.markets.create_market(s.db, ADMIN, market_id, f"Q{market_id}?", DEADLINE)

        first = await s.markets.list_markets(s.db, None, None, 2)
        assert [m.market_id for m in first.items] == [5, 4]
        assert first.has_more is True
        assert cursor_decode(first.next_cursor) == 4

        second = await s.markets.list_markets(s.db, None, first.next_cursor, 10)
        assert [m.market_id for m in second.items] == [3, 2, 1]
        assert second.has_more is False
        assert second.next_cursor is None

    @pytest.mark.asyncio
    async def test_bad_cursor_starts_from_top(self, initialized):
        s = initialized
        await s.markets.create_market(s.db, ADMIN, 1, "Q?", DEADLINE)
        resp = await s.markets.list_markets(s.db, None, "not-a-cursor", 10)
        assert [m.market_id for m in resp.items] == [1]

    @pytest.mark.asyncio
    async def test_get_market_not_found(self, initialized):
        with pytest.raises(MarketNotFoundError):
            await initialized.markets.get_market(initialized.db, 1)
