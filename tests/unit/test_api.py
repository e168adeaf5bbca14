# tests/unit/test_api.py
"""HTTP surface: routers wired onto the in-memory ledger services."""
from datetime import timedelta

import pytest
from httpx import AsyncClient

import src.pv_account.api.router as account_router
import src.pv_authority.api.router as authority_router
import src.pv_betting.api.router as betting_router
import src.pv_market.api.router as market_router
import src.pv_settlement.api.router as settlement_router
import src.pv_vault.api.router as vault_router
from src.main import app
from src.pv_common.database import get_db_session
from src.pv_gateway.auth.jwt_handler import create_access_token
from src.pv_gateway.middleware.request_log import REQUEST_ID_HEADER
from src.pv_settlement.domain.commitment import Commitment
from tests.unit.fakes import ADMIN, ALICE, BOB, T0

SECRET_A = bytes.fromhex("a1" * 32)
SECRET_B = bytes.fromhex("b2" * 32)


def _auth(identity: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(identity)}"}


@pytest.fixture
def wired(services, monkeypatch):
    monkeypatch.setattr(authority_router, "_service", services.authority)
    monkeypatch.setattr(account_router, "_service", services.accounts)
    monkeypatch.setattr(market_router, "_service", services.markets)
    monkeypatch.setattr(betting_router, "_service", services.betting)
    monkeypatch.setattr(settlement_router, "_service", services.settlement)
    monkeypatch.setattr(vault_router, "_service", services.vault)

    async def _fake_session():
        yield services.db

    app.dependency_overrides[get_db_session] = _fake_session
    yield services
    app.dependency_overrides.clear()


class TestAuth:
    @pytest.mark.asyncio
    async def test_missing_token(self, client: AsyncClient, wired):
        resp = await client.get("/api/v1/authority")
        assert resp.status_code == 401

    @pytest.mark.asyncio
    async def test_bad_token(self, client: AsyncClient, wired):
        resp = await client.get(
            "/api/v1/authority", headers={"Authorization": "Bearer not-a-jwt"}
        )
        assert resp.status_code == 401

    @pytest.mark.asyncio
    async def test_vault_identity_cannot_withdraw(self, client: AsyncClient, wired):
        wired.state.balances["vault:1"] = 300
        resp = await client.post(
            "/api/v1/account/withdraw", json={"amount": 300}, headers=_auth("vault:1")
        )
        assert resp.status_code == 401
        assert wired.state.balances["vault:1"] == 300

    @pytest.mark.asyncio
    async def test_health_is_public(self, client: AsyncClient):
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"


class TestEnvelope:
    @pytest.mark.asyncio
    async def test_app_error_envelope(self, client: AsyncClient, wired):
        resp = await client.get("/api/v1/authority", headers=_auth(ALICE))

        assert resp.status_code == 409
        body = resp.json()
        assert body["code"] == 1004
        assert body["data"] is None
        assert body["request_id"] == resp.headers[REQUEST_ID_HEADER]

    @pytest.mark.asyncio
    async def test_success_envelope(self, client: AsyncClient, wired):
        resp = await client.post("/api/v1/authority/initialize", headers=_auth(ADMIN))

        assert resp.status_code == 200
        body = resp.json()
        assert body["code"] == 0
        assert body["data"]["admin_id"] == ADMIN
        assert body["request_id"] == resp.headers[REQUEST_ID_HEADER]


class TestMarketFlow:
    @pytest.mark.asyncio
    async def test_full_round(self, client: AsyncClient, wired):
        s = wired
        await client.post("/api/v1/authority/initialize", headers=_auth(ADMIN))
        for who in (ALICE, BOB):
            resp = await client.post(
                "/api/v1/account/deposit", json={"amount": 1_000}, headers=_auth(who)
            )
            assert resp.status_code == 200

        resp = await client.post(
            "/api/v1/markets",
            json={
                "market_id": 1,
                "question": "Will it rain tomorrow?",
                "deadline": (T0 + timedelta(seconds=100)).isoformat(),
            },
            headers=_auth(ADMIN),
        )
        assert resp.status_code == 200
        assert resp.json()["data"]["status"] == "OPEN"

        resp = await client.post(
            "/api/v1/markets/1/bets",
            json={"commitment": Commitment.for_choice(SECRET_A, True).hex(), "amount": 100},
            headers=_auth(ALICE),
        )
        assert resp.status_code == 200
        resp = await client.post(
            "/api/v1/markets/1/bets",
            json={"commitment": Commitment.for_choice(SECRET_B, False).hex(), "amount": 200},
            headers=_auth(BOB),
        )
        assert resp.status_code == 200

        resp = await client.get("/api/v1/markets/1/vault", headers=_auth(ALICE))
        assert resp.json()["data"]["balance"] == 300

        s.clock.advance(101)
        resp = await client.post(
            "/api/v1/markets/1/resolve", json={"outcome": True}, headers=_auth(ADMIN)
        )
        assert resp.status_code == 200

        resp = await client.post(
            "/api/v1/markets/1/claim",
            json={"secret": SECRET_A.hex(), "side": True},
            headers=_auth(ALICE),
        )
        assert resp.status_code == 200
        assert resp.json()["data"]["payout"] == 300

        resp = await client.get("/api/v1/account/balance", headers=_auth(ALICE))
        assert resp.json()["data"]["balance"] == 1_200

        resp = await client.get("/api/v1/markets/1/position", headers=_auth(ALICE))
        assert resp.json()["data"]["claimed"] is True

        resp = await client.get(
            "/api/v1/account/ledger?entry_type=CLAIM_PAYOUT", headers=_auth(ALICE)
        )
        items = resp.json()["data"]["items"]
        assert [(e["amount"], e["reference_id"]) for e in items] == [(300, "1")]

        resp = await client.post(
            "/api/v1/markets/1/claim",
            json={"secret": SECRET_A.hex(), "side": True},
            headers=_auth(ALICE),
        )
        assert resp.status_code == 409
        assert resp.json()["code"] == 5001

    @pytest.mark.asyncio
    async def test_resolve_by_non_admin(self, client: AsyncClient, wired):
        await client.post("/api/v1/authority/initialize", headers=_auth(ADMIN))
        resp = await client.post(
            "/api/v1/markets/1/resolve", json={"outcome": True}, headers=_auth(ALICE)
        )
        assert resp.status_code == 403
        assert resp.json()["code"] == 1002

    @pytest.mark.asyncio
    async def test_zero_amount_bet(self, client: AsyncClient, wired):
        resp = await client.post(
            "/api/v1/markets/1/bets",
            json={"commitment": "00" * 32, "amount": 0},
            headers=_auth(ALICE),
        )
        assert resp.status_code == 422
        assert resp.json()["code"] == 4001

    @pytest.mark.asyncio
    async def test_list_filters_by_status(self, client: AsyncClient, wired):
        await client.post("/api/v1/authority/initialize", headers=_auth(ADMIN))
        await client.post(
            "/api/v1/markets",
            json={
                "market_id": 3,
                "question": "Q?",
                "deadline": (T0 + timedelta(seconds=10)).isoformat(),
            },
            headers=_auth(ADMIN),
        )

        resp = await client.get("/api/v1/markets?status=RESOLVED", headers=_auth(ALICE))
        assert resp.json()["data"]["items"] == []
        resp = await client.get("/api/v1/markets?status=OPEN", headers=_auth(ALICE))
        assert [m["market_id"] for m in resp.json()["data"]["items"]] == [3]
