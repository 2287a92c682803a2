"""
Web API 통합 테스트

httpx.AsyncClient + ASGITransport로 FastAPI 앱을 직접 호출.
lifespan 대신 set_vault()로 테스트용 Vault를 주입한다.
"""

import httpx
import pytest
import pytest_asyncio

from tests.constants import AGENT, OWNER, TOKEN, USER_A, USER_B, WALLET
from tests.integration.harness import VaultHarness
from web.app import app
from web.dependencies import get_optional_vault, set_vault


def _as(address: str) -> dict[str, str]:
    return {"X-Account-Address": address}


@pytest_asyncio.fixture
async def client(harness: VaultHarness) -> httpx.AsyncClient:
    set_vault(harness.vault)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    set_vault(None)


class TestHealth:
    """GET /health"""

    @pytest.mark.asyncio
    async def test_ready(self, client: httpx.AsyncClient) -> None:
        response = await client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["vault_ready"] is True
        assert body["paused"] is False

    @pytest.mark.asyncio
    async def test_not_ready(self) -> None:
        set_vault(None)
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            health = await client.get("/health")
            snapshot = await client.get("/api/vault")

        assert health.json()["status"] == "starting"
        assert snapshot.status_code == 503


class TestVaultApi:
    """예치 / 인출 / 스냅샷"""

    @pytest.mark.asyncio
    async def test_deposit_and_snapshot(self, client: httpx.AsyncClient) -> None:
        response = await client.post(
            "/api/vault/deposit", json={"amount": str(100 * TOKEN)}, headers=_as(USER_A)
        )
        assert response.status_code == 200
        assert response.json() == {"shares_minted": str(100 * TOKEN)}

        snapshot = (await client.get("/api/vault/me", headers=_as(USER_A))).json()
        assert snapshot["asset_symbol"] == "WHBAR"
        assert snapshot["total_assets"] == str(100 * TOKEN)
        assert snapshot["total_assets_display"] == "100"
        assert snapshot["share_price"] == "1"
        assert snapshot["account"]["shares"] == str(100 * TOKEN)

        public = (await client.get("/api/vault")).json()
        assert public["account"] is None

    @pytest.mark.asyncio
    async def test_missing_caller_header(self, client: httpx.AsyncClient) -> None:
        response = await client.post("/api/vault/deposit", json={"amount": "1"})
        assert response.status_code == 422

    @pytest.mark.asyncio
    @pytest.mark.parametrize("amount", ["-1", "1.5", "abc", ""])
    async def test_invalid_amount_format(self, client: httpx.AsyncClient, amount: str) -> None:
        response = await client.post(
            "/api/vault/deposit", json={"amount": amount}, headers=_as(USER_A)
        )
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_below_min_deposit_maps_to_422(self, client: httpx.AsyncClient) -> None:
        response = await client.post(
            "/api/vault/deposit", json={"amount": "1"}, headers=_as(USER_A)
        )

        assert response.status_code == 422
        assert response.json()["code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_invalid_caller_maps_to_422(self, client: httpx.AsyncClient) -> None:
        response = await client.post(
            "/api/vault/deposit", json={"amount": str(TOKEN)}, headers=_as("0xbad")
        )
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_withdraw_without_shares_maps_to_409(self, client: httpx.AsyncClient) -> None:
        response = await client.post("/api/vault/withdraw", json={}, headers=_as(USER_A))

        assert response.status_code == 409
        body = response.json()
        assert body["code"] == "STATE_ERROR"
        assert "지분" in body["message"]

    @pytest.mark.asyncio
    async def test_transfer_error_maps_to_502(
        self,
        client: httpx.AsyncClient,
        harness: VaultHarness,
    ) -> None:
        harness.assets.fail_next()

        response = await client.post(
            "/api/vault/deposit", json={"amount": str(TOKEN)}, headers=_as(USER_A)
        )

        assert response.status_code == 502
        assert response.json()["code"] == "TRANSFER_ERROR"

    @pytest.mark.asyncio
    async def test_previews(self, client: httpx.AsyncClient) -> None:
        await client.post("/api/vault/deposit", json={"amount": str(10 * TOKEN)}, headers=_as(USER_A))

        deposit = (await client.get("/api/vault/preview/deposit", params={"amount": str(TOKEN)})).json()
        assert deposit == {"amount": str(TOKEN), "result": str(TOKEN)}

        redeem = (await client.get("/api/vault/preview/redeem", params={"shares": str(TOKEN)})).json()
        assert redeem["result"] == str(TOKEN)

        fee = (await client.get("/api/vault/preview/fee", params={"profit": "10000"})).json()
        assert fee["result"] == "200"

        withdraw = (await client.get("/api/vault/preview/withdraw", headers=_as(USER_A))).json()
        assert withdraw["net_to_user"] == str(10 * TOKEN)

        bad = await client.get("/api/vault/preview/deposit", params={"amount": "-5"})
        assert bad.status_code == 422


class TestScenarioApi:
    """HTTP로 전체 흐름 실행"""

    @pytest.mark.asyncio
    async def test_profit_donation_and_mint(self, client: httpx.AsyncClient, harness: VaultHarness) -> None:
        await client.post("/api/vault/deposit", json={"amount": str(100 * TOKEN)}, headers=_as(USER_A))

        response = await client.post(
            "/api/agent/allocate",
            json={"wallet": WALLET, "amount": str(40 * TOKEN)},
            headers=_as(AGENT),
        )
        assert response.json() == {"status": "ok"}

        harness.desk.simulate_profit(WALLET, 10 * TOKEN)
        response = await client.post(
            "/api/agent/return",
            json={"wallet": WALLET, "amount": str(50 * TOKEN), "reported_profit": str(10 * TOKEN)},
            headers=_as(AGENT),
        )
        assert response.status_code == 200

        receipt = (
            await client.post("/api/vault/withdraw", json={"donation_bps": 1000}, headers=_as(USER_A))
        ).json()
        assert receipt["net_to_user_display"] == "108.82"
        assert receipt["fee"] == str(2 * TOKEN // 10)
        assert receipt["donation"] == str(98 * TOKEN // 100)
        certificate_id = receipt["certificate_id"]

        certificate = (await client.get(f"/api/impact/certificates/{certificate_id}")).json()
        assert certificate["is_minted"] is False
        assert certificate["owner"] == USER_A

        minted = await client.post(f"/api/impact/certificates/{certificate_id}/mint", headers=_as(USER_A))
        assert minted.json() == {"certificate_id": certificate_id, "token_id": 1}

        again = await client.post(f"/api/impact/certificates/{certificate_id}/mint", headers=_as(USER_A))
        assert again.status_code == 409
        assert again.json()["code"] == "ALREADY_DONE"


class TestImpactApi:
    """임팩트 풀 API"""

    @pytest.mark.asyncio
    async def test_donate_and_list(self, client: httpx.AsyncClient) -> None:
        response = await client.post("/api/impact/donate", json={"amount": str(TOKEN)}, headers=_as(USER_B))
        assert response.json() == {"certificate_id": 1}

        pool = (await client.get("/api/impact")).json()
        assert pool == {"total_pool_balance": str(TOKEN), "impact_pool_ref": "test-pool"}

        account = (await client.get(f"/api/impact/accounts/{USER_B}")).json()
        assert account["pool_balance"] == str(TOKEN)
        assert account["certificate_count"] == 1

        listing = (await client.get(f"/api/impact/accounts/{USER_B}/certificates")).json()
        assert listing["total"] == 1
        assert [c["id"] for c in listing["certificates"]] == [1]

    @pytest.mark.asyncio
    async def test_donation_rate_and_pool_withdraw(self, client: httpx.AsyncClient) -> None:
        response = await client.post("/api/impact/donation-rate", json={"bps": 300}, headers=_as(USER_A))
        assert response.status_code == 200

        await client.post("/api/impact/donate", json={"amount": str(2 * TOKEN)}, headers=_as(USER_A))
        response = await client.post("/api/impact/withdraw", json={"amount": str(TOKEN)}, headers=_as(USER_A))
        assert response.status_code == 200

        account = (await client.get(f"/api/impact/accounts/{USER_A}")).json()
        assert account["donation_rate_bps"] == 300
        assert account["pool_balance"] == str(TOKEN)

    @pytest.mark.asyncio
    async def test_invalid_bps(self, client: httpx.AsyncClient) -> None:
        response = await client.post("/api/impact/donation-rate", json={"bps": 10_001}, headers=_as(USER_A))
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_certificate_not_found(self, client: httpx.AsyncClient) -> None:
        assert (await client.get("/api/impact/certificates/99")).status_code == 404


class TestAdminApi:
    """관리자 / 에이전트 API"""

    @pytest.mark.asyncio
    async def test_governance(self, client: httpx.AsyncClient) -> None:
        assert (await client.post("/api/admin/withdrawal-fee", json={"bps": 300}, headers=_as(OWNER))).status_code == 200
        assert (await client.post("/api/admin/pause", headers=_as(OWNER))).status_code == 200

        snapshot = (await client.get("/api/vault")).json()
        assert snapshot["withdrawal_fee_bps"] == 300
        assert snapshot["paused"] is True

        health = (await client.get("/health")).json()
        assert health["paused"] is True

        blocked = await client.post("/api/vault/deposit", json={"amount": str(TOKEN)}, headers=_as(USER_A))
        assert blocked.status_code == 409

    @pytest.mark.asyncio
    async def test_non_owner_rejected(self, client: httpx.AsyncClient) -> None:
        response = await client.post("/api/admin/pause", headers=_as(USER_A))

        assert response.status_code == 409
        assert response.json()["code"] == "STATE_ERROR"

    @pytest.mark.asyncio
    async def test_agent_management(self, client: httpx.AsyncClient) -> None:
        added = await client.post("/api/admin/agents", json={"address": USER_B}, headers=_as(OWNER))
        assert added.status_code == 200

        duplicate = await client.post("/api/admin/agents", json={"address": USER_B}, headers=_as(OWNER))
        assert duplicate.status_code == 409
        assert duplicate.json()["code"] == "ALREADY_DONE"

        agents = (await client.get("/api/admin/agents")).json()
        assert agents == {"owner": OWNER, "agents": [AGENT, USER_B]}

        removed = await client.delete(f"/api/admin/agents/{USER_B}", headers=_as(OWNER))
        assert removed.status_code == 200

    @pytest.mark.asyncio
    async def test_wallets_and_invariants(self, client: httpx.AsyncClient) -> None:
        await client.post("/api/vault/deposit", json={"amount": str(10 * TOKEN)}, headers=_as(USER_A))
        await client.post(
            "/api/agent/allocate",
            json={"wallet": WALLET, "amount": str(5 * TOKEN)},
            headers=_as(AGENT),
        )

        summary = (await client.get("/api/agent/wallets")).json()
        assert summary["allocated_assets"] == str(5 * TOKEN)
        assert summary["max_allocatable"] == str(3 * TOKEN)
        assert summary["wallets"][0]["wallet"] == WALLET

        returned = await client.post(
            "/api/agent/return-all", json={"wallet": WALLET}, headers=_as(AGENT)
        )
        assert returned.json() == {"amount": str(5 * TOKEN)}

        invariants = (await client.get("/api/admin/invariants")).json()
        assert invariants == {"ok": True, "violations": []}


class TestEventsApi:
    """감사 이벤트 API"""

    @pytest.mark.asyncio
    async def test_events(self, client: httpx.AsyncClient, harness: VaultHarness) -> None:
        await client.post("/api/vault/deposit", json={"amount": str(TOKEN)}, headers=_as(USER_A))

        events = (await client.get("/api/events", params={"actor": USER_A})).json()
        assert [e["event_type"] for e in events["events"]] == ["Deposited"]

        tx_id = harness.notifier.last_result.tx_id
        by_tx = (await client.get(f"/api/events/tx/{tx_id}")).json()
        assert len(by_tx["events"]) == 1
        assert by_tx["events"][0]["tx_id"] == tx_id


class TestLifespan:
    """앱 생명주기"""

    @pytest.mark.asyncio
    async def test_injected_vault_is_kept(self, harness: VaultHarness) -> None:
        """주입된 Vault가 있으면 개발용 Mock Vault를 만들지 않음"""
        set_vault(harness.vault)
        try:
            async with app.router.lifespan_context(app):
                assert get_optional_vault() is harness.vault
            assert get_optional_vault() is harness.vault
        finally:
            set_vault(None)
