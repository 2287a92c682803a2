"""
LedgerStore 통합 테스트

실제 SQLite 파일에 원장 스키마를 만들고 저장/조회를 검증.
"""

from dataclasses import replace
from pathlib import Path

import pytest
import pytest_asyncio

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.ledger.schema import VaultParameters, init_ledger_schema, seed_vault_state
from core.ledger.store import LedgerNotInitializedError, LedgerStore
from core.ledger.types import Account, ImpactAccount, TradingWallet
from tests.constants import AGENT, FEE_RECIPIENT, OWNER, TOKEN, USER_A, USER_B, WALLET


@pytest_asyncio.fixture
async def db(tmp_path: Path) -> SQLiteAdapter:
    """원장 스키마가 준비된 어댑터"""
    adapter = SQLiteAdapter(tmp_path / "ledger.db")
    await adapter.connect()
    await init_ledger_schema(adapter)
    yield adapter
    await adapter.close()


@pytest_asyncio.fixture
async def store(db: SQLiteAdapter) -> LedgerStore:
    """vault_state가 시드된 LedgerStore"""
    async with db.transaction():
        await seed_vault_state(db, VaultParameters(owner=OWNER, fee_recipient=FEE_RECIPIENT))
    return LedgerStore(db)


class TestSeedVaultState:
    """seed_vault_state 테스트"""

    @pytest.mark.asyncio
    async def test_seed_once(self, db: SQLiteAdapter) -> None:
        """최초 1회만 생성, 이후에는 기존 값 유지"""
        params = VaultParameters(owner=OWNER, fee_recipient=FEE_RECIPIENT, min_deposit=5)

        assert await seed_vault_state(db, params) is True
        assert await seed_vault_state(db, replace(params, min_deposit=99)) is False

        state = await LedgerStore(db).get_vault_state()
        assert state.min_deposit == 5
        assert state.total_assets == 0
        assert state.paused is False

    @pytest.mark.asyncio
    async def test_not_initialized(self, db: SQLiteAdapter) -> None:
        with pytest.raises(LedgerNotInitializedError):
            await LedgerStore(db).get_vault_state()

    @pytest.mark.asyncio
    async def test_schema_idempotent(self, db: SQLiteAdapter) -> None:
        await init_ledger_schema(db)
        for table in ["vault_state", "vault_account", "authorized_agent",
                      "trading_wallet", "impact_pool", "impact_account", "certificate"]:
            assert await db.table_exists(table)


class TestVaultState:
    """Vault 상태 저장 테스트"""

    @pytest.mark.asyncio
    async def test_large_amounts_round_trip(self, store: LedgerStore) -> None:
        """64bit 범위를 넘는 wei 금액도 손실 없이 저장"""
        state = await store.get_vault_state()
        huge = 10**30 + 7

        await store.save_vault_state(
            replace(state, idle_assets=huge, total_shares=huge, paused=True)
        )

        loaded = await store.get_vault_state()
        assert loaded.idle_assets == huge
        assert loaded.total_shares == huge
        assert loaded.paused is True


class TestAccounts:
    """예치자 계정 테스트"""

    @pytest.mark.asyncio
    async def test_missing_account_is_empty(self, store: LedgerStore) -> None:
        account = await store.get_account(USER_A)
        assert account == Account(owner=USER_A)

    @pytest.mark.asyncio
    async def test_upsert_and_sum(self, store: LedgerStore) -> None:
        await store.save_account(Account(owner=USER_A, shares=10 * TOKEN, total_deposited=10 * TOKEN))
        await store.save_account(Account(owner=USER_B, shares=5 * TOKEN))
        await store.save_account(Account(owner=USER_A, shares=3 * TOKEN, lifetime_deposited=10 * TOKEN))

        account = await store.get_account(USER_A)
        assert account.shares == 3 * TOKEN
        assert account.total_deposited == 0
        assert account.lifetime_deposited == 10 * TOKEN
        assert await store.sum_account_shares() == 8 * TOKEN


class TestAgents:
    """에이전트 허용 목록 테스트"""

    @pytest.mark.asyncio
    async def test_add_remove(self, store: LedgerStore) -> None:
        assert await store.add_agent(AGENT, added_by=OWNER) is True
        assert await store.add_agent(AGENT, added_by=OWNER) is False
        assert await store.is_agent(AGENT) is True
        assert await store.list_agents() == [AGENT]

        assert await store.remove_agent(AGENT) is True
        assert await store.remove_agent(AGENT) is False
        assert await store.is_agent(AGENT) is False


class TestTradingWallets:
    """트레이딩 지갑 테스트"""

    @pytest.mark.asyncio
    async def test_upsert(self, store: LedgerStore) -> None:
        assert await store.get_trading_wallet(WALLET) == TradingWallet(wallet=WALLET)

        await store.save_trading_wallet(TradingWallet(wallet=WALLET, allocated=4, total_allocated=4))
        await store.save_trading_wallet(TradingWallet(wallet=WALLET, allocated=1, total_allocated=4, total_returned=3))

        wallets = await store.list_trading_wallets()
        assert wallets == [TradingWallet(wallet=WALLET, allocated=1, total_allocated=4, total_returned=3)]


class TestImpactPool:
    """임팩트 풀 / 인증서 테스트"""

    @pytest.mark.asyncio
    async def test_default_impact_account(self, store: LedgerStore) -> None:
        account = await store.get_impact_account(USER_A, default_rate_bps=700)
        assert account == ImpactAccount(owner=USER_A, donation_rate_bps=700)

        await store.save_impact_account(replace(account, donation_rate_bps=100, pool_balance=5))
        stored = await store.get_impact_account(USER_A, default_rate_bps=700)
        assert stored.donation_rate_bps == 100
        assert stored.pool_balance == 5

    @pytest.mark.asyncio
    async def test_pool_balance(self, store: LedgerStore) -> None:
        await store.set_total_pool_balance(42)
        pool = await store.get_impact_pool()
        assert pool.total_pool_balance == 42
        assert pool.next_certificate_id == 1

    @pytest.mark.asyncio
    async def test_certificate_ids_are_monotonic(self, store: LedgerStore) -> None:
        first = await store.create_certificate(USER_A, 10, tx_id="vtx-1")
        second = await store.create_certificate(USER_B, 20)
        third = await store.create_certificate(USER_A, 30)

        assert [first.id, second.id, third.id] == [1, 2, 3]
        assert first.is_minted is False

        certificates = await store.list_certificates(USER_A)
        assert [c.id for c in certificates] == [1, 3]
        assert await store.count_certificates(USER_A) == 2
        assert await store.list_certificates(USER_A, offset=1, limit=1) == [certificates[1]]

    @pytest.mark.asyncio
    async def test_mint_once(self, store: LedgerStore) -> None:
        """Unminted → Minted 한 번만 전이"""
        certificate = await store.create_certificate(USER_A, 10)

        minted = await store.mark_certificate_minted(certificate.id)
        assert minted.is_minted is True
        assert minted.token_id == 1
        assert minted.amount == 10

        with pytest.raises(RuntimeError, match="not mintable"):
            await store.mark_certificate_minted(certificate.id)

        pool = await store.get_impact_pool()
        assert pool.next_token_id == 2

    @pytest.mark.asyncio
    async def test_missing_certificate(self, store: LedgerStore) -> None:
        assert await store.get_certificate(999) is None
        with pytest.raises(RuntimeError):
            await store.mark_certificate_minted(999)
