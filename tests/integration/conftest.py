"""
통합 테스트 픽스처

임시 SQLite 파일 + Mock 자산 원장/트레이딩 데스크/알림으로
실제 VaultService를 조립한다.
"""

from pathlib import Path

import pytest_asyncio

from adapters.mock.asset_ledger import MockAssetLedger
from adapters.mock.notifier import MockNotifier
from adapters.mock.trading_desk import MockTradingDesk
from core.ledger.schema import VaultParameters
from tests.constants import AGENT, FEE_RECIPIENT, OWNER, TOKEN, USER_A, USER_B
from tests.integration.harness import VaultHarness
from vault.bootstrap import create_vault


@pytest_asyncio.fixture
async def harness(tmp_path: Path) -> VaultHarness:
    """초기 상태 Vault (사용자 잔고 1000 토큰, 에이전트 등록)"""
    assets = MockAssetLedger()
    assets.mint(USER_A, 1000 * TOKEN)
    assets.mint(USER_B, 1000 * TOKEN)

    desk = MockTradingDesk(assets=assets)
    notifier = MockNotifier()
    db_path = tmp_path / "vault.db"

    vault = await create_vault(
        db_path=db_path,
        params=VaultParameters(
            owner=OWNER,
            fee_recipient=FEE_RECIPIENT,
            min_deposit=TOKEN,
            withdrawal_fee_bps=200,
            max_allocation_bps=8000,
            impact_pool_ref="test-pool",
        ),
        network="testnet",
        assets=assets,
        trading_desk=desk,
        notifier=notifier,
        default_donation_bps=0,
    )
    await vault.governance.add_authorized_agent(OWNER, AGENT)
    notifier.clear()

    yield VaultHarness(
        vault=vault,
        assets=assets,
        desk=desk,
        notifier=notifier,
        db_path=db_path,
    )

    await vault.close()
