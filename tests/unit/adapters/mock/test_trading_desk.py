"""
MockTradingDesk 테스트
"""

import pytest

from adapters.mock.asset_ledger import MockAssetLedger
from adapters.mock.trading_desk import MockTradingDesk
from core.domain.errors import TransferError
from tests.constants import USER_A, WALLET


class TestMockTradingDesk:
    """지갑 잔고 추적 테스트"""

    @pytest.mark.asyncio
    async def test_allocate_and_recall(self) -> None:
        desk = MockTradingDesk()

        assert await desk.allocate(WALLET, 40) == "mock-allocate-1"
        desk.simulate_profit(WALLET, 10)
        assert await desk.recall(WALLET, 50) == "mock-recall-2"

        assert desk.balance_of(WALLET) == 0
        assert [r.action for r in desk.records] == ["allocate", "recall"]

    @pytest.mark.asyncio
    async def test_recall_more_than_balance(self) -> None:
        desk = MockTradingDesk()
        await desk.allocate(WALLET, 10)

        with pytest.raises(TransferError, match="지갑 잔고 부족"):
            await desk.recall(WALLET, 11)

    @pytest.mark.asyncio
    async def test_should_fail(self) -> None:
        desk = MockTradingDesk(should_fail=True)

        with pytest.raises(TransferError):
            await desk.allocate(WALLET, 1)
        assert desk.records == []


class TestLinkedAssets:
    """자산 원장 연결 시 Vault 보유 자산 이동 테스트"""

    @pytest.mark.asyncio
    async def test_moves_vault_balance(
        self,
        mock_assets: MockAssetLedger,
        mock_desk: MockTradingDesk,
    ) -> None:
        await mock_assets.transfer_in(USER_A, 100)

        await mock_desk.allocate(WALLET, 40)
        assert mock_assets.state.vault_balance == 60

        mock_desk.simulate_profit(WALLET, 10)
        await mock_desk.recall(WALLET, 50)
        assert mock_assets.state.vault_balance == 110

    @pytest.mark.asyncio
    async def test_allocate_more_than_vault_balance(
        self,
        mock_desk: MockTradingDesk,
    ) -> None:
        with pytest.raises(TransferError, match="Vault 보유 자산 부족"):
            await mock_desk.allocate(WALLET, 1)
        assert mock_desk.balance_of(WALLET) == 0
