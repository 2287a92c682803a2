"""
MockAssetLedger 테스트
"""

import pytest

from adapters.mock.asset_ledger import MockAssetLedger, MockAssetState
from core.domain.errors import TransferError
from tests.constants import USER_A, USER_B


class TestTransferIn:
    """transfer_in 테스트"""

    @pytest.mark.asyncio
    async def test_moves_balance_to_vault(self, mock_assets: MockAssetLedger) -> None:
        ref = await mock_assets.transfer_in(USER_A, 40)

        assert ref == "mock-transfer-1"
        assert mock_assets.balance_of(USER_A) == 60
        assert mock_assets.state.vault_balance == 40

    @pytest.mark.asyncio
    async def test_insufficient_balance(self, mock_assets: MockAssetLedger) -> None:
        """잔고 부족 시 상태 변경 없이 실패"""
        with pytest.raises(TransferError, match="잔고 부족"):
            await mock_assets.transfer_in(USER_A, 101)

        assert mock_assets.balance_of(USER_A) == 100
        assert mock_assets.state.vault_balance == 0

    @pytest.mark.asyncio
    async def test_requires_approval(self) -> None:
        assets = MockAssetLedger(MockAssetState(require_approval=True))
        assets.mint(USER_A, 100)

        with pytest.raises(TransferError, match="승인 한도"):
            await assets.transfer_in(USER_A, 10)

        assets.approve(USER_A, 30)
        await assets.transfer_in(USER_A, 10)

        assert assets.state.allowances[USER_A] == 20


class TestTransferOut:
    """transfer_out 테스트"""

    @pytest.mark.asyncio
    async def test_moves_vault_balance(self, mock_assets: MockAssetLedger) -> None:
        await mock_assets.transfer_in(USER_A, 50)
        await mock_assets.transfer_out(USER_B, 20)

        assert mock_assets.balance_of(USER_B) == 20
        assert mock_assets.state.vault_balance == 30

    @pytest.mark.asyncio
    async def test_vault_balance_insufficient(self, mock_assets: MockAssetLedger) -> None:
        with pytest.raises(TransferError, match="Vault 보유 자산 부족"):
            await mock_assets.transfer_out(USER_B, 1)


class TestInjectedFailure:
    """fail_next 테스트"""

    @pytest.mark.asyncio
    async def test_fails_once(self, mock_assets: MockAssetLedger) -> None:
        mock_assets.fail_next("네트워크 장애")

        with pytest.raises(TransferError, match="네트워크 장애"):
            await mock_assets.transfer_in(USER_A, 10)

        # 다음 호출은 정상
        await mock_assets.transfer_in(USER_A, 10)
        assert mock_assets.balance_of(USER_A) == 90
