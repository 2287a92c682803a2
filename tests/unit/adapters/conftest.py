"""
어댑터 테스트 픽스처

공통 테스트 설정 및 픽스처 제공.
"""

import pytest

from adapters.mock.asset_ledger import MockAssetLedger
from adapters.mock.notifier import MockNotifier
from adapters.mock.trading_desk import MockTradingDesk
from core.types import OperationResult
from tests.constants import USER_A


@pytest.fixture
def mock_assets() -> MockAssetLedger:
    """Mock 자산 원장 (USER_A에 100 토큰)"""
    assets = MockAssetLedger()
    assets.mint(USER_A, 100)
    return assets


@pytest.fixture
def mock_desk(mock_assets: MockAssetLedger) -> MockTradingDesk:
    """자산 원장에 연결된 Mock 트레이딩 데스크"""
    return MockTradingDesk(assets=mock_assets)


@pytest.fixture
def mock_notifier() -> MockNotifier:
    """Mock Notifier"""
    return MockNotifier()


@pytest.fixture
def success_result() -> OperationResult:
    """성공 결과 샘플"""
    return OperationResult(
        success=True,
        tx_id="vtx-success",
        operation="deposit",
        caller=USER_A,
    )


@pytest.fixture
def failure_result() -> OperationResult:
    """실패 결과 샘플"""
    return OperationResult(
        success=False,
        tx_id="vtx-failure",
        operation="withdraw_profits",
        caller=USER_A,
        error="상환할 지분이 없습니다",
        error_code="STATE_ERROR",
    )
