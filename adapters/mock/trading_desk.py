"""
Mock 트레이딩 데스크

테스트용 트레이딩 지갑 시뮬레이터.
ITradingDesk Protocol 준수.
"""

from dataclasses import dataclass

from adapters.mock.asset_ledger import MockAssetLedger
from core.domain.errors import TransferError


@dataclass
class AllocationRecord:
    """자본 이동 기록"""

    action: str  # "allocate" | "recall"
    wallet: str
    amount: int


class MockTradingDesk:
    """Mock 트레이딩 데스크

    ITradingDesk Protocol 구현.
    지갑별 보유 자산을 추적하고, simulate_profit()으로 트레이딩 수익을 흉내낸다.
    assets를 연결하면 Vault 보유 자산(vault_balance)도 함께 이동한다.

    사용 예시:
    ```python
    desk = MockTradingDesk(assets=assets)
    await desk.allocate(wallet, 40 * 10**18)
    desk.simulate_profit(wallet, 10 * 10**18)
    await desk.recall(wallet, 50 * 10**18)
    ```
    """

    def __init__(self, should_fail: bool = False, assets: MockAssetLedger | None = None):
        """
        Args:
            should_fail: True면 모든 이동 실패 (에러 시나리오 테스트용)
            assets: 연결할 Mock 자산 원장 (None이면 지갑 잔고만 추적)
        """
        self.should_fail = should_fail
        self.assets = assets
        self.wallet_balances: dict[str, int] = {}
        self.records: list[AllocationRecord] = []

    async def allocate(self, wallet: str, amount: int) -> str:
        """Vault → 지갑"""
        if self.should_fail:
            raise TransferError(f"Mock allocate 실패: wallet={wallet}")

        if self.assets is not None:
            if self.assets.state.vault_balance < amount:
                raise TransferError(
                    f"Vault 보유 자산 부족: vault_balance={self.assets.state.vault_balance}, "
                    f"amount={amount}"
                )
            self.assets.state.vault_balance -= amount

        self.wallet_balances[wallet] = self.wallet_balances.get(wallet, 0) + amount
        self.records.append(AllocationRecord("allocate", wallet, amount))
        return f"mock-allocate-{len(self.records)}"

    async def recall(self, wallet: str, amount: int) -> str:
        """지갑 → Vault"""
        if self.should_fail:
            raise TransferError(f"Mock recall 실패: wallet={wallet}")

        balance = self.wallet_balances.get(wallet, 0)
        if balance < amount:
            raise TransferError(
                f"지갑 잔고 부족: wallet={wallet}, balance={balance}, amount={amount}"
            )

        self.wallet_balances[wallet] = balance - amount
        if self.assets is not None:
            self.assets.state.vault_balance += amount

        self.records.append(AllocationRecord("recall", wallet, amount))
        return f"mock-recall-{len(self.records)}"

    # -------------------------------------------------------------------------
    # 테스트 헬퍼 메서드
    # -------------------------------------------------------------------------

    def simulate_profit(self, wallet: str, amount: int) -> None:
        """트레이딩 수익 발생 시뮬레이션"""
        self.wallet_balances[wallet] = self.wallet_balances.get(wallet, 0) + amount

    def balance_of(self, wallet: str) -> int:
        """지갑 보유 자산"""
        return self.wallet_balances.get(wallet, 0)
