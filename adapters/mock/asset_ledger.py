"""
Mock 기초 자산 원장

테스트용 메모리 내 대체 가능 자산 원장.
IAssetTransfer Protocol 준수.
"""

from dataclasses import dataclass, field

from core.domain.errors import TransferError


@dataclass
class MockAssetState:
    """Mock 상태 (메모리 내 저장)"""

    # 주소별 잔고 (address -> amount)
    balances: dict[str, int] = field(default_factory=dict)

    # Vault 승인 한도 (address -> amount)
    allowances: dict[str, int] = field(default_factory=dict)

    # Vault가 보관 중인 자산
    vault_balance: int = 0

    # 시뮬레이션 옵션
    require_approval: bool = False
    should_fail_next: bool = False
    next_error_message: str = "Mock transfer failure"

    # 전송 카운터
    transfer_counter: int = 0


class MockAssetLedger:
    """Mock 자산 원장

    IAssetTransfer Protocol 구현.
    transfer_in은 사용자 잔고를 Vault로, transfer_out은 Vault 잔고를
    수신자에게 옮긴다. 실패 시 상태를 바꾸지 않고 TransferError 발생.

    사용 예시:
    ```python
    assets = MockAssetLedger()
    assets.mint(user, 100 * 10**18)

    await assets.transfer_in(user, 10 * 10**18)
    assert assets.balance_of(user) == 90 * 10**18
    ```
    """

    def __init__(self, state: MockAssetState | None = None):
        self.state = state or MockAssetState()

    # -------------------------------------------------------------------------
    # IAssetTransfer
    # -------------------------------------------------------------------------

    async def transfer_in(self, owner: str, amount: int) -> str:
        """owner → Vault 전송"""
        self._check_injected_failure()

        balance = self.state.balances.get(owner, 0)
        if balance < amount:
            raise TransferError(
                f"잔고 부족: owner={owner}, balance={balance}, amount={amount}"
            )

        if self.state.require_approval:
            allowance = self.state.allowances.get(owner, 0)
            if allowance < amount:
                raise TransferError(
                    f"승인 한도 부족: owner={owner}, allowance={allowance}, amount={amount}"
                )
            self.state.allowances[owner] = allowance - amount

        self.state.balances[owner] = balance - amount
        self.state.vault_balance += amount
        return self._next_ref()

    async def transfer_out(self, recipient: str, amount: int) -> str:
        """Vault → recipient 전송"""
        self._check_injected_failure()

        if self.state.vault_balance < amount:
            raise TransferError(
                f"Vault 보유 자산 부족: vault_balance={self.state.vault_balance}, amount={amount}"
            )

        self.state.vault_balance -= amount
        self.state.balances[recipient] = self.state.balances.get(recipient, 0) + amount
        return self._next_ref()

    # -------------------------------------------------------------------------
    # 테스트 헬퍼 메서드
    # -------------------------------------------------------------------------

    def mint(self, address: str, amount: int) -> None:
        """주소에 자산 발행 (테스트 초기 잔고)"""
        self.state.balances[address] = self.state.balances.get(address, 0) + amount

    def approve(self, owner: str, amount: int) -> None:
        """Vault 승인 한도 설정"""
        self.state.allowances[owner] = amount

    def balance_of(self, address: str) -> int:
        """주소 잔고"""
        return self.state.balances.get(address, 0)

    def fail_next(self, message: str = "Mock transfer failure") -> None:
        """다음 전송 1회 실패"""
        self.state.should_fail_next = True
        self.state.next_error_message = message

    def _check_injected_failure(self) -> None:
        if self.state.should_fail_next:
            self.state.should_fail_next = False
            raise TransferError(self.state.next_error_message)

    def _next_ref(self) -> str:
        self.state.transfer_counter += 1
        return f"mock-transfer-{self.state.transfer_counter}"
