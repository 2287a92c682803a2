"""
어댑터 인터페이스 정의

Protocol 기반으로 정의하여 의존성 주입 및 Mock 교체 가능.
모든 구현체는 이 Protocol을 준수해야 함.

금액은 모두 기초 자산 최소 단위(wei) 정수.
"""

from typing import Any, Protocol, runtime_checkable

from core.types import OperationResult


@runtime_checkable
class IAssetTransfer(Protocol):
    """기초 자산 전송 인터페이스

    외부 대체 가능 자산 원장(예: WHBAR 토큰 컨트랙트)에 대한
    입금/출금 원시 연산. 완전히 성공하거나 TransferError로 완전히 실패한다.
    """

    async def transfer_in(self, owner: str, amount: int) -> str:
        """owner → Vault 전송 (사전 승인된 금액 인출)

        Args:
            owner: 자산을 보내는 주소
            amount: 전송 금액

        Returns:
            외부 전송 참조 ID

        Raises:
            TransferError: 잔고/승인 부족 등 전송 실패 시
        """
        ...

    async def transfer_out(self, recipient: str, amount: int) -> str:
        """Vault → recipient 전송

        Raises:
            TransferError: 전송 실패 시
        """
        ...


@runtime_checkable
class ITradingDesk(Protocol):
    """외부 트레이딩 전략 인터페이스

    Vault는 트레이딩 지갑과 총액만 주고받는다 (주문 단위 정보 없음).
    """

    async def allocate(self, wallet: str, amount: int) -> str:
        """Vault → 트레이딩 지갑 자본 이동

        Raises:
            TransferError: 이동 실패 시
        """
        ...

    async def recall(self, wallet: str, amount: int) -> str:
        """트레이딩 지갑 → Vault 자본 회수 (원금 + 수익)

        Raises:
            TransferError: 회수 실패 시
        """
        ...


@runtime_checkable
class INotifier(Protocol):
    """알림 서비스 인터페이스

    모든 상태 변경 호출의 OperationResult를 사용자 알림으로 전달.
    """

    async def send(
        self,
        message: str,
        level: str = "INFO",
        extra: dict[str, Any] | None = None,
    ) -> bool:
        """알림 전송

        Args:
            message: 알림 메시지
            level: 알림 레벨 (INFO, WARNING, ERROR, CRITICAL)
            extra: 추가 데이터

        Returns:
            전송 성공 여부
        """
        ...

    async def send_operation_result(self, result: OperationResult) -> bool:
        """연산 결과 알림

        Args:
            result: {success, tx_id, error?} 결과 레코드

        Returns:
            전송 성공 여부
        """
        ...
