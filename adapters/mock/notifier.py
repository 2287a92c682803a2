"""
Mock 알림 서비스

테스트용 Mock Notifier.
INotifier Protocol 준수.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from core.types import OperationResult


@dataclass
class NotificationRecord:
    """알림 기록"""

    message: str
    level: str
    extra: dict[str, Any] | None
    timestamp: datetime
    sent: bool


class MockNotifier:
    """Mock 알림 서비스

    INotifier Protocol 구현.
    발송된 모든 알림과 연산 결과를 기록하여 테스트에서 검증 가능.

    사용 예시:
    ```python
    notifier = MockNotifier()

    await notifier.send("테스트 메시지", level="INFO")

    # 발송 기록 확인
    assert len(notifier.notifications) == 1
    assert notifier.notifications[0].message == "테스트 메시지"
    ```
    """

    def __init__(self, should_fail: bool = False, should_raise: bool = False):
        """
        Args:
            should_fail: True면 모든 발송 실패 (False 반환)
            should_raise: True면 발송 시 예외 발생 (알림 장애 격리 테스트용)
        """
        self.should_fail = should_fail
        self.should_raise = should_raise
        self.notifications: list[NotificationRecord] = []
        self.results: list[OperationResult] = []

    async def send(
        self,
        message: str,
        level: str = "INFO",
        extra: dict[str, Any] | None = None,
    ) -> bool:
        """알림 전송"""
        if self.should_raise:
            raise ConnectionError("Mock notifier unavailable")

        record = NotificationRecord(
            message=message,
            level=level,
            extra=extra,
            timestamp=datetime.now(timezone.utc),
            sent=not self.should_fail,
        )

        self.notifications.append(record)

        return not self.should_fail

    async def send_operation_result(self, result: OperationResult) -> bool:
        """연산 결과 알림"""
        if self.should_raise:
            raise ConnectionError("Mock notifier unavailable")

        self.results.append(result)

        if result.success:
            message = f"[{result.operation}] 성공 ({result.tx_id})"
            level = "INFO"
        else:
            message = f"[{result.operation}] 실패: {result.error}"
            level = "ERROR"

        return await self.send(message=message, level=level, extra=result.to_dict())

    # -------------------------------------------------------------------------
    # 테스트 헬퍼 메서드
    # -------------------------------------------------------------------------

    def clear(self) -> None:
        """알림 기록 초기화"""
        self.notifications.clear()
        self.results.clear()

    def get_by_level(self, level: str) -> list[NotificationRecord]:
        """특정 레벨의 알림 조회"""
        return [n for n in self.notifications if n.level == level]

    def get_errors(self) -> list[NotificationRecord]:
        """에러 레벨 알림 조회"""
        return self.get_by_level("ERROR")

    def get_results(self, operation: str) -> list[OperationResult]:
        """특정 연산의 결과 조회"""
        return [r for r in self.results if r.operation == operation]

    @property
    def last_result(self) -> OperationResult | None:
        """마지막 연산 결과"""
        return self.results[-1] if self.results else None

    @property
    def last_notification(self) -> NotificationRecord | None:
        """마지막 알림 조회"""
        return self.notifications[-1] if self.notifications else None

    @property
    def message_count(self) -> int:
        """전체 알림 수"""
        return len(self.notifications)

    @property
    def sent_count(self) -> int:
        """성공적으로 발송된 알림 수"""
        return sum(1 for n in self.notifications if n.sent)

    @property
    def failed_count(self) -> int:
        """발송 실패한 알림 수"""
        return sum(1 for n in self.notifications if not n.sent)
