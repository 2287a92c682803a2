"""
Vault 도메인 에러

모든 공개 연산은 상태 변경 전에 전제 조건을 검증하고,
위반 시 아래 에러 중 하나를 발생시킨다 (부분 적용 없음).
"""


class VaultError(Exception):
    """Vault 에러 기본 클래스

    code는 Web/알림 레이어에서 사용하는 안정적인 식별자.
    """

    code: str = "VAULT_ERROR"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(VaultError):
    """입력 값 오류 (잘못된 금액, bps 범위 초과, 잘못된 주소 등)"""

    code = "VALIDATION_ERROR"


class StateError(VaultError):
    """현재 상태에서 허용되지 않는 연산

    일시정지, 지분 없음, 유휴 유동성 부족, 배분 한도 초과,
    권한 없는 에이전트/소유자 등.
    """

    code = "STATE_ERROR"


class AlreadyDoneError(VaultError):
    """한 번만 허용되는 연산의 재시도 (예: 이미 민팅된 인증서)"""

    code = "ALREADY_DONE"


class TransferError(VaultError):
    """기초 자산 전송 실패"""

    code = "TRANSFER_ERROR"
