"""
접근 제어 및 입력 검증

각 상태 변경 연산은 본문 시작 시 아래 검사를 명시적으로 호출한다.
- 소유자: vault_state.owner와 비교
- 에이전트: authorized_agent 허용 목록 조회
- 일시정지: vault_state.paused

모든 검사는 원장 변경 전에 수행되어야 한다.
"""

from core.constants import BPS_DENOMINATOR
from core.domain.errors import StateError, ValidationError
from core.ledger.store import LedgerStore
from core.ledger.types import VaultState
from core.types import ZERO_ADDRESS, is_address


def normalize_address(value: str, field_name: str = "address") -> str:
    """주소 검증 후 소문자로 정규화

    Raises:
        ValidationError: 0x + 40 hex 형식이 아닌 경우
    """
    if not isinstance(value, str) or not is_address(value):
        raise ValidationError(f"{field_name} 주소 형식이 올바르지 않습니다: {value!r}")
    return value.lower()


def require_non_zero_address(address: str, field_name: str = "address") -> str:
    """영(0) 주소가 아닌 정규화 주소"""
    normalized = normalize_address(address, field_name)
    if normalized == ZERO_ADDRESS:
        raise ValidationError(f"{field_name}는 영(0) 주소일 수 없습니다")
    return normalized


def require_amount(value: int, field_name: str = "amount", allow_zero: bool = False) -> int:
    """금액 검증 (최소 단위 정수)

    Raises:
        ValidationError: 정수가 아니거나 음수(또는 0)인 경우
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field_name}는 정수여야 합니다: {value!r}")
    if value < 0 or (value == 0 and not allow_zero):
        raise ValidationError(f"{field_name}는 0보다 커야 합니다: {value}")
    return value


def require_bps(value: int, field_name: str = "bps") -> int:
    """bps 검증 (0~10000)"""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field_name}는 정수여야 합니다: {value!r}")
    if not 0 <= value <= BPS_DENOMINATOR:
        raise ValidationError(
            f"{field_name}는 0 이상 {BPS_DENOMINATOR} 이하여야 합니다: {value}"
        )
    return value


def require_not_paused(state: VaultState) -> None:
    """일시정지 상태면 StateError"""
    if state.paused:
        raise StateError("Vault가 일시정지 상태입니다")


def require_owner(state: VaultState, caller: str) -> None:
    """소유자 권한 검사"""
    if caller != state.owner:
        raise StateError(f"소유자만 호출할 수 있습니다: caller={caller}")


async def require_agent(ledger: LedgerStore, caller: str) -> None:
    """승인된 에이전트 권한 검사"""
    if not await ledger.is_agent(caller):
        raise StateError(f"승인된 에이전트가 아닙니다: caller={caller}")
