"""
타입 정의 모듈

Enum, Dataclass 등 핵심 타입 정의
모든 Enum은 str을 상속하여 문자열 직렬화 가능
"""

import re
from dataclasses import dataclass
from enum import Enum


class NetworkMode(str, Enum):
    """네트워크 모드 (메인넷 / 테스트넷)"""

    MAINNET = "mainnet"
    TESTNET = "testnet"


class Operation(str, Enum):
    """상태 변경 연산 종류

    OperationResult 및 감사 이벤트에 기록되는 이름
    """

    # 지분 회계
    DEPOSIT = "deposit"
    WITHDRAW_PROFITS = "withdraw_profits"

    # 자본 배분
    MOVE_TO_TRADING_WALLET = "move_to_trading_wallet"
    RETURN_CAPITAL = "return_capital"
    RETURN_ALL_CAPITAL = "return_all_capital"

    # 임팩트 풀
    SET_DONATION_RATE = "set_donation_rate"
    MINT_CERTIFICATE = "mint_certificate"
    WITHDRAW_FROM_POOL = "withdraw_from_pool"
    DONATE = "donate"

    # 거버넌스
    SET_MIN_DEPOSIT = "set_min_deposit"
    SET_WITHDRAWAL_FEE = "set_withdrawal_fee"
    SET_MAX_ALLOCATION = "set_max_allocation"
    SET_FEE_RECIPIENT = "set_fee_recipient"
    SET_IMPACT_POOL = "set_impact_pool"
    ADD_AUTHORIZED_AGENT = "add_authorized_agent"
    REMOVE_AUTHORIZED_AGENT = "remove_authorized_agent"
    PAUSE = "pause"
    UNPAUSE = "unpause"
    WITHDRAW_FEES = "withdraw_fees"


class EventSource(str, Enum):
    """Event 출처"""

    VAULT = "VAULT"
    WEB = "WEB"


class EntityKind(str, Enum):
    """Entity 종류"""

    VAULT = "VAULT"
    ACCOUNT = "ACCOUNT"
    CERTIFICATE = "CERTIFICATE"
    TRADING_WALLET = "TRADING_WALLET"
    IMPACT_POOL = "IMPACT_POOL"


ZERO_ADDRESS: str = "0x" + "0" * 40

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


def is_address(value: str) -> bool:
    """0x + 40 hex 형식인지 확인"""
    return bool(value) and _ADDRESS_RE.match(value) is not None


@dataclass(frozen=True)
class OperationResult:
    """연산 결과 (불변)

    모든 상태 변경 호출이 알림 레이어로 전달하는 결과 레코드
    """

    success: bool
    tx_id: str
    operation: str
    caller: str
    error: str | None = None
    error_code: str | None = None

    def to_dict(self) -> dict[str, object]:
        """딕셔너리로 변환 (직렬화용)"""
        data: dict[str, object] = {
            "success": self.success,
            "txId": self.tx_id,
            "operation": self.operation,
            "caller": self.caller,
        }
        if self.error is not None:
            data["error"] = self.error
            data["errorCode"] = self.error_code
        return data
