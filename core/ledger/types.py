"""
원장 타입 정의

Ledger Store가 보관하는 Vault/계정/임팩트 풀/인증서 레코드.
모두 불변 dataclass이며, 변경은 dataclasses.replace()로 새 값을 만들어
LedgerStore에 저장하는 방식으로만 이루어진다.

금액 필드는 기초 자산 최소 단위(wei) 정수.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum


class CertificateStatus(str, Enum):
    """인증서 상태"""

    UNMINTED = "UNMINTED"
    MINTED = "MINTED"


@dataclass(frozen=True)
class Unminted:
    """민팅 전 인증서 상태"""

    @property
    def status(self) -> CertificateStatus:
        return CertificateStatus.UNMINTED


@dataclass(frozen=True)
class Minted:
    """민팅 완료 상태 (외부 공개용 token_id 보유)"""

    token_id: int

    @property
    def status(self) -> CertificateStatus:
        return CertificateStatus.MINTED


MintState = Unminted | Minted


@dataclass(frozen=True)
class VaultState:
    """Vault 전역 상태

    불변식: total_assets == idle_assets + allocated_assets
    accumulated_fees는 Vault가 보관하지만 total_assets에 포함되지 않는다.
    """

    owner: str
    idle_assets: int
    allocated_assets: int
    total_shares: int
    min_deposit: int
    withdrawal_fee_bps: int
    max_allocation_bps: int
    paused: bool
    fee_recipient: str
    accumulated_fees: int
    impact_pool_ref: str

    @property
    def total_assets(self) -> int:
        return self.idle_assets + self.allocated_assets

    @property
    def share_price(self) -> Decimal:
        """지분 가격 (total_assets / total_shares, 지분 없으면 1)"""
        if self.total_shares == 0:
            return Decimal(1)
        return Decimal(self.total_assets) / Decimal(self.total_shares)


@dataclass(frozen=True)
class Account:
    """예치자 계정

    total_deposited: 현재 보유 포지션의 원금 (전액 인출 시 0으로 초기화)
    lifetime_deposited: 누적 예치 금액
    """

    owner: str
    shares: int = 0
    total_deposited: int = 0
    lifetime_deposited: int = 0
    total_profit_withdrawn: int = 0


@dataclass(frozen=True)
class TradingWallet:
    """트레이딩 지갑별 배분 현황"""

    wallet: str
    allocated: int = 0
    total_allocated: int = 0
    total_returned: int = 0
    total_profit: int = 0


@dataclass(frozen=True)
class ImpactAccount:
    """임팩트 풀 계정

    pool_balance: 기부했지만 아직 인출하지 않은 금액 (withdraw_from_pool 한도)
    """

    owner: str
    donation_rate_bps: int
    total_donated: int = 0
    pool_balance: int = 0


@dataclass(frozen=True)
class Certificate:
    """임팩트 인증서

    amount는 생성 후 불변. state는 Unminted → Minted 한 번만 전이.
    """

    id: int
    owner: str
    amount: int
    timestamp: datetime
    state: MintState
    tx_id: str | None = None

    @property
    def is_minted(self) -> bool:
        return isinstance(self.state, Minted)

    @property
    def token_id(self) -> int | None:
        if isinstance(self.state, Minted):
            return self.state.token_id
        return None


@dataclass(frozen=True)
class WithdrawalReceipt:
    """withdraw_profits 결과"""

    gross_assets: int
    profit: int
    fee: int
    donation: int
    net_to_user: int
    shares_burned: int
    certificate_id: int | None = None


@dataclass(frozen=True)
class ImpactPoolState:
    """임팩트 풀 전역 상태"""

    total_pool_balance: int
    next_certificate_id: int
    next_token_id: int
