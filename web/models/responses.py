"""
응답 스키마 (Pydantic)

Web API 응답 데이터 직렬화

금액 필드는 최소 단위 정수 문자열, *_display 필드는 토큰 단위 표시값.
"""

from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """헬스 체크 응답"""

    status: str = Field(default="ok", description="서비스 상태")
    vault_ready: bool = Field(..., description="Vault 초기화 여부")
    paused: bool | None = Field(default=None, description="일시정지 여부")
    version: str = Field(..., description="API 버전")


class ErrorResponse(BaseModel):
    """Vault 에러 응답"""

    code: str = Field(..., description="에러 코드 (VALIDATION_ERROR 등)")
    message: str = Field(..., description="에러 메시지")


class AccountResponse(BaseModel):
    """계정 정보"""

    owner: str
    shares: str
    total_deposited: str
    current_value: str
    unrealized_profit: str
    total_profit_withdrawn: str
    donation_rate_bps: int
    pool_balance: str
    total_donated: str
    certificate_count: int


class VaultSnapshotResponse(BaseModel):
    """Vault 스냅샷 응답"""

    asset_symbol: str
    asset_decimals: int
    idle_assets: str
    allocated_assets: str
    total_assets: str
    total_assets_display: str
    total_shares: str
    share_price: str
    paused: bool
    min_deposit: str
    withdrawal_fee_bps: int
    max_allocation_bps: int
    max_allocatable: str
    accumulated_fees: str
    total_pool_balance: str
    account: AccountResponse | None = None


class DepositResponse(BaseModel):
    """예치 응답"""

    shares_minted: str


class WithdrawalReceiptResponse(BaseModel):
    """전량 상환 결과"""

    gross_assets: str
    profit: str
    fee: str
    donation: str
    net_to_user: str
    net_to_user_display: str
    shares_burned: str
    certificate_id: int | None = None


class PreviewResponse(BaseModel):
    """미리보기 응답"""

    amount: str
    result: str


class CertificateResponse(BaseModel):
    """인증서"""

    id: int
    owner: str
    amount: str
    timestamp: str
    is_minted: bool
    token_id: int | None = None


class CertificateListResponse(BaseModel):
    """인증서 목록"""

    owner: str
    certificates: list[CertificateResponse]
    total: int
    offset: int
    limit: int


class ImpactAccountResponse(BaseModel):
    """임팩트 계정"""

    owner: str
    donation_rate_bps: int
    total_donated: str
    pool_balance: str
    certificate_count: int


class ImpactPoolResponse(BaseModel):
    """임팩트 풀 요약"""

    total_pool_balance: str
    impact_pool_ref: str


class MintResponse(BaseModel):
    """민팅 결과"""

    certificate_id: int
    token_id: int


class DonateResponse(BaseModel):
    """직접 기부 결과"""

    certificate_id: int


class TradingWalletResponse(BaseModel):
    """트레이딩 지갑 배분 현황"""

    wallet: str
    allocated: str
    total_allocated: str
    total_returned: str
    total_profit: str


class AllocationSummaryResponse(BaseModel):
    """배분 요약"""

    allocated_assets: str
    max_allocatable: str
    wallets: list[TradingWalletResponse]


class AmountResponse(BaseModel):
    """금액 결과 (return_all_capital, withdraw_fees)"""

    amount: str


class StatusResponse(BaseModel):
    """단순 성공 응답"""

    status: str = "ok"


class AgentListResponse(BaseModel):
    """에이전트 목록"""

    owner: str
    agents: list[str]


class InvariantResponse(BaseModel):
    """원장 불변식 점검 결과"""

    ok: bool
    violations: list[str]


class EventResponse(BaseModel):
    """감사 이벤트"""

    seq: int | None = None
    event_id: str
    event_type: str
    ts: str
    tx_id: str
    actor: str
    entity_kind: str
    entity_id: str
    payload: dict[str, Any]


class EventListResponse(BaseModel):
    """감사 이벤트 목록"""

    events: list[EventResponse]
    limit: int
    offset: int
