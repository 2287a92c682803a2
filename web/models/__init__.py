"""
Web 모델 패키지

Pydantic 스키마 정의
"""

from web.models.requests import (
    AddressRequest,
    AllocateRequest,
    AmountRequest,
    BpsRequest,
    ImpactPoolRequest,
    ReturnAllCapitalRequest,
    ReturnCapitalRequest,
    WithdrawRequest,
)
from web.models.responses import (
    AccountResponse,
    AgentListResponse,
    AllocationSummaryResponse,
    AmountResponse,
    CertificateListResponse,
    CertificateResponse,
    DepositResponse,
    DonateResponse,
    ErrorResponse,
    EventListResponse,
    EventResponse,
    HealthResponse,
    ImpactAccountResponse,
    ImpactPoolResponse,
    InvariantResponse,
    MintResponse,
    PreviewResponse,
    StatusResponse,
    TradingWalletResponse,
    VaultSnapshotResponse,
    WithdrawalReceiptResponse,
)

__all__ = [
    # Requests
    "AddressRequest",
    "AllocateRequest",
    "AmountRequest",
    "BpsRequest",
    "ImpactPoolRequest",
    "ReturnAllCapitalRequest",
    "ReturnCapitalRequest",
    "WithdrawRequest",
    # Responses
    "AccountResponse",
    "AgentListResponse",
    "AllocationSummaryResponse",
    "AmountResponse",
    "CertificateListResponse",
    "CertificateResponse",
    "DepositResponse",
    "DonateResponse",
    "ErrorResponse",
    "EventListResponse",
    "EventResponse",
    "HealthResponse",
    "ImpactAccountResponse",
    "ImpactPoolResponse",
    "InvariantResponse",
    "MintResponse",
    "PreviewResponse",
    "StatusResponse",
    "TradingWalletResponse",
    "VaultSnapshotResponse",
    "WithdrawalReceiptResponse",
]
