"""
Vault API 라우터

예치 / 전량 상환 / 스냅샷 / 미리보기
"""

from fastapi import APIRouter, Depends, Query

from vault.service import VaultService
from web.dependencies import get_caller, get_vault, get_view
from web.models.requests import AmountRequest, WithdrawRequest
from web.models.responses import (
    DepositResponse,
    PreviewResponse,
    VaultSnapshotResponse,
    WithdrawalReceiptResponse,
)
from web.services.view_service import ViewService

router = APIRouter(prefix="/api/vault", tags=["Vault"])


@router.get("", response_model=VaultSnapshotResponse)
async def get_snapshot(
    owner: str | None = Query(default=None, description="계정 정보를 포함할 주소"),
    vault: VaultService = Depends(get_vault),
    view: ViewService = Depends(get_view),
) -> VaultSnapshotResponse:
    """Vault 스냅샷 (owner 지정 시 계정 포함)"""
    return view.snapshot(await vault.snapshot(owner))


@router.get("/me", response_model=VaultSnapshotResponse)
async def get_my_snapshot(
    caller: str = Depends(get_caller),
    vault: VaultService = Depends(get_vault),
    view: ViewService = Depends(get_view),
) -> VaultSnapshotResponse:
    """호출자 계정이 포함된 스냅샷"""
    return view.snapshot(await vault.snapshot(caller))


@router.post("/deposit", response_model=DepositResponse)
async def deposit(
    request: AmountRequest,
    caller: str = Depends(get_caller),
    vault: VaultService = Depends(get_vault),
) -> DepositResponse:
    """기초 자산 예치"""
    shares = await vault.accounting.deposit(caller, int(request.amount))
    return DepositResponse(shares_minted=str(shares))


@router.post("/withdraw", response_model=WithdrawalReceiptResponse)
async def withdraw_profits(
    request: WithdrawRequest,
    caller: str = Depends(get_caller),
    vault: VaultService = Depends(get_vault),
    view: ViewService = Depends(get_view),
) -> WithdrawalReceiptResponse:
    """보유 지분 전량 상환"""
    receipt = await vault.accounting.withdraw_profits(caller, request.donation_bps)
    return view.receipt(receipt)


@router.get("/preview/deposit", response_model=PreviewResponse)
async def preview_deposit(
    amount: str = Query(..., pattern=r"^\d+$"),
    vault: VaultService = Depends(get_vault),
) -> PreviewResponse:
    """예치 시 발행될 지분"""
    shares = await vault.accounting.preview_deposit(int(amount))
    return PreviewResponse(amount=amount, result=str(shares))


@router.get("/preview/redeem", response_model=PreviewResponse)
async def preview_redeem(
    shares: str = Query(..., pattern=r"^\d+$"),
    vault: VaultService = Depends(get_vault),
) -> PreviewResponse:
    """지분 상환 시 받게 될 자산"""
    assets = await vault.accounting.preview_redeem(int(shares))
    return PreviewResponse(amount=shares, result=str(assets))


@router.get("/preview/fee", response_model=PreviewResponse)
async def preview_withdrawal_fee(
    profit: str = Query(..., pattern=r"^\d+$"),
    vault: VaultService = Depends(get_vault),
) -> PreviewResponse:
    """수익 금액에 부과될 수수료"""
    fee = await vault.accounting.preview_withdrawal_fee(int(profit))
    return PreviewResponse(amount=profit, result=str(fee))


@router.get("/preview/withdraw", response_model=WithdrawalReceiptResponse)
async def preview_withdrawal(
    donation_bps: int | None = Query(default=None),
    caller: str = Depends(get_caller),
    vault: VaultService = Depends(get_vault),
    view: ViewService = Depends(get_view),
) -> WithdrawalReceiptResponse:
    """호출자 전량 상환 분배 미리보기"""
    receipt = await vault.accounting.preview_withdrawal(caller, donation_bps)
    return view.receipt(receipt)
