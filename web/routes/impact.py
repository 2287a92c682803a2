"""
임팩트 풀 API 라우터

기부율 설정 / 인증서 조회·민팅 / 풀 인출 / 직접 기부
"""

from fastapi import APIRouter, Depends, HTTPException, Query

from core.constants import Defaults
from vault.service import VaultService
from web.dependencies import get_caller, get_vault, get_view
from web.models.requests import AmountRequest, BpsRequest
from web.models.responses import (
    CertificateListResponse,
    CertificateResponse,
    DonateResponse,
    ImpactAccountResponse,
    ImpactPoolResponse,
    MintResponse,
    StatusResponse,
)
from web.services.view_service import ViewService

router = APIRouter(prefix="/api/impact", tags=["Impact"])


@router.get("", response_model=ImpactPoolResponse)
async def get_pool(vault: VaultService = Depends(get_vault)) -> ImpactPoolResponse:
    """임팩트 풀 요약"""
    state = await vault.accounting.get_vault_state()
    total = await vault.impact.get_total_pool_balance()
    return ImpactPoolResponse(
        total_pool_balance=str(total),
        impact_pool_ref=state.impact_pool_ref,
    )


@router.get("/accounts/{owner}", response_model=ImpactAccountResponse)
async def get_impact_account(
    owner: str,
    vault: VaultService = Depends(get_vault),
) -> ImpactAccountResponse:
    """임팩트 계정 조회"""
    account = await vault.impact.get_impact_account(owner)
    count = await vault.impact.get_user_certificate_count(owner)
    return ViewService.impact_account(account, count)


@router.get("/accounts/{owner}/certificates", response_model=CertificateListResponse)
async def get_user_certificates(
    owner: str,
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=Defaults.CERTIFICATE_PAGE_LIMIT, ge=1, le=100),
    vault: VaultService = Depends(get_vault),
) -> CertificateListResponse:
    """보유 인증서 목록"""
    certificates = await vault.impact.get_user_certificates(owner, offset=offset, limit=limit)
    total = await vault.impact.get_user_certificate_count(owner)
    return CertificateListResponse(
        owner=owner.lower(),
        certificates=[ViewService.certificate(c) for c in certificates],
        total=total,
        offset=offset,
        limit=limit,
    )


@router.get("/certificates/{certificate_id}", response_model=CertificateResponse)
async def get_certificate(
    certificate_id: int,
    vault: VaultService = Depends(get_vault),
) -> CertificateResponse:
    """인증서 단건 조회"""
    certificate = await vault.impact.get_certificate(certificate_id)
    if certificate is None:
        raise HTTPException(status_code=404, detail=f"Certificate not found: {certificate_id}")
    return ViewService.certificate(certificate)


@router.post("/certificates/{certificate_id}/mint", response_model=MintResponse)
async def mint_certificate(
    certificate_id: int,
    caller: str = Depends(get_caller),
    vault: VaultService = Depends(get_vault),
) -> MintResponse:
    """인증서 민팅 (소유자만, 1회)"""
    token_id = await vault.impact.mint_certificate(caller, certificate_id)
    return MintResponse(certificate_id=certificate_id, token_id=token_id)


@router.post("/donation-rate", response_model=StatusResponse)
async def set_donation_rate(
    request: BpsRequest,
    caller: str = Depends(get_caller),
    vault: VaultService = Depends(get_vault),
) -> StatusResponse:
    """기본 기부율 설정"""
    await vault.impact.set_donation_rate(caller, request.bps)
    return StatusResponse()


@router.post("/withdraw", response_model=StatusResponse)
async def withdraw_from_pool(
    request: AmountRequest,
    caller: str = Depends(get_caller),
    vault: VaultService = Depends(get_vault),
) -> StatusResponse:
    """본인 기부 잔액 인출"""
    await vault.impact.withdraw_from_pool(caller, int(request.amount))
    return StatusResponse()


@router.post("/donate", response_model=DonateResponse)
async def donate(
    request: AmountRequest,
    caller: str = Depends(get_caller),
    vault: VaultService = Depends(get_vault),
) -> DonateResponse:
    """풀에 직접 기부"""
    certificate_id = await vault.impact.donate(caller, int(request.amount))
    return DonateResponse(certificate_id=certificate_id)
