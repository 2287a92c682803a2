"""
에이전트 API 라우터

트레이딩 지갑 자본 배분 / 회수 (승인된 에이전트 전용)
"""

from fastapi import APIRouter, Depends

from vault.service import VaultService
from web.dependencies import get_caller, get_vault
from web.models.requests import AllocateRequest, ReturnAllCapitalRequest, ReturnCapitalRequest
from web.models.responses import (
    AllocationSummaryResponse,
    AmountResponse,
    StatusResponse,
    TradingWalletResponse,
)
from web.services.view_service import ViewService

router = APIRouter(prefix="/api/agent", tags=["Agent"])


@router.get("/wallets", response_model=AllocationSummaryResponse)
async def list_wallets(vault: VaultService = Depends(get_vault)) -> AllocationSummaryResponse:
    """배분 요약 + 지갑 목록"""
    state = await vault.accounting.get_vault_state()
    wallets = await vault.allocation.list_trading_wallets()
    max_allocatable = await vault.allocation.max_allocatable()
    return AllocationSummaryResponse(
        allocated_assets=str(state.allocated_assets),
        max_allocatable=str(max_allocatable),
        wallets=[ViewService.trading_wallet(w) for w in wallets],
    )


@router.get("/wallets/{wallet}", response_model=TradingWalletResponse)
async def get_wallet(wallet: str, vault: VaultService = Depends(get_vault)) -> TradingWalletResponse:
    """지갑 배분 현황"""
    return ViewService.trading_wallet(await vault.allocation.get_allocation(wallet))


@router.post("/allocate", response_model=StatusResponse)
async def move_to_trading_wallet(
    request: AllocateRequest,
    caller: str = Depends(get_caller),
    vault: VaultService = Depends(get_vault),
) -> StatusResponse:
    """유휴 자산 → 트레이딩 지갑"""
    await vault.allocation.move_to_trading_wallet(caller, int(request.amount), request.wallet)
    return StatusResponse()


@router.post("/return", response_model=StatusResponse)
async def return_capital(
    request: ReturnCapitalRequest,
    caller: str = Depends(get_caller),
    vault: VaultService = Depends(get_vault),
) -> StatusResponse:
    """트레이딩 지갑 → 유휴 자산 (원금 + 보고 수익)"""
    await vault.allocation.return_capital(
        caller,
        request.wallet,
        int(request.amount),
        int(request.reported_profit),
    )
    return StatusResponse()


@router.post("/return-all", response_model=AmountResponse)
async def return_all_capital(
    request: ReturnAllCapitalRequest,
    caller: str = Depends(get_caller),
    vault: VaultService = Depends(get_vault),
) -> AmountResponse:
    """지갑 원금 전액 + 보고 수익 회수"""
    amount = await vault.allocation.return_all_capital(
        caller,
        request.wallet,
        int(request.reported_profit),
    )
    return AmountResponse(amount=str(amount))
