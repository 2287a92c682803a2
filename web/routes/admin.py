"""
관리자 API 라우터

거버넌스 파라미터 / 에이전트 허용 목록 / 일시정지 / 수수료 인출 (소유자 전용)
"""

from fastapi import APIRouter, Depends

from vault.service import VaultService
from web.dependencies import get_caller, get_vault
from web.models.requests import AddressRequest, AmountRequest, BpsRequest, ImpactPoolRequest
from web.models.responses import (
    AgentListResponse,
    AmountResponse,
    InvariantResponse,
    StatusResponse,
)

router = APIRouter(prefix="/api/admin", tags=["Admin"])


# =========================================================================
# 조회
# =========================================================================


@router.get("/agents", response_model=AgentListResponse)
async def get_agents(vault: VaultService = Depends(get_vault)) -> AgentListResponse:
    """소유자 및 에이전트 목록"""
    return AgentListResponse(
        owner=await vault.governance.owner(),
        agents=await vault.governance.get_authorized_agents(),
    )


@router.get("/invariants", response_model=InvariantResponse)
async def check_invariants(vault: VaultService = Depends(get_vault)) -> InvariantResponse:
    """원장 불변식 점검"""
    violations = await vault.check_invariants()
    return InvariantResponse(ok=not violations, violations=violations)


# =========================================================================
# 파라미터 변경
# =========================================================================


@router.post("/min-deposit", response_model=StatusResponse)
async def set_min_deposit(
    request: AmountRequest,
    caller: str = Depends(get_caller),
    vault: VaultService = Depends(get_vault),
) -> StatusResponse:
    await vault.governance.set_min_deposit(caller, int(request.amount))
    return StatusResponse()


@router.post("/withdrawal-fee", response_model=StatusResponse)
async def set_withdrawal_fee(
    request: BpsRequest,
    caller: str = Depends(get_caller),
    vault: VaultService = Depends(get_vault),
) -> StatusResponse:
    await vault.governance.set_withdrawal_fee(caller, request.bps)
    return StatusResponse()


@router.post("/max-allocation", response_model=StatusResponse)
async def set_max_allocation(
    request: BpsRequest,
    caller: str = Depends(get_caller),
    vault: VaultService = Depends(get_vault),
) -> StatusResponse:
    await vault.governance.set_max_allocation(caller, request.bps)
    return StatusResponse()


@router.post("/fee-recipient", response_model=StatusResponse)
async def set_fee_recipient(
    request: AddressRequest,
    caller: str = Depends(get_caller),
    vault: VaultService = Depends(get_vault),
) -> StatusResponse:
    await vault.governance.set_fee_recipient(caller, request.address)
    return StatusResponse()


@router.post("/impact-pool", response_model=StatusResponse)
async def set_impact_pool(
    request: ImpactPoolRequest,
    caller: str = Depends(get_caller),
    vault: VaultService = Depends(get_vault),
) -> StatusResponse:
    await vault.governance.set_impact_pool(caller, request.ref)
    return StatusResponse()


# =========================================================================
# 에이전트 / 일시정지 / 수수료
# =========================================================================


@router.post("/agents", response_model=StatusResponse)
async def add_agent(
    request: AddressRequest,
    caller: str = Depends(get_caller),
    vault: VaultService = Depends(get_vault),
) -> StatusResponse:
    await vault.governance.add_authorized_agent(caller, request.address)
    return StatusResponse()


@router.delete("/agents/{agent}", response_model=StatusResponse)
async def remove_agent(
    agent: str,
    caller: str = Depends(get_caller),
    vault: VaultService = Depends(get_vault),
) -> StatusResponse:
    await vault.governance.remove_authorized_agent(caller, agent)
    return StatusResponse()


@router.post("/pause", response_model=StatusResponse)
async def pause(
    caller: str = Depends(get_caller),
    vault: VaultService = Depends(get_vault),
) -> StatusResponse:
    """일시정지 (예치/인출/배분/기부 차단)"""
    await vault.governance.pause(caller)
    return StatusResponse()


@router.post("/unpause", response_model=StatusResponse)
async def unpause(
    caller: str = Depends(get_caller),
    vault: VaultService = Depends(get_vault),
) -> StatusResponse:
    await vault.governance.unpause(caller)
    return StatusResponse()


@router.post("/withdraw-fees", response_model=AmountResponse)
async def withdraw_fees(
    caller: str = Depends(get_caller),
    vault: VaultService = Depends(get_vault),
) -> AmountResponse:
    """누적 수수료 → fee_recipient"""
    amount = await vault.governance.withdraw_fees(caller)
    return AmountResponse(amount=str(amount))
