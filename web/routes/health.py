"""
헬스 체크 엔드포인트

GET /health - 서버 상태 확인
"""

from fastapi import APIRouter

from web.dependencies import get_optional_vault
from web.models.responses import HealthResponse

router = APIRouter(tags=["health"])

API_VERSION = "1.0.0"


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """서버 상태 확인

    Returns:
        HealthResponse: status, vault_ready, paused, version 정보
    """
    vault = get_optional_vault()
    if vault is None:
        return HealthResponse(status="starting", vault_ready=False, version=API_VERSION)

    state = await vault.accounting.get_vault_state()
    return HealthResponse(
        status="ok",
        vault_ready=True,
        paused=state.paused,
        version=API_VERSION,
    )
