"""
FastAPI 애플리케이션

라우터 등록 및 앱 설정.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.domain.errors import (
    AlreadyDoneError,
    StateError,
    TransferError,
    ValidationError,
    VaultError,
)
from core.logging import setup_logging

# 로깅 설정 (콘솔 + 파일)
setup_logging("web")

from web.dependencies import get_optional_vault, set_vault
from web.routes import admin, agent, events, health, impact
from web.routes import vault as vault_routes

logger = logging.getLogger(__name__)

# Vault 에러 → HTTP 상태 코드
ERROR_STATUS: dict[type[VaultError], int] = {
    ValidationError: 422,
    StateError: 409,
    AlreadyDoneError: 409,
    TransferError: 502,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """앱 생명주기 관리

    VaultService가 외부에서 설정되지 않았으면 vault.yaml로 생성.

    주의: 이 경로는 로컬 개발 전용이다. 기초 자산 원장/트레이딩 데스크를
    메모리 Mock으로 연결하므로 실제 자금 이동이 없다. 운영 배포는 실제
    IAssetTransfer/ITradingDesk 구현으로 만든 VaultService를 앱 시작 전에
    set_vault()로 주입해야 한다.
    """
    from adapters.mock.asset_ledger import MockAssetLedger
    from adapters.mock.trading_desk import MockTradingDesk
    from core.config.loader import get_settings
    from vault.bootstrap import create_vault_from_settings

    owned = None

    if get_optional_vault() is None:
        settings = get_settings()
        assets = MockAssetLedger()
        owned = await create_vault_from_settings(
            settings.vault_settings,
            assets=assets,
            trading_desk=MockTradingDesk(assets=assets),
        )
        set_vault(owned, asset=settings.asset)
        logger.info(f"Web: Vault 초기화 완료 ({settings.network.value})")

    yield

    # 종료 시 - 리소스 정리
    if owned is not None:
        set_vault(None)
        await owned.close()
        logger.info("Web: Vault 연결 종료 완료")


app = FastAPI(
    title="ImpactVault API",
    description="Tokenized yield vault with impact pool",
    version=health.API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# CORS 설정 (개발용)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(VaultError)
async def vault_error_handler(request: Request, exc: VaultError) -> JSONResponse:
    """Vault 에러를 {code, message} 본문으로 변환"""
    status_code = ERROR_STATUS.get(type(exc), 400)
    return JSONResponse(
        status_code=status_code,
        content={"code": exc.code, "message": exc.message},
    )


# =========================================================================
# API 라우터 등록
# =========================================================================

app.include_router(health.router)
app.include_router(vault_routes.router)
app.include_router(impact.router)
app.include_router(agent.router)
app.include_router(admin.router)
app.include_router(events.router)
