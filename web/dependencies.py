"""
의존성 주입

FastAPI의 Depends를 사용한 의존성 관리.
"""

from fastapi import Header, HTTPException

from core.config.loader import AssetConfig
from core.constants import Defaults, HttpHeaders
from vault.service import VaultService
from web.services.view_service import ViewService


# =========================================================================
# VaultService (lifespan 또는 테스트에서 설정)
# =========================================================================

_vault: VaultService | None = None
_asset = AssetConfig(symbol=Defaults.ASSET_SYMBOL, decimals=Defaults.ASSET_DECIMALS)


def set_vault(vault: VaultService | None, asset: AssetConfig | None = None) -> None:
    """VaultService 설정

    Args:
        vault: VaultService 인스턴스 (None이면 해제)
        asset: 표시용 기초 자산 정보 (None이면 기존 값 유지)
    """
    global _vault, _asset
    _vault = vault
    if asset is not None:
        _asset = asset


def get_vault() -> VaultService:
    """VaultService 반환

    Raises:
        HTTPException: 초기화 전이면 503
    """
    if _vault is None:
        raise HTTPException(status_code=503, detail="Vault가 초기화되지 않았습니다")
    return _vault


def get_asset() -> AssetConfig:
    """기초 자산 정보 반환"""
    return _asset


def get_caller(
    x_account_address: str = Header(..., alias=HttpHeaders.ACCOUNT_ADDRESS),
) -> str:
    """호출자 주소 (지갑/세션 레이어가 인증한 값)

    형식 검증은 Vault 연산에서 수행 (잘못된 주소는 422).
    """
    return x_account_address.strip()


def get_view() -> ViewService:
    """응답 변환 서비스 반환"""
    return ViewService(_asset)


def get_optional_vault() -> VaultService | None:
    """VaultService 반환 (없으면 None)"""
    return _vault
