"""
설정 로더

vault.yaml 로드 및 Vault 초기 파라미터 생성
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from core.constants import BPS_DENOMINATOR, Defaults, Paths
from core.ledger.schema import VaultParameters
from core.types import NetworkMode, is_address
from core.utils.units import to_base_units


@dataclass(frozen=True)
class AssetConfig:
    """기초 자산 설정"""

    symbol: str
    decimals: int


@dataclass(frozen=True)
class VaultConfig:
    """Vault 초기 거버넌스 파라미터 (최소 단위 정수)

    Vault 최초 생성 시에만 사용되며, 이후에는 원장 값이 우선한다.
    """

    min_deposit: int
    withdrawal_fee_bps: int
    max_allocation_bps: int
    fee_recipient: str
    impact_pool_ref: str
    default_donation_bps: int


@dataclass(frozen=True)
class VaultSettings:
    """애플리케이션 설정 (vault.yaml에서 로드)

    불변 데이터 구조로 설정 변경 방지
    """

    network: NetworkMode
    owner: str
    asset: AssetConfig
    vault: VaultConfig
    slack_webhook_url: str | None = None


class SettingsLoadError(Exception):
    """설정 로드 실패 예외"""

    pass


def _parse_bps(section: dict[str, Any], key: str, default: int) -> int:
    """bps 값 파싱 (0~10000)"""
    value = section.get(key, default)
    try:
        bps = int(value)
    except (TypeError, ValueError) as e:
        raise SettingsLoadError(f"'{key}'는 정수여야 합니다: {value!r}") from e

    if not 0 <= bps <= BPS_DENOMINATOR:
        raise SettingsLoadError(
            f"'{key}'는 0 이상 {BPS_DENOMINATOR} 이하여야 합니다: {bps}"
        )
    return bps


def _parse_address(value: Any, field_name: str) -> str:
    """주소 파싱 (소문자 정규화)"""
    if not isinstance(value, str) or not is_address(value):
        raise SettingsLoadError(f"'{field_name}' 주소 형식이 올바르지 않습니다: {value!r}")
    return value.lower()


def load_settings(path: Path | None = None) -> VaultSettings:
    """vault.yaml 파일 로드

    Args:
        path: vault.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        VaultSettings 인스턴스

    Raises:
        SettingsLoadError: 파일이 없거나 형식이 잘못된 경우
        ValueError: 유효하지 않은 network인 경우
    """
    if path is None:
        path = Paths.CONFIG_FILE

    if not path.exists():
        raise SettingsLoadError(f"vault.yaml 파일을 찾을 수 없습니다: {path}")

    try:
        content = path.read_text(encoding="utf-8")
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise SettingsLoadError(f"vault.yaml 파싱 실패: {e}") from e

    if data is None:
        raise SettingsLoadError("vault.yaml이 비어 있습니다")

    # network 검증
    network_str = data.get("network")
    if network_str is None:
        raise SettingsLoadError("vault.yaml에 'network' 필드가 없습니다")

    try:
        network = NetworkMode(network_str)
    except ValueError as e:
        valid_modes = [m.value for m in NetworkMode]
        raise ValueError(
            f"유효하지 않은 network입니다: '{network_str}'. "
            f"유효한 값: {valid_modes}"
        ) from e

    owner = _parse_address(data.get("owner"), "owner")

    # 기초 자산
    asset_data = data.get("asset") or {}
    asset = AssetConfig(
        symbol=str(asset_data.get("symbol", Defaults.ASSET_SYMBOL)),
        decimals=int(asset_data.get("decimals", Defaults.ASSET_DECIMALS)),
    )

    # Vault 파라미터 (min_deposit은 토큰 단위로 기재)
    vault_data = data.get("vault") or {}
    min_deposit_raw = vault_data.get("min_deposit")
    if min_deposit_raw is None:
        min_deposit = Defaults.MIN_DEPOSIT
    else:
        try:
            min_deposit = to_base_units(min_deposit_raw, asset.decimals)
        except ValueError as e:
            raise SettingsLoadError(f"'min_deposit' 값이 올바르지 않습니다: {e}") from e

    fee_recipient = _parse_address(
        vault_data.get("fee_recipient", owner), "vault.fee_recipient"
    )

    vault = VaultConfig(
        min_deposit=min_deposit,
        withdrawal_fee_bps=_parse_bps(
            vault_data, "withdrawal_fee_bps", Defaults.WITHDRAWAL_FEE_BPS
        ),
        max_allocation_bps=_parse_bps(
            vault_data, "max_allocation_bps", Defaults.MAX_ALLOCATION_BPS
        ),
        fee_recipient=fee_recipient,
        impact_pool_ref=str(vault_data.get("impact_pool_ref", Defaults.IMPACT_POOL_REF)),
        default_donation_bps=_parse_bps(
            vault_data, "default_donation_bps", Defaults.DEFAULT_DONATION_BPS
        ),
    )

    # 알림 (선택)
    notifier_data = data.get("notifier") or {}
    slack_webhook_url = notifier_data.get("slack_webhook_url") or None

    return VaultSettings(
        network=network,
        owner=owner,
        asset=asset,
        vault=vault,
        slack_webhook_url=slack_webhook_url,
    )


def get_vault_parameters(settings: VaultSettings) -> VaultParameters:
    """Vault 최초 생성 파라미터 반환"""
    return VaultParameters(
        owner=settings.owner,
        fee_recipient=settings.vault.fee_recipient,
        min_deposit=settings.vault.min_deposit,
        withdrawal_fee_bps=settings.vault.withdrawal_fee_bps,
        max_allocation_bps=settings.vault.max_allocation_bps,
        impact_pool_ref=settings.vault.impact_pool_ref,
    )


def get_db_path(settings: VaultSettings) -> Path:
    """네트워크에 따른 DB 경로 반환"""
    if settings.network == NetworkMode.MAINNET:
        return Paths.MAINNET_DB
    else:
        return Paths.TESTNET_DB


class Settings:
    """애플리케이션 설정 (싱글턴 패턴)

    vault.yaml을 로드하고 관련 설정을 제공
    """

    _instance: "Settings | None" = None
    _settings: VaultSettings | None = None

    def __new__(cls, config_path: Path | None = None) -> "Settings":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, config_path: Path | None = None) -> None:
        if self._settings is None:
            type(self)._settings = load_settings(config_path)

    @property
    def network(self) -> NetworkMode:
        """현재 네트워크"""
        assert self._settings is not None
        return self._settings.network

    @property
    def owner(self) -> str:
        """Vault 소유자 주소"""
        assert self._settings is not None
        return self._settings.owner

    @property
    def asset(self) -> AssetConfig:
        """기초 자산 설정"""
        assert self._settings is not None
        return self._settings.asset

    @property
    def vault(self) -> VaultConfig:
        """Vault 초기 파라미터"""
        assert self._settings is not None
        return self._settings.vault

    @property
    def slack_webhook_url(self) -> str | None:
        """Slack Webhook URL (없으면 None)"""
        assert self._settings is not None
        return self._settings.slack_webhook_url

    @property
    def vault_settings(self) -> VaultSettings:
        """원본 VaultSettings"""
        assert self._settings is not None
        return self._settings

    @property
    def db_path(self) -> Path:
        """현재 네트워크의 DB 경로"""
        assert self._settings is not None
        return get_db_path(self._settings)

    @classmethod
    def reset(cls) -> None:
        """싱글턴 인스턴스 초기화 (테스트용)"""
        cls._instance = None
        cls._settings = None


def get_settings(config_path: Path | None = None) -> Settings:
    """Settings 인스턴스 반환

    Args:
        config_path: vault.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        Settings 싱글턴 인스턴스
    """
    return Settings(config_path)
