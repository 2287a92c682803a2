"""
설정 로더 테스트

vault.yaml 로드, 값 검증, Settings 싱글턴 테스트
"""

from pathlib import Path

import pytest

from core.config.loader import (
    Settings,
    SettingsLoadError,
    get_db_path,
    get_settings,
    get_vault_parameters,
    load_settings,
)
from core.constants import Defaults, Paths
from core.types import NetworkMode
from tests.constants import FEE_RECIPIENT, OWNER


def _write(temp_dir: Path, content: str) -> Path:
    path = temp_dir / "vault.yaml"
    path.write_text(content, encoding="utf-8")
    return path


class TestLoadSettings:
    """load_settings 함수 테스트"""

    def test_load_valid_config(self, temp_vault_config: Path) -> None:
        """정상 설정 파일 로드"""
        settings = load_settings(temp_vault_config)

        assert settings.network == NetworkMode.TESTNET
        assert settings.owner == OWNER
        assert settings.asset.symbol == "WHBAR"
        assert settings.asset.decimals == 18
        assert settings.vault.withdrawal_fee_bps == 200
        assert settings.vault.max_allocation_bps == 8000
        assert settings.vault.fee_recipient == FEE_RECIPIENT
        assert settings.vault.impact_pool_ref == "test-pool"
        assert settings.vault.default_donation_bps == 500
        assert settings.slack_webhook_url == "https://hooks.slack.com/services/test"

    def test_address_is_lowercased(self, temp_vault_config: Path) -> None:
        """대문자 주소도 소문자로 정규화"""
        assert load_settings(temp_vault_config).vault.fee_recipient == FEE_RECIPIENT

    def test_min_deposit_in_token_units(self, temp_vault_config: Path) -> None:
        """min_deposit은 토큰 단위 → 최소 단위 변환"""
        settings = load_settings(temp_vault_config)
        assert settings.vault.min_deposit == 5 * 10**17

    def test_defaults_applied(self, temp_vault_config_minimal: Path) -> None:
        """선택 필드 누락 시 기본값"""
        settings = load_settings(temp_vault_config_minimal)

        assert settings.network == NetworkMode.MAINNET
        assert settings.asset.symbol == Defaults.ASSET_SYMBOL
        assert settings.vault.min_deposit == Defaults.MIN_DEPOSIT
        assert settings.vault.withdrawal_fee_bps == Defaults.WITHDRAWAL_FEE_BPS
        assert settings.vault.fee_recipient == OWNER
        assert settings.slack_webhook_url is None

    def test_invalid_network(self, temp_vault_config_invalid_network: Path) -> None:
        """잘못된 network 값"""
        with pytest.raises(ValueError, match="유효하지 않은 network"):
            load_settings(temp_vault_config_invalid_network)

    def test_file_not_found(self, temp_dir: Path) -> None:
        with pytest.raises(SettingsLoadError, match="찾을 수 없습니다"):
            load_settings(temp_dir / "missing.yaml")

    def test_empty_file(self, temp_dir: Path) -> None:
        with pytest.raises(SettingsLoadError, match="비어 있습니다"):
            load_settings(_write(temp_dir, ""))

    def test_invalid_yaml(self, temp_dir: Path) -> None:
        with pytest.raises(SettingsLoadError, match="파싱 실패"):
            load_settings(_write(temp_dir, "network: [testnet\n"))

    def test_missing_network(self, temp_dir: Path) -> None:
        with pytest.raises(SettingsLoadError, match="network"):
            load_settings(_write(temp_dir, f'owner: "{OWNER}"\n'))

    def test_missing_owner(self, temp_dir: Path) -> None:
        with pytest.raises(SettingsLoadError, match="owner"):
            load_settings(_write(temp_dir, "network: testnet\n"))

    def test_invalid_owner(self, temp_dir: Path) -> None:
        with pytest.raises(SettingsLoadError, match="owner"):
            load_settings(_write(temp_dir, 'network: testnet\nowner: "0x1234"\n'))

    @pytest.mark.parametrize("bps", ["10001", "-1", "abc"])
    def test_invalid_bps(self, temp_dir: Path, bps: str) -> None:
        content = f'network: testnet\nowner: "{OWNER}"\nvault:\n  withdrawal_fee_bps: "{bps}"\n'
        with pytest.raises(SettingsLoadError, match="withdrawal_fee_bps"):
            load_settings(_write(temp_dir, content))

    def test_invalid_min_deposit(self, temp_dir: Path) -> None:
        content = f'network: testnet\nowner: "{OWNER}"\nvault:\n  min_deposit: "1.5.2"\n'
        with pytest.raises(SettingsLoadError, match="min_deposit"):
            load_settings(_write(temp_dir, content))


class TestVaultParameters:
    """get_vault_parameters / get_db_path 테스트"""

    def test_vault_parameters(self, temp_vault_config: Path) -> None:
        params = get_vault_parameters(load_settings(temp_vault_config))

        assert params.owner == OWNER
        assert params.fee_recipient == FEE_RECIPIENT
        assert params.min_deposit == 5 * 10**17
        assert params.impact_pool_ref == "test-pool"

    def test_db_path_by_network(
        self,
        temp_vault_config: Path,
        temp_vault_config_minimal: Path,
    ) -> None:
        """네트워크별 DB 분리"""
        assert get_db_path(load_settings(temp_vault_config)) == Paths.TESTNET_DB
        assert get_db_path(load_settings(temp_vault_config_minimal)) == Paths.MAINNET_DB


class TestSettingsSingleton:
    """Settings 싱글턴 테스트"""

    def setup_method(self) -> None:
        Settings.reset()

    def teardown_method(self) -> None:
        Settings.reset()

    def test_singleton(self, temp_vault_config: Path) -> None:
        first = get_settings(temp_vault_config)
        second = get_settings()

        assert first is second
        assert second.network == NetworkMode.TESTNET
        assert second.db_path == Paths.TESTNET_DB
        assert second.vault_settings.owner == OWNER

    def test_reset(self, temp_vault_config: Path, temp_vault_config_minimal: Path) -> None:
        assert get_settings(temp_vault_config).network == NetworkMode.TESTNET

        Settings.reset()

        assert get_settings(temp_vault_config_minimal).network == NetworkMode.MAINNET
