"""
core/constants.py 테스트
"""

from pathlib import Path

from core.constants import (
    BPS_DENOMINATOR,
    PROJECT_ROOT,
    Defaults,
    HttpHeaders,
    Paths,
)


class TestPaths:
    """경로 상수 테스트"""

    def test_paths_are_pathlib(self) -> None:
        """모든 경로는 pathlib.Path"""
        assert isinstance(PROJECT_ROOT, Path)
        assert isinstance(Paths.CONFIG_FILE, Path)
        assert isinstance(Paths.MAINNET_DB, Path)
        assert isinstance(Paths.TESTNET_DB, Path)

    def test_project_root(self) -> None:
        assert (PROJECT_ROOT / "core" / "constants.py").exists()

    def test_config_file(self) -> None:
        assert Paths.CONFIG_FILE == PROJECT_ROOT / "config" / "vault.yaml"

    def test_db_files_are_separated(self) -> None:
        """네트워크별 DB 분리"""
        assert Paths.MAINNET_DB != Paths.TESTNET_DB
        assert Paths.MAINNET_DB.parent == Paths.DATA_DIR

    def test_log_dirs(self) -> None:
        assert Paths.VAULT_LOGS_DIR.parent == Paths.LOGS_DIR
        assert Paths.WEB_LOGS_DIR.parent == Paths.LOGS_DIR


class TestDefaults:
    """기본값 상수 테스트"""

    def test_bps_denominator(self) -> None:
        assert BPS_DENOMINATOR == 10_000

    def test_governance_defaults_within_range(self) -> None:
        assert 0 <= Defaults.WITHDRAWAL_FEE_BPS <= BPS_DENOMINATOR
        assert 0 <= Defaults.MAX_ALLOCATION_BPS <= BPS_DENOMINATOR
        assert 0 <= Defaults.DEFAULT_DONATION_BPS <= BPS_DENOMINATOR

    def test_min_deposit_is_one_token(self) -> None:
        assert Defaults.MIN_DEPOSIT == 10**Defaults.ASSET_DECIMALS

    def test_account_header(self) -> None:
        assert HttpHeaders.ACCOUNT_ADDRESS == "X-Account-Address"
