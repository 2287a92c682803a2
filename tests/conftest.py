"""
pytest 공통 fixture 정의

임시 디렉토리, vault.yaml fixture
"""

import tempfile
from pathlib import Path

import pytest

from tests.constants import FEE_RECIPIENT, OWNER


@pytest.fixture
def temp_dir() -> Path:
    """OS 독립적인 임시 디렉토리 생성"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_vault_config(temp_dir: Path) -> Path:
    """테스트용 vault.yaml 파일 생성"""
    content = f"""# 테스트용 vault.yaml
network: testnet
owner: "{OWNER}"

asset:
  symbol: WHBAR
  decimals: 18

vault:
  min_deposit: "0.5"
  withdrawal_fee_bps: 200
  max_allocation_bps: 8000
  fee_recipient: "0x{FEE_RECIPIENT[2:].upper()}"
  impact_pool_ref: test-pool
  default_donation_bps: 500

notifier:
  slack_webhook_url: "https://hooks.slack.com/services/test"
"""
    config_path = temp_dir / "vault.yaml"
    config_path.write_text(content, encoding="utf-8")
    return config_path


@pytest.fixture
def temp_vault_config_minimal(temp_dir: Path) -> Path:
    """필수 필드만 있는 vault.yaml (기본값 적용 확인용)"""
    content = f"""network: mainnet
owner: "{OWNER}"
"""
    config_path = temp_dir / "vault_minimal.yaml"
    config_path.write_text(content, encoding="utf-8")
    return config_path


@pytest.fixture
def temp_vault_config_invalid_network(temp_dir: Path) -> Path:
    """잘못된 network의 vault.yaml 파일 생성"""
    content = f"""network: devnet
owner: "{OWNER}"
"""
    config_path = temp_dir / "vault_invalid.yaml"
    config_path.write_text(content, encoding="utf-8")
    return config_path
