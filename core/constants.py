"""
하드코딩 상수 - 변경될 일이 거의 없는 고정값

중요: 경로는 반드시 pathlib.Path 사용 (Windows/Linux 크로스 플랫폼)
금액은 모두 기초 자산의 최소 단위(wei) 정수로 다룬다.
"""

from pathlib import Path


# 프로젝트 루트 (이 파일 기준 2단계 상위: core/constants.py → impactvault/)
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent


# Basis point 분모 (10000 bps = 100%)
BPS_DENOMINATOR: int = 10_000


class Defaults:
    """기본값 상수"""

    ASSET_SYMBOL: str = "WHBAR"
    ASSET_DECIMALS: int = 18

    # 거버넌스 파라미터 초기값 (config에 없을 때)
    MIN_DEPOSIT: int = 10**18  # 1 토큰
    WITHDRAWAL_FEE_BPS: int = 200  # 2%
    MAX_ALLOCATION_BPS: int = 8000  # 80%
    DEFAULT_DONATION_BPS: int = 0
    IMPACT_POOL_REF: str = "impact-pool"

    # 인증서 목록 페이지 기본 크기
    CERTIFICATE_PAGE_LIMIT: int = 10

    WEB_HOST: str = "127.0.0.1"
    WEB_PORT: int = 8000

    LOG_LEVEL: str = "INFO"


class Paths:
    """프로젝트 경로 상수 (pathlib 사용 - OS 독립적)"""

    # 디렉토리
    CONFIG_DIR: Path = PROJECT_ROOT / "config"
    DATA_DIR: Path = PROJECT_ROOT / "data"
    LOGS_DIR: Path = DATA_DIR / "logs"
    VAULT_LOGS_DIR: Path = LOGS_DIR / "vault"
    WEB_LOGS_DIR: Path = LOGS_DIR / "web"

    # 설정 파일
    CONFIG_FILE: Path = CONFIG_DIR / "vault.yaml"

    # DB 파일
    MAINNET_DB: Path = DATA_DIR / "impactvault_mainnet.db"
    TESTNET_DB: Path = DATA_DIR / "impactvault_testnet.db"


class HttpHeaders:
    """Web 요청 헤더"""

    # 지갑/세션 레이어가 인증한 호출자 주소
    ACCOUNT_ADDRESS: str = "X-Account-Address"
