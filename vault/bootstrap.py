"""
Vault Bootstrap

설정 로드, 스키마 초기화, 의존성 주입.

1. 쓰기 연결 생성 (WAL)
2. 감사 이벤트/원장 스키마 생성 (IF NOT EXISTS)
3. vault_state 최초 1회 시드 (이후에는 원장 값 유지)
4. 읽기 전용 연결 생성 (조회가 쓰기를 막지 않도록)
5. Executor / 컴포넌트 조립
"""

import logging
from pathlib import Path

from adapters.db.sqlite_adapter import SQLiteAdapter, init_schema
from adapters.interfaces import IAssetTransfer, INotifier, ITradingDesk
from adapters.slack.notifier import SlackNotifier
from core.config.loader import VaultSettings, get_db_path, get_vault_parameters
from core.constants import Defaults
from core.ledger.schema import VaultParameters, init_ledger_schema, seed_vault_state
from core.ledger.store import LedgerStore
from vault.executor import VaultExecutor
from vault.service import VaultService

logger = logging.getLogger(__name__)


async def create_vault(
    db_path: Path | str,
    params: VaultParameters,
    network: str,
    assets: IAssetTransfer,
    trading_desk: ITradingDesk,
    notifier: INotifier | None = None,
    default_donation_bps: int = Defaults.DEFAULT_DONATION_BPS,
    read_connection: bool = True,
) -> VaultService:
    """VaultService 생성

    Args:
        db_path: 원장 DB 파일 경로
        params: 최초 생성 시 거버넌스 파라미터
        network: 이벤트에 기록할 네트워크
        assets: 기초 자산 전송
        trading_desk: 트레이딩 지갑 자본 이동
        notifier: 결과 알림 (선택)
        default_donation_bps: 기본 기부율
        read_connection: True면 조회 전용 연결 추가 생성

    Returns:
        연결된 VaultService (사용 후 close() 필요)
    """
    db = SQLiteAdapter(db_path)
    await db.connect()
    read_db: SQLiteAdapter | None = None

    try:
        await init_schema(db)
        await init_ledger_schema(db)

        async with db.transaction():
            seeded = await seed_vault_state(db, params)

        if not seeded:
            state = await LedgerStore(db).get_vault_state()
            if state.owner != params.owner:
                logger.warning(
                    f"설정의 owner와 원장의 owner가 다릅니다 (원장 값 사용): "
                    f"config={params.owner}, ledger={state.owner}"
                )

        if read_connection:
            read_db = SQLiteAdapter(db_path, readonly=True)
            await read_db.connect()

        executor = VaultExecutor(
            db=db,
            network=network,
            notifier=notifier,
            read_db=read_db,
        )

        logger.info(
            f"Vault 준비 완료: network={network}, db={db_path}",
            extra={"seeded": seeded},
        )
    except BaseException:
        # 연결 스레드가 남으면 프로세스가 종료되지 않는다
        if read_db is not None:
            await read_db.close()
        await db.close()
        raise

    return VaultService(
        executor=executor,
        assets=assets,
        trading_desk=trading_desk,
        default_donation_bps=default_donation_bps,
    )


def create_notifier(settings: VaultSettings) -> INotifier | None:
    """설정에 Slack Webhook이 있으면 SlackNotifier 생성"""
    if settings.slack_webhook_url:
        return SlackNotifier(webhook_url=settings.slack_webhook_url)

    logger.info("Slack Webhook 미설정: 연산 결과 알림 비활성화")
    return None


async def create_vault_from_settings(
    settings: VaultSettings,
    assets: IAssetTransfer,
    trading_desk: ITradingDesk,
    notifier: INotifier | None = None,
    db_path: Path | None = None,
) -> VaultService:
    """vault.yaml 설정으로 VaultService 생성

    Args:
        settings: 로드된 설정
        assets: 기초 자산 전송
        trading_desk: 트레이딩 지갑 자본 이동
        notifier: 결과 알림 (None이면 설정으로 생성)
        db_path: DB 경로 오버라이드 (None이면 network별 기본 경로)
    """
    if notifier is None:
        notifier = create_notifier(settings)

    return await create_vault(
        db_path=db_path or get_db_path(settings),
        params=get_vault_parameters(settings),
        network=settings.network.value,
        assets=assets,
        trading_desk=trading_desk,
        notifier=notifier,
        default_donation_bps=settings.vault.default_donation_bps,
    )
