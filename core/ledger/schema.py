"""
원장 스키마 초기화

Vault/Web 시작 시 자동으로 원장 테이블 생성.
CREATE IF NOT EXISTS 패턴으로 안전하게 동작.

금액 컬럼은 모두 TEXT (wei 정수는 64bit 범위를 넘는다).
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from core.constants import Defaults

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VaultParameters:
    """Vault 최초 생성 시 사용하는 거버넌스 파라미터

    한 번 기록된 이후에는 원장이 진실의 원천이며,
    이후 변경은 거버넌스 연산으로만 이루어진다.
    """

    owner: str
    fee_recipient: str
    min_deposit: int = Defaults.MIN_DEPOSIT
    withdrawal_fee_bps: int = Defaults.WITHDRAWAL_FEE_BPS
    max_allocation_bps: int = Defaults.MAX_ALLOCATION_BPS
    impact_pool_ref: str = Defaults.IMPACT_POOL_REF


async def init_ledger_schema(db: "SQLiteAdapter") -> None:
    """원장 스키마 초기화

    이미 존재하는 경우 안전하게 건너뜀 (IF NOT EXISTS).

    Args:
        db: SQLiteAdapter 인스턴스
    """
    await _create_ledger_tables(db)
    logger.info("원장 스키마 초기화 완료")


async def seed_vault_state(db: "SQLiteAdapter", params: VaultParameters) -> bool:
    """vault_state / impact_pool 단일 행 생성 (없을 때만)

    Returns:
        True: 새로 생성됨
        False: 이미 존재 (기존 값 유지)
    """
    cursor = await db.execute(
        """
        INSERT OR IGNORE INTO vault_state (
            id, owner, idle_assets, allocated_assets, total_shares,
            min_deposit, withdrawal_fee_bps, max_allocation_bps,
            paused, fee_recipient, accumulated_fees, impact_pool_ref
        ) VALUES (1, ?, '0', '0', '0', ?, ?, ?, 0, ?, '0', ?)
        """,
        (
            params.owner,
            str(params.min_deposit),
            params.withdrawal_fee_bps,
            params.max_allocation_bps,
            params.fee_recipient,
            params.impact_pool_ref,
        ),
    )
    created = cursor.rowcount > 0

    await db.execute(
        """
        INSERT OR IGNORE INTO impact_pool (
            id, total_pool_balance, next_certificate_id, next_token_id
        ) VALUES (1, '0', 1, 1)
        """
    )

    if created:
        logger.info(
            "Vault 상태 초기화",
            extra={"owner": params.owner, "fee_recipient": params.fee_recipient},
        )
    return created


async def _create_ledger_tables(db: "SQLiteAdapter") -> None:
    """원장 테이블 생성"""

    # vault_state (단일 행)
    await db.execute("""
        CREATE TABLE IF NOT EXISTS vault_state (
            id                  INTEGER PRIMARY KEY CHECK (id = 1),
            owner               TEXT NOT NULL,
            idle_assets         TEXT NOT NULL DEFAULT '0',
            allocated_assets    TEXT NOT NULL DEFAULT '0',
            total_shares        TEXT NOT NULL DEFAULT '0',
            min_deposit         TEXT NOT NULL DEFAULT '0',
            withdrawal_fee_bps  INTEGER NOT NULL DEFAULT 0,
            max_allocation_bps  INTEGER NOT NULL DEFAULT 0,
            paused              INTEGER NOT NULL DEFAULT 0,
            fee_recipient       TEXT NOT NULL,
            accumulated_fees    TEXT NOT NULL DEFAULT '0',
            impact_pool_ref     TEXT NOT NULL,
            updated_at          TEXT NOT NULL DEFAULT (datetime('now'))
        )
    """)

    # vault_account (예치자별 지분)
    await db.execute("""
        CREATE TABLE IF NOT EXISTS vault_account (
            owner                   TEXT PRIMARY KEY,
            shares                  TEXT NOT NULL DEFAULT '0',
            total_deposited         TEXT NOT NULL DEFAULT '0',
            lifetime_deposited      TEXT NOT NULL DEFAULT '0',
            total_profit_withdrawn  TEXT NOT NULL DEFAULT '0',
            created_at              TEXT NOT NULL DEFAULT (datetime('now')),
            updated_at              TEXT NOT NULL DEFAULT (datetime('now'))
        )
    """)

    # authorized_agent (자본 이동 허용 목록)
    await db.execute("""
        CREATE TABLE IF NOT EXISTS authorized_agent (
            agent        TEXT PRIMARY KEY,
            added_by     TEXT NOT NULL,
            created_at   TEXT NOT NULL DEFAULT (datetime('now'))
        )
    """)

    # trading_wallet (지갑별 배분 현황)
    await db.execute("""
        CREATE TABLE IF NOT EXISTS trading_wallet (
            wallet           TEXT PRIMARY KEY,
            allocated        TEXT NOT NULL DEFAULT '0',
            total_allocated  TEXT NOT NULL DEFAULT '0',
            total_returned   TEXT NOT NULL DEFAULT '0',
            total_profit     TEXT NOT NULL DEFAULT '0',
            updated_at       TEXT NOT NULL DEFAULT (datetime('now'))
        )
    """)

    # impact_pool (단일 행: 풀 잔액 + ID 카운터)
    await db.execute("""
        CREATE TABLE IF NOT EXISTS impact_pool (
            id                   INTEGER PRIMARY KEY CHECK (id = 1),
            total_pool_balance   TEXT NOT NULL DEFAULT '0',
            next_certificate_id  INTEGER NOT NULL DEFAULT 1,
            next_token_id        INTEGER NOT NULL DEFAULT 1,
            updated_at           TEXT NOT NULL DEFAULT (datetime('now'))
        )
    """)

    # impact_account (사용자별 기부율/기부액)
    await db.execute("""
        CREATE TABLE IF NOT EXISTS impact_account (
            owner               TEXT PRIMARY KEY,
            donation_rate_bps   INTEGER NOT NULL,
            total_donated       TEXT NOT NULL DEFAULT '0',
            pool_balance        TEXT NOT NULL DEFAULT '0',
            updated_at          TEXT NOT NULL DEFAULT (datetime('now'))
        )
    """)

    # certificate (임팩트 인증서)
    # token_id는 민팅 시에만 할당되며, status와 함께만 변경된다
    await db.execute("""
        CREATE TABLE IF NOT EXISTS certificate (
            certificate_id   INTEGER PRIMARY KEY,
            owner            TEXT NOT NULL,
            amount           TEXT NOT NULL,
            ts               TEXT NOT NULL,
            status           TEXT NOT NULL DEFAULT 'UNMINTED',
            token_id         INTEGER UNIQUE,
            tx_id            TEXT,
            minted_at        TEXT,
            CHECK (
                (status = 'UNMINTED' AND token_id IS NULL)
                OR (status = 'MINTED' AND token_id IS NOT NULL)
            )
        )
    """)

    await db.execute("""
        CREATE INDEX IF NOT EXISTS ix_certificate_owner
        ON certificate(owner, certificate_id)
    """)
