"""
Ledger 저장소

Vault의 모든 잔액을 보관하는 단일 원천.
컴포넌트는 잔액의 사본을 갖지 않고, 항상 이 저장소를 통해 읽고 쓴다.

트랜잭션 경계는 호출자(VaultExecutor)가 관리한다.
이 클래스는 BEGIN/COMMIT을 직접 실행하지 않는다.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from core.ledger.types import (
    Account,
    Certificate,
    CertificateStatus,
    ImpactAccount,
    ImpactPoolState,
    Minted,
    TradingWallet,
    Unminted,
    VaultState,
)

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)


class LedgerNotInitializedError(RuntimeError):
    """vault_state 행이 없음 (seed_vault_state 미호출)"""
    pass


class LedgerStore:
    """Ledger 저장소

    Args:
        db: SQLite 어댑터
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db

    # -------------------------------------------------------------------------
    # Vault 상태
    # -------------------------------------------------------------------------

    async def get_vault_state(self) -> VaultState:
        """Vault 전역 상태 조회

        Raises:
            LedgerNotInitializedError: 상태 행이 없는 경우
        """
        row = await self.db.fetchone(
            """
            SELECT
                owner, idle_assets, allocated_assets, total_shares,
                min_deposit, withdrawal_fee_bps, max_allocation_bps,
                paused, fee_recipient, accumulated_fees, impact_pool_ref
            FROM vault_state
            WHERE id = 1
            """
        )
        if row is None:
            raise LedgerNotInitializedError("vault_state is not initialized")

        return VaultState(
            owner=row[0],
            idle_assets=int(row[1]),
            allocated_assets=int(row[2]),
            total_shares=int(row[3]),
            min_deposit=int(row[4]),
            withdrawal_fee_bps=int(row[5]),
            max_allocation_bps=int(row[6]),
            paused=bool(row[7]),
            fee_recipient=row[8],
            accumulated_fees=int(row[9]),
            impact_pool_ref=row[10],
        )

    async def save_vault_state(self, state: VaultState) -> None:
        """Vault 전역 상태 저장"""
        await self.db.execute(
            """
            UPDATE vault_state SET
                owner = ?,
                idle_assets = ?,
                allocated_assets = ?,
                total_shares = ?,
                min_deposit = ?,
                withdrawal_fee_bps = ?,
                max_allocation_bps = ?,
                paused = ?,
                fee_recipient = ?,
                accumulated_fees = ?,
                impact_pool_ref = ?,
                updated_at = datetime('now')
            WHERE id = 1
            """,
            (
                state.owner,
                str(state.idle_assets),
                str(state.allocated_assets),
                str(state.total_shares),
                str(state.min_deposit),
                state.withdrawal_fee_bps,
                state.max_allocation_bps,
                1 if state.paused else 0,
                state.fee_recipient,
                str(state.accumulated_fees),
                state.impact_pool_ref,
            ),
        )

    # -------------------------------------------------------------------------
    # 예치자 계정
    # -------------------------------------------------------------------------

    async def get_account(self, owner: str) -> Account:
        """계정 조회 (없으면 빈 계정)"""
        row = await self.db.fetchone(
            """
            SELECT shares, total_deposited, lifetime_deposited, total_profit_withdrawn
            FROM vault_account
            WHERE owner = ?
            """,
            (owner,),
        )
        if row is None:
            return Account(owner=owner)

        return Account(
            owner=owner,
            shares=int(row[0]),
            total_deposited=int(row[1]),
            lifetime_deposited=int(row[2]),
            total_profit_withdrawn=int(row[3]),
        )

    async def save_account(self, account: Account) -> None:
        """계정 저장 (UPSERT)"""
        await self.db.execute(
            """
            INSERT INTO vault_account (
                owner, shares, total_deposited, lifetime_deposited, total_profit_withdrawn
            ) VALUES (?, ?, ?, ?, ?)
            ON CONFLICT(owner) DO UPDATE SET
                shares = excluded.shares,
                total_deposited = excluded.total_deposited,
                lifetime_deposited = excluded.lifetime_deposited,
                total_profit_withdrawn = excluded.total_profit_withdrawn,
                updated_at = datetime('now')
            """,
            (
                account.owner,
                str(account.shares),
                str(account.total_deposited),
                str(account.lifetime_deposited),
                str(account.total_profit_withdrawn),
            ),
        )

    async def sum_account_shares(self) -> int:
        """전체 계정 지분 합계 (불변식 점검용)"""
        rows = await self.db.fetchall("SELECT shares FROM vault_account")
        return sum(int(row[0]) for row in rows)

    # -------------------------------------------------------------------------
    # 승인된 에이전트
    # -------------------------------------------------------------------------

    async def is_agent(self, address: str) -> bool:
        """에이전트 허용 목록 포함 여부"""
        row = await self.db.fetchone(
            "SELECT 1 FROM authorized_agent WHERE agent = ?",
            (address,),
        )
        return row is not None

    async def add_agent(self, address: str, added_by: str) -> bool:
        """에이전트 추가

        Returns:
            True: 새로 추가됨, False: 이미 존재
        """
        cursor = await self.db.execute(
            "INSERT OR IGNORE INTO authorized_agent (agent, added_by) VALUES (?, ?)",
            (address, added_by),
        )
        return cursor.rowcount > 0

    async def remove_agent(self, address: str) -> bool:
        """에이전트 제거

        Returns:
            True: 제거됨, False: 목록에 없음
        """
        cursor = await self.db.execute(
            "DELETE FROM authorized_agent WHERE agent = ?",
            (address,),
        )
        return cursor.rowcount > 0

    async def list_agents(self) -> list[str]:
        """에이전트 목록 (추가 순)"""
        rows = await self.db.fetchall(
            "SELECT agent FROM authorized_agent ORDER BY created_at, agent"
        )
        return [row[0] for row in rows]

    # -------------------------------------------------------------------------
    # 트레이딩 지갑
    # -------------------------------------------------------------------------

    async def get_trading_wallet(self, wallet: str) -> TradingWallet:
        """지갑 배분 현황 조회 (없으면 0)"""
        row = await self.db.fetchone(
            """
            SELECT allocated, total_allocated, total_returned, total_profit
            FROM trading_wallet
            WHERE wallet = ?
            """,
            (wallet,),
        )
        if row is None:
            return TradingWallet(wallet=wallet)

        return TradingWallet(
            wallet=wallet,
            allocated=int(row[0]),
            total_allocated=int(row[1]),
            total_returned=int(row[2]),
            total_profit=int(row[3]),
        )

    async def save_trading_wallet(self, wallet: TradingWallet) -> None:
        """지갑 배분 현황 저장 (UPSERT)"""
        await self.db.execute(
            """
            INSERT INTO trading_wallet (
                wallet, allocated, total_allocated, total_returned, total_profit
            ) VALUES (?, ?, ?, ?, ?)
            ON CONFLICT(wallet) DO UPDATE SET
                allocated = excluded.allocated,
                total_allocated = excluded.total_allocated,
                total_returned = excluded.total_returned,
                total_profit = excluded.total_profit,
                updated_at = datetime('now')
            """,
            (
                wallet.wallet,
                str(wallet.allocated),
                str(wallet.total_allocated),
                str(wallet.total_returned),
                str(wallet.total_profit),
            ),
        )

    async def list_trading_wallets(self) -> list[TradingWallet]:
        """전체 지갑 배분 현황"""
        rows = await self.db.fetchall(
            """
            SELECT wallet, allocated, total_allocated, total_returned, total_profit
            FROM trading_wallet
            ORDER BY wallet
            """
        )
        return [
            TradingWallet(
                wallet=row[0],
                allocated=int(row[1]),
                total_allocated=int(row[2]),
                total_returned=int(row[3]),
                total_profit=int(row[4]),
            )
            for row in rows
        ]

    # -------------------------------------------------------------------------
    # 임팩트 풀
    # -------------------------------------------------------------------------

    async def get_impact_pool(self) -> ImpactPoolState:
        """임팩트 풀 전역 상태 조회"""
        row = await self.db.fetchone(
            """
            SELECT total_pool_balance, next_certificate_id, next_token_id
            FROM impact_pool
            WHERE id = 1
            """
        )
        if row is None:
            raise LedgerNotInitializedError("impact_pool is not initialized")

        return ImpactPoolState(
            total_pool_balance=int(row[0]),
            next_certificate_id=int(row[1]),
            next_token_id=int(row[2]),
        )

    async def set_total_pool_balance(self, total_pool_balance: int) -> None:
        """풀 잔액 갱신"""
        await self.db.execute(
            """
            UPDATE impact_pool SET
                total_pool_balance = ?,
                updated_at = datetime('now')
            WHERE id = 1
            """,
            (str(total_pool_balance),),
        )

    async def get_impact_account(self, owner: str, default_rate_bps: int) -> ImpactAccount:
        """임팩트 계정 조회 (없으면 기본 기부율의 빈 계정)"""
        row = await self.db.fetchone(
            """
            SELECT donation_rate_bps, total_donated, pool_balance
            FROM impact_account
            WHERE owner = ?
            """,
            (owner,),
        )
        if row is None:
            return ImpactAccount(owner=owner, donation_rate_bps=default_rate_bps)

        return ImpactAccount(
            owner=owner,
            donation_rate_bps=int(row[0]),
            total_donated=int(row[1]),
            pool_balance=int(row[2]),
        )

    async def save_impact_account(self, account: ImpactAccount) -> None:
        """임팩트 계정 저장 (UPSERT)"""
        await self.db.execute(
            """
            INSERT INTO impact_account (
                owner, donation_rate_bps, total_donated, pool_balance
            ) VALUES (?, ?, ?, ?)
            ON CONFLICT(owner) DO UPDATE SET
                donation_rate_bps = excluded.donation_rate_bps,
                total_donated = excluded.total_donated,
                pool_balance = excluded.pool_balance,
                updated_at = datetime('now')
            """,
            (
                account.owner,
                account.donation_rate_bps,
                str(account.total_donated),
                str(account.pool_balance),
            ),
        )

    # -------------------------------------------------------------------------
    # 인증서
    # -------------------------------------------------------------------------

    async def create_certificate(
        self,
        owner: str,
        amount: int,
        tx_id: str | None = None,
        ts: datetime | None = None,
    ) -> Certificate:
        """인증서 생성 (Unminted)

        풀 단위 단조 증가 ID를 할당한다.
        """
        pool = await self.get_impact_pool()
        certificate_id = pool.next_certificate_id
        ts = ts or datetime.now(timezone.utc)

        await self.db.execute(
            """
            INSERT INTO certificate (certificate_id, owner, amount, ts, status, tx_id)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                certificate_id,
                owner,
                str(amount),
                ts.isoformat(),
                CertificateStatus.UNMINTED.value,
                tx_id,
            ),
        )
        await self.db.execute(
            "UPDATE impact_pool SET next_certificate_id = ? WHERE id = 1",
            (certificate_id + 1,),
        )

        logger.debug(f"Certificate created: {certificate_id}")
        return Certificate(
            id=certificate_id,
            owner=owner,
            amount=amount,
            timestamp=ts,
            state=Unminted(),
            tx_id=tx_id,
        )

    async def mark_certificate_minted(self, certificate_id: int) -> Certificate:
        """인증서 민팅 (Unminted → Minted)

        status = 'UNMINTED' 조건부 UPDATE로 한 번만 전이된다.

        Raises:
            RuntimeError: 대상이 없거나 이미 민팅된 경우
        """
        pool = await self.get_impact_pool()
        token_id = pool.next_token_id

        cursor = await self.db.execute(
            """
            UPDATE certificate SET
                status = ?,
                token_id = ?,
                minted_at = datetime('now')
            WHERE certificate_id = ? AND status = ?
            """,
            (
                CertificateStatus.MINTED.value,
                token_id,
                certificate_id,
                CertificateStatus.UNMINTED.value,
            ),
        )
        if cursor.rowcount != 1:
            raise RuntimeError(f"Certificate {certificate_id} is not mintable")

        await self.db.execute(
            "UPDATE impact_pool SET next_token_id = ? WHERE id = 1",
            (token_id + 1,),
        )

        certificate = await self.get_certificate(certificate_id)
        assert certificate is not None
        return certificate

    async def get_certificate(self, certificate_id: int) -> Certificate | None:
        """인증서 단건 조회"""
        row = await self.db.fetchone(
            """
            SELECT certificate_id, owner, amount, ts, status, token_id, tx_id
            FROM certificate
            WHERE certificate_id = ?
            """,
            (certificate_id,),
        )
        if row is None:
            return None
        return self._row_to_certificate(row)

    async def list_certificates(
        self,
        owner: str,
        offset: int = 0,
        limit: int = 10,
    ) -> list[Certificate]:
        """사용자 인증서 목록 (ID 오름차순)"""
        rows = await self.db.fetchall(
            """
            SELECT certificate_id, owner, amount, ts, status, token_id, tx_id
            FROM certificate
            WHERE owner = ?
            ORDER BY certificate_id
            LIMIT ? OFFSET ?
            """,
            (owner, limit, offset),
        )
        return [self._row_to_certificate(row) for row in rows]

    async def count_certificates(self, owner: str) -> int:
        """사용자 인증서 개수"""
        row = await self.db.fetchone(
            "SELECT COUNT(*) FROM certificate WHERE owner = ?",
            (owner,),
        )
        return int(row[0]) if row else 0

    def _row_to_certificate(self, row: tuple) -> Certificate:
        """DB 행을 Certificate로 변환"""
        if row[4] == CertificateStatus.MINTED.value:
            state: Minted | Unminted = Minted(token_id=int(row[5]))
        else:
            state = Unminted()

        return Certificate(
            id=int(row[0]),
            owner=row[1],
            amount=int(row[2]),
            timestamp=datetime.fromisoformat(row[3]),
            state=state,
            tx_id=row[6],
        )
