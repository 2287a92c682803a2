"""
Vault Service (Facade)

모든 컴포넌트를 하나의 객체로 묶고, 표시 계층용 스냅샷과
원장 불변식 점검을 제공한다.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from adapters.db.sqlite_adapter import SQLiteAdapter
from adapters.interfaces import IAssetTransfer, INotifier, ITradingDesk
from core.domain.events import Event
from vault.accounting.engine import ShareAccountingEngine, assets_for_shares
from vault.access import normalize_address
from vault.allocation.allocator import CapitalAllocator, allocation_cap
from vault.executor import VaultExecutor
from vault.governance.controller import GovernanceController
from vault.impact.pool import ImpactPool

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccountView:
    """계정별 표시 정보"""

    owner: str
    shares: int
    total_deposited: int
    current_value: int
    unrealized_profit: int
    total_profit_withdrawn: int
    donation_rate_bps: int
    pool_balance: int
    total_donated: int
    certificate_count: int


@dataclass(frozen=True)
class VaultSnapshot:
    """표시 계층용 스냅샷 (한 번의 읽기 트랜잭션에서 조회)"""

    idle_assets: int
    allocated_assets: int
    total_assets: int
    total_shares: int
    share_price: Decimal
    paused: bool
    min_deposit: int
    withdrawal_fee_bps: int
    max_allocation_bps: int
    max_allocatable: int
    accumulated_fees: int
    total_pool_balance: int
    account: AccountView | None = None

    @property
    def account_shares(self) -> int:
        return self.account.shares if self.account else 0

    @property
    def account_total_deposited(self) -> int:
        return self.account.total_deposited if self.account else 0


class VaultService:
    """Vault Facade

    Args:
        executor: 트랜잭션 경계
        assets: 기초 자산 전송
        trading_desk: 트레이딩 지갑 자본 이동
        default_donation_bps: 기본 기부율

    사용 예시:
    ```python
    vault = VaultService(executor, assets, trading_desk)

    await vault.accounting.deposit(user, amount)
    await vault.allocation.move_to_trading_wallet(agent, amount, wallet)
    snapshot = await vault.snapshot(user)
    ```
    """

    def __init__(
        self,
        executor: VaultExecutor,
        assets: IAssetTransfer,
        trading_desk: ITradingDesk,
        default_donation_bps: int = 0,
    ):
        self.executor = executor
        self.assets = assets
        self.trading_desk = trading_desk

        self.impact = ImpactPool(executor, assets, default_donation_bps)
        self.accounting = ShareAccountingEngine(executor, assets, self.impact)
        self.allocation = CapitalAllocator(executor, trading_desk)
        self.governance = GovernanceController(executor, assets)

    @property
    def notifier(self) -> INotifier | None:
        return self.executor.notifier

    async def snapshot(self, owner: str | None = None) -> VaultSnapshot:
        """Vault 스냅샷 (owner 지정 시 계정 정보 포함)"""
        if owner is not None:
            owner = normalize_address(owner, "owner")

        async with self.executor.read() as ledger:
            state = await ledger.get_vault_state()
            pool = await ledger.get_impact_pool()

            account_view = None
            if owner is not None:
                account = await ledger.get_account(owner)
                impact = await ledger.get_impact_account(owner, self.impact.default_donation_bps)
                certificate_count = await ledger.count_certificates(owner)

                value = assets_for_shares(state, account.shares)
                account_view = AccountView(
                    owner=owner,
                    shares=account.shares,
                    total_deposited=account.total_deposited,
                    current_value=value,
                    unrealized_profit=max(0, value - account.total_deposited),
                    total_profit_withdrawn=account.total_profit_withdrawn,
                    donation_rate_bps=impact.donation_rate_bps,
                    pool_balance=impact.pool_balance,
                    total_donated=impact.total_donated,
                    certificate_count=certificate_count,
                )

        headroom = allocation_cap(state) - state.allocated_assets
        return VaultSnapshot(
            idle_assets=state.idle_assets,
            allocated_assets=state.allocated_assets,
            total_assets=state.total_assets,
            total_shares=state.total_shares,
            share_price=state.share_price,
            paused=state.paused,
            min_deposit=state.min_deposit,
            withdrawal_fee_bps=state.withdrawal_fee_bps,
            max_allocation_bps=state.max_allocation_bps,
            max_allocatable=max(0, min(headroom, state.idle_assets)),
            accumulated_fees=state.accumulated_fees,
            total_pool_balance=pool.total_pool_balance,
            account=account_view,
        )

    async def check_invariants(self) -> list[str]:
        """원장 불변식 점검

        Returns:
            위반 항목 설명 목록 (비어 있으면 정상)
        """
        violations: list[str] = []

        async with self.executor.read() as ledger:
            state = await ledger.get_vault_state()
            share_sum = await ledger.sum_account_shares()
            wallets = await ledger.list_trading_wallets()

        if share_sum != state.total_shares:
            violations.append(
                f"sum(account.shares)={share_sum} != total_shares={state.total_shares}"
            )

        allocated_sum = sum(w.allocated for w in wallets)
        if allocated_sum != state.allocated_assets:
            violations.append(
                f"sum(wallet.allocated)={allocated_sum} != allocated_assets={state.allocated_assets}"
            )

        if state.total_shares == 0 and state.total_assets > 0:
            logger.debug(f"Unclaimed dust in vault: {state.total_assets}")

        for violation in violations:
            logger.error(f"Ledger invariant violated: {violation}")
        return violations

    async def get_events(
        self,
        actor: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Event]:
        """감사 이벤트 조회 (최신순)"""
        async with self.executor.read_events() as event_store:
            if actor is not None:
                return await event_store.get_by_actor(
                    normalize_address(actor, "actor"), limit=limit, offset=offset
                )
            return await event_store.get_recent(limit=limit, offset=offset)

    async def get_events_by_tx(self, tx_id: str) -> list[Event]:
        """tx_id로 감사 이벤트 조회"""
        async with self.executor.read_events() as event_store:
            return await event_store.get_by_tx(tx_id)

    def get_stats(self) -> dict[str, Any]:
        """통계 반환"""
        return self.executor.get_stats()

    async def close(self) -> None:
        """연결 및 알림 클라이언트 정리"""
        notifier = self.executor.notifier
        close = getattr(notifier, "close", None)
        if close is not None:
            await close()

        if self.executor.read_db is not None:
            await self.executor.read_db.close()
        await self.executor.db.close()
