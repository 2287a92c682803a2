"""
Capital Allocation

승인된 에이전트가 유휴 자산을 트레이딩 지갑으로 배분하고 회수.

- 배분 한도: allocated_assets + amount <= total_assets * max_allocation_bps // 10000
- 회수 시 보고된 수익은 idle_assets만 늘린다 (유일한 수익 경로)
- 지갑별 배분액 합계 == allocated_assets
"""

import logging
from dataclasses import replace

from adapters.interfaces import ITradingDesk
from core.constants import BPS_DENOMINATOR
from core.domain.errors import StateError, ValidationError
from core.domain.events import EventTypes
from core.ledger.types import TradingWallet, VaultState
from core.types import EntityKind, Operation
from vault.access import (
    normalize_address,
    require_agent,
    require_amount,
    require_not_paused,
)
from vault.executor import TxContext, VaultExecutor

logger = logging.getLogger(__name__)


def allocation_cap(state: VaultState) -> int:
    """배분 가능한 최대 총액"""
    return state.total_assets * state.max_allocation_bps // BPS_DENOMINATOR


class CapitalAllocator:
    """자본 배분

    Args:
        executor: 트랜잭션 경계
        trading_desk: 트레이딩 지갑 자본 이동
    """

    def __init__(self, executor: VaultExecutor, trading_desk: ITradingDesk):
        self.executor = executor
        self.trading_desk = trading_desk

    async def move_to_trading_wallet(self, caller: str, amount: int, wallet: str) -> None:
        """유휴 자산 → 트레이딩 지갑

        Raises:
            StateError: 에이전트 아님, 일시정지, 배분 한도 초과, 유휴 자산 부족
            ValidationError: 금액/주소 오류
            TransferError: 자본 이동 실패
        """
        async with self.executor.write(Operation.MOVE_TO_TRADING_WALLET, caller) as tx:
            agent = normalize_address(caller, "caller")
            wallet = normalize_address(wallet, "wallet")
            amount = require_amount(amount)

            state = await tx.ledger.get_vault_state()
            require_not_paused(state)
            await require_agent(tx.ledger, agent)

            cap = allocation_cap(state)
            if state.allocated_assets + amount > cap:
                raise StateError(
                    f"배분 한도 초과: allocated={state.allocated_assets}, "
                    f"amount={amount}, cap={cap}"
                )
            if amount > state.idle_assets:
                raise StateError(
                    f"유휴 자산 부족: idle={state.idle_assets}, amount={amount}"
                )

            record = await tx.ledger.get_trading_wallet(wallet)

            await tx.ledger.save_vault_state(
                replace(
                    state,
                    idle_assets=state.idle_assets - amount,
                    allocated_assets=state.allocated_assets + amount,
                )
            )
            await tx.ledger.save_trading_wallet(
                replace(
                    record,
                    allocated=record.allocated + amount,
                    total_allocated=record.total_allocated + amount,
                )
            )

            await tx.emit(
                EventTypes.CAPITAL_ALLOCATED,
                EntityKind.TRADING_WALLET,
                wallet,
                {
                    "wallet": wallet,
                    "amount": str(amount),
                    "allocated_assets": str(state.allocated_assets + amount),
                },
            )

            await self.trading_desk.allocate(wallet, amount)

        logger.info(f"Capital allocated: {wallet} {amount}")

    async def return_capital(
        self,
        caller: str,
        from_wallet: str,
        amount: int,
        reported_profit: int = 0,
    ) -> None:
        """트레이딩 지갑 → 유휴 자산 (원금 + 보고 수익)

        일시정지 중에도 허용된다.
        """
        async with self.executor.write(Operation.RETURN_CAPITAL, caller) as tx:
            agent = normalize_address(caller, "caller")
            wallet = normalize_address(from_wallet, "from_wallet")
            amount = require_amount(amount)
            reported_profit = require_amount(reported_profit, "reported_profit", allow_zero=True)
            if reported_profit > amount:
                raise ValidationError(
                    f"reported_profit이 amount보다 큽니다: amount={amount}, "
                    f"reported_profit={reported_profit}"
                )

            await require_agent(tx.ledger, agent)
            await self._apply_return(tx, wallet, amount, reported_profit)

        logger.info(f"Capital returned: {wallet} {amount} (profit {reported_profit})")

    async def return_all_capital(
        self,
        caller: str,
        from_wallet: str,
        reported_profit: int = 0,
    ) -> int:
        """지갑에 배분된 원금 전액 + 보고 수익 회수

        Returns:
            회수한 총액
        """
        async with self.executor.write(Operation.RETURN_ALL_CAPITAL, caller) as tx:
            agent = normalize_address(caller, "caller")
            wallet = normalize_address(from_wallet, "from_wallet")
            reported_profit = require_amount(reported_profit, "reported_profit", allow_zero=True)

            await require_agent(tx.ledger, agent)

            record = await tx.ledger.get_trading_wallet(wallet)
            amount = record.allocated + reported_profit
            if amount == 0:
                raise StateError(f"회수할 자본이 없습니다: wallet={wallet}")

            await self._apply_return(tx, wallet, amount, reported_profit)

        logger.info(f"All capital returned: {wallet} {amount}")
        return amount

    async def _apply_return(
        self,
        tx: TxContext,
        wallet: str,
        amount: int,
        reported_profit: int,
    ) -> None:
        """회수 반영

        원금 = min(지갑 배분액, amount - reported_profit).
        지갑 배분액을 넘는 부분은 수익으로 취급한다.
        """
        state = await tx.ledger.get_vault_state()
        record = await tx.ledger.get_trading_wallet(wallet)

        principal = min(record.allocated, amount - reported_profit)
        profit = amount - principal

        await tx.ledger.save_vault_state(
            replace(
                state,
                idle_assets=state.idle_assets + amount,
                allocated_assets=state.allocated_assets - principal,
            )
        )
        await tx.ledger.save_trading_wallet(
            replace(
                record,
                allocated=record.allocated - principal,
                total_returned=record.total_returned + amount,
                total_profit=record.total_profit + profit,
            )
        )

        await tx.emit(
            EventTypes.CAPITAL_RETURNED,
            EntityKind.TRADING_WALLET,
            wallet,
            {
                "wallet": wallet,
                "amount": str(amount),
                "principal": str(principal),
                "profit": str(profit),
                "allocated_assets": str(state.allocated_assets - principal),
            },
        )

        await self.trading_desk.recall(wallet, amount)

    # -------------------------------------------------------------------------
    # 조회
    # -------------------------------------------------------------------------

    async def get_allocation(self, wallet: str) -> TradingWallet:
        """지갑 배분 현황"""
        wallet = normalize_address(wallet, "wallet")
        async with self.executor.read() as ledger:
            return await ledger.get_trading_wallet(wallet)

    async def list_trading_wallets(self) -> list[TradingWallet]:
        """전체 지갑 배분 현황"""
        async with self.executor.read() as ledger:
            return await ledger.list_trading_wallets()

    async def max_allocatable(self) -> int:
        """지금 추가로 배분 가능한 금액 (한도와 유휴 자산 중 작은 값)"""
        async with self.executor.read() as ledger:
            state = await ledger.get_vault_state()
        headroom = allocation_cap(state) - state.allocated_assets
        return max(0, min(headroom, state.idle_assets))
