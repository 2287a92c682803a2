"""
Share Accounting Engine

예치 → 지분 발행, 전량 상환 → 수익 분배 (수수료 / 기부 / 사용자 순수령액).

지분 가격 = total_assets / total_shares
- 최초 예치는 1:1
- 이후 발행량은 내림 나눗셈 (반올림 이익은 항상 Vault 쪽)
- 상환액도 내림 나눗셈 → 어떤 연산도 지분 가격을 낮추지 않는다
"""

import logging
from dataclasses import replace
from decimal import Decimal

from adapters.interfaces import IAssetTransfer
from core.constants import BPS_DENOMINATOR
from core.domain.errors import StateError, ValidationError
from core.domain.events import EventTypes
from core.ledger.types import Account, VaultState, WithdrawalReceipt
from core.types import EntityKind, Operation
from vault.access import (
    normalize_address,
    require_amount,
    require_not_paused,
)
from vault.executor import VaultExecutor
from vault.impact.pool import ImpactPool

logger = logging.getLogger(__name__)


# =============================================================================
# 순수 계산 함수
# =============================================================================


def shares_for_deposit(state: VaultState, amount: int) -> int:
    """예치 금액에 대해 발행될 지분 수"""
    if state.total_shares == 0:
        return amount
    if state.total_assets == 0:
        raise StateError("지분이 있으나 총 자산이 0입니다")
    return amount * state.total_shares // state.total_assets


def assets_for_shares(state: VaultState, shares: int) -> int:
    """지분 상환 시 받게 될 자산 (내림)"""
    if state.total_shares == 0:
        return 0
    return shares * state.total_assets // state.total_shares


def compute_withdrawal(
    state: VaultState,
    account: Account,
    donation_bps: int,
) -> WithdrawalReceipt:
    """전량 상환 분배 계산

    gross  = shares * total_assets // total_shares
    profit = max(0, gross - total_deposited)
    fee    = profit * withdrawal_fee_bps // 10000
    donation = (profit - fee) * donation_bps // 10000
    net    = gross - fee - donation
    """
    gross = assets_for_shares(state, account.shares)
    profit = max(0, gross - account.total_deposited)
    fee = profit * state.withdrawal_fee_bps // BPS_DENOMINATOR
    donation = (profit - fee) * donation_bps // BPS_DENOMINATOR

    return WithdrawalReceipt(
        gross_assets=gross,
        profit=profit,
        fee=fee,
        donation=donation,
        net_to_user=gross - fee - donation,
        shares_burned=account.shares,
    )


# =============================================================================
# 엔진
# =============================================================================


class ShareAccountingEngine:
    """지분 회계 엔진

    Args:
        executor: 트랜잭션 경계
        assets: 기초 자산 전송
        impact_pool: 기부금 분리 및 인증서 생성

    사용 예시:
    ```python
    engine = ShareAccountingEngine(executor, assets, impact_pool)

    shares = await engine.deposit(user, 100 * 10**18)
    receipt = await engine.withdraw_profits(user, donation_bps=1000)
    ```
    """

    def __init__(
        self,
        executor: VaultExecutor,
        assets: IAssetTransfer,
        impact_pool: ImpactPool,
    ):
        self.executor = executor
        self.assets = assets
        self.impact_pool = impact_pool

    async def deposit(self, caller: str, amount: int) -> int:
        """기초 자산 예치

        Returns:
            발행된 지분 수

        Raises:
            StateError: 일시정지 상태
            ValidationError: 최소 예치액 미만, 발행 지분 0
            TransferError: 자산 전송 실패
        """
        async with self.executor.write(Operation.DEPOSIT, caller) as tx:
            owner = normalize_address(caller, "caller")
            amount = require_amount(amount)

            state = await tx.ledger.get_vault_state()
            require_not_paused(state)

            if amount < state.min_deposit:
                raise ValidationError(
                    f"최소 예치액 미만입니다: amount={amount}, min_deposit={state.min_deposit}"
                )

            minted = shares_for_deposit(state, amount)
            if minted == 0:
                raise ValidationError(f"발행될 지분이 0입니다: amount={amount}")

            account = await tx.ledger.get_account(owner)

            await tx.ledger.save_vault_state(
                replace(
                    state,
                    idle_assets=state.idle_assets + amount,
                    total_shares=state.total_shares + minted,
                )
            )
            await tx.ledger.save_account(
                replace(
                    account,
                    shares=account.shares + minted,
                    total_deposited=account.total_deposited + amount,
                    lifetime_deposited=account.lifetime_deposited + amount,
                )
            )

            await tx.emit(
                EventTypes.DEPOSITED,
                EntityKind.ACCOUNT,
                owner,
                {
                    "owner": owner,
                    "amount": str(amount),
                    "shares_minted": str(minted),
                    "total_shares": str(state.total_shares + minted),
                },
            )

            # 외부 전송은 마지막 (실패 시 전체 롤백)
            await self.assets.transfer_in(owner, amount)

        logger.info(f"Deposit: {owner} {amount} -> {minted} shares")
        return minted

    async def withdraw_profits(
        self,
        caller: str,
        donation_bps: int | None = None,
    ) -> WithdrawalReceipt:
        """보유 지분 전량 상환

        Args:
            caller: 호출자 주소
            donation_bps: 이번 인출의 기부율 (None이면 저장된 기본 기부율)

        Raises:
            StateError: 일시정지, 지분 없음, 유휴 유동성 부족
            ValidationError: donation_bps 범위 오류
            TransferError: 자산 전송 실패
        """
        async with self.executor.write(Operation.WITHDRAW_PROFITS, caller) as tx:
            owner = normalize_address(caller, "caller")

            state = await tx.ledger.get_vault_state()
            require_not_paused(state)

            rate = await self.impact_pool.resolve_donation_rate(tx.ledger, owner, donation_bps)

            account = await tx.ledger.get_account(owner)
            if account.shares == 0:
                raise StateError("상환할 지분이 없습니다")

            receipt = compute_withdrawal(state, account, rate)
            if receipt.gross_assets > state.idle_assets:
                raise StateError(
                    f"유휴 유동성 부족: required={receipt.gross_assets}, idle={state.idle_assets}"
                )

            await tx.ledger.save_vault_state(
                replace(
                    state,
                    idle_assets=state.idle_assets - receipt.gross_assets,
                    total_shares=state.total_shares - receipt.shares_burned,
                    accumulated_fees=state.accumulated_fees + receipt.fee,
                )
            )
            await tx.ledger.save_account(
                replace(
                    account,
                    shares=0,
                    total_deposited=0,
                    total_profit_withdrawn=account.total_profit_withdrawn + receipt.profit,
                )
            )

            if receipt.donation > 0:
                certificate = await self.impact_pool.record_donation(tx, owner, receipt.donation)
                receipt = replace(receipt, certificate_id=certificate.id)

            await tx.emit(
                EventTypes.PROFITS_WITHDRAWN,
                EntityKind.ACCOUNT,
                owner,
                {
                    "owner": owner,
                    "gross_assets": str(receipt.gross_assets),
                    "profit": str(receipt.profit),
                    "fee": str(receipt.fee),
                    "donation": str(receipt.donation),
                    "donation_bps": rate,
                    "net_to_user": str(receipt.net_to_user),
                    "shares_burned": str(receipt.shares_burned),
                    "certificate_id": receipt.certificate_id,
                },
            )

            if receipt.net_to_user > 0:
                await self.assets.transfer_out(owner, receipt.net_to_user)

        logger.info(
            f"Withdraw: {owner} gross={receipt.gross_assets} net={receipt.net_to_user}"
        )
        return receipt

    # -------------------------------------------------------------------------
    # 조회 (일시정지와 무관)
    # -------------------------------------------------------------------------

    async def get_vault_state(self) -> VaultState:
        """Vault 전역 상태"""
        async with self.executor.read() as ledger:
            return await ledger.get_vault_state()

    async def total_assets(self) -> int:
        """총 자산 (유휴 + 배분)"""
        return (await self.get_vault_state()).total_assets

    async def share_price(self) -> Decimal:
        """지분 가격 (지분 없으면 1)"""
        return (await self.get_vault_state()).share_price

    async def get_available_assets(self) -> int:
        """즉시 상환 가능한 유휴 자산"""
        return (await self.get_vault_state()).idle_assets

    async def preview_deposit(self, amount: int) -> int:
        """예치 시 발행될 지분 수 (최소 예치액 검사 없음)"""
        amount = require_amount(amount, allow_zero=True)
        return shares_for_deposit(await self.get_vault_state(), amount)

    async def preview_redeem(self, shares: int) -> int:
        """지분 상환 시 받게 될 총 자산"""
        shares = require_amount(shares, "shares", allow_zero=True)
        return assets_for_shares(await self.get_vault_state(), shares)

    async def preview_withdrawal_fee(self, profit: int) -> int:
        """수익 금액에 부과될 인출 수수료"""
        profit = require_amount(profit, "profit", allow_zero=True)
        state = await self.get_vault_state()
        return profit * state.withdrawal_fee_bps // BPS_DENOMINATOR

    async def preview_withdrawal(
        self,
        owner: str,
        donation_bps: int | None = None,
    ) -> WithdrawalReceipt:
        """현재 상태 기준 전량 상환 분배 미리보기 (certificate_id 없음)"""
        owner = normalize_address(owner, "owner")
        async with self.executor.read() as ledger:
            state = await ledger.get_vault_state()
            account = await ledger.get_account(owner)
            rate = await self.impact_pool.resolve_donation_rate(ledger, owner, donation_bps)
        return compute_withdrawal(state, account, rate)

    async def get_account(self, owner: str) -> Account:
        """예치자 계정"""
        owner = normalize_address(owner, "owner")
        async with self.executor.read() as ledger:
            return await ledger.get_account(owner)

    async def get_user_balance(self, owner: str) -> int:
        """보유 지분의 현재 가치"""
        owner = normalize_address(owner, "owner")
        async with self.executor.read() as ledger:
            state = await ledger.get_vault_state()
            account = await ledger.get_account(owner)
        return assets_for_shares(state, account.shares)

    async def get_user_profits(self, owner: str) -> int:
        """미실현 수익 (현재 가치 - 원금)"""
        owner = normalize_address(owner, "owner")
        async with self.executor.read() as ledger:
            state = await ledger.get_vault_state()
            account = await ledger.get_account(owner)
        return max(0, assets_for_shares(state, account.shares) - account.total_deposited)
