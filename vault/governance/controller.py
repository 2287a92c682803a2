"""
Governance / Pause Controller

소유자 전용 파라미터 변경, 에이전트 허용 목록 관리, 일시정지(서킷 브레이커),
누적 수수료 인출.

모든 변경은 검증 실패 시 원장을 건드리지 않는다.
"""

import logging
from dataclasses import replace
from typing import Any, Callable

from adapters.interfaces import IAssetTransfer
from core.domain.errors import AlreadyDoneError, StateError, ValidationError
from core.domain.events import EventTypes
from core.ledger.types import VaultState
from core.types import EntityKind, Operation
from vault.access import (
    normalize_address,
    require_amount,
    require_bps,
    require_non_zero_address,
    require_owner,
)
from vault.executor import TxContext, VaultExecutor

logger = logging.getLogger(__name__)


class GovernanceController:
    """거버넌스 컨트롤러

    Args:
        executor: 트랜잭션 경계
        assets: 기초 자산 전송 (수수료 인출용)

    사용 예시:
    ```python
    governance = GovernanceController(executor, assets)

    await governance.set_withdrawal_fee(owner, 300)
    await governance.add_authorized_agent(owner, agent)
    await governance.pause(owner)
    ```
    """

    def __init__(self, executor: VaultExecutor, assets: IAssetTransfer):
        self.executor = executor
        self.assets = assets

    # -------------------------------------------------------------------------
    # 파라미터 변경
    # -------------------------------------------------------------------------

    async def set_min_deposit(self, caller: str, amount: int) -> None:
        """최소 예치액 변경"""
        await self._set_parameter(
            Operation.SET_MIN_DEPOSIT,
            caller,
            "min_deposit",
            lambda: require_amount(amount, "min_deposit", allow_zero=True),
        )

    async def set_withdrawal_fee(self, caller: str, bps: int) -> None:
        """인출 수수료율 변경 (bps)"""
        await self._set_parameter(
            Operation.SET_WITHDRAWAL_FEE,
            caller,
            "withdrawal_fee_bps",
            lambda: require_bps(bps, "withdrawal_fee_bps"),
        )

    async def set_max_allocation(self, caller: str, bps: int) -> None:
        """최대 배분 비율 변경 (bps)"""
        await self._set_parameter(
            Operation.SET_MAX_ALLOCATION,
            caller,
            "max_allocation_bps",
            lambda: require_bps(bps, "max_allocation_bps"),
        )

    async def set_fee_recipient(self, caller: str, recipient: str) -> None:
        """수수료 수령 주소 변경"""
        await self._set_parameter(
            Operation.SET_FEE_RECIPIENT,
            caller,
            "fee_recipient",
            lambda: require_non_zero_address(recipient, "fee_recipient"),
        )

    async def set_impact_pool(self, caller: str, ref: str) -> None:
        """임팩트 풀 참조 변경"""

        def validate() -> str:
            if not isinstance(ref, str) or not ref.strip():
                raise ValidationError("impact_pool_ref는 비어 있을 수 없습니다")
            return ref.strip()

        await self._set_parameter(
            Operation.SET_IMPACT_POOL,
            caller,
            "impact_pool_ref",
            validate,
        )

    async def _set_parameter(
        self,
        operation: Operation,
        caller: str,
        field_name: str,
        validate: Callable[[], Any],
    ) -> None:
        """소유자 검사 → 값 검증 → 저장 → ParameterChanged 기록"""
        async with self.executor.write(operation, caller) as tx:
            state = await self._load_as_owner(tx, caller)
            value = validate()

            old_value = getattr(state, field_name)
            await tx.ledger.save_vault_state(replace(state, **{field_name: value}))

            await tx.emit(
                EventTypes.PARAMETER_CHANGED,
                EntityKind.VAULT,
                field_name,
                {
                    "parameter": field_name,
                    "old_value": str(old_value),
                    "new_value": str(value),
                },
            )

        logger.info(f"Parameter changed: {field_name} {old_value} -> {value}")

    # -------------------------------------------------------------------------
    # 에이전트 허용 목록
    # -------------------------------------------------------------------------

    async def add_authorized_agent(self, caller: str, agent: str) -> None:
        """에이전트 추가

        Raises:
            AlreadyDoneError: 이미 등록된 에이전트
        """
        async with self.executor.write(Operation.ADD_AUTHORIZED_AGENT, caller) as tx:
            state = await self._load_as_owner(tx, caller)
            agent = require_non_zero_address(agent, "agent")

            if not await tx.ledger.add_agent(agent, added_by=state.owner):
                raise AlreadyDoneError(f"이미 등록된 에이전트입니다: {agent}")

            await tx.emit(
                EventTypes.AGENT_ADDED,
                EntityKind.VAULT,
                agent,
                {"agent": agent},
            )

        logger.info(f"Agent added: {agent}")

    async def remove_authorized_agent(self, caller: str, agent: str) -> None:
        """에이전트 제거

        Raises:
            StateError: 등록되지 않은 에이전트
        """
        async with self.executor.write(Operation.REMOVE_AUTHORIZED_AGENT, caller) as tx:
            await self._load_as_owner(tx, caller)
            agent = normalize_address(agent, "agent")

            if not await tx.ledger.remove_agent(agent):
                raise StateError(f"등록되지 않은 에이전트입니다: {agent}")

            await tx.emit(
                EventTypes.AGENT_REMOVED,
                EntityKind.VAULT,
                agent,
                {"agent": agent},
            )

        logger.info(f"Agent removed: {agent}")

    # -------------------------------------------------------------------------
    # 일시정지
    # -------------------------------------------------------------------------

    async def pause(self, caller: str) -> None:
        """일시정지 (예치/인출/배분/기부 차단)"""
        await self._set_paused(Operation.PAUSE, caller, paused=True)

    async def unpause(self, caller: str) -> None:
        """일시정지 해제"""
        await self._set_paused(Operation.UNPAUSE, caller, paused=False)

    async def _set_paused(self, operation: Operation, caller: str, paused: bool) -> None:
        async with self.executor.write(operation, caller) as tx:
            state = await self._load_as_owner(tx, caller)
            if state.paused == paused:
                raise StateError(
                    "이미 일시정지 상태입니다" if paused else "일시정지 상태가 아닙니다"
                )

            await tx.ledger.save_vault_state(replace(state, paused=paused))
            await tx.emit(
                EventTypes.VAULT_PAUSED if paused else EventTypes.VAULT_UNPAUSED,
                EntityKind.VAULT,
                "vault",
                {"paused": paused},
            )

        logger.warning(f"Vault {'paused' if paused else 'unpaused'} by {caller}")

    # -------------------------------------------------------------------------
    # 수수료 인출
    # -------------------------------------------------------------------------

    async def withdraw_fees(self, caller: str) -> int:
        """누적 수수료를 fee_recipient에게 전송

        소유자 또는 fee_recipient만 호출 가능.

        Returns:
            전송한 수수료
        """
        async with self.executor.write(Operation.WITHDRAW_FEES, caller) as tx:
            who = normalize_address(caller, "caller")
            state = await tx.ledger.get_vault_state()
            if who not in (state.owner, state.fee_recipient):
                raise StateError(f"수수료 인출 권한이 없습니다: caller={who}")

            fees = state.accumulated_fees
            if fees == 0:
                raise StateError("인출할 수수료가 없습니다")

            await tx.ledger.save_vault_state(replace(state, accumulated_fees=0))
            await tx.emit(
                EventTypes.FEES_WITHDRAWN,
                EntityKind.VAULT,
                "vault",
                {"recipient": state.fee_recipient, "amount": str(fees)},
            )

            await self.assets.transfer_out(state.fee_recipient, fees)

        logger.info(f"Fees withdrawn: {fees} -> {state.fee_recipient}")
        return fees

    # -------------------------------------------------------------------------
    # 조회
    # -------------------------------------------------------------------------

    async def owner(self) -> str:
        """소유자 주소"""
        async with self.executor.read() as ledger:
            return (await ledger.get_vault_state()).owner

    async def get_authorized_agents(self) -> list[str]:
        """에이전트 목록"""
        async with self.executor.read() as ledger:
            return await ledger.list_agents()

    async def is_authorized_agent(self, address: str) -> bool:
        """에이전트 여부"""
        address = normalize_address(address, "address")
        async with self.executor.read() as ledger:
            return await ledger.is_agent(address)

    async def _load_as_owner(self, tx: TxContext, caller: str) -> VaultState:
        state = await tx.ledger.get_vault_state()
        require_owner(state, normalize_address(caller, "caller"))
        return state
