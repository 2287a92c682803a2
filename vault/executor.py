"""
Vault Executor

모든 상태 변경 연산의 트랜잭션 경계.

쓰기:
1. asyncio.Lock으로 프로세스 내 쓰기를 직렬화
2. BEGIN IMMEDIATE 트랜잭션 안에서 본문 실행
3. 감사 이벤트도 같은 트랜잭션에 기록
4. 예외 발생 시 ROLLBACK (원장은 호출 전과 동일)
5. 결과(OperationResult)를 알림 레이어로 전달 (알림 실패는 로그만 남김)

읽기:
- 읽기 전용 WAL 연결이 있으면 스냅샷 트랜잭션으로 조회 (쓰기를 막지 않음)
- 없으면 쓰기 연결을 락 아래에서 공유
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, AsyncIterator

from adapters.db.sqlite_adapter import SQLiteAdapter
from adapters.interfaces import INotifier
from core.domain.errors import VaultError
from core.domain.events import Event
from core.ledger.store import LedgerStore
from core.storage.event_store import EventStore
from core.types import EntityKind, EventSource, Operation, OperationResult
from core.utils.idempotency import make_tx_id

logger = logging.getLogger(__name__)

INTERNAL_ERROR_CODE = "INTERNAL_ERROR"


@dataclass
class TxContext:
    """쓰기 트랜잭션 컨텍스트

    본문은 ledger로 원장을 읽고 쓰며, emit()으로 감사 이벤트를 남긴다.
    """

    tx_id: str
    operation: Operation
    caller: str
    network: str
    ledger: LedgerStore
    event_store: EventStore
    events: list[Event] = field(default_factory=list)

    async def emit(
        self,
        event_type: str,
        entity_kind: EntityKind,
        entity_id: str,
        payload: dict[str, Any],
    ) -> Event:
        """감사 이벤트 기록 (트랜잭션과 함께 커밋/롤백)"""
        event = Event.create(
            event_type=event_type,
            tx_id=self.tx_id,
            source=EventSource.VAULT.value,
            actor=self.caller,
            entity_kind=entity_kind.value,
            entity_id=entity_id,
            network=self.network,
            payload=payload,
        )
        await self.event_store.append(event)
        self.events.append(event)
        return event


class VaultExecutor:
    """Vault Executor

    Args:
        db: 쓰기 연결
        network: 이벤트에 기록할 네트워크 (mainnet / testnet)
        notifier: 결과 알림 (None이면 알림 생략)
        read_db: 읽기 전용 연결 (선택)

    사용 예시:
    ```python
    executor = VaultExecutor(db, network="testnet", notifier=notifier)

    async with executor.write(Operation.PAUSE, caller) as tx:
        state = await tx.ledger.get_vault_state()
        await tx.ledger.save_vault_state(replace(state, paused=True))

    async with executor.read() as ledger:
        state = await ledger.get_vault_state()
    ```
    """

    def __init__(
        self,
        db: SQLiteAdapter,
        network: str,
        notifier: INotifier | None = None,
        read_db: SQLiteAdapter | None = None,
    ):
        self.db = db
        self.network = network
        self.notifier = notifier
        self.read_db = read_db

        self.ledger = LedgerStore(db)
        self.event_store = EventStore(db)
        self._read_ledger = LedgerStore(read_db) if read_db is not None else None

        self._write_lock = asyncio.Lock()
        self._read_lock = asyncio.Lock()

        # 통계
        self._success_count = 0
        self._failed_count = 0

    @asynccontextmanager
    async def write(self, operation: Operation, caller: str) -> AsyncIterator[TxContext]:
        """쓰기 트랜잭션 실행

        본문에서 발생한 예외는 롤백 후 그대로 전파된다.
        알림은 락을 해제한 뒤 전송한다.

        Args:
            operation: 연산 종류
            caller: 호출자 주소 (소문자로 기록, 형식 검증은 본문에서)
        """
        tx_id = make_tx_id()
        caller = caller.lower() if isinstance(caller, str) else str(caller)
        outcome: OperationResult | None = None

        try:
            async with self._write_lock:
                try:
                    async with self.db.transaction():
                        ctx = TxContext(
                            tx_id=tx_id,
                            operation=operation,
                            caller=caller,
                            network=self.network,
                            ledger=self.ledger,
                            event_store=self.event_store,
                        )
                        yield ctx
                except VaultError as e:
                    self._failed_count += 1
                    logger.warning(
                        f"Operation rejected: {operation.value} ({e.code}) {e.message}",
                        extra={"tx_id": tx_id, "caller": caller},
                    )
                    outcome = OperationResult(
                        success=False,
                        tx_id=tx_id,
                        operation=operation.value,
                        caller=caller,
                        error=e.message,
                        error_code=e.code,
                    )
                    raise
                except Exception as e:
                    self._failed_count += 1
                    logger.exception(
                        f"Operation failed: {operation.value}",
                        extra={"tx_id": tx_id, "caller": caller},
                    )
                    outcome = OperationResult(
                        success=False,
                        tx_id=tx_id,
                        operation=operation.value,
                        caller=caller,
                        error=str(e),
                        error_code=INTERNAL_ERROR_CODE,
                    )
                    raise

            self._success_count += 1
            logger.info(
                f"Operation committed: {operation.value}",
                extra={"tx_id": tx_id, "caller": caller, "event_count": len(ctx.events)},
            )
            outcome = OperationResult(
                success=True,
                tx_id=tx_id,
                operation=operation.value,
                caller=caller,
            )
        finally:
            if outcome is not None:
                await self._notify(outcome)

    @asynccontextmanager
    async def read(self) -> AsyncIterator[LedgerStore]:
        """커밋된 상태만 보는 읽기 컨텍스트"""
        if self.read_db is not None and self._read_ledger is not None:
            async with self._read_lock:
                async with self.read_db.read_transaction():
                    yield self._read_ledger
        else:
            async with self._write_lock:
                yield self.ledger

    @asynccontextmanager
    async def read_events(self) -> AsyncIterator[EventStore]:
        """감사 이벤트 읽기 컨텍스트"""
        if self.read_db is not None:
            async with self._read_lock:
                yield EventStore(self.read_db)
        else:
            async with self._write_lock:
                yield self.event_store

    async def _notify(self, result: OperationResult) -> None:
        """결과 알림 (실패해도 원장에 영향 없음)"""
        if self.notifier is None:
            return

        try:
            sent = await self.notifier.send_operation_result(result)
            if not sent:
                logger.warning(f"Notification not delivered: {result.tx_id}")
        except Exception as e:
            logger.error(f"Notifier error: {e}", extra={"tx_id": result.tx_id})

    def get_stats(self) -> dict[str, Any]:
        """통계 반환"""
        return {
            "success_count": self._success_count,
            "failed_count": self._failed_count,
        }
