"""
EventStore - 감사 이벤트 저장소

모든 Vault 상태 변경은 Event로 기록됨.
dedup_key로 중복 이벤트를 방지하고, append-only 방식으로 저장.

append()는 커밋하지 않는다. 원장 변경과 같은 트랜잭션 안에서 호출되어
함께 커밋되거나 함께 롤백된다.
"""

import json
import logging
from datetime import datetime
from typing import Any

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.domain.events import Event

logger = logging.getLogger(__name__)


_SELECT_COLUMNS = """
    seq, event_id, event_type, ts,
    tx_id, source, actor,
    entity_kind, entity_id, network,
    dedup_key, payload_json
"""


class EventStore:
    """감사 이벤트 저장소

    Args:
        db: SQLiteAdapter 인스턴스

    사용 예시:
    ```python
    event_store = EventStore(db)

    async with db.transaction():
        ...  # 원장 변경
        await event_store.append(event)

    events = await event_store.get_by_tx(tx_id)
    ```
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db

    async def append(self, event: Event) -> bool:
        """이벤트 저장 (dedup_key로 중복 제거)

        Args:
            event: 저장할 Event 인스턴스

        Returns:
            True: 저장 성공 (신규 이벤트)
            False: 중복으로 무시됨
        """
        payload_json = json.dumps(event.payload, ensure_ascii=False)

        cursor = await self.db.execute(
            """
            INSERT OR IGNORE INTO event_store (
                event_id, event_type, ts,
                tx_id, source, actor,
                entity_kind, entity_id, network,
                dedup_key, payload_json
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                event.event_id,
                event.event_type,
                event.ts.isoformat(),
                event.tx_id,
                event.source,
                event.actor,
                event.entity_kind,
                event.entity_id,
                event.network,
                event.dedup_key,
                payload_json,
            ),
        )

        # INSERT OR IGNORE는 중복 시 rowcount=0
        if cursor.rowcount > 0:
            logger.debug(
                "이벤트 저장 완료",
                extra={"event_id": event.event_id, "event_type": event.event_type},
            )
            return True

        logger.debug(
            "이벤트 중복 (무시됨)",
            extra={"dedup_key": event.dedup_key},
        )
        return False

    async def get_by_id(self, event_id: str) -> Event | None:
        """ID로 이벤트 조회"""
        row = await self.db.fetchone(
            f"SELECT {_SELECT_COLUMNS} FROM event_store WHERE event_id = ?",
            (event_id,),
        )
        if row is None:
            return None
        return self._row_to_event(row)

    async def get_by_tx(self, tx_id: str) -> list[Event]:
        """트랜잭션 ID로 이벤트 조회 (seq 순)"""
        rows = await self.db.fetchall(
            f"SELECT {_SELECT_COLUMNS} FROM event_store WHERE tx_id = ? ORDER BY seq ASC",
            (tx_id,),
        )
        return [self._row_to_event(row) for row in rows]

    async def get_since(self, last_seq: int, limit: int = 1000) -> list[Event]:
        """특정 seq 이후 이벤트 조회

        Args:
            last_seq: 마지막으로 처리한 seq (이 값보다 큰 seq의 이벤트 조회)
            limit: 최대 조회 개수 (기본 1000)

        Returns:
            Event 리스트 (seq 순서로 정렬)
        """
        rows = await self.db.fetchall(
            f"""
            SELECT {_SELECT_COLUMNS}
            FROM event_store
            WHERE seq > ?
            ORDER BY seq ASC
            LIMIT ?
            """,
            (last_seq, limit),
        )
        return [self._row_to_event(row) for row in rows]

    async def get_recent(self, limit: int = 100, offset: int = 0) -> list[Event]:
        """최근 이벤트 조회 (최신순)"""
        rows = await self.db.fetchall(
            f"""
            SELECT {_SELECT_COLUMNS}
            FROM event_store
            ORDER BY seq DESC
            LIMIT ? OFFSET ?
            """,
            (limit, offset),
        )
        return [self._row_to_event(row) for row in rows]

    async def get_by_actor(
        self,
        actor: str,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Event]:
        """호출자별 이벤트 조회 (최신순)"""
        rows = await self.db.fetchall(
            f"""
            SELECT {_SELECT_COLUMNS}
            FROM event_store
            WHERE actor = ?
            ORDER BY seq DESC
            LIMIT ? OFFSET ?
            """,
            (actor, limit, offset),
        )
        return [self._row_to_event(row) for row in rows]

    async def get_by_entity(
        self,
        entity_kind: str,
        entity_id: str,
        limit: int = 100,
    ) -> list[Event]:
        """엔티티별 이벤트 조회 (seq 순)"""
        rows = await self.db.fetchall(
            f"""
            SELECT {_SELECT_COLUMNS}
            FROM event_store
            WHERE entity_kind = ? AND entity_id = ?
            ORDER BY seq ASC
            LIMIT ?
            """,
            (entity_kind, entity_id, limit),
        )
        return [self._row_to_event(row) for row in rows]

    async def count_all(self) -> int:
        """전체 이벤트 개수 조회"""
        row = await self.db.fetchone(
            "SELECT COUNT(*) as event_count FROM event_store"
        )
        return row[0] if row else 0

    async def get_last_seq(self) -> int:
        """마지막 seq 조회"""
        row = await self.db.fetchone(
            "SELECT MAX(seq) as max_seq FROM event_store"
        )
        return row[0] if row and row[0] else 0

    def _row_to_event(self, row: tuple[Any, ...]) -> Event:
        """DB 행을 Event 객체로 변환

        컬럼 순서:
        0: seq, 1: event_id, 2: event_type, 3: ts,
        4: tx_id, 5: source, 6: actor,
        7: entity_kind, 8: entity_id, 9: network,
        10: dedup_key, 11: payload_json
        """
        ts = row[3]
        if isinstance(ts, str):
            ts = datetime.fromisoformat(ts)

        payload = row[11]
        if isinstance(payload, str):
            payload = json.loads(payload)

        return Event(
            event_id=row[1],
            event_type=row[2],
            ts=ts,
            tx_id=row[4],
            source=row[5],
            actor=row[6],
            entity_kind=row[7],
            entity_id=row[8],
            network=row[9],
            dedup_key=row[10],
            payload=payload,
            seq=row[0],
        )
