"""
SQLite 어댑터

WAL 모드로 SQLite 연결 관리.
쓰기 연결 1개 + 읽기 전용 연결로 동시 접근 가능하도록 설정.

트랜잭션은 명시적으로 관리한다 (isolation_level=None + BEGIN IMMEDIATE).
sqlite3의 암묵적 BEGIN에 의존하지 않으므로, 읽기-검증-쓰기 전체가
하나의 트랜잭션으로 묶인다.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator

import aiosqlite

from core.constants import Paths
from core.types import NetworkMode

logger = logging.getLogger(__name__)


def get_db_path(mode: NetworkMode | str) -> Path:
    """모드에 따른 DB 경로 반환

    Args:
        mode: 네트워크 모드 (MAINNET/TESTNET)

    Returns:
        DB 파일 경로 (Path 타입)
    """
    if isinstance(mode, str):
        mode = NetworkMode(mode.lower())

    if mode == NetworkMode.MAINNET:
        return Paths.MAINNET_DB
    return Paths.TESTNET_DB


async def create_connection(
    db_path: Path | str,
    readonly: bool = False,
) -> aiosqlite.Connection:
    """SQLite 연결 생성 (WAL 모드, autocommit)

    Args:
        db_path: DB 파일 경로
        readonly: 읽기 전용 여부

    Returns:
        aiosqlite 연결 객체
    """
    db_path_str = str(db_path)

    # 디렉토리가 없으면 생성
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    if readonly:
        conn = await aiosqlite.connect(
            f"file:{db_path_str}?mode=ro", uri=True, isolation_level=None
        )
    else:
        conn = await aiosqlite.connect(db_path_str, isolation_level=None)
        # WAL 모드 설정 (읽기 전용 연결은 파일 모드를 바꿀 수 없음)
        await conn.execute("PRAGMA journal_mode=WAL")

    # 동시 접근 설정
    await conn.execute("PRAGMA busy_timeout=30000")  # 30초 대기

    # 외래 키 제약 활성화
    await conn.execute("PRAGMA foreign_keys=ON")

    logger.info(
        "SQLite 연결 생성",
        extra={"db_path": db_path_str, "readonly": readonly},
    )

    return conn


class SQLiteAdapter:
    """SQLite 어댑터

    WAL 모드로 SQLite 연결 관리.
    쓰기/읽기 트랜잭션 컨텍스트 매니저 제공.

    Args:
        db_path: DB 파일 경로
        readonly: 읽기 전용 여부 (Web 조회용)

    사용 예시:
    ```python
    adapter = SQLiteAdapter(db_path)
    await adapter.connect()

    async with adapter.transaction():
        await adapter.execute("UPDATE ...")

    await adapter.close()
    ```
    """

    def __init__(self, db_path: Path | str, readonly: bool = False):
        self.db_path = Path(db_path)
        self.readonly = readonly
        self._conn: aiosqlite.Connection | None = None
        self._in_transaction = False

    @property
    def is_connected(self) -> bool:
        """연결 상태 확인"""
        return self._conn is not None

    @property
    def in_transaction(self) -> bool:
        """트랜잭션 진행 중 여부"""
        return self._in_transaction

    async def connect(self) -> None:
        """연결 생성"""
        if self._conn is not None:
            return

        self._conn = await create_connection(self.db_path, self.readonly)

    async def close(self) -> None:
        """연결 종료"""
        if self._conn is not None:
            await self._conn.close()
            self._conn = None
            logger.info("SQLite 연결 종료")

    async def execute(
        self,
        sql: str,
        parameters: tuple[Any, ...] | None = None,
    ) -> aiosqlite.Cursor:
        """SQL 실행"""
        if self._conn is None:
            raise RuntimeError("Not connected to database")

        if parameters:
            return await self._conn.execute(sql, parameters)
        return await self._conn.execute(sql)

    async def executemany(
        self,
        sql: str,
        parameters: list[tuple[Any, ...]],
    ) -> aiosqlite.Cursor:
        """SQL 다중 실행"""
        if self._conn is None:
            raise RuntimeError("Not connected to database")

        return await self._conn.executemany(sql, parameters)

    async def fetchone(
        self,
        sql: str,
        parameters: tuple[Any, ...] | None = None,
    ) -> tuple[Any, ...] | None:
        """단일 행 조회"""
        cursor = await self.execute(sql, parameters)
        return await cursor.fetchone()

    async def fetchall(
        self,
        sql: str,
        parameters: tuple[Any, ...] | None = None,
    ) -> list[tuple[Any, ...]]:
        """전체 행 조회"""
        cursor = await self.execute(sql, parameters)
        return list(await cursor.fetchall())

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator["SQLiteAdapter"]:
        """쓰기 트랜잭션 컨텍스트 매니저

        BEGIN IMMEDIATE로 쓰기 잠금을 먼저 획득.
        성공 시 자동 커밋, 예외 시 자동 롤백.
        중첩 호출은 허용하지 않는다.

        사용 예시:
        ```python
        async with adapter.transaction():
            await adapter.execute("INSERT INTO ...")
            # 성공 시 자동 커밋
        ```
        """
        if self._conn is None:
            raise RuntimeError("Not connected to database")
        if self.readonly:
            raise RuntimeError("Read-only connection cannot open a write transaction")
        if self._in_transaction:
            raise RuntimeError("Nested transaction is not supported")

        await self._conn.execute("BEGIN IMMEDIATE")
        self._in_transaction = True
        try:
            yield self
            await self._conn.execute("COMMIT")
        except BaseException:
            await self._conn.execute("ROLLBACK")
            raise
        finally:
            self._in_transaction = False

    @asynccontextmanager
    async def read_transaction(self) -> AsyncIterator["SQLiteAdapter"]:
        """읽기 트랜잭션 컨텍스트 매니저

        WAL 모드에서 하나의 읽기 트랜잭션 안의 모든 SELECT는
        같은 커밋 스냅샷을 본다.
        """
        if self._conn is None:
            raise RuntimeError("Not connected to database")
        if self._in_transaction:
            raise RuntimeError("Nested transaction is not supported")

        await self._conn.execute("BEGIN")
        self._in_transaction = True
        try:
            yield self
        finally:
            self._in_transaction = False
            await self._conn.execute("COMMIT")

    async def table_exists(self, table_name: str) -> bool:
        """테이블 존재 여부 확인"""
        result = await self.fetchone(
            "SELECT name FROM sqlite_master WHERE type='table' AND name=?",
            (table_name,),
        )
        return result is not None

    async def get_table_info(self, table_name: str) -> list[dict[str, Any]]:
        """테이블 정보 조회"""
        rows = await self.fetchall(f"PRAGMA table_info({table_name})")

        columns = []
        for row in rows:
            columns.append({
                "cid": row[0],
                "name": row[1],
                "type": row[2],
                "notnull": bool(row[3]),
                "default_value": row[4],
                "pk": bool(row[5]),
            })

        return columns

    # -------------------------------------------------------------------------
    # 컨텍스트 매니저
    # -------------------------------------------------------------------------

    async def __aenter__(self) -> "SQLiteAdapter":
        await self.connect()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()


async def init_schema(adapter: SQLiteAdapter) -> None:
    """공통 스키마 초기화 (감사 이벤트 테이블)

    원장 테이블은 core.ledger.schema.init_ledger_schema에서 생성.

    Args:
        adapter: 연결된 SQLiteAdapter
    """
    # event_store (감사 로그, append-only)
    await adapter.execute("""
        CREATE TABLE IF NOT EXISTS event_store (
            seq              INTEGER PRIMARY KEY AUTOINCREMENT,
            event_id         TEXT NOT NULL UNIQUE,
            event_type       TEXT NOT NULL,
            ts               TEXT NOT NULL,

            tx_id            TEXT NOT NULL,
            source           TEXT NOT NULL,
            actor            TEXT NOT NULL,

            entity_kind      TEXT NOT NULL,
            entity_id        TEXT NOT NULL,
            network          TEXT NOT NULL DEFAULT 'testnet',

            dedup_key        TEXT NOT NULL UNIQUE,
            payload_json     TEXT NOT NULL,

            created_at       TEXT NOT NULL DEFAULT (datetime('now'))
        )
    """)

    await adapter.execute("""
        CREATE INDEX IF NOT EXISTS ix_event_store_tx
        ON event_store(tx_id)
    """)

    await adapter.execute("""
        CREATE INDEX IF NOT EXISTS ix_event_store_entity
        ON event_store(entity_kind, entity_id)
    """)

    await adapter.execute("""
        CREATE INDEX IF NOT EXISTS ix_event_store_actor
        ON event_store(actor)
    """)

    logger.info("스키마 초기화 완료")
