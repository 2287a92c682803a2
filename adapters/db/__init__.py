"""
데이터베이스 어댑터

원장/감사 이벤트용 SQLite 연결 (WAL, 쓰기 트랜잭션, 읽기 전용 스냅샷).
"""

from adapters.db.sqlite_adapter import (
    SQLiteAdapter,
    create_connection,
    get_db_path,
    init_schema,
)

__all__ = [
    "SQLiteAdapter",
    "create_connection",
    "get_db_path",
    "init_schema",
]
