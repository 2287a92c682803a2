"""
스토리지 모듈

감사 이벤트 저장소 제공
"""

from core.storage.event_store import EventStore

__all__ = [
    "EventStore",
]
