"""
어댑터 레이어

외부 서비스(자산 원장, 트레이딩 데스크, DB, 알림 등)와의 연동을 담당.
Protocol 기반 인터페이스로 Mock 교체 가능.
"""

from adapters.interfaces import (
    IAssetTransfer,
    ITradingDesk,
    INotifier,
)

__all__ = [
    "IAssetTransfer",
    "ITradingDesk",
    "INotifier",
]
