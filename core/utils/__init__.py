"""
유틸리티 패키지

금액 단위 변환, 트랜잭션 ID 생성 등 공통 유틸리티
"""

from core.utils.idempotency import make_tx_id, parse_tx_id, is_vault_tx_id
from core.utils.units import format_units, to_base_units

__all__ = [
    "make_tx_id",
    "parse_tx_id",
    "is_vault_tx_id",
    "format_units",
    "to_base_units",
]
