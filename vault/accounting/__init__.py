"""
지분 회계 패키지
"""

from vault.accounting.engine import (
    ShareAccountingEngine,
    assets_for_shares,
    compute_withdrawal,
    shares_for_deposit,
)

__all__ = [
    "ShareAccountingEngine",
    "assets_for_shares",
    "compute_withdrawal",
    "shares_for_deposit",
]
