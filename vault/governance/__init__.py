"""
거버넌스 패키지
"""

from vault.governance.controller import GovernanceController

__all__ = ["GovernanceController"]
