"""
Vault 엔진

지분 회계, 자본 배분, 임팩트 풀, 거버넌스 컴포넌트와
이들을 묶는 트랜잭션 경계(VaultExecutor) 및 Facade(VaultService).
"""

from vault.bootstrap import create_vault, create_vault_from_settings
from vault.executor import TxContext, VaultExecutor
from vault.service import AccountView, VaultService, VaultSnapshot

__all__ = [
    "create_vault",
    "create_vault_from_settings",
    "TxContext",
    "VaultExecutor",
    "AccountView",
    "VaultService",
    "VaultSnapshot",
]
