"""
Vault 원장 (Ledger Store)

Vault/계정/에이전트/트레이딩 지갑/임팩트 풀/인증서 잔액의 단일 원천.

사용 예시:
```python
from core.ledger import LedgerStore, init_ledger_schema

await init_ledger_schema(db)
ledger = LedgerStore(db)

async with db.transaction():
    state = await ledger.get_vault_state()
    await ledger.save_vault_state(replace(state, paused=True))
```
"""

from core.ledger.schema import VaultParameters, init_ledger_schema, seed_vault_state
from core.ledger.store import LedgerNotInitializedError, LedgerStore
from core.ledger.types import (
    Account,
    Certificate,
    CertificateStatus,
    ImpactAccount,
    ImpactPoolState,
    Minted,
    MintState,
    TradingWallet,
    Unminted,
    VaultState,
    WithdrawalReceipt,
)

__all__ = [
    # 핵심 클래스
    "LedgerStore",
    "LedgerNotInitializedError",
    # 스키마
    "VaultParameters",
    "init_ledger_schema",
    "seed_vault_state",
    # 레코드
    "VaultState",
    "Account",
    "TradingWallet",
    "ImpactAccount",
    "ImpactPoolState",
    "Certificate",
    "CertificateStatus",
    "MintState",
    "Minted",
    "Unminted",
    "WithdrawalReceipt",
]
