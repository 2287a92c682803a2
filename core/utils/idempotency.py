"""
트랜잭션 ID 유틸리티

모든 상태 변경 연산은 tx_id 하나를 발급받는다.
규칙: vtx-{uuid4}
"""

from uuid import uuid4

# Vault 트랜잭션 ID 접두사
TX_ID_PREFIX: str = "vtx"


def make_tx_id(seed: str | None = None) -> str:
    """tx_id 생성

    Args:
        seed: 호출자가 지정한 고유 값 (None이면 uuid4 생성)

    Returns:
        tx_id: vtx-{seed} 형식

    Example:
        >>> make_tx_id("550e8400-e29b-41d4-a716-446655440000")
        'vtx-550e8400-e29b-41d4-a716-446655440000'
    """
    if seed is not None and not seed:
        raise ValueError("seed는 비어 있을 수 없습니다")

    return f"{TX_ID_PREFIX}-{seed or uuid4()}"


def parse_tx_id(tx_id: str) -> str | None:
    """tx_id에서 seed 추출

    Example:
        >>> parse_tx_id("vtx-abc")
        'abc'
        >>> parse_tx_id("other-12345")
        None
    """
    if not tx_id:
        return None

    prefix = f"{TX_ID_PREFIX}-"

    if tx_id.startswith(prefix):
        seed = tx_id[len(prefix) :]
        return seed if seed else None

    return None


def is_vault_tx_id(tx_id: str) -> bool:
    """Vault가 발급한 tx_id 형식인지 확인"""
    return parse_tx_id(tx_id) is not None
