"""
트랜잭션 ID 유틸리티 테스트
"""

import pytest

from core.utils.idempotency import (
    TX_ID_PREFIX,
    is_vault_tx_id,
    make_tx_id,
    parse_tx_id,
)


class TestMakeTxId:
    """make_tx_id 테스트"""

    def test_with_seed(self) -> None:
        assert make_tx_id("abc") == "vtx-abc"

    def test_generates_unique_ids(self) -> None:
        ids = {make_tx_id() for _ in range(100)}
        assert len(ids) == 100
        assert all(tx_id.startswith(f"{TX_ID_PREFIX}-") for tx_id in ids)

    def test_empty_seed(self) -> None:
        with pytest.raises(ValueError):
            make_tx_id("")


class TestParseTxId:
    """parse_tx_id / is_vault_tx_id 테스트"""

    def test_parse_valid(self) -> None:
        assert parse_tx_id("vtx-550e8400") == "550e8400"

    @pytest.mark.parametrize("tx_id", ["", "vtx-", "other-123", "vtx"])
    def test_parse_invalid(self, tx_id: str) -> None:
        assert parse_tx_id(tx_id) is None

    def test_round_trip_with_generated(self) -> None:
        tx_id = make_tx_id()
        assert is_vault_tx_id(tx_id) is True
        assert make_tx_id(parse_tx_id(tx_id)) == tx_id

    def test_is_vault_tx_id_false(self) -> None:
        assert is_vault_tx_id("ae-123") is False
