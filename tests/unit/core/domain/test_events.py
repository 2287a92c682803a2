"""
Event 도메인 모델 테스트
"""

from datetime import datetime, timezone

from core.domain.events import Event, EventTypes


def _make_event(**overrides) -> Event:
    params = dict(
        event_type=EventTypes.DEPOSITED,
        tx_id="vtx-1",
        source="VAULT",
        actor="0x" + "aa" * 20,
        entity_kind="ACCOUNT",
        entity_id="0x" + "aa" * 20,
        network="testnet",
        payload={"amount": "100"},
    )
    params.update(overrides)
    return Event.create(**params)


class TestEventCreate:
    """Event.create 테스트"""

    def test_default_dedup_key(self) -> None:
        """dedup_key 기본값은 tx_id:event_type:entity_id"""
        event = _make_event()
        assert event.dedup_key == f"vtx-1:Deposited:{'0x' + 'aa' * 20}"

    def test_custom_dedup_key(self) -> None:
        event = _make_event(dedup_key="custom")
        assert event.dedup_key == "custom"

    def test_unique_event_id(self) -> None:
        assert _make_event().event_id != _make_event().event_id

    def test_timestamp_is_utc(self) -> None:
        event = _make_event()
        assert event.ts.tzinfo == timezone.utc
        assert event.seq is None


class TestEventSerialization:
    """to_dict / from_dict 테스트"""

    def test_to_dict(self) -> None:
        event = _make_event()
        data = event.to_dict()

        assert data["event_type"] == "Deposited"
        assert data["payload"] == {"amount": "100"}
        assert isinstance(data["ts"], str)

    def test_from_dict_parses_timestamp(self) -> None:
        data = _make_event().to_dict()
        data["seq"] = 7

        restored = Event.from_dict(data)

        assert isinstance(restored.ts, datetime)
        assert restored.seq == 7
        assert restored.dedup_key == data["dedup_key"]

    def test_from_dict_without_payload(self) -> None:
        data = _make_event().to_dict()
        del data["payload"]
        assert Event.from_dict(data).payload == {}


class TestEventTypes:
    """EventTypes 테스트"""

    def test_all_types(self) -> None:
        types = EventTypes.all_types()
        assert EventTypes.DEPOSITED in types
        assert EventTypes.CERTIFICATE_MINTED in types
        assert EventTypes.FEES_WITHDRAWN in types
        assert len(types) == len(set(types))

    def test_is_valid_type(self) -> None:
        assert EventTypes.is_valid_type("ProfitsWithdrawn") is True
        assert EventTypes.is_valid_type("OrderPlaced") is False
