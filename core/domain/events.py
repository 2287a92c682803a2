"""
Event 도메인 모델

모든 Vault 상태 변경은 감사 Event로 기록됨.
Event는 원장 변경과 같은 트랜잭션에서 저장되므로,
커밋된 원장 상태와 감사 로그는 항상 일치한다.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4


@dataclass
class Event:
    """이벤트

    상태 변경을 기록하는 데이터 구조.
    dedup_key로 중복 이벤트를 방지함 (기본값: tx_id + event_type).
    """

    event_id: str
    event_type: str
    ts: datetime
    tx_id: str
    source: str
    actor: str
    entity_kind: str
    entity_id: str
    network: str
    dedup_key: str
    payload: dict[str, Any]
    seq: int | None = None  # DB에서 조회 시 자동 할당되는 시퀀스 번호

    @staticmethod
    def create(
        event_type: str,
        tx_id: str,
        source: str,
        actor: str,
        entity_kind: str,
        entity_id: str,
        network: str,
        payload: dict[str, Any],
        dedup_key: str | None = None,
    ) -> "Event":
        """새 이벤트 생성

        Args:
            event_type: 이벤트 타입 (예: Deposited)
            tx_id: 이 이벤트를 발생시킨 연산의 트랜잭션 ID
            source: 이벤트 출처 (VAULT, WEB)
            actor: 호출자 주소
            entity_kind: 엔티티 종류 (VAULT, ACCOUNT, CERTIFICATE 등)
            entity_id: 엔티티 ID
            network: mainnet / testnet
            payload: 이벤트 상세 데이터 (금액은 문자열)
            dedup_key: 중복 제거 키 (없으면 tx_id:event_type:entity_id)

        Returns:
            새 Event 인스턴스
        """
        return Event(
            event_id=str(uuid4()),
            event_type=event_type,
            ts=datetime.now(timezone.utc),
            tx_id=tx_id,
            source=source,
            actor=actor,
            entity_kind=entity_kind,
            entity_id=entity_id,
            network=network,
            dedup_key=dedup_key or f"{tx_id}:{event_type}:{entity_id}",
            payload=payload,
        )

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리로 변환 (직렬화용)"""
        return {
            "event_id": self.event_id,
            "event_type": self.event_type,
            "ts": self.ts.isoformat(),
            "tx_id": self.tx_id,
            "source": self.source,
            "actor": self.actor,
            "entity_kind": self.entity_kind,
            "entity_id": self.entity_id,
            "network": self.network,
            "dedup_key": self.dedup_key,
            "payload": self.payload,
        }

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "Event":
        """딕셔너리에서 생성 (역직렬화용)"""
        ts = data["ts"]
        if isinstance(ts, str):
            ts = datetime.fromisoformat(ts)

        return Event(
            event_id=data["event_id"],
            event_type=data["event_type"],
            ts=ts,
            tx_id=data["tx_id"],
            source=data["source"],
            actor=data["actor"],
            entity_kind=data["entity_kind"],
            entity_id=data["entity_id"],
            network=data["network"],
            dedup_key=data["dedup_key"],
            payload=data.get("payload", {}),
            seq=data.get("seq"),
        )


class EventTypes:
    """Event Type 상수"""

    # Share accounting
    DEPOSITED: str = "Deposited"
    PROFITS_WITHDRAWN: str = "ProfitsWithdrawn"

    # Capital allocation
    CAPITAL_ALLOCATED: str = "CapitalAllocated"
    CAPITAL_RETURNED: str = "CapitalReturned"

    # Impact pool
    DONATION_RATE_UPDATED: str = "DonationRateUpdated"
    DONATION: str = "Donation"
    CERTIFICATE_CREATED: str = "CertificateCreated"
    CERTIFICATE_MINTED: str = "CertificateMinted"
    POOL_WITHDRAWAL: str = "PoolWithdrawal"

    # Governance
    PARAMETER_CHANGED: str = "ParameterChanged"
    AGENT_ADDED: str = "AgentAdded"
    AGENT_REMOVED: str = "AgentRemoved"
    VAULT_PAUSED: str = "VaultPaused"
    VAULT_UNPAUSED: str = "VaultUnpaused"
    FEES_WITHDRAWN: str = "FeesWithdrawn"

    @classmethod
    def all_types(cls) -> list[str]:
        """모든 이벤트 타입 목록 반환"""
        return [
            value
            for name, value in vars(cls).items()
            if not name.startswith("_") and isinstance(value, str) and name.isupper()
        ]

    @classmethod
    def is_valid_type(cls, event_type: str) -> bool:
        """유효한 이벤트 타입인지 확인"""
        return event_type in cls.all_types()
