"""
Slack 알림 서비스

Slack Webhook을 통해 Vault 연산 결과를 전송.
INotifier Protocol 준수.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

import httpx

from core.types import OperationResult

logger = logging.getLogger(__name__)


# 레벨별 이모지 매핑
LEVEL_EMOJI = {
    "INFO": ":white_check_mark:",
    "WARNING": ":warning:",
    "ERROR": ":x:",
    "CRITICAL": ":rotating_light:",
}

# 레벨별 색상 매핑 (Slack attachment color)
LEVEL_COLOR = {
    "INFO": "#36A64F",      # 녹색
    "WARNING": "#FFA500",   # 주황색
    "ERROR": "#FF0000",     # 빨간색
    "CRITICAL": "#8B0000",  # 진한 빨간색
}

KST = timezone(timedelta(hours=9))


class SlackNotifier:
    """Slack 알림 서비스

    INotifier Protocol 구현.
    Slack Webhook URL을 통해 메시지 전송.

    사용 예시:
    ```python
    notifier = SlackNotifier(webhook_url="https://hooks.slack.com/...")

    await notifier.send("Vault 시작됨", level="INFO")
    await notifier.send_operation_result(result)
    ```
    """

    def __init__(
        self,
        webhook_url: str,
        channel: str | None = None,
        username: str = "ImpactVault",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Args:
            webhook_url: Slack Incoming Webhook URL
            channel: 채널 오버라이드 (기본값은 Webhook 설정 사용)
            username: 메시지 발송자 이름
            timeout: HTTP 요청 타임아웃 (초)
            transport: httpx 전송 계층 오버라이드 (테스트용)
        """
        if not webhook_url:
            raise ValueError("webhook_url은 필수입니다")

        self.webhook_url = webhook_url
        self.channel = channel
        self.username = username
        self.timeout = timeout
        self._transport = transport

        # httpx 비동기 클라이언트 (재사용)
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """HTTP 클라이언트 반환 (lazy initialization)"""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """HTTP 클라이언트 종료"""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def send(
        self,
        message: str,
        level: str = "INFO",
        extra: dict[str, Any] | None = None,
    ) -> bool:
        """알림 전송

        Args:
            message: 알림 메시지
            level: 알림 레벨 (INFO, WARNING, ERROR, CRITICAL)
            extra: 추가 데이터 (attachment fields로 표시)

        Returns:
            전송 성공 여부
        """
        emoji = LEVEL_EMOJI.get(level, ":bell:")
        color = LEVEL_COLOR.get(level, "#808080")

        payload = self._build_payload(
            color=color,
            text=f"{emoji} *[{level}]* {message}",
        )

        if extra:
            payload["attachments"][0]["fields"] = [
                {"title": key, "value": str(value), "short": True}
                for key, value in extra.items()
            ]

        return await self._send_payload(payload)

    async def send_operation_result(self, result: OperationResult) -> bool:
        """연산 결과 알림 (성공: 녹색, 실패: 빨간색)

        Args:
            result: 연산 결과

        Returns:
            전송 성공 여부
        """
        if result.success:
            title = f"{LEVEL_EMOJI['INFO']} {result.operation} 완료"
            color = LEVEL_COLOR["INFO"]
        else:
            title = f"{LEVEL_EMOJI['ERROR']} {result.operation} 실패"
            color = LEVEL_COLOR["ERROR"]

        fields = [
            {"title": "tx_id", "value": result.tx_id, "short": False},
            {"title": "호출자", "value": result.caller, "short": False},
        ]
        if result.error is not None:
            fields.append({"title": "에러 코드", "value": result.error_code or "-", "short": True})
            fields.append({"title": "에러", "value": result.error, "short": False})

        payload = self._build_payload(color=color, title=title)
        payload["attachments"][0]["fields"] = fields

        return await self._send_payload(payload)

    def _build_payload(
        self,
        color: str,
        text: str | None = None,
        title: str | None = None,
    ) -> dict[str, Any]:
        """단일 attachment 페이로드 구성"""
        attachment: dict[str, Any] = {
            "color": color,
            "footer": f"ImpactVault | {self._format_timestamp()}",
        }
        if title is not None:
            attachment["title"] = title
        if text is not None:
            attachment["text"] = text

        payload: dict[str, Any] = {
            "username": self.username,
            "attachments": [attachment],
        }

        # 채널 오버라이드
        if self.channel:
            payload["channel"] = self.channel

        return payload

    async def _send_payload(self, payload: dict[str, Any]) -> bool:
        """Slack Webhook으로 페이로드 전송

        Args:
            payload: Slack 메시지 페이로드

        Returns:
            전송 성공 여부
        """
        try:
            client = await self._get_client()
            response = await client.post(self.webhook_url, json=payload)

            if response.status_code == 200:
                logger.debug("Slack 알림 전송 성공")
                return True
            else:
                logger.warning(
                    "Slack 알림 전송 실패: status=%s, body=%s",
                    response.status_code,
                    response.text,
                )
                return False

        except httpx.TimeoutException:
            logger.error("Slack 알림 전송 타임아웃")
            return False
        except httpx.HTTPError as e:
            logger.error("Slack 알림 전송 HTTP 에러: %s", e)
            return False

    def _format_timestamp(self) -> str:
        """현재 시간을 KST로 포맷"""
        return datetime.now(KST).strftime("%Y-%m-%d %H:%M:%S KST")

    # -------------------------------------------------------------------------
    # Context Manager 지원
    # -------------------------------------------------------------------------

    async def __aenter__(self) -> "SlackNotifier":
        """async with 진입"""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """async with 종료 시 클라이언트 정리"""
        await self.close()
